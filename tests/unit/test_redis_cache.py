# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the Redis facade against a mocked client."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from keystash.cache.base import CacheInterface
from keystash.cache.redis import RedisCache, redis_available
from keystash.core.exceptions import ConfigurationError, InvalidArgumentError, InvalidKeyError


@pytest.fixture
def client() -> MagicMock:
    mock = MagicMock()
    mock.set.return_value = True
    mock.flushall.return_value = True
    return mock


@pytest.fixture
def cache(client: MagicMock) -> RedisCache:
    return RedisCache(client)


# ---------------------------------------------------------------------------
# Single-key operations
# ---------------------------------------------------------------------------


class TestRedisSingleKey:
    def test_satisfies_interface(self, cache: RedisCache) -> None:
        assert isinstance(cache, CacheInterface)

    def test_get_hit(self, cache: RedisCache, client: MagicMock) -> None:
        client.get.return_value = b"value"
        assert cache.get("k") == b"value"
        client.get.assert_called_once_with("k")

    def test_get_miss_returns_default(self, cache: RedisCache, client: MagicMock) -> None:
        client.get.return_value = None
        assert cache.get("k", "fallback") == "fallback"

    def test_set_without_ttl(self, cache: RedisCache, client: MagicMock) -> None:
        assert cache.set("k", "v") is True
        client.set.assert_called_once_with("k", "v", ex=None)

    def test_set_with_ttl(self, cache: RedisCache, client: MagicMock) -> None:
        cache.set("k", "v", ttl=30)
        client.set.assert_called_once_with("k", "v", ex=30)

    def test_set_with_timedelta_ttl(self, cache: RedisCache, client: MagicMock) -> None:
        cache.set("k", "v", ttl=timedelta(minutes=5))
        client.set.assert_called_once_with("k", "v", ex=300)

    @pytest.mark.parametrize("ttl", [0, -20, timedelta(milliseconds=200)])
    def test_small_ttl_clamped_to_one_second(
        self, cache: RedisCache, client: MagicMock, ttl: object
    ) -> None:
        cache.set("k", "v", ttl=ttl)  # type: ignore[arg-type]
        client.set.assert_called_once_with("k", "v", ex=1)

    @pytest.mark.parametrize("ack", [True, "OK", b"OK"])
    def test_set_accepts_ok_acks(self, cache: RedisCache, client: MagicMock, ack: object) -> None:
        client.set.return_value = ack
        assert cache.set("k", "v") is True

    @pytest.mark.parametrize("ack", [None, False, "QUEUED", 1])
    def test_set_rejects_other_acks(self, cache: RedisCache, client: MagicMock, ack: object) -> None:
        client.set.return_value = ack
        assert cache.set("k", "v") is False

    def test_delete(self, cache: RedisCache, client: MagicMock) -> None:
        client.delete.return_value = 1
        assert cache.delete("k") is True
        client.delete.assert_called_once_with("k")

    def test_delete_missing(self, cache: RedisCache, client: MagicMock) -> None:
        client.delete.return_value = 0
        assert cache.delete("k") is False

    def test_has(self, cache: RedisCache, client: MagicMock) -> None:
        client.exists.return_value = 1
        assert cache.has("k") is True
        client.exists.return_value = 0
        assert cache.has("k") is False

    def test_clear_flushes(self, cache: RedisCache, client: MagicMock) -> None:
        assert cache.clear() is True
        client.flushall.assert_called_once_with()

    def test_clear_without_ok(self, cache: RedisCache, client: MagicMock) -> None:
        client.flushall.return_value = False
        assert cache.clear() is False

    @pytest.mark.parametrize(
        "call",
        [
            lambda c: c.get(""),
            lambda c: c.set("", "v"),
            lambda c: c.delete(""),
            lambda c: c.has(""),
        ],
    )
    def test_empty_key_issues_no_remote_call(self, cache: RedisCache, client: MagicMock, call) -> None:
        with pytest.raises(InvalidKeyError):
            call(cache)
        assert client.method_calls == []

    def test_network_errors_propagate(self, cache: RedisCache, client: MagicMock) -> None:
        client.get.side_effect = ConnectionError("connection refused")
        with pytest.raises(ConnectionError):
            cache.get("k")


# ---------------------------------------------------------------------------
# Batch operations
# ---------------------------------------------------------------------------


class TestRedisBatch:
    def test_get_multiple_aligns_to_input_order(self, cache: RedisCache, client: MagicMock) -> None:
        client.mget.return_value = [None, b"bee", None]
        result = cache.get_multiple(["a", "b", "c"], default=0)
        assert result == {"a": 0, "b": b"bee", "c": 0}
        assert list(result) == ["a", "b", "c"]
        client.mget.assert_called_once_with(["a", "b", "c"])

    def test_get_multiple_empty(self, cache: RedisCache, client: MagicMock) -> None:
        assert cache.get_multiple([]) == {}
        client.mget.assert_not_called()

    def test_get_multiple_validates_all_keys_first(self, cache: RedisCache, client: MagicMock) -> None:
        with pytest.raises(InvalidKeyError):
            cache.get_multiple(["a", ""])
        client.mget.assert_not_called()

    def test_set_multiple_pipelines(self, cache: RedisCache, client: MagicMock) -> None:
        pipe = client.pipeline.return_value
        pipe.execute.return_value = [True, True]

        assert cache.set_multiple({"a": 1, "b": 2}, ttl=0) is True
        assert pipe.set.call_count == 2
        pipe.set.assert_any_call("a", 1, ex=1)
        pipe.set.assert_any_call("b", 2, ex=1)
        pipe.execute.assert_called_once_with()
        client.set.assert_not_called()

    def test_set_multiple_fails_on_any_bad_ack(self, cache: RedisCache, client: MagicMock) -> None:
        client.pipeline.return_value.execute.return_value = [True, "ERR", True]
        assert cache.set_multiple([("a", 1), ("b", 2), ("c", 3)]) is False

    def test_set_multiple_short_ack_list(self, cache: RedisCache, client: MagicMock) -> None:
        client.pipeline.return_value.execute.return_value = [True]
        assert cache.set_multiple({"a": 1, "b": 2}) is False

    def test_set_multiple_validates_before_pipelining(self, cache: RedisCache, client: MagicMock) -> None:
        with pytest.raises(InvalidKeyError):
            cache.set_multiple({"a": 1, "": 2})
        client.pipeline.assert_not_called()

    def test_set_multiple_rejects_non_pair_items(self, cache: RedisCache, client: MagicMock) -> None:
        with pytest.raises(InvalidArgumentError, match="pairs"):
            cache.set_multiple(["ab", "cd"])
        client.pipeline.assert_not_called()

    def test_set_multiple_empty(self, cache: RedisCache, client: MagicMock) -> None:
        assert cache.set_multiple({}) is True
        client.pipeline.assert_not_called()

    def test_delete_multiple(self, cache: RedisCache, client: MagicMock) -> None:
        client.delete.return_value = 1
        assert cache.delete_multiple(["a", "b"]) is True
        client.delete.assert_called_once_with("a", "b")

    def test_delete_multiple_nothing_removed(self, cache: RedisCache, client: MagicMock) -> None:
        client.delete.return_value = 0
        assert cache.delete_multiple(["a", "b"]) is False

    def test_delete_multiple_empty(self, cache: RedisCache, client: MagicMock) -> None:
        assert cache.delete_multiple([]) is False
        client.delete.assert_not_called()

    @pytest.mark.parametrize("method", ["get_multiple", "delete_multiple", "set_multiple"])
    def test_non_iterable(self, cache: RedisCache, client: MagicMock, method: str) -> None:
        with pytest.raises(InvalidArgumentError):
            getattr(cache, method)(3)
        assert client.method_calls == []


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestRedisConstruction:
    def test_redis_available_returns_bool(self) -> None:
        assert isinstance(redis_available(), bool)

    def test_from_url_without_package(self) -> None:
        with patch("keystash.cache.redis._REDIS_AVAILABLE", False):
            with pytest.raises(ConfigurationError, match="keystash\\[redis\\]"):
                RedisCache.from_url("redis://localhost:6379/0")

    def test_from_url_builds_client(self) -> None:
        fake_redis = MagicMock()
        with (
            patch("keystash.cache.redis._REDIS_AVAILABLE", True),
            patch("keystash.cache.redis.redis", fake_redis),
        ):
            cache = RedisCache.from_url("redis://cache:6380/2")
        fake_redis.Redis.from_url.assert_called_once_with("redis://cache:6380/2")
        assert cache.client is fake_redis.Redis.from_url.return_value

    def test_close(self, cache: RedisCache, client: MagicMock) -> None:
        cache.close()
        client.close.assert_called_once_with()
