# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Redis cache backend over a synchronous ``redis-py`` style client.

The wire protocol and connection handling belong to the client; this
module only decides how the cache contract maps onto ``GET``, ``SET``,
``DEL``, ``MGET``, ``EXISTS``, ``FLUSHALL`` and pipelined ``SET`` calls.

The ``redis`` package is **optional**: this module imports without it, and
:meth:`RedisCache.from_url` raises a clear error when it is missing.  A
client can always be injected directly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from keystash.cache.base import TTL, RemoteClient
from keystash.cache.expiration import ttl_seconds
from keystash.cache.keys import iter_items, validate_iterable, validate_key
from keystash.core.exceptions import ConfigurationError
from keystash.core.logging import redact_sensitive

logger = logging.getLogger("keystash.cache.redis")

try:
    import redis

    _REDIS_AVAILABLE = True
except ImportError:  # pragma: no cover
    redis = None  # type: ignore[assignment]
    _REDIS_AVAILABLE = False

_OK_ACKS = ("OK", b"OK")


def redis_available() -> bool:
    """Return ``True`` if the ``redis`` package is installed."""
    return _REDIS_AVAILABLE


def _is_ok(response: Any) -> bool:
    # redis-py maps the OK status to True; raw clients return the status text.
    return response is True or (isinstance(response, (str, bytes)) and response in _OK_ACKS)


def _expiry(ttl: TTL) -> int | None:
    """Remote TTLs are clamped to at least one second."""
    if ttl is None:
        return None
    return max(1, ttl_seconds(ttl))


class RedisCache:
    """Cache facade over a Redis-compatible client.

    Values are passed to the client unchanged, so they must be types the
    client can encode (``str``, ``bytes``, ``int``, ``float`` for redis-py).
    ``get`` returns whatever the client returns.

    Args:
        client: Object satisfying :class:`~keystash.cache.base.RemoteClient`.
    """

    def __init__(self, client: RemoteClient) -> None:
        self._client = client

    @classmethod
    def from_url(cls, redis_url: str = "redis://localhost:6379/0", **kwargs: Any) -> RedisCache:
        """Build a cache on a new ``redis.Redis`` client for *redis_url*."""
        if not _REDIS_AVAILABLE:
            raise ConfigurationError(
                "The 'redis' package is required for the Redis cache backend. "
                "Install it with: pip install 'keystash[redis]'"
            )
        logger.debug("Connecting Redis cache to %s", redact_sensitive(redis_url))
        return cls(redis.Redis.from_url(redis_url, **kwargs))

    @property
    def client(self) -> RemoteClient:
        return self._client

    # ------------------------------------------------------------------
    # CacheInterface
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        validate_key(key)
        value = self._client.get(key)
        return value if value is not None else default

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        validate_key(key)
        return _is_ok(self._client.set(key, value, ex=_expiry(ttl)))

    def delete(self, key: str) -> bool:
        validate_key(key)
        return self._client.delete(key) > 0

    def clear(self) -> bool:
        return _is_ok(self._client.flushall())

    def has(self, key: str) -> bool:
        validate_key(key)
        return bool(self._client.exists(key))

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        validate_iterable(keys, "Keys")
        key_list = list(keys)
        for key in key_list:
            validate_key(key)
        if not key_list:
            return {}

        values = self._client.mget(key_list)
        return {
            key: value if value is not None else default
            for key, value in zip(key_list, values)
        }

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: TTL = None,
    ) -> bool:
        """Pipeline one ``SET`` per entry; ``False`` unless every ack is OK."""
        validate_iterable(values, "Values")
        items = list(iter_items(values))
        for key, _value in items:
            validate_key(key)
        if not items:
            return True

        ex = _expiry(ttl)
        pipe = self._client.pipeline()
        for key, value in items:
            pipe.set(key, value, ex=ex)
        responses = pipe.execute()

        failed = [key for (key, _value), ack in zip(items, responses) if not _is_ok(ack)]
        if failed:
            logger.warning("Pipelined SET not acknowledged for %d of %d keys", len(failed), len(items))
            return False
        return len(responses) == len(items)

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        validate_iterable(keys, "Keys")
        key_list = list(keys)
        for key in key_list:
            validate_key(key)
        if not key_list:
            return False
        return self._client.delete(*key_list) > 0

    def close(self) -> None:
        """Release the client's connections, when it supports that."""
        close = getattr(self._client, "close", None)
        if callable(close):
            close()
