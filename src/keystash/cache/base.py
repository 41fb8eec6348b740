# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache capability contract and the remote client it can sit on.

Every backend implements :class:`CacheInterface` on its own rather than
inheriting shared behaviour, because the backends deliberately disagree on
some details:

* **Batch atomicity.** ``FileCache``, ``JsonFileCache`` and ``MemoryCache``
  apply batch calls entry by entry with no rollback.  ``FileCache`` and
  ``JsonFileCache`` always report ``True`` from ``set_multiple`` and
  ``delete_multiple``; ``MemoryCache.delete_multiple`` reports ``False``
  when any key was missing.  ``RedisCache.set_multiple`` pipelines all
  writes and reports ``False`` unless every acknowledgement is ``OK``.
* **TTL boundary.** File backends turn a zero or negative TTL into an
  expiry in the past, so the entry is gone on the next read.  ``RedisCache``
  clamps any TTL up to one second.  ``MemoryCache`` ignores TTLs.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any, Protocol, TypeAlias, runtime_checkable

TTL: TypeAlias = int | timedelta | None


@runtime_checkable
class CacheInterface(Protocol):
    """Protocol implemented by every cache backend."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value for *key*, or *default* on a miss."""
        ...

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        """Store *value* under *key*.

        Args:
            key: Cache key.
            value: Value to store.
            ttl: Time-to-live in seconds or as a ``timedelta``.  ``None``
                means no expiry.

        Returns:
            ``True`` if the value was stored.
        """
        ...

    def delete(self, key: str) -> bool:
        """Delete *key*.  Returns ``False`` when the key was not present."""
        ...

    def clear(self) -> bool:
        """Remove every entry held by this cache."""
        ...

    def has(self, key: str) -> bool:
        """Check whether *key* holds a value."""
        ...

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Return a mapping of each key, in input order, to its value or *default*."""
        ...

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: TTL = None,
    ) -> bool:
        """Store several values sharing one TTL."""
        ...

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete several keys."""
        ...


@runtime_checkable
class RemotePipeline(Protocol):
    """Batch of buffered commands sent in one round trip."""

    def set(self, name: str, value: Any, ex: int | None = None) -> Any: ...

    def execute(self) -> list[Any]: ...


@runtime_checkable
class RemoteClient(Protocol):
    """Subset of a Redis-compatible client used by ``RedisCache``.

    ``redis.Redis`` satisfies this protocol; tests pass a mock.
    """

    def get(self, name: str) -> Any: ...

    def set(self, name: str, value: Any, ex: int | None = None) -> Any: ...

    def delete(self, *names: str) -> int: ...

    def mget(self, keys: list[str]) -> list[Any]: ...

    def exists(self, *names: str) -> int: ...

    def flushall(self) -> Any: ...

    def pipeline(self) -> RemotePipeline: ...
