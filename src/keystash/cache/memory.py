# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""In-memory cache backend.

A plain ``dict`` owned by the instance.  TTLs are accepted and ignored, so
entries live until deleted or cleared.  Not thread-safe.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from keystash.cache.base import TTL
from keystash.cache.keys import iter_items, validate_iterable, validate_key


class MemoryCache:
    """Process-local cache without expiry."""

    def __init__(self) -> None:
        self._store: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        validate_key(key)
        return self._store.get(key, default)

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        validate_key(key)
        self._store[key] = value
        return True

    def delete(self, key: str) -> bool:
        validate_key(key)
        try:
            del self._store[key]
        except KeyError:
            return False
        return True

    def clear(self) -> bool:
        self._store.clear()
        return True

    def has(self, key: str) -> bool:
        validate_key(key)
        return key in self._store

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        validate_iterable(keys, "Keys")
        return {key: self.get(key, default) for key in keys}

    def set_multiple(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]],
        ttl: TTL = None,
    ) -> bool:
        validate_iterable(values, "Values")
        for key, value in iter_items(values):
            self.set(key, value, ttl)
        return True

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete every key; ``False`` if any of them was not present."""
        validate_iterable(keys, "Keys")
        success = True
        for key in keys:
            if not self.delete(key):
                success = False
        return success

    def __len__(self) -> int:
        return len(self._store)
