# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Build the configured cache backend and hold the process-wide instance."""

from __future__ import annotations

import logging

from keystash.cache.base import CacheInterface
from keystash.cache.file import FileCache, JsonFileCache
from keystash.cache.memory import MemoryCache
from keystash.core.config import Settings
from keystash.core.exceptions import ConfigurationError

logger = logging.getLogger("keystash.cache.manager")

BACKENDS = ("memory", "file", "json", "redis")

# Module-level singleton
_cache: CacheInterface | None = None


def create_cache_from_settings(settings: Settings | None = None) -> CacheInterface:
    """Instantiate the cache backend named by ``settings.cache_backend``.

    Raises:
        ConfigurationError: If the backend name is unknown, or redis is
            requested but not installed.
    """
    if settings is None:
        from keystash.core.config import get_settings

        settings = get_settings()

    backend_type = settings.cache_backend
    logger.debug("Creating %s cache backend", backend_type)

    if backend_type == "memory":
        return MemoryCache()
    if backend_type == "file":
        return FileCache(settings.cache_dir)
    if backend_type == "json":
        return JsonFileCache(settings.cache_dir)
    if backend_type == "redis":
        from keystash.cache.redis import RedisCache

        return RedisCache.from_url(settings.redis_url)

    raise ConfigurationError(
        f"Unknown cache backend {backend_type!r}; expected one of {', '.join(BACKENDS)}"
    )


def get_cache() -> CacheInterface:
    """Return the module-level cache singleton.

    Creates a new instance on first call using application settings.
    """
    global _cache
    if _cache is None:
        _cache = create_cache_from_settings()
    return _cache


def reset_cache() -> None:
    """Reset the singleton (useful for testing)."""
    global _cache
    _cache = None
