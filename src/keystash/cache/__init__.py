# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Key-value cache backends sharing one capability contract."""

from keystash.cache.base import CacheInterface, RemoteClient
from keystash.cache.file import FileCache, JsonFileCache
from keystash.cache.manager import create_cache_from_settings, get_cache, reset_cache
from keystash.cache.memory import MemoryCache
from keystash.cache.redis import RedisCache

__all__ = [
    "CacheInterface",
    "FileCache",
    "JsonFileCache",
    "MemoryCache",
    "RedisCache",
    "RemoteClient",
    "create_cache_from_settings",
    "get_cache",
    "reset_cache",
]
