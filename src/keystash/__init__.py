# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""keystash - Key-value caching over memory, files and Redis."""

__version__ = "0.1.0"

from keystash.cache import (
    CacheInterface,
    FileCache,
    JsonFileCache,
    MemoryCache,
    RedisCache,
    create_cache_from_settings,
)
from keystash.core.exceptions import (
    CacheError,
    CorruptRecordError,
    InvalidArgumentError,
    InvalidKeyError,
    KeystashError,
)

__all__ = [
    "CacheError",
    "CacheInterface",
    "CorruptRecordError",
    "FileCache",
    "InvalidArgumentError",
    "InvalidKeyError",
    "JsonFileCache",
    "KeystashError",
    "MemoryCache",
    "RedisCache",
    "__version__",
    "create_cache_from_settings",
]
