# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for keystash."""


class KeystashError(Exception):
    """Base exception for all keystash errors."""


class ConfigurationError(KeystashError):
    """Invalid or missing configuration."""


class CacheError(KeystashError):
    """Base exception for cache operation errors."""


class InvalidArgumentError(CacheError):
    """A cache operation received an argument it cannot accept."""


class InvalidKeyError(InvalidArgumentError):
    """A cache key is empty or not a string."""


class CorruptRecordError(CacheError):
    """Stored bytes do not decode to a cache record."""
