# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Key and batch-argument validation shared by every backend."""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from keystash.core.exceptions import InvalidArgumentError, InvalidKeyError


def validate_key(key: object) -> None:
    """Reject keys that are not non-empty strings.

    Raises:
        InvalidKeyError: If *key* is not a ``str`` or is empty.
    """
    if not isinstance(key, str):
        raise InvalidKeyError(f"Key must be a string, got {type(key).__name__}")
    if key == "":
        raise InvalidKeyError("Key cannot be empty")


def validate_iterable(obj: object, what: str = "Keys") -> None:
    """Reject batch arguments that cannot be iterated as a sequence of items.

    Strings and bytes are refused too: iterating them yields characters,
    never keys.

    Raises:
        InvalidArgumentError: If *obj* is not a suitable iterable.
    """
    if isinstance(obj, (str, bytes)) or not isinstance(obj, Iterable):
        raise InvalidArgumentError(f"{what} must be an iterable")


def iter_items(values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> Iterator[tuple[str, Any]]:
    """Yield ``(key, value)`` pairs from a mapping or an iterable of pairs.

    Raises:
        InvalidArgumentError: When an item of a non-mapping iterable is not
            a two-element tuple or list.
    """
    if isinstance(values, Mapping):
        yield from values.items()
        return
    for item in values:
        if not isinstance(item, (tuple, list)) or len(item) != 2:
            raise InvalidArgumentError(
                f"Values must be a mapping or (key, value) pairs, got {type(item).__name__} item"
            )
        yield item[0], item[1]


def key_digest(key: str) -> str:
    """Return the 64-character lowercase hex SHA-256 digest of *key*.

    Used as a filesystem-safe locator.  Two keys sharing a digest would
    share a file; that risk is accepted.
    """
    return hashlib.sha256(key.encode()).hexdigest()
