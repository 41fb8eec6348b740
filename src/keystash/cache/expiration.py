# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Expiry arithmetic for cache records.

Expiry instants are absolute Unix-epoch seconds so they survive being
written to disk and read back by another process.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from keystash.core.exceptions import InvalidArgumentError


@dataclass(frozen=True, slots=True)
class CacheRecord:
    """A stored value and the instant it stops being live."""

    value: Any
    expiration: int | None = None


def ttl_seconds(ttl: int | timedelta) -> int:
    """Normalise a TTL to whole seconds.

    Raises:
        InvalidArgumentError: If *ttl* is neither an ``int`` nor a ``timedelta``.
    """
    if isinstance(ttl, timedelta):
        return int(ttl.total_seconds())
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise InvalidArgumentError(
            f"TTL must be an int, a timedelta or None, got {type(ttl).__name__}"
        )
    return ttl


def absolute_expiry(ttl: int | timedelta | None, now: float) -> int | None:
    """Convert *ttl* into an absolute expiry instant in whole epoch seconds.

    *now* is truncated to the whole second before the TTL is added, so a
    zero or negative TTL yields an instant no later than *now*.  Checked
    against the full-precision clock, such a record reads as expired
    straight away unless the clock sits exactly on a whole second.
    """
    if ttl is None:
        return None
    return int(now) + ttl_seconds(ttl)


def is_live(record: CacheRecord, now: float) -> bool:
    """Return ``True`` if *record* has not expired at *now*.

    The boundary is inclusive: a record expiring exactly at *now* is live.
    Pass the clock at full precision; only the stored expiry is whole seconds.
    """
    return record.expiration is None or record.expiration >= now
