# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Byte encodings for cache records stored on disk.

Two codecs share one contract:

* :class:`PickleCodec` keeps the exact Python type of the value, including
  ``bytes``, tuples, sets and user classes.
* :class:`JsonCodec` writes a human-readable ``{"value", "expiration"}``
  object.  Only JSON-representable values survive: tuples come back as
  lists and non-string dict keys as strings.  Encoding anything else raises
  ``TypeError`` from :mod:`json`.
"""

from __future__ import annotations

import json
import pickle
from typing import Any, Protocol

from keystash.cache.expiration import CacheRecord
from keystash.core.exceptions import CorruptRecordError


class RecordCodec(Protocol):
    extension: str

    def encode(self, record: CacheRecord) -> bytes: ...

    def decode(self, data: bytes) -> CacheRecord: ...


def _record_from_mapping(data: Any) -> CacheRecord:
    if not isinstance(data, dict) or "value" not in data or "expiration" not in data:
        raise CorruptRecordError("Stored entry is not a {value, expiration} record")
    expiration = data["expiration"]
    if expiration is not None and (isinstance(expiration, bool) or not isinstance(expiration, int)):
        raise CorruptRecordError(
            f"Stored expiration must be an integer or null, got {type(expiration).__name__}"
        )
    return CacheRecord(value=data["value"], expiration=expiration)


class PickleCodec:
    """Binary codec backed by :mod:`pickle`."""

    extension = ""

    def encode(self, record: CacheRecord) -> bytes:
        return pickle.dumps(
            {"value": record.value, "expiration": record.expiration},
            protocol=pickle.HIGHEST_PROTOCOL,
        )

    def decode(self, data: bytes) -> CacheRecord:
        try:
            payload = pickle.loads(data)
        except Exception as exc:  # pickle can raise nearly anything on corrupt input
            raise CorruptRecordError(f"Cannot unpickle cache entry: {exc}") from exc
        return _record_from_mapping(payload)


class JsonCodec:
    """Readable codec producing ``{"value": ..., "expiration": ...}``."""

    extension = ".json"

    def encode(self, record: CacheRecord) -> bytes:
        return json.dumps({"value": record.value, "expiration": record.expiration}).encode()

    def decode(self, data: bytes) -> CacheRecord:
        try:
            payload = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise CorruptRecordError(f"Cannot parse JSON cache entry: {exc}") from exc
        return _record_from_mapping(payload)
