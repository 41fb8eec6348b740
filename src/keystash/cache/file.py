# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""File-backed cache backends with per-entry expiry.

Each key is stored in its own file named by the key's SHA-256 digest.  The
file holds the encoded ``(value, expiration)`` record; :class:`FileCache`
pickles it and :class:`JsonFileCache` writes JSON with a ``.json`` suffix.

Writes take an exclusive ``flock`` on the target file for the duration of
the write.  That is the only cross-process coordination: readers do not
lock, and no other process is expected to write into the directory.

Expired entries are removed lazily when read.  A file that cannot be
decoded raises :class:`~keystash.core.exceptions.CorruptRecordError`
rather than being treated as a miss.
"""

from __future__ import annotations

import fcntl
import logging
import os
import time
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

from keystash.cache.base import TTL
from keystash.cache.codec import JsonCodec, PickleCodec, RecordCodec
from keystash.cache.expiration import CacheRecord, absolute_expiry, is_live
from keystash.cache.keys import iter_items, key_digest, validate_iterable, validate_key

logger = logging.getLogger("keystash.cache.file")


class FileCache:
    """Cache storing one pickled record per key under *directory*.

    Args:
        directory: Storage root.  Created, with parents, if missing.
        codec: Record encoding.  Defaults to :class:`PickleCodec`.
        clock: Returns the current Unix time; used for expiry.
    """

    def __init__(
        self,
        directory: Path | str,
        codec: RecordCodec | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._directory = Path(directory)
        self._codec = codec or PickleCodec()
        self._clock = clock
        self._ensure_directory()

    @property
    def directory(self) -> Path:
        return self._directory

    # ------------------------------------------------------------------
    # CacheInterface
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        validate_key(key)
        path = self.path_for(key)
        if not path.exists():
            return default

        record = self._codec.decode(path.read_bytes())
        if is_live(record, self._clock()):
            return record.value

        logger.debug("Evicting expired entry %s", path.name[:12])
        self.delete(key)
        return default

    def set(self, key: str, value: Any, ttl: TTL = None) -> bool:
        validate_key(key)
        path = self.path_for(key)
        record = CacheRecord(value=value, expiration=absolute_expiry(ttl, self._clock()))
        data = self._codec.encode(record)

        try:
            written = _write_locked(path, data)
        except OSError as exc:
            logger.warning("Failed to write cache entry %s: %s", path.name[:12], exc)
            return False
        return written == len(data)

    def delete(self, key: str) -> bool:
        validate_key(key)
        path = self.path_for(key)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Failed to delete cache entry %s: %s", path.name[:12], exc)
            return False
        return True

    def clear(self) -> bool:
        self._purge()
        self._ensure_directory()
        return True

    def has(self, key: str) -> bool:
        validate_key(key)
        return self.get(key) is not None

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
        validate_iterable(keys, "Keys")
        for key in keys:
            self.delete(key)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def path_for(self, key: str) -> Path:
        """Return the file that stores *key*."""
        return self._directory / f"{key_digest(key)}{self._codec.extension}"

    def _ensure_directory(self) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)

    def _purge(self) -> None:
        """Remove everything under the storage root, children before parents."""
        for dirpath, dirnames, filenames in os.walk(self._directory, topdown=False):
            for name in filenames:
                _remove_quietly(Path(dirpath, name), os.unlink)
            for name in dirnames:
                _remove_quietly(Path(dirpath, name), os.rmdir)


class JsonFileCache(FileCache):
    """Cache storing one human-readable JSON record per key.

    Values are limited to what :mod:`json` can represent.  ``clear`` only
    removes ``*.json`` files at the top of the directory, leaving anything
    else in place.
    """

    def __init__(
        self,
        directory: Path | str,
        clock: Callable[[], float] = time.time,
    ) -> None:
        super().__init__(directory, codec=JsonCodec(), clock=clock)

    def _purge(self) -> None:
        if not self._directory.is_dir():
            return
        for path in self._directory.glob("*.json"):
            _remove_quietly(path, os.unlink)


def _write_locked(path: Path, data: bytes) -> int:
    """Replace the contents of *path* with *data* under an exclusive lock.

    The file is opened without truncation so the lock is held before the
    old contents are discarded.
    """
    with open(path, "r+b", opener=_open_for_write) as fh:
        fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
        fh.truncate(0)
        written = fh.write(data)
        fh.flush()
    return written


def _open_for_write(path: str, flags: int) -> int:
    # r+b without O_TRUNC; O_CREAT so a new key gets a file
    return os.open(path, flags | os.O_CREAT, 0o666)


def _remove_quietly(path: Path, remove: Callable[[Path], None]) -> None:
    try:
        remove(path)
    except OSError as exc:
        logger.warning("Failed to remove %s during clear: %s", path, exc)
