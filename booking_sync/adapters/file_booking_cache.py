"""
File adapter for BookingCache.

Stores {"timestamp": ..., "booking": {...}} as JSON in <cache_dir>/booking_cache.json,
shadowed in memory for the lifetime of the process.

Writes go to a temp file in the same directory and are moved into place with
os.replace(), so readers see either the old file or the new one, never a
truncated one.  I/O failures are logged and swallowed.
"""

import json
import logging
import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Callable

from booking_sync.domain.booking import Booking
from booking_sync.domain.booking_cache import BookingCache, CacheEntry

CACHE_FILENAME = "booking_cache.json"

log = logging.getLogger(__name__)


class FileBookingCache(BookingCache):

    def __init__(
        self,
        cache_dir: str | Path,
        clock: Callable[[], float] = time.time,
        logger: logging.Logger | None = None,
    ):
        self.path = Path(cache_dir) / CACHE_FILENAME
        self._clock = clock
        self._log = logger or log
        self._lock = threading.Lock()
        self._cached: CacheEntry | None = None

    def load(self) -> CacheEntry | None:
        with self._lock:
            if self._cached is not None:
                return self._cached
            try:
                raw = self.path.read_bytes()
            except FileNotFoundError:
                self._log.debug("no booking cache at %s", self.path)
                return None
            except OSError as exc:
                self._log.warning("booking cache read failed (%s): %s", self.path, exc)
                return None
            try:
                entry = CacheEntry.from_dict(json.loads(raw))
            except (ValueError, KeyError, TypeError, RecursionError) as exc:
                self._log.warning("booking cache at %s is unreadable: %s", self.path, exc)
                return None
            self._cached = entry
            return entry

    def save(self, booking: Booking) -> None:
        entry = CacheEntry(timestamp=self._clock(), booking=booking)
        with self._lock:
            self._cached = entry
            try:
                self._write(json.dumps(entry.to_dict()).encode("utf-8"))
            except OSError as exc:
                self._log.warning("booking cache write failed (%s): %s", self.path, exc)

    def _write(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".booking_cache.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise
