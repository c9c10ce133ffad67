"""
In-memory BookingCache for testing — no filesystem required.
"""

import time
from typing import Callable

from booking_sync.domain.booking import Booking
from booking_sync.domain.booking_cache import BookingCache, CacheEntry


class InMemoryBookingCache(BookingCache):

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entry: CacheEntry | None = None
        self.saves = 0

    def load(self) -> CacheEntry | None:
        return self._entry

    def save(self, booking: Booking) -> None:
        self._entry = CacheEntry(timestamp=self._clock(), booking=booking)
        self.saves += 1

    def inject_entry(self, entry: CacheEntry) -> None:
        """Test helper: seed the cache with an entry of any age."""
        self._entry = entry
