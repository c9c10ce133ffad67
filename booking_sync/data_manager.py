"""
BookingDataManager — the cached-then-fresh delivery sequence.

Each publish() call yields at most two BookingResult elements:

    no cache entry      →  [fresh or error]
    fresh cache entry   →  [cached]                    (no fetch)
    stale cache entry   →  [cached, fresh or error]

The cached element always comes first.  For a stale entry the refresh task
is started before the cached element is handed out, so delivering the
cached value never waits on the network.  Abandoning or cancelling the
iteration stops delivery only; a refresh already in flight still runs to
completion and still updates the cache.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import AsyncIterator, Callable

from booking_sync.domain.booking import Booking
from booking_sync.domain.booking_cache import BookingCache
from booking_sync.domain.errors import BookingServiceError
from booking_sync.domain.staleness import StalenessPolicy, TtlStalenessPolicy
from booking_sync.service import BookingService

log = logging.getLogger(__name__)


@dataclass
class BookingResult:
    booking: Booking | None = None
    error: BookingServiceError | None = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, booking: Booking, from_cache: bool = False) -> "BookingResult":
        return cls(booking=booking, from_cache=from_cache)

    @classmethod
    def failure(cls, error: BookingServiceError) -> "BookingResult":
        return cls(error=error)


class BookingDataManager:

    def __init__(
        self,
        service: BookingService,
        cache: BookingCache,
        policy: StalenessPolicy | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._service = service
        self._cache = cache
        self._policy = policy or TtlStalenessPolicy()
        self._clock = clock
        # strong refs so in-flight refreshes aren't garbage collected
        self._refreshes: set[asyncio.Task] = set()

    async def publish(self) -> AsyncIterator[BookingResult]:
        """Yield the best known booking now, followed by fresher data if warranted."""
        entry = self._cache.load()

        if entry is None:
            log.info("booking cache empty, fetching")
            yield await asyncio.shield(self._start_refresh())
            return

        now = self._clock()
        if not self._policy.is_expired(entry, now):
            log.info("booking cache fresh (age=%.0fs)", now - entry.timestamp)
            yield BookingResult.success(entry.booking, from_cache=True)
            return

        log.info("booking cache stale (age=%.0fs), refreshing", now - entry.timestamp)
        refresh = self._start_refresh()
        yield BookingResult.success(entry.booking, from_cache=True)
        yield await asyncio.shield(refresh)

    async def latest(self) -> BookingResult:
        """Consume one publish() sequence and return its last element."""
        result = None
        async for result in self.publish():
            pass
        return result

    def _start_refresh(self) -> asyncio.Task:
        task = asyncio.create_task(self._refresh())
        self._refreshes.add(task)
        task.add_done_callback(self._refreshes.discard)
        return task

    async def _refresh(self) -> BookingResult:
        try:
            booking = await self._service.fetch_and_persist()
        except BookingServiceError as exc:
            log.info("booking refresh failed: %s", exc)
            return BookingResult.failure(exc)
        return BookingResult.success(booking)
