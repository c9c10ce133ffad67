"""
BookingService — one fetch attempt against the transport, decoded into a Booking.

Transport and decoding failures are translated into BookingServiceError
subclasses here; nothing is retried.
"""

import asyncio
import logging

from booking_sync.adapters.ports import BookingTransport, TransportError
from booking_sync.domain.booking import Booking
from booking_sync.domain.booking_cache import BookingCache
from booking_sync.domain.errors import BusinessError, DecodingFailed

log = logging.getLogger(__name__)

SUCCESS_CODE = 200


class BookingService:

    def __init__(self, transport: BookingTransport, cache: BookingCache):
        self._transport = transport
        self._cache = cache

    async def fetch(self) -> Booking:
        """
        Fetch and decode the booking. Does not touch the cache.

        Raises BusinessError for transport failures, non-200 codes and empty
        payloads; DecodingFailed when the payload is not a valid booking.
        """
        try:
            response = await self._transport.fetch()
        except TransportError as exc:
            log.info("booking fetch failed: transport error %d: %s", exc.code, exc.message)
            raise BusinessError(exc.code, exc.message) from exc

        if response.code != SUCCESS_CODE or not response.payload:
            log.info("booking fetch failed: code=%d message=%r", response.code, response.message)
            raise BusinessError(response.code, response.message)

        try:
            booking = Booking.from_json(response.payload)
        except (ValueError, KeyError, TypeError, RecursionError) as exc:
            log.warning("booking payload could not be decoded: %s", exc)
            raise DecodingFailed(exc) from exc

        log.debug("fetched booking ref=%s segments=%d", booking.ship_reference, len(booking.segments))
        return booking

    async def fetch_and_persist(self) -> Booking:
        """fetch(), then store the result in the cache. Errors propagate, cache untouched."""
        booking = await self.fetch()
        # file cache does a blocking write + fsync
        await asyncio.to_thread(self._cache.save, booking)
        log.info("booking ref=%s fetched and cached", booking.ship_reference)
        return booking
