"""
SimulatorBookingTransport — in-process stand-in for the booking endpoint.

No network. Each fetch() suspends for `delay` seconds, then answers with, in order
of precedence:
    1. the next queued response or error (inject_response / inject_error)
    2. the contents of fixture_path, if one was given
    3. a freshly generated mock booking
"""

import asyncio
import logging
import random
import time
from pathlib import Path

from booking_sync.domain.booking import Booking, Location, OriginDestinationPair, Segment

from .ports import BookingResponse, BookingTransport, TransportError

log = logging.getLogger(__name__)


def mock_booking(rng: random.Random | None = None, now: float | None = None) -> Booking:
    """Build a sample booking with 2–3 segments, each adding 3–6 hours of travel."""
    rng = rng or random.Random()
    now = time.time() if now is None else now

    segments = []
    duration = 0
    for i in range(1, rng.randint(2, 3) + 1):
        pair = OriginDestinationPair(
            origin=Location(code="AAA", display_name="AAA DisplayName", url="www.ship.com"),
            destination=Location(code="BBB", display_name="BBB DisplayName", url="www.ship.com"),
            origin_city=f"City{i}",
            destination_city=f"City{i + 1}",
        )
        segments.append(Segment(id=i, origin_and_destination_pair=pair))
        duration += rng.randint(3, 6) * 60

    return Booking(
        ship_reference="ABCDEF",
        ship_token="AAAABBBCCCCDDD",
        can_issue_ticket_checking=True,
        expiry_time=str(now),
        duration=duration,
        segments=segments,
    )


class SimulatorBookingTransport(BookingTransport):
    """
    Fake booking endpoint for tests and local runs. No mocking framework needed.

    Test helpers:
        inject_response()  — queue a canned BookingResponse
        inject_error()     — queue a TransportError to be raised
        calls              — number of fetch() calls made so far
    """

    def __init__(
        self,
        delay: float = 1.0,
        fixture_path: str | Path | None = None,
        seed: int | None = None,
    ):
        self._delay = delay
        self._fixture_path = Path(fixture_path) if fixture_path else None
        self._rng = random.Random(seed)
        self._queue: list[BookingResponse | TransportError] = []
        self.calls = 0

    def inject_response(self, response: BookingResponse) -> None:
        self._queue.append(response)

    def inject_error(self, error: TransportError) -> None:
        self._queue.append(error)

    async def fetch(self) -> BookingResponse:
        self.calls += 1
        await asyncio.sleep(self._delay)

        if self._queue:
            queued = self._queue.pop(0)
            if isinstance(queued, TransportError):
                raise queued
            return queued

        if self._fixture_path is not None:
            return self._read_fixture()

        booking = mock_booking(self._rng)
        log.debug("simulator: generated booking with %d segment(s)", len(booking.segments))
        return BookingResponse(message="", code=200, payload=booking.to_json())

    def _read_fixture(self) -> BookingResponse:
        try:
            data = self._fixture_path.read_bytes()
        except FileNotFoundError:
            raise TransportError(-1, f"{self._fixture_path.name} not found")
        except OSError as exc:
            raise TransportError(exc.errno or -1, str(exc)) from exc
        return BookingResponse(message="", code=200, payload=data)
