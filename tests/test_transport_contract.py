"""
Adapter contract tests for BookingTransport — both simulator and real.

The same contract is verified against:
  - SimulatorBookingTransport  (always runs, no network needed)
  - HttpBookingTransport       (skipped if BOOKING_API_URL is not set)
"""

import asyncio
import os
import random

import pytest

from booking_sync.adapters.http_transport import HttpBookingTransport
from booking_sync.adapters.ports import BookingResponse, TransportError
from booking_sync.adapters.simulator_transport import SimulatorBookingTransport, mock_booking
from booking_sync.domain.booking import Booking

from tests.contracts.booking_transport_contract import BookingTransportContract

# ---------------------------------------------------------------------------
# Simulator — always runs
# ---------------------------------------------------------------------------


class TestSimulatorTransportContract(BookingTransportContract):

    def create_transport(self):
        return SimulatorBookingTransport(delay=0)

    @pytest.mark.asyncio
    async def test_injected_response_returned_first(self):
        transport = SimulatorBookingTransport(delay=0)
        transport.inject_response(BookingResponse(message="not found", code=404))

        first = await transport.fetch()
        second = await transport.fetch()

        assert (first.code, first.message, first.payload) == (404, "not found", None)
        assert second.code == 200
        assert transport.calls == 2

    @pytest.mark.asyncio
    async def test_injected_error_raised(self):
        transport = SimulatorBookingTransport(delay=0)
        transport.inject_error(TransportError(-1009, "offline"))
        with pytest.raises(TransportError) as exc_info:
            await transport.fetch()
        assert exc_info.value.code == -1009

    @pytest.mark.asyncio
    async def test_fixture_file_served(self, tmp_path):
        fixture = tmp_path / "booking.json"
        fixture.write_bytes(mock_booking(random.Random(1), now=0.0).to_json())

        response = await SimulatorBookingTransport(delay=0, fixture_path=fixture).fetch()
        assert response.code == 200
        assert response.payload == fixture.read_bytes()

    @pytest.mark.asyncio
    async def test_missing_fixture_raises_transport_error(self, tmp_path):
        transport = SimulatorBookingTransport(delay=0, fixture_path=tmp_path / "booking.json")
        with pytest.raises(TransportError) as exc_info:
            await transport.fetch()
        assert exc_info.value.code == -1
        assert "booking.json not found" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_delay_does_not_block_event_loop(self):
        transport = SimulatorBookingTransport(delay=0.2)
        order = []

        async def fetch():
            await transport.fetch()
            order.append("fetch")

        async def tick():
            await asyncio.sleep(0.01)
            order.append("tick")

        await asyncio.gather(fetch(), tick())
        assert order == ["tick", "fetch"]


def test_mock_booking_shape():
    booking = mock_booking(random.Random(7), now=1750000000.0)
    assert 2 <= len(booking.segments) <= 3
    assert [s.id for s in booking.segments] == list(range(1, len(booking.segments) + 1))
    assert booking.expiry_timestamp == 1750000000.0
    assert len(booking.segments) * 180 <= booking.duration <= len(booking.segments) * 360
    for i, segment in enumerate(booking.segments, start=1):
        pair = segment.origin_and_destination_pair
        assert (pair.origin_city, pair.destination_city) == (f"City{i}", f"City{i + 1}")


def test_mock_booking_survives_wire_format():
    booking = mock_booking(random.Random(3))
    assert Booking.from_json(booking.to_json()) == booking


# ---------------------------------------------------------------------------
# Real endpoint — skipped without configuration
# ---------------------------------------------------------------------------

API_URL = os.environ.get("BOOKING_API_URL", "")


@pytest.mark.skipif(not API_URL, reason="BOOKING_API_URL not set")
class TestHttpTransportContract(BookingTransportContract):

    def create_transport(self):
        return HttpBookingTransport(url=API_URL)


@pytest.mark.asyncio
async def test_http_unreachable_host_raises_transport_error():
    # port 9 on localhost is discard; nothing listens there in test environments
    transport = HttpBookingTransport(url="http://127.0.0.1:9/booking", timeout=2)
    with pytest.raises(TransportError) as exc_info:
        await transport.fetch()
    assert exc_info.value.code == -1
