"""
Booking JSON codec: wire names, round-trips, tolerance and rejection.
"""

import json

import pytest

from booking_sync.domain.booking import Booking, Location, OriginDestinationPair, Segment
from booking_sync.domain.booking_cache import CacheEntry
from tests.contracts.booking_cache_contract import sample_booking

WIRE_BOOKING = {
    "shipReference": "ABCDEF",
    "shipToken": "AAAABBBCCCCDDD",
    "canIssueTicketChecking": False,
    "expiryTime": "1722409261.5",
    "duration": 2430,
    "segments": [
        {
            "id": 1,
            "originAndDestinationPair": {
                "origin": {"code": "AAA", "displayName": "AAA DisplayName", "url": "www.ship.com"},
                "destination": {"code": "BBB", "displayName": "BBB DisplayName", "url": "www.ship.com"},
                "originCity": "AAA City",
                "destinationCity": "BBB City",
            },
        },
        {
            "id": 1,
            "originAndDestinationPair": {
                "origin": {"code": "BBB", "displayName": "BBB DisplayName", "url": "www.ship.com"},
                "destination": {"code": "CCC", "displayName": "CCC DisplayName", "url": "www.ship.com"},
                "originCity": "BBB City",
                "destinationCity": "CCC City",
            },
        },
    ],
}


def test_decode_wire_format():
    booking = Booking.from_json(json.dumps(WIRE_BOOKING))
    assert booking.ship_reference == "ABCDEF"
    assert booking.can_issue_ticket_checking is False
    assert booking.expiry_timestamp == 1722409261.5
    assert booking.duration == 2430
    first = booking.segments[0].origin_and_destination_pair
    assert first.origin == Location("AAA", "AAA DisplayName", "www.ship.com")
    assert first.destination_city == "BBB City"


def test_duplicate_segment_ids_allowed():
    booking = Booking.from_json(json.dumps(WIRE_BOOKING))
    assert [s.id for s in booking.segments] == [1, 1]
    assert booking.segments[1].origin_and_destination_pair.destination.code == "CCC"


def test_encode_uses_wire_names():
    assert Booking.from_dict(WIRE_BOOKING).to_dict() == WIRE_BOOKING


@pytest.mark.parametrize("segments", [0, 1, 5])
def test_roundtrip(segments):
    booking = sample_booking(segments=segments)
    assert Booking.from_json(booking.to_json()) == booking


def test_roundtrip_preserves_segment_order():
    pair = OriginDestinationPair(Location("X", "X", "u"), Location("Y", "Y", "u"), "x", "y")
    booking = Booking("R", "T", True, "0", 0, [Segment(9, pair), Segment(3, pair), Segment(7, pair)])
    assert [s.id for s in Booking.from_json(booking.to_json()).segments] == [9, 3, 7]


def test_unknown_fields_ignored():
    data = json.loads(json.dumps(WIRE_BOOKING))
    data["loyaltyTier"] = "gold"
    data["segments"][0]["cabin"] = {"deck": 4}
    data["segments"][0]["originAndDestinationPair"]["origin"]["timezone"] = "UTC"
    assert Booking.from_dict(data) == Booking.from_dict(WIRE_BOOKING)


@pytest.mark.parametrize("field", ["shipReference", "shipToken", "expiryTime", "duration", "segments"])
def test_missing_field_rejected(field):
    data = dict(WIRE_BOOKING)
    del data[field]
    with pytest.raises(KeyError):
        Booking.from_dict(data)


@pytest.mark.parametrize(
    "field, value",
    [
        ("duration", "2430"),
        ("duration", True),
        ("canIssueTicketChecking", 1),
        ("expiryTime", 1722409261.5),
        ("segments", {}),
    ],
)
def test_wrong_type_rejected(field, value):
    data = {**WIRE_BOOKING, field: value}
    with pytest.raises(TypeError):
        Booking.from_dict(data)


def test_non_object_payload_rejected():
    with pytest.raises(TypeError):
        Booking.from_json("[1, 2, 3]")


def test_invalid_json_rejected():
    with pytest.raises(ValueError):
        Booking.from_json(b"\x00not json")


def test_non_numeric_expiry_is_kept_as_text():
    booking = Booking.from_dict({**WIRE_BOOKING, "expiryTime": "tomorrow"})
    assert booking.expiry_time == "tomorrow"
    with pytest.raises(ValueError):
        booking.expiry_timestamp


def test_cache_entry_roundtrip():
    entry = CacheEntry(timestamp=1750000000.25, booking=sample_booking())
    assert CacheEntry.from_dict(json.loads(json.dumps(entry.to_dict()))) == entry


def test_cache_entry_integer_timestamp_accepted():
    entry = CacheEntry.from_dict({"timestamp": 100, "booking": WIRE_BOOKING})
    assert entry.timestamp == 100.0
