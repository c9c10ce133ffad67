"""
Booking model and its JSON codec.

Field names on the wire are camelCase (shipReference, originAndDestinationPair, ...).
Unknown keys are ignored when decoding so newer payloads stay readable.
Missing or mistyped fields raise KeyError / TypeError / ValueError.
"""

import json
from dataclasses import dataclass, field


def _get(data: dict, key: str, kind: type):
    value = data[key]
    # bool is a subclass of int: don't accept True as a duration
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"{key!r} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _get_object(data: dict, key: str) -> dict:
    return _get(data, key, dict)


@dataclass
class Location:
    code: str
    display_name: str
    url: str

    def to_dict(self) -> dict:
        return {"code": self.code, "displayName": self.display_name, "url": self.url}

    @classmethod
    def from_dict(cls, data: dict) -> "Location":
        return cls(
            code=_get(data, "code", str),
            display_name=_get(data, "displayName", str),
            url=_get(data, "url", str),
        )


@dataclass
class OriginDestinationPair:
    origin: Location
    destination: Location
    origin_city: str
    destination_city: str

    def to_dict(self) -> dict:
        return {
            "origin": self.origin.to_dict(),
            "destination": self.destination.to_dict(),
            "originCity": self.origin_city,
            "destinationCity": self.destination_city,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OriginDestinationPair":
        return cls(
            origin=Location.from_dict(_get_object(data, "origin")),
            destination=Location.from_dict(_get_object(data, "destination")),
            origin_city=_get(data, "originCity", str),
            destination_city=_get(data, "destinationCity", str),
        )


@dataclass
class Segment:
    """One leg of the trip. Ids are not required to be unique."""

    id: int
    origin_and_destination_pair: OriginDestinationPair

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "originAndDestinationPair": self.origin_and_destination_pair.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Segment":
        return cls(
            id=_get(data, "id", int),
            origin_and_destination_pair=OriginDestinationPair.from_dict(
                _get_object(data, "originAndDestinationPair")
            ),
        )


@dataclass
class Booking:
    """Ship booking: reference/token, ticketing flag, expiry and ordered trip segments."""

    ship_reference: str
    ship_token: str
    can_issue_ticket_checking: bool
    expiry_time: str     # decimal epoch seconds, e.g. "1750000000.5"
    duration: int        # total trip time in minutes
    segments: list[Segment] = field(default_factory=list)

    @property
    def expiry_timestamp(self) -> float:
        """expiry_time parsed to epoch seconds. Raises ValueError if not numeric."""
        return float(self.expiry_time)

    def to_dict(self) -> dict:
        return {
            "shipReference": self.ship_reference,
            "shipToken": self.ship_token,
            "canIssueTicketChecking": self.can_issue_ticket_checking,
            "expiryTime": self.expiry_time,
            "duration": self.duration,
            "segments": [s.to_dict() for s in self.segments],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Booking":
        if not isinstance(data, dict):
            raise TypeError(f"booking must be an object, got {type(data).__name__}")
        segments = _get(data, "segments", list)
        return cls(
            ship_reference=_get(data, "shipReference", str),
            ship_token=_get(data, "shipToken", str),
            can_issue_ticket_checking=_get(data, "canIssueTicketChecking", bool),
            expiry_time=_get(data, "expiryTime", str),
            duration=_get(data, "duration", int),
            segments=[Segment.from_dict(s) for s in segments],
        )

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def from_json(cls, raw: bytes | str) -> "Booking":
        return cls.from_dict(json.loads(raw))
