"""
BookingCache port — keeps the last successfully fetched booking.

Single key: there is at most one entry, and every save replaces it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from booking_sync.domain.booking import Booking


@dataclass
class CacheEntry:
    timestamp: float   # epoch seconds at which the entry was written
    booking: Booking

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "booking": self.booking.to_dict()}

    @classmethod
    def from_dict(cls, data: dict) -> "CacheEntry":
        timestamp = data["timestamp"]
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            raise TypeError("'timestamp' must be a number")
        return cls(timestamp=float(timestamp), booking=Booking.from_dict(data["booking"]))


class BookingCache(ABC):
    """
    Port: durable storage for the cached booking.

    Neither method raises. A missing or unreadable entry is a normal state
    (load() returns None); a failed write is dropped and the in-process copy
    stays authoritative.
    """

    @abstractmethod
    def load(self) -> CacheEntry | None:
        """Return the cached entry, or None if nothing usable is stored."""
        ...

    @abstractmethod
    def save(self, booking: Booking) -> None:
        """Replace the cached entry with booking, stamped with the current time."""
        ...
