from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class BookingResponse:
    """Raw answer from the booking endpoint."""

    message: str
    code: int                     # 200 = success, anything else is a business failure
    payload: bytes | None = None  # booking JSON


class TransportError(Exception):
    """The transport could not produce a response at all (I/O error, missing fixture...)."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"transport error {code}: {message}")


class BookingTransport(ABC):
    """
    Port: how we reach the remote booking resource.

    BookingService depends ONLY on this interface.
    It doesn't know or care whether the bytes come from an HTTP endpoint
    or an in-process simulator with an artificial delay.
    """

    @abstractmethod
    async def fetch(self) -> BookingResponse:
        """
        Perform one request.
        Raises TransportError when no response could be obtained.
        """
        ...
