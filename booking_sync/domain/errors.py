"""
Errors raised by BookingService.

Both are terminal for the fetch attempt that produced them: nothing retries.
The data manager forwards them to subscribers as the last element of a sequence.
"""


class BookingServiceError(Exception):
    """Base class for fetch failures."""


class BusinessError(BookingServiceError):
    """The transport reported a failure: non-200 status, empty payload, not found..."""

    def __init__(self, code: int, message: str | None = None):
        self.code = code
        self.message = message
        text = f"business error {code}"
        if message:
            text += f": {message}"
        super().__init__(text)

    def __eq__(self, other):
        if not isinstance(other, BusinessError):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    __hash__ = Exception.__hash__


class DecodingFailed(BookingServiceError):
    """A payload was received but could not be decoded into a Booking."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"could not decode booking: {cause}")
