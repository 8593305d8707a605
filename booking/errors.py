"""Errors raised by the booking service.

Every message is meant to be shown to the user as-is.
"""


class BookingError(Exception):
    """Base for all booking errors."""


class InvalidFieldError(BookingError):
    """A submitted field is missing or invalid. Nothing was written."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class PastTeeTimeError(BookingError):
    """The tee time has already started and can no longer be claimed."""


class TeeTimeNotFoundError(BookingError):
    """No tee time with the given id."""


class TeeTimeFullError(BookingError):
    """Every spot on the tee time is taken."""


class StoreUnavailableError(BookingError):
    """The store rejected or failed an operation. Safe to try again."""
