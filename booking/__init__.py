from booking.errors import (
    BookingError,
    InvalidFieldError,
    PastTeeTimeError,
    StoreUnavailableError,
    TeeTimeFullError,
    TeeTimeNotFoundError,
)
from booking.service import BookingService

__all__ = [
    "BookingError",
    "BookingService",
    "InvalidFieldError",
    "PastTeeTimeError",
    "StoreUnavailableError",
    "TeeTimeFullError",
    "TeeTimeNotFoundError",
]
