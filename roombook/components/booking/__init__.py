"""
Booking component - Room reservation with best-effort notification.
"""

from ._impl import (
    BookingError,
    BookingSystem,
    FailedPreconditionError,
    InvalidArgumentError,
)
from .component import (
    run,
    run_available_rooms,
    run_book_room,
    run_cancel,
)
from .models import (
    AvailableRoomsInput,
    AvailableRoomsOutput,
    BookingValidationError,
    BookOutput,
    BookRoomInput,
    CancelBookingInput,
    CancelOutput,
)
from .ports import (
    ClockPort,
    ConcurrentUpdateError,
    NotificationError,
    NotifierPort,
    RoomRepoPort,
)

__all__ = [
    # Entry points
    "run",
    "run_available_rooms",
    "run_book_room",
    "run_cancel",
    # Input models
    "AvailableRoomsInput",
    "BookRoomInput",
    "CancelBookingInput",
    # Output models
    "AvailableRoomsOutput",
    "BookOutput",
    "BookingValidationError",
    "CancelOutput",
    # Ports
    "ClockPort",
    "NotifierPort",
    "RoomRepoPort",
    # Service and errors
    "BookingError",
    "BookingSystem",
    "ConcurrentUpdateError",
    "FailedPreconditionError",
    "InvalidArgumentError",
    "NotificationError",
]
