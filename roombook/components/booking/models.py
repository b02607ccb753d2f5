"""
Booking component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from roombook.domain.entities import Booking, Room

# --- Validation Error ---


ErrorCode = Literal["invalid_argument", "failed_precondition", "unavailable", "not_found"]


@dataclass(frozen=True)
class BookingValidationError:
    """Booking request error."""

    code: ErrorCode
    message: str
    room_id: str | None = None
    booking_id: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class BookRoomInput:
    """Input for booking a room."""

    room_id: str | None
    start_time: datetime | None
    end_time: datetime | None


@dataclass(frozen=True)
class AvailableRoomsInput:
    """Input for listing rooms free over an interval."""

    start_time: datetime | None
    end_time: datetime | None


@dataclass(frozen=True)
class CancelBookingInput:
    """Input for cancelling a booking."""

    booking_id: str | None


# --- Output Models ---


@dataclass(frozen=True)
class BookOutput:
    """Output for book operation."""

    booked: bool
    booking: Booking | None = None
    errors: list[BookingValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class AvailableRoomsOutput:
    """Output for availability query."""

    rooms: tuple[Room, ...]
    errors: list[BookingValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class CancelOutput:
    """Output for cancel operation."""

    cancelled: bool
    errors: list[BookingValidationError] = field(default_factory=list)
    success: bool = True
