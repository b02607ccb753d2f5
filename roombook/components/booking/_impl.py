"""
BookingSystem - Room booking orchestration.

Validates requests, applies the half-open overlap rule against the
room's current bookings, persists the room and attempts notification.

Key behaviors:
- Validation errors are raised before any collaborator is mutated
- An unavailable room or unknown booking is a False result, not an error
- Persistence happens before notification
- Notifier failures are logged and discarded; the booking stays committed
- Repository failures propagate to the caller
"""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import uuid4

from roombook.domain.entities import Booking, Room

from .ports import ClockPort, NotifierPort, RoomRepoPort

logger = logging.getLogger(__name__)


# --- Errors ---


class BookingError(Exception):
    """Base exception for booking requests that cannot be carried out."""

    pass


class InvalidArgumentError(BookingError, ValueError):
    """Malformed, missing or out-of-range request input."""

    pass


class FailedPreconditionError(BookingError):
    """Request is well formed but the booking's state forbids it."""

    pass


# --- Messages ---

MSG_BOOKING_ARGS_REQUIRED = "Booking requires valid room id, start and end time"
MSG_TIMES_REQUIRED = "Must supply both start and end time"
MSG_END_BEFORE_START = "End time must be after start time"
MSG_NAIVE_TIME = "Start and end time must be timezone-aware"
MSG_START_IN_PAST = "Cannot book a time in the past"
MSG_ROOM_NOT_FOUND = "Room does not exist"
MSG_BOOKING_ID_REQUIRED = "Booking id cannot be empty"
MSG_BOOKING_STARTED = "Cannot cancel a booking that has started or ended"


def _require_aware(start_time: datetime, end_time: datetime) -> None:
    # Naive and aware datetimes cannot be compared with each other.
    if start_time.tzinfo is None or end_time.tzinfo is None:
        raise InvalidArgumentError(MSG_NAIVE_TIME)


def _new_booking_id() -> str:
    return uuid4().hex


class BookingSystem:
    """
    Room booking service.

    Holds no state between calls; all state lives in the rooms returned by
    the repository.
    """

    def __init__(
        self,
        clock: ClockPort,
        repo: RoomRepoPort,
        notifier: NotifierPort,
    ) -> None:
        self.clock = clock
        self.repo = repo
        self.notifier = notifier

    def book_room(
        self,
        room_id: str | None,
        start_time: datetime | None,
        end_time: datetime | None,
    ) -> bool:
        """
        Book a room for [start_time, end_time).

        Returns:
            True if the booking was committed, False if the room is taken.

        Raises:
            InvalidArgumentError: Missing or naive times, empty interval, start in
                the past or unknown room.
        """
        return self.reserve(room_id, start_time, end_time) is not None

    def reserve(
        self,
        room_id: str | None,
        start_time: datetime | None,
        end_time: datetime | None,
    ) -> Booking | None:
        """Same as book_room, returning the committed Booking or None."""
        if not room_id or start_time is None or end_time is None:
            raise InvalidArgumentError(MSG_BOOKING_ARGS_REQUIRED)
        _require_aware(start_time, end_time)

        now = self.clock.now()

        if end_time <= start_time:
            raise InvalidArgumentError(MSG_END_BEFORE_START)

        if start_time < now:
            raise InvalidArgumentError(MSG_START_IN_PAST)

        room = self.repo.get_by_id(room_id)
        if room is None:
            raise InvalidArgumentError(MSG_ROOM_NOT_FOUND)

        if room.has_overlap(start_time, end_time):
            logger.debug(
                "Room %s unavailable for %s - %s", room_id, start_time, end_time
            )
            return None

        booking = Booking(
            id=_new_booking_id(),
            room_id=room.id,
            start_time=start_time,
            end_time=end_time,
        )
        room.add_booking(booking)
        self.repo.save(room)
        logger.info("Booked room %s as %s", room.id, booking.id)

        try:
            self.notifier.send_booking_confirmation(booking)
        except Exception:
            logger.warning(
                "Booking confirmation failed for %s", booking.id, exc_info=True
            )

        return booking

    def get_available_rooms(
        self,
        start_time: datetime | None,
        end_time: datetime | None,
    ) -> list[Room]:
        """
        List rooms with no booking overlapping [start_time, end_time).

        Raises:
            InvalidArgumentError: Missing or naive times, or empty interval.
        """
        if start_time is None or end_time is None:
            raise InvalidArgumentError(MSG_TIMES_REQUIRED)
        _require_aware(start_time, end_time)

        if end_time <= start_time:
            raise InvalidArgumentError(MSG_END_BEFORE_START)

        return [
            room
            for room in self.repo.list_all()
            if not room.has_overlap(start_time, end_time)
        ]

    def cancel_booking(self, booking_id: str | None) -> bool:
        """
        Cancel a booking that has not started yet.

        Returns:
            True if cancelled, False if no room holds the booking.

        Raises:
            InvalidArgumentError: Missing booking id.
            FailedPreconditionError: The booking has started or ended.
        """
        if not booking_id:
            raise InvalidArgumentError(MSG_BOOKING_ID_REQUIRED)

        found = self._find_booking(booking_id)
        if found is None:
            return False
        room, booking = found

        if booking.start_time <= self.clock.now():
            raise FailedPreconditionError(MSG_BOOKING_STARTED)

        room.remove_booking(booking_id)
        self.repo.save(room)
        logger.info("Cancelled booking %s in room %s", booking_id, room.id)

        try:
            self.notifier.send_cancellation_confirmation(booking)
        except Exception:
            logger.warning(
                "Cancellation confirmation failed for %s", booking_id, exc_info=True
            )

        return True

    def _find_booking(self, booking_id: str) -> tuple[Room, Booking] | None:
        # No booking index; scan every room.
        for room in self.repo.list_all():
            booking = room.get_booking(booking_id)
            if booking is not None:
                return room, booking
        return None
