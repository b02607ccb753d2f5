"""
Booking component - Room reservation entry points.

Wraps BookingSystem so callers receive outputs with error lists instead
of exceptions.

Invariants:
- I1: No two bookings held by a room overlap (half-open intervals)
- I2: A rejected request leaves the room and repository unchanged
- I3: Notification failures never undo a committed booking
- I4: Bookings that have started cannot be cancelled
"""

from __future__ import annotations

from ._impl import BookingSystem, FailedPreconditionError, InvalidArgumentError
from .models import (
    AvailableRoomsInput,
    AvailableRoomsOutput,
    BookingValidationError,
    BookOutput,
    BookRoomInput,
    CancelBookingInput,
    CancelOutput,
)
from .ports import ClockPort, NotifierPort, RoomRepoPort


def _create_service(
    repo: RoomRepoPort,
    clock: ClockPort,
    notifier: NotifierPort,
) -> BookingSystem:
    """Create booking service from ports."""
    return BookingSystem(clock=clock, repo=repo, notifier=notifier)


# --- Component Entry Points ---


def run_book_room(
    inp: BookRoomInput,
    *,
    repo: RoomRepoPort,
    clock: ClockPort,
    notifier: NotifierPort,
) -> BookOutput:
    """
    Book a room for the requested interval.

    Args:
        inp: Input containing room_id, start_time and end_time.
        repo: Room repository port.
        clock: Clock port for the past-time check.
        notifier: Notifier port for the confirmation.

    Returns:
        BookOutput with the committed booking, or errors.
    """
    service = _create_service(repo, clock, notifier)

    try:
        booking = service.reserve(inp.room_id, inp.start_time, inp.end_time)
    except InvalidArgumentError as e:
        return BookOutput(
            booked=False,
            errors=[
                BookingValidationError(
                    code="invalid_argument",
                    message=str(e),
                    room_id=inp.room_id,
                )
            ],
            success=False,
        )

    if booking is None:
        return BookOutput(
            booked=False,
            errors=[
                BookingValidationError(
                    code="unavailable",
                    message=f"Room {inp.room_id} is already booked for that time",
                    room_id=inp.room_id,
                )
            ],
            success=False,
        )

    return BookOutput(booked=True, booking=booking)


def run_available_rooms(
    inp: AvailableRoomsInput,
    *,
    repo: RoomRepoPort,
    clock: ClockPort,
    notifier: NotifierPort,
) -> AvailableRoomsOutput:
    """
    List rooms free over the requested interval.

    Args:
        inp: Input containing start_time and end_time.
        repo: Room repository port.
        clock: Clock port.
        notifier: Notifier port.

    Returns:
        AvailableRoomsOutput with rooms (possibly empty), or errors.
    """
    service = _create_service(repo, clock, notifier)

    try:
        rooms = service.get_available_rooms(inp.start_time, inp.end_time)
    except InvalidArgumentError as e:
        return AvailableRoomsOutput(
            rooms=(),
            errors=[BookingValidationError(code="invalid_argument", message=str(e))],
            success=False,
        )

    return AvailableRoomsOutput(rooms=tuple(rooms))


def run_cancel(
    inp: CancelBookingInput,
    *,
    repo: RoomRepoPort,
    clock: ClockPort,
    notifier: NotifierPort,
) -> CancelOutput:
    """
    Cancel a booking that has not started.

    Args:
        inp: Input containing booking_id.
        repo: Room repository port.
        clock: Clock port for the started check.
        notifier: Notifier port for the confirmation.

    Returns:
        CancelOutput indicating success or failure.
    """
    service = _create_service(repo, clock, notifier)

    try:
        cancelled = service.cancel_booking(inp.booking_id)
    except InvalidArgumentError as e:
        code = "invalid_argument"
        message = str(e)
    except FailedPreconditionError as e:
        code = "failed_precondition"
        message = str(e)
    else:
        if cancelled:
            return CancelOutput(cancelled=True)
        code = "not_found"
        message = f"Booking {inp.booking_id} not found"

    return CancelOutput(
        cancelled=False,
        errors=[
            BookingValidationError(
                code=code,
                message=message,
                booking_id=inp.booking_id,
            )
        ],
        success=False,
    )


def run(
    inp: BookRoomInput | AvailableRoomsInput | CancelBookingInput,
    *,
    repo: RoomRepoPort,
    clock: ClockPort,
    notifier: NotifierPort,
) -> BookOutput | AvailableRoomsOutput | CancelOutput:
    """
    Main entry point for the booking component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, BookRoomInput):
        return run_book_room(inp, repo=repo, clock=clock, notifier=notifier)
    elif isinstance(inp, AvailableRoomsInput):
        return run_available_rooms(inp, repo=repo, clock=clock, notifier=notifier)
    elif isinstance(inp, CancelBookingInput):
        return run_cancel(inp, repo=repo, clock=clock, notifier=notifier)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
