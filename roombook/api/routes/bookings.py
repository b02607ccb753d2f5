"""
Booking API Routes.

Status mapping:
- InvalidArgumentError -> 400
- Room unavailable, FailedPreconditionError, ConcurrentUpdateError -> 409
- Unknown booking on cancel -> 404
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from roombook.api.deps import get_booking_system
from roombook.api.schemas import BookingResponse, BookRequest, BookResponse, CancelResponse
from roombook.components.booking import (
    BookingSystem,
    ConcurrentUpdateError,
    FailedPreconditionError,
    InvalidArgumentError,
)

router = APIRouter()


@router.post("", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def book_room(
    request: BookRequest,
    booking_system: BookingSystem = Depends(get_booking_system),
) -> BookResponse:
    try:
        booking = booking_system.reserve(request.room_id, request.start_time, request.end_time)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ConcurrentUpdateError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    if booking is None:
        raise HTTPException(
            status_code=409,
            detail="Room is not available for the requested time",
        )

    return BookResponse(booked=True, booking=BookingResponse.from_booking(booking))


@router.delete("/{booking_id}", response_model=CancelResponse)
def cancel_booking(
    booking_id: str,
    booking_system: BookingSystem = Depends(get_booking_system),
) -> CancelResponse:
    try:
        cancelled = booking_system.cancel_booking(booking_id)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except (FailedPreconditionError, ConcurrentUpdateError) as e:
        raise HTTPException(status_code=409, detail=str(e)) from e

    if not cancelled:
        raise HTTPException(status_code=404, detail="Booking not found")

    return CancelResponse(cancelled=True, booking_id=booking_id)
