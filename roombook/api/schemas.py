from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from roombook.domain.entities import Booking, Room


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC so they compare with the clock."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# --- Requests ---


class RoomCreateRequest(BaseModel):
    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)


class BookRequest(BaseModel):
    # Optional so that missing values reach BookingSystem's own validation
    room_id: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_tz(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


# --- Responses ---


class BookingResponse(BaseModel):
    id: str
    room_id: str
    start_time: datetime
    end_time: datetime

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingResponse":
        return cls(
            id=booking.id,
            room_id=booking.room_id,
            start_time=booking.start_time,
            end_time=booking.end_time,
        )


class RoomResponse(BaseModel):
    id: str
    name: str
    bookings: list[BookingResponse]

    @classmethod
    def from_room(cls, room: Room) -> "RoomResponse":
        return cls(
            id=room.id,
            name=room.name,
            bookings=[BookingResponse.from_booking(b) for b in room.bookings],
        )


class BookResponse(BaseModel):
    booked: bool
    booking: BookingResponse


class CancelResponse(BaseModel):
    cancelled: bool
    booking_id: str
