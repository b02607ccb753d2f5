from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """Half-open overlap: [a_start, a_end) and [b_start, b_end) share an instant."""
    return a_start < b_end and b_start < a_end


# --- Bookings ---

class Booking(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    room_id: str  # Lookup key into the room repository, not a reference
    start_time: datetime
    end_time: datetime

    @model_validator(mode="after")
    def check_interval(self) -> "Booking":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return intervals_overlap(self.start_time, self.end_time, start, end)


# --- Rooms ---

class Room(BaseModel):
    id: str
    name: str
    bookings: list[Booking] = Field(default_factory=list)
    # Bumped by the repository on every successful save
    version: int = 0

    def has_overlap(self, start: datetime, end: datetime) -> bool:
        return any(b.overlaps(start, end) for b in self.bookings)

    def add_booking(self, booking: Booking) -> None:
        # No overlap guard here; BookingSystem checks before mutating.
        self.bookings.append(booking)

    def get_booking(self, booking_id: str) -> Booking | None:
        for booking in self.bookings:
            if booking.id == booking_id:
                return booking
        return None

    def has_booking(self, booking_id: str) -> bool:
        return self.get_booking(booking_id) is not None

    def remove_booking(self, booking_id: str) -> bool:
        booking = self.get_booking(booking_id)
        if booking is None:
            return False
        self.bookings.remove(booking)
        return True
