"""
Booking component port definitions.

The booking core depends only on these three collaborators; storage,
notification transport and the time source live in adapters.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from roombook.domain.entities import Booking, Room


class ClockPort(Protocol):
    """Time source for "is this in the past" checks."""

    def now(self) -> datetime:
        """Return the current instant."""
        ...


class RoomRepoPort(Protocol):
    """Repository interface for rooms and the bookings they hold."""

    def get_by_id(self, room_id: str) -> Room | None:
        """Get room by ID."""
        ...

    def list_all(self) -> list[Room]:
        """List every room."""
        ...

    def save(self, room: Room) -> None:
        """
        Persist the room with its full booking collection.

        Raises:
            ConcurrentUpdateError: If the stored room changed since it was read.
        """
        ...


class NotifierPort(Protocol):
    """Best-effort delivery of booking confirmations. May raise."""

    def send_booking_confirmation(self, booking: Booking) -> None:
        """Confirm a new booking."""
        ...

    def send_cancellation_confirmation(self, booking: Booking) -> None:
        """Confirm a cancelled booking."""
        ...


# --- Error Types ---


class ConcurrentUpdateError(Exception):
    """Room was saved by another writer since it was read."""

    def __init__(self, room_id: str, expected_version: int) -> None:
        self.room_id = room_id
        self.expected_version = expected_version
        super().__init__(
            f"Room {room_id} was modified concurrently (expected version {expected_version})"
        )


class NotificationError(Exception):
    """Notifier could not deliver a confirmation."""

    pass
