"""In-memory room repository adapter.

This adapter implements RoomRepoPort for the booking component.
Stored rooms are copies, so callers never share mutable state with the
store; save() is a version check-and-set under a lock.
"""

import threading

from roombook.components.booking.ports import ConcurrentUpdateError
from roombook.domain.entities import Room


class InMemoryRoomRepo:
    """In-memory room storage - suitable for single-process deployments."""

    def __init__(self, rooms: list[Room] | None = None) -> None:
        self._rooms: dict[str, Room] = {}
        self._lock = threading.Lock()
        for room in rooms or []:
            self._rooms[room.id] = room.model_copy(deep=True)

    def get_by_id(self, room_id: str) -> Room | None:
        """Get a copy of the room by ID."""
        with self._lock:
            room = self._rooms.get(room_id)
            return room.model_copy(deep=True) if room else None

    def list_all(self) -> list[Room]:
        """List copies of all rooms in insertion order."""
        with self._lock:
            return [room.model_copy(deep=True) for room in self._rooms.values()]

    def save(self, room: Room) -> None:
        """Store the room if nobody else saved it since it was read."""
        with self._lock:
            stored = self._rooms.get(room.id)
            if stored is not None and stored.version != room.version:
                raise ConcurrentUpdateError(room.id, room.version)
            room.version += 1
            self._rooms[room.id] = room.model_copy(deep=True)

    def clear(self) -> None:
        """Remove all rooms - useful for testing."""
        with self._lock:
            self._rooms.clear()
