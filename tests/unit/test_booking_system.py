"""
Tests for BookingSystem.

Collaborators are MagicMocks specced on the booking ports so each test
can verify exactly which of them were touched.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from roombook.components.booking import (
    BookingSystem,
    ClockPort,
    ConcurrentUpdateError,
    FailedPreconditionError,
    InvalidArgumentError,
    NotificationError,
    NotifierPort,
    RoomRepoPort,
)
from roombook.domain.entities import Booking, Room

NOW = datetime(2026, 1, 29, 9, 0, tzinfo=UTC)


@pytest.fixture
def clock() -> MagicMock:
    clock = MagicMock(spec=ClockPort)
    clock.now.return_value = NOW
    return clock


@pytest.fixture
def repo() -> MagicMock:
    return MagicMock(spec=RoomRepoPort)


@pytest.fixture
def notifier() -> MagicMock:
    return MagicMock(spec=NotifierPort)


@pytest.fixture
def system(clock: MagicMock, repo: MagicMock, notifier: MagicMock) -> BookingSystem:
    return BookingSystem(clock=clock, repo=repo, notifier=notifier)


# --- book_room ---


class TestBookRoom:
    @pytest.mark.parametrize(
        "start, end",
        [
            (datetime(2026, 2, 1, 9, 0), datetime(2026, 2, 1, 10, 0)),
            (NOW + timedelta(days=1), datetime(2026, 2, 1, 10, 0)),
        ],
    )
    def test_rejects_naive_times_before_reading_clock(
        self,
        system: BookingSystem,
        clock: MagicMock,
        repo: MagicMock,
        notifier: MagicMock,
        start: datetime,
        end: datetime,
    ) -> None:
        with pytest.raises(InvalidArgumentError, match="must be timezone-aware"):
            system.book_room("room01", start, end)

        clock.now.assert_not_called()
        repo.get_by_id.assert_not_called()
        repo.save.assert_not_called()
        notifier.send_booking_confirmation.assert_not_called()

    def test_returns_true_when_room_is_free(
        self, system: BookingSystem, repo: MagicMock, notifier: MagicMock
    ) -> None:
        room = Room(id="room01", name="Double room")
        repo.get_by_id.return_value = room

        result = system.book_room("room01", NOW + timedelta(days=1), NOW + timedelta(days=2))

        assert result is True
        repo.save.assert_called_once_with(room)
        notifier.send_booking_confirmation.assert_called_once()
        booking = notifier.send_booking_confirmation.call_args.args[0]
        assert isinstance(booking, Booking)
        assert booking.room_id == "room01"
        assert booking.start_time == NOW + timedelta(days=1)
        assert booking.end_time == NOW + timedelta(days=2)
        assert room.has_booking(booking.id)

    def test_returns_false_when_room_is_taken(
        self, system: BookingSystem, repo: MagicMock, notifier: MagicMock
    ) -> None:
        start = NOW + timedelta(days=1)
        end = NOW + timedelta(days=2)
        room = Room(id="room01", name="Double room")
        room.add_booking(
            Booking(
                id="existing-booking",
                room_id="room01",
                start_time=start - timedelta(hours=1),
                end_time=end + timedelta(hours=1),
            )
        )
        repo.get_by_id.return_value = room

        result = system.book_room("room01", start, end)

        assert result is False
        assert len(room.bookings) == 1
        repo.save.assert_not_called()
        notifier.send_booking_confirmation.assert_not_called()

    def test_rejects_start_in_the_past(
        self, system: BookingSystem, repo: MagicMock, notifier: MagicMock
    ) -> None:
        with pytest.raises(InvalidArgumentError, match="Cannot book a time in the past"):
            system.book_room("room01", NOW - timedelta(days=1), NOW + timedelta(days=2))

        assert repo.method_calls == []
        assert notifier.method_calls == []

    def test_start_exactly_now_is_allowed(
        self, system: BookingSystem, repo: MagicMock
    ) -> None:
        repo.get_by_id.return_value = Room(id="room01", name="Double room")

        assert system.book_room("room01", NOW, NOW + timedelta(hours=1)) is True

    @pytest.mark.parametrize(
        "room_id, start, end",
        [
            (None, NOW + timedelta(days=1), NOW + timedelta(days=2)),
            ("", NOW + timedelta(days=1), NOW + timedelta(days=2)),
            ("room01", None, NOW + timedelta(days=2)),
            ("room01", NOW + timedelta(days=1), None),
        ],
    )
    def test_rejects_missing_arguments(
        self,
        system: BookingSystem,
        clock: MagicMock,
        repo: MagicMock,
        notifier: MagicMock,
        room_id: str | None,
        start: datetime | None,
        end: datetime | None,
    ) -> None:
        with pytest.raises(InvalidArgumentError, match="requires valid room id"):
            system.book_room(room_id, start, end)

        assert clock.method_calls == []
        assert repo.method_calls == []
        assert notifier.method_calls == []

    @pytest.mark.parametrize(
        "start, end",
        [
            (NOW + timedelta(days=2), NOW + timedelta(days=1)),
            (NOW + timedelta(hours=2), NOW + timedelta(hours=1)),
            (NOW + timedelta(hours=1), NOW + timedelta(hours=1)),
        ],
    )
    def test_rejects_end_not_after_start(
        self,
        system: BookingSystem,
        repo: MagicMock,
        notifier: MagicMock,
        start: datetime,
        end: datetime,
    ) -> None:
        with pytest.raises(InvalidArgumentError, match="End time must be after start time"):
            system.book_room("room01", start, end)

        assert repo.method_calls == []
        assert notifier.method_calls == []

    def test_rejects_unknown_room(
        self, system: BookingSystem, repo: MagicMock, notifier: MagicMock
    ) -> None:
        repo.get_by_id.return_value = None

        with pytest.raises(InvalidArgumentError, match="Room does not exist"):
            system.book_room("non-existent", NOW + timedelta(days=1), NOW + timedelta(days=2))

        repo.save.assert_not_called()
        assert notifier.method_calls == []

    def test_succeeds_when_notification_fails(
        self, system: BookingSystem, repo: MagicMock, notifier: MagicMock
    ) -> None:
        room = Room(id="room01", name="Double room")
        repo.get_by_id.return_value = room
        notifier.send_booking_confirmation.side_effect = NotificationError("SMTP down")

        result = system.book_room("room01", NOW + timedelta(days=1), NOW + timedelta(days=2))

        assert result is True
        repo.save.assert_called_once_with(room)
        assert len(room.bookings) == 1

    def test_absorbs_any_notifier_exception(
        self, system: BookingSystem, repo: MagicMock, notifier: MagicMock
    ) -> None:
        repo.get_by_id.return_value = Room(id="room01", name="Double room")
        notifier.send_booking_confirmation.side_effect = RuntimeError("boom")

        assert system.book_room("room01", NOW + timedelta(days=1), NOW + timedelta(days=2))

    def test_notifier_failure_is_logged(
        self,
        system: BookingSystem,
        repo: MagicMock,
        notifier: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        repo.get_by_id.return_value = Room(id="room01", name="Double room")
        notifier.send_booking_confirmation.side_effect = NotificationError("SMTP down")

        system.book_room("room01", NOW + timedelta(days=1), NOW + timedelta(days=2))

        assert "Booking confirmation failed" in caplog.text

    def test_persists_before_notifying(
        self, clock: MagicMock, repo: MagicMock, notifier: MagicMock
    ) -> None:
        calls = MagicMock()
        calls.attach_mock(repo.save, "save")
        calls.attach_mock(notifier.send_booking_confirmation, "notify")
        repo.get_by_id.return_value = Room(id="room01", name="Double room")
        system = BookingSystem(clock=clock, repo=repo, notifier=notifier)

        system.book_room("room01", NOW + timedelta(days=1), NOW + timedelta(days=2))

        assert [c[0] for c in calls.mock_calls] == ["save", "notify"]

    def test_repository_failure_propagates(
        self, system: BookingSystem, repo: MagicMock, notifier: MagicMock
    ) -> None:
        repo.get_by_id.return_value = Room(id="room01", name="Double room")
        repo.save.side_effect = ConcurrentUpdateError("room01", 0)

        with pytest.raises(ConcurrentUpdateError):
            system.book_room("room01", NOW + timedelta(days=1), NOW + timedelta(days=2))

        notifier.send_booking_confirmation.assert_not_called()

    def test_booking_ids_are_unique(self, system: BookingSystem, repo: MagicMock) -> None:
        room = Room(id="room01", name="Double room")
        repo.get_by_id.return_value = room

        for day in range(1, 4):
            system.book_room(
                "room01", NOW + timedelta(days=day), NOW + timedelta(days=day, hours=1)
            )

        assert len({b.id for b in room.bookings}) == 3

    def test_reserve_returns_committed_booking(
        self, system: BookingSystem, repo: MagicMock
    ) -> None:
        room = Room(id="room01", name="Double room")
        repo.get_by_id.return_value = room

        booking = system.reserve("room01", NOW + timedelta(days=1), NOW + timedelta(days=2))

        assert booking is not None
        assert room.get_booking(booking.id) == booking


# --- get_available_rooms ---


class TestGetAvailableRooms:
    def test_rejects_naive_times(self, system: BookingSystem, repo: MagicMock) -> None:
        room = Room(id="room01", name="Double room")
        room.add_booking(
            Booking(
                id="b1",
                room_id="room01",
                start_time=NOW + timedelta(days=3),
                end_time=NOW + timedelta(days=4),
            )
        )
        repo.list_all.return_value = [room]

        with pytest.raises(InvalidArgumentError, match="must be timezone-aware"):
            system.get_available_rooms(datetime(2026, 2, 1), datetime(2026, 2, 2))

        repo.list_all.assert_not_called()

    def test_returns_all_rooms_when_none_booked(
        self, system: BookingSystem, repo: MagicMock
    ) -> None:
        rooms = [
            Room(id="room01", name="Double room"),
            Room(id="room02", name="Double room"),
            Room(id="room03", name="Single room"),
        ]
        repo.list_all.return_value = rooms

        available = system.get_available_rooms(NOW + timedelta(days=1), NOW + timedelta(days=2))

        assert {r.id for r in available} == {"room01", "room02", "room03"}

    def test_returns_only_free_rooms_when_some_booked(
        self, system: BookingSystem, repo: MagicMock
    ) -> None:
        start = NOW + timedelta(days=1)
        end = NOW + timedelta(days=2)
        booked = Room(id="room01", name="Double room")
        booked.add_booking(
            Booking(id="b1", room_id="room01", start_time=start, end_time=end)
        )
        touching = Room(id="room02", name="Double room")
        touching.add_booking(
            Booking(id="b2", room_id="room02", start_time=end, end_time=end + timedelta(hours=3))
        )
        free = Room(id="room03", name="Single room")
        repo.list_all.return_value = [booked, touching, free]

        available = system.get_available_rooms(start, end)

        assert {r.id for r in available} == {"room02", "room03"}

    def test_returns_empty_when_all_booked(
        self, system: BookingSystem, repo: MagicMock
    ) -> None:
        start = NOW + timedelta(days=1)
        end = NOW + timedelta(days=2)
        rooms = []
        for i in range(1, 4):
            room = Room(id=f"room0{i}", name="Room")
            room.add_booking(
                Booking(id=f"booking0{i}", room_id=room.id, start_time=start, end_time=end)
            )
            rooms.append(room)
        repo.list_all.return_value = rooms

        assert system.get_available_rooms(start, end) == []

    @pytest.mark.parametrize("start, end", [(None, NOW), (NOW, None), (None, None)])
    def test_rejects_missing_times(
        self,
        system: BookingSystem,
        repo: MagicMock,
        start: datetime | None,
        end: datetime | None,
    ) -> None:
        with pytest.raises(InvalidArgumentError, match="Must supply both start and end time"):
            system.get_available_rooms(start, end)

        assert repo.method_calls == []

    def test_rejects_end_not_after_start(
        self, system: BookingSystem, repo: MagicMock
    ) -> None:
        with pytest.raises(InvalidArgumentError, match="End time must be after start time"):
            system.get_available_rooms(NOW + timedelta(days=2), NOW + timedelta(days=1))

        assert repo.method_calls == []

    def test_does_not_consult_clock(
        self, system: BookingSystem, clock: MagicMock, repo: MagicMock
    ) -> None:
        repo.list_all.return_value = []

        # Past intervals are a valid query
        system.get_available_rooms(NOW - timedelta(days=2), NOW - timedelta(days=1))

        clock.now.assert_not_called()


# --- cancel_booking ---


class TestCancelBooking:
    def _room_with_booking(self, start: datetime, end: datetime) -> Room:
        room = Room(id="room01", name="Double room")
        room.add_booking(Booking(id="booking01", room_id="room01", start_time=start, end_time=end))
        return room

    def test_cancels_future_booking(
        self, system: BookingSystem, repo: MagicMock, notifier: MagicMock
    ) -> None:
        room = self._room_with_booking(NOW + timedelta(days=1), NOW + timedelta(days=2))
        repo.list_all.return_value = [room]

        result = system.cancel_booking("booking01")

        assert result is True
        assert not room.has_booking("booking01")
        repo.save.assert_called_once_with(room)
        notifier.send_cancellation_confirmation.assert_called_once()
        cancelled = notifier.send_cancellation_confirmation.call_args.args[0]
        assert cancelled.id == "booking01"

    def test_returns_false_when_booking_missing(
        self, system: BookingSystem, clock: MagicMock, repo: MagicMock, notifier: MagicMock
    ) -> None:
        repo.list_all.return_value = [Room(id="room01", name="Double room")]

        result = system.cancel_booking("non-existent booking")

        assert result is False
        repo.save.assert_not_called()
        notifier.send_cancellation_confirmation.assert_not_called()
        clock.now.assert_not_called()

    @pytest.mark.parametrize(
        "start, end",
        [
            (NOW - timedelta(hours=1), NOW + timedelta(days=1)),  # in progress
            (NOW - timedelta(days=2), NOW - timedelta(days=1)),  # finished
            (NOW, NOW + timedelta(hours=1)),  # starts right now
        ],
    )
    def test_rejects_started_or_finished_booking(
        self,
        system: BookingSystem,
        repo: MagicMock,
        notifier: MagicMock,
        start: datetime,
        end: datetime,
    ) -> None:
        room = self._room_with_booking(start, end)
        repo.list_all.return_value = [room]

        with pytest.raises(FailedPreconditionError, match="has started or ended"):
            system.cancel_booking("booking01")

        assert room.has_booking("booking01")
        repo.save.assert_not_called()
        assert notifier.method_calls == []

    def test_failed_precondition_is_not_invalid_argument(self) -> None:
        assert not issubclass(FailedPreconditionError, InvalidArgumentError)
        assert not issubclass(FailedPreconditionError, ValueError)
        assert issubclass(InvalidArgumentError, ValueError)

    @pytest.mark.parametrize("booking_id", [None, ""])
    def test_rejects_missing_booking_id(
        self,
        system: BookingSystem,
        repo: MagicMock,
        notifier: MagicMock,
        booking_id: str | None,
    ) -> None:
        with pytest.raises(InvalidArgumentError, match="Booking id cannot be empty"):
            system.cancel_booking(booking_id)

        assert repo.method_calls == []
        assert notifier.method_calls == []

    def test_succeeds_when_notification_fails(
        self, system: BookingSystem, repo: MagicMock, notifier: MagicMock
    ) -> None:
        room = self._room_with_booking(NOW + timedelta(days=1), NOW + timedelta(days=2))
        repo.list_all.return_value = [room]
        notifier.send_cancellation_confirmation.side_effect = NotificationError("down")

        result = system.cancel_booking("booking01")

        assert result is True
        assert not room.has_booking("booking01")
        repo.save.assert_called_once_with(room)

    def test_finds_booking_in_any_room(
        self, system: BookingSystem, repo: MagicMock
    ) -> None:
        other = Room(id="room02", name="Single room")
        room = Room(id="room03", name="Suite")
        room.add_booking(
            Booking(
                id="booking07",
                room_id="room03",
                start_time=NOW + timedelta(days=3),
                end_time=NOW + timedelta(days=4),
            )
        )
        repo.list_all.return_value = [other, room]

        assert system.cancel_booking("booking07") is True
        repo.save.assert_called_once_with(room)
