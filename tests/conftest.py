from datetime import UTC, datetime
from pathlib import Path

import pytest

from roombook.adapters.clock import FixedClock
from roombook.adapters.dev_notifier import DevNotifier
from roombook.adapters.memory_repo import InMemoryRoomRepo
from roombook.adapters.sqlite.migrator import SQLiteMigrator
from roombook.components.booking import BookingSystem
from roombook.domain.entities import Room

PROJECT_ROOT = Path(__file__).parent.parent
MIGRATIONS_DIR = str(PROJECT_ROOT / "migrations")

NOW = datetime(2026, 1, 29, 9, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def notifier() -> DevNotifier:
    return DevNotifier()


@pytest.fixture
def room_repo() -> InMemoryRoomRepo:
    return InMemoryRoomRepo(
        [
            Room(id="room01", name="Double room"),
            Room(id="room02", name="Double room"),
            Room(id="room03", name="Single room"),
        ]
    )


@pytest.fixture
def booking_system(
    clock: FixedClock, room_repo: InMemoryRoomRepo, notifier: DevNotifier
) -> BookingSystem:
    return BookingSystem(clock=clock, repo=room_repo, notifier=notifier)


@pytest.fixture
def db_path(tmp_path) -> str:
    """Migrated SQLite database in a temporary directory."""
    path = str(tmp_path / "roombook.db")
    SQLiteMigrator(path, MIGRATIONS_DIR).run_migrations()
    return path
