import sqlite3
from datetime import datetime
from typing import Any

from roombook.components.booking.ports import ConcurrentUpdateError
from roombook.domain.entities import Booking, Room


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _row_to_booking(row: dict[str, Any]) -> Booking:
    return Booking(
        id=row["id"],
        room_id=row["room_id"],
        start_time=datetime.fromisoformat(row["start_time"]),
        end_time=datetime.fromisoformat(row["end_time"]),
    )


class SQLiteRoomRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        # Autocommit mode; save() manages its own transaction
        conn = sqlite3.connect(self.db_path, isolation_level=None)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn

    def save(self, room: Room) -> None:
        conn = self._get_conn()
        try:
            # Take the write lock before reading the version so the
            # check-and-set cannot interleave with another writer.
            conn.execute("BEGIN IMMEDIATE")

            row = conn.execute(
                "SELECT version FROM rooms WHERE id = ?", (room.id,)
            ).fetchone()

            if row is None:
                conn.execute(
                    "INSERT INTO rooms (id, name, version) VALUES (?, ?, ?)",
                    (room.id, room.name, room.version + 1),
                )
            else:
                if row["version"] != room.version:
                    raise ConcurrentUpdateError(room.id, room.version)
                conn.execute(
                    "UPDATE rooms SET name = ?, version = ? WHERE id = ?",
                    (room.name, room.version + 1, room.id),
                )

            # Replace the full booking set
            conn.execute("DELETE FROM bookings WHERE room_id = ?", (room.id,))
            conn.executemany(
                """
                INSERT INTO bookings (id, room_id, start_time, end_time)
                VALUES (?, ?, ?, ?)
            """,
                [
                    (b.id, room.id, b.start_time.isoformat(), b.end_time.isoformat())
                    for b in room.bookings
                ],
            )

            conn.execute("COMMIT")
            room.version += 1
        except Exception:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            conn.close()

    def get_by_id(self, room_id: str) -> Room | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM rooms WHERE id = ?", (room_id,)).fetchone()
            if not row:
                return None

            booking_rows = conn.execute(
                "SELECT * FROM bookings WHERE room_id = ? ORDER BY start_time ASC",
                (room_id,),
            ).fetchall()

            return Room(
                id=row["id"],
                name=row["name"],
                version=row["version"],
                bookings=[_row_to_booking(b) for b in booking_rows],
            )
        finally:
            conn.close()

    def list_all(self) -> list[Room]:
        conn = self._get_conn()
        try:
            room_rows = conn.execute("SELECT * FROM rooms ORDER BY rowid ASC").fetchall()
            booking_rows = conn.execute(
                "SELECT * FROM bookings ORDER BY start_time ASC"
            ).fetchall()

            by_room: dict[str, list[Booking]] = {}
            for b_row in booking_rows:
                by_room.setdefault(b_row["room_id"], []).append(_row_to_booking(b_row))

            return [
                Room(
                    id=r["id"],
                    name=r["name"],
                    version=r["version"],
                    bookings=by_room.get(r["id"], []),
                )
                for r in room_rows
            ]
        finally:
            conn.close()
