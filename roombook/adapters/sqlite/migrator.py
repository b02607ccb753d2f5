"""SQL-file schema migrations.

Each ``NNNN_name.sql`` file under the migrations directory holds an up
script, optionally followed by a ``-- Down`` section that is never run
here. Applied files are recorded in ``_migrations`` and skipped afterwards.
"""

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

DOWN_MARKER = "-- Down"


class MigrationError(RuntimeError):
    """A migration script failed; none of its statements were kept."""


class SQLiteMigrator:
    def __init__(self, db_path: str, migrations_dir: str | Path):
        self.db_path = db_path
        self.migrations_dir = Path(migrations_dir)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS _migrations (
                filename TEXT PRIMARY KEY,
                applied_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        return conn

    def _scripts(self) -> list[Path]:
        return sorted(self.migrations_dir.glob("*.sql"))

    def pending(self) -> list[str]:
        """Filenames not yet applied, in apply order."""
        conn = self._connect()
        try:
            done = {row[0] for row in conn.execute("SELECT filename FROM _migrations")}
        finally:
            conn.close()
        return [p.name for p in self._scripts() if p.name not in done]

    def run_migrations(self) -> list[str]:
        """Apply pending migrations. Returns the filenames applied."""
        todo = self.pending()
        if not todo:
            logger.debug("Schema at %s is up to date", self.db_path)
            return []

        conn = self._connect()
        try:
            for filename in todo:
                logger.info("Applying migration: %s", filename)
                self._apply(conn, filename)
        finally:
            conn.close()

        logger.info("Applied %d migration(s) to %s", len(todo), self.db_path)
        return todo

    def _apply(self, conn: sqlite3.Connection, filename: str) -> None:
        text = (self.migrations_dir / filename).read_text()
        up_script = text.split(DOWN_MARKER, 1)[0]
        recorded = filename.replace("'", "''")
        # executescript commits before it runs, so the transaction lives in the script
        try:
            conn.executescript(
                f"BEGIN;\n{up_script}\n;\n"
                f"INSERT INTO _migrations (filename) VALUES ('{recorded}');\n"
                "COMMIT;"
            )
        except sqlite3.Error as e:
            conn.rollback()
            raise MigrationError(f"Migration {filename} failed: {e}") from e
