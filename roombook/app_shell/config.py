import logging
import os
from pathlib import Path

from roombook.adapters.sqlite.migrator import SQLiteMigrator
from roombook.rules.models import Rules

logger = logging.getLogger(__name__)


class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("ROOMBOOK_DATA_DIR", "./data"))
        self.rules_path = Path(os.environ.get("ROOMBOOK_RULES", str(self.base_dir / "rules.yaml")))

    def db_path(self, rules: Rules) -> str:
        return str(self.data_dir / rules.storage.db_filename)

    def migrations_dir(self, rules: Rules) -> str:
        return str(self.base_dir / rules.storage.migrations_dir)


def configure_logging(rules: Rules) -> None:
    logging.basicConfig(
        level=rules.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def prepare_storage(settings: Settings, rules: Rules) -> str:
    """
    Create the data directory and apply pending migrations.
    Returns the database path.
    """
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    db_path = settings.db_path(rules)

    migrations_dir = settings.migrations_dir(rules)
    if not Path(migrations_dir).is_dir():
        raise FileNotFoundError(f"Migrations directory not found at: {migrations_dir}")

    SQLiteMigrator(db_path, migrations_dir).run_migrations()
    logger.info("Database ready at %s", db_path)
    return db_path
