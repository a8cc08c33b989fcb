"""SQLite connection management."""

from pathlib import Path
from typing import Optional

from peewee import PeeweeException, SqliteDatabase

from tooltip_taxonomy.config import Config
from tooltip_taxonomy.database.models import create_tables, db_proxy
from tooltip_taxonomy.exceptions import DatabaseError
from tooltip_taxonomy.logging_config import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """Owns the SQLite database bound to the model proxy."""

    def __init__(self, config: Config) -> None:
        self.path = Path(config.database.path)
        self.database: Optional[SqliteDatabase] = None

    def connect(self) -> SqliteDatabase:
        """Open the database, bind the models and create missing tables."""
        if self.database is not None:
            return self.database

        try:
            if self.path.parent and not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            database = SqliteDatabase(
                str(self.path), pragmas={"foreign_keys": 1}
            )
            db_proxy.initialize(database)
            database.connect(reuse_if_open=True)
            create_tables()
        except (PeeweeException, OSError) as e:
            raise DatabaseError(
                f"Failed to open database: {e}", details=f"Path: {self.path}"
            ) from e

        self.database = database
        logger.info("Database initialized", path=str(self.path))
        return database

    def close(self) -> None:
        """Close the connection if open."""
        if self.database is not None and not self.database.is_closed():
            self.database.close()
            logger.debug("Database closed", path=str(self.path))
        self.database = None


_manager: Optional[DatabaseManager] = None


def initialize_database(config: Config) -> DatabaseManager:
    """Open the configured database and make it the active one."""
    global _manager
    close_database()
    _manager = DatabaseManager(config)
    _manager.connect()
    return _manager


def close_database() -> None:
    """Close the active database, if any."""
    global _manager
    if _manager is not None:
        _manager.close()
        _manager = None
