"""Database factory functions for creating database instances."""

from pathlib import Path
from typing import Optional

from ledgerkit.config import Settings, load_settings
from ledgerkit.database.sqlalchemy_db import SQLAlchemyDatabase


def create_database(settings: Optional[Settings] = None) -> SQLAlchemyDatabase:
    """Create a database instance from settings.

    ``Settings.database_url`` wins when set; otherwise a SQLite file at
    ``Settings.database_path`` is used.
    """
    if settings is None:
        settings = load_settings()
    if settings.database_url:
        return SQLAlchemyDatabase(settings.database_url, busy_timeout=settings.busy_timeout)
    return create_sqlite_database(settings.database_path, busy_timeout=settings.busy_timeout)


def create_sqlite_database(database_path: Optional[str] = None, busy_timeout: float = 30.0) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, falls back to
            LEDGERKIT_DB_PATH, then to ~/.ledgerkit/ledgerkit.db
        busy_timeout: Seconds a writer waits for the database lock

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = load_settings().database_path

    Path(database_path).expanduser().parent.mkdir(parents=True, exist_ok=True)
    database_url = f"sqlite:///{Path(database_path).expanduser()}"
    return SQLAlchemyDatabase(database_url, busy_timeout=busy_timeout)
