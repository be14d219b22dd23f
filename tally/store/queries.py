"""Database query functions for the key-value table."""

import sqlite3
from collections.abc import Mapping
from contextlib import closing
from pathlib import Path

from tally.store.schema import get_db_path


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection.
    """
    if db_path is None:
        db_path = get_db_path()
    return sqlite3.connect(db_path)


def get_value(key: str, db_path: Path | None = None) -> str | None:
    """Get the stored value for a key.

    Args:
        key: Entry name.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored text, or None if the key is absent.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None


def set_values(items: Mapping[str, str], db_path: Path | None = None) -> None:
    """Overwrite several entries, each as a whole value.

    Args:
        items: Entry names to new values.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with closing(_connect(db_path)) as conn:
        cursor = conn.cursor()
        try:
            cursor.executemany(
                "INSERT INTO kv (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                list(items.items()),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
