"""Key-value backends the ledger persists through."""

import sqlite3
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from tally.errors import StorageError
from tally.logging_setup import get_logger
from tally.store.queries import get_value, set_values
from tally.store.schema import get_db_path, init_database

logger = get_logger("tally.store")


class KeyValueStore(Protocol):
    """Durable string store with whole-value overwrite semantics."""

    def get(self, key: str) -> str | None: ...

    def set_many(self, items: Mapping[str, str]) -> None: ...


class SqliteKeyValueStore:
    """KeyValueStore backed by the kv table of a sqlite file.

    sqlite3 errors are re-raised as StorageError.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path if db_path is not None else get_db_path()
        try:
            init_database(self.db_path)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e
        logger.debug("Opened key-value store at %s", self.db_path)

    def get(self, key: str) -> str | None:
        try:
            return get_value(key, self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot read {key!r}: {e}") from e

    def set_many(self, items: Mapping[str, str]) -> None:
        try:
            set_values(items, self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot write {', '.join(items)}: {e}") from e
