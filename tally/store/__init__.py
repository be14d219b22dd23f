"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from tally.store.backend import KeyValueStore, SqliteKeyValueStore
from tally.store.queries import get_value, set_values
from tally.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "get_value",
    "set_values",
    # Backends
    "KeyValueStore",
    "SqliteKeyValueStore",
]
