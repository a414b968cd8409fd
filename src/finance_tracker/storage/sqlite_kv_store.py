import sqlite3
from typing import Optional

from finance_tracker.database.connection import DatabaseManager
from finance_tracker.logging_setup import get_logger
from finance_tracker.storage.base import KeyValueStore, PersistenceError

_logger = get_logger(__name__)

class SQLiteKeyValueStore(KeyValueStore):
    """
    SQLite implementation of the KeyValueStore.

    One row per key in the kv_store table. Every write runs in its own
    transaction, so a value is either fully replaced or left untouched.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db = db_manager
        try:
            self.db.initialize()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Could not initialize database: {e}") from e

    def get(self, key: str) -> Optional[bytes]:
        """Read a value, or None if the key doesn't exist"""
        try:
            conn = self.db.get_connection()
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to read '{key}': {e}") from e

        if row is None:
            return None

        value = row["value"]
        # Rows written as TEXT by other tools come back as str
        return value.encode("utf-8") if isinstance(value, str) else bytes(value)

    def set(self, key: str, value: bytes) -> None:
        """Insert or replace a value."""
        try:
            with self.db.transaction() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, sqlite3.Binary(value)),
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to write '{key}': {e}") from e

        _logger.debug("Wrote %d bytes to '%s'", len(value), key)

    def delete(self, key: str) -> bool:
        """Delete a key."""
        try:
            with self.db.transaction() as conn:
                cursor = conn.execute(
                    "DELETE FROM kv_store WHERE key = ?",
                    (key,)
                )
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to delete '{key}': {e}") from e
