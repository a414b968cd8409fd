"""
Durable key-value storage for the ledger.

Backends share the KeyValueStore contract: bytes in, bytes out, None for a
missing key, PersistenceError for anything that went wrong.

Quick Start:
    >>> from finance_tracker.storage import InMemoryKeyValueStore
    >>>
    >>> storage = InMemoryKeyValueStore()
    >>> storage.set("appTheme", b"true")
    >>> storage.get("appTheme")
    b'true'
"""
from finance_tracker.storage.base import KeyValueStore, PersistenceError
from finance_tracker.storage.memory import InMemoryKeyValueStore
from finance_tracker.storage.sqlite_kv_store import SQLiteKeyValueStore

__all__ = [
    "KeyValueStore",
    "PersistenceError",
    "InMemoryKeyValueStore",
    "SQLiteKeyValueStore",
]
