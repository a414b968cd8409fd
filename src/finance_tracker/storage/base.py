from abc import ABC, abstractmethod
from typing import Optional

from finance_tracker.domain.errors import FinanceTrackerError

class PersistenceError(FinanceTrackerError):
    """Raised when the durable store can't be read or written."""
    pass

class KeyValueStore(ABC):
    """
    Abstract durable key-value byte store.

    Knows nothing about what the bytes mean: callers own encoding.
    Swapping backends (memory, SQLite, ...) doesn't touch the ledger.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """
        Read the value stored under a key.

        Args:
            key: Entry name

        Returns:
            The stored bytes, or None if the key is absent

        Raises:
            PersistenceError: If the backend can't be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: Entry name
            value: Bytes to store

        Raises:
            PersistenceError: If the write did not complete
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if deleted, False if it wasn't there

        Raises:
            PersistenceError: If the backend can't be written
        """
        pass
