import json

from finance_tracker.logging_setup import get_logger
from finance_tracker.storage.base import KeyValueStore, PersistenceError

_logger = get_logger(__name__)

class PreferenceStore:
    """
    Persisted dark-mode flag.

    Lives on its own key and never touches the ledger. Nothing here raises:
    failures are logged and reads fall back to False.
    """

    DEFAULT = False

    def __init__(self, storage: KeyValueStore, key: str = "appTheme"):
        self.storage = storage
        self.key = key

    def get(self) -> bool:
        """Return the stored flag, or False if absent or unreadable"""
        try:
            raw = self.storage.get(self.key)
        except PersistenceError as e:
            _logger.warning("Could not read theme preference: %s", e)
            return self.DEFAULT

        if raw is None:
            return self.DEFAULT

        try:
            value = json.loads(raw)
        except ValueError as e:
            _logger.warning("Ignoring unreadable theme preference: %s", e)
            return self.DEFAULT

        if not isinstance(value, bool):
            _logger.warning("Ignoring non-boolean theme preference: %r", value)
            return self.DEFAULT
        return value

    def set(self, dark_mode: bool) -> bool:
        """
        Store the flag.

        Returns:
            True if it was written, False if the write failed
        """
        try:
            self.storage.set(self.key, json.dumps(bool(dark_mode)).encode("utf-8"))
        except PersistenceError as e:
            _logger.warning("Could not save theme preference: %s", e)
            return False
        return True
