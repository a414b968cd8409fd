import pytest
from datetime import date
from decimal import Decimal
from itertools import count

from finance_tracker.database.connection import DatabaseConfig, DatabaseManager
from finance_tracker.domain.models import TransactionDraft
from finance_tracker.services.transaction_store import TransactionStore
from finance_tracker.storage import InMemoryKeyValueStore

@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    """Fresh in-memory key-value store for each test"""
    return InMemoryKeyValueStore()

@pytest.fixture
def sequential_ids():
    """Predictable id factory: txn-1, txn-2, ..."""
    counter = count(1)
    return lambda: f"txn-{next(counter)}"

@pytest.fixture
def store(storage, sequential_ids) -> TransactionStore:
    """A loaded, empty store backed by memory"""
    store = TransactionStore(storage, id_factory=sequential_ids)
    store.load()
    return store

@pytest.fixture
def coffee() -> TransactionDraft:
    return TransactionDraft(
        description="Coffee",
        amount=Decimal("4.50"),
        date=date(2024, 1, 1),
        is_expense=True,
    )

@pytest.fixture
def salary() -> TransactionDraft:
    return TransactionDraft(
        description="Salary",
        amount=Decimal("2000.00"),
        date=date(2024, 1, 2),
        is_expense=False,
    )

@pytest.fixture
def db_manager(tmp_path):
    """
    Real SQLite database in pytest's tmp_path.

    The connection is closed after each test.
    """
    manager = DatabaseManager(DatabaseConfig(tmp_path / "test.db"))
    yield manager
    manager.close()
