import threading
import uuid
from typing import Callable, List, Optional, Tuple

from finance_tracker.domain.enums import FilterMode
from finance_tracker.domain.errors import StoreNotLoadedError, TransactionNotFoundError
from finance_tracker.domain.models import Transaction, TransactionDraft
from finance_tracker.logging_setup import get_logger
from finance_tracker.services.aggregates import summarize
from finance_tracker.services.codec import CorruptDataError, decode_transactions, encode_transactions
from finance_tracker.services.filters import filter_view
from finance_tracker.services.models import LedgerSummary
from finance_tracker.services.validation import validate_draft
from finance_tracker.storage.base import KeyValueStore, PersistenceError

_logger = get_logger(__name__)

Listener = Callable[["TransactionStore"], None]

def new_transaction_id() -> str:
    """Random id; unique even for records created in the same millisecond"""
    return uuid.uuid4().hex

class TransactionStore:
    """
    Sole owner of the ledger.

    Every mutation is validated first, applied to the in-memory list and then
    written through to the key-value store as the whole collection. A failed
    write doesn't undo the change: memory stays authoritative and the error is
    kept in ``last_persistence_error`` so the caller can warn the user.

    All operations hold one lock, so mutations never interleave and readers
    never see a half-applied change.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = "transactions",
        id_factory: Callable[[], str] = new_transaction_id,
    ):
        self.storage = storage
        self.key = key
        self._id_factory = id_factory

        self._lock = threading.RLock()
        self._transactions: List[Transaction] = []
        self._loaded = False
        self._filter_mode = FilterMode.ALL
        self._listener: Optional[Listener] = None
        self._last_persistence_error: Optional[PersistenceError] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def last_persistence_error(self) -> Optional[PersistenceError]:
        """None if the most recent read or write went through"""
        return self._last_persistence_error

    def load(self) -> None:
        """
        Replace in-memory state with what's persisted.

        Never raises for bad data: an absent entry, an unreadable backend or a
        corrupt blob all leave an empty ledger, the last two with a warning.
        """
        with self._lock:
            self._transactions = self._read_persisted()
            self._loaded = True
            _logger.info("Loaded %d transactions", len(self._transactions))
        self._notify()

    def _read_persisted(self) -> List[Transaction]:
        try:
            raw = self.storage.get(self.key)
        except PersistenceError as e:
            _logger.error("Could not read transactions, starting empty: %s", e)
            self._last_persistence_error = e
            return []

        self._last_persistence_error = None
        if raw is None:
            return []

        try:
            transactions = decode_transactions(raw)
        except CorruptDataError as e:
            _logger.warning("Discarding unreadable transaction data: %s", e)
            return []

        return self._dedupe_ids(transactions)

    def _dedupe_ids(self, transactions: List[Transaction]) -> List[Transaction]:
        """Give later records with an already-seen id a fresh one"""
        seen = set()
        taken = {t.id for t in transactions}
        result = []
        for txn in transactions:
            if txn.id in seen:
                new_id = self._new_id(taken)
                taken.add(new_id)
                _logger.warning("Duplicate transaction id %s reassigned to %s", txn.id, new_id)
                txn = Transaction(
                    id=new_id,
                    description=txn.description,
                    amount=txn.amount,
                    date=txn.date,
                    is_expense=txn.is_expense,
                )
            seen.add(txn.id)
            result.append(txn)
        return result

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register the single change listener, replacing any previous one.

        The listener gets the store after load() and after every successful
        mutation.

        Returns:
            A callable that removes the listener
        """
        self._listener = listener

        def unsubscribe() -> None:
            if self._listener is listener:
                self._listener = None

        return unsubscribe

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, draft: TransactionDraft) -> Transaction:
        """
        Validate a draft and append it as a new transaction.

        Raises:
            StoreNotLoadedError: If load() hasn't completed
            ValidationError: If the draft is invalid

        Returns:
            The created transaction with its assigned id
        """
        with self._lock:
            self._require_loaded()
            clean = validate_draft(draft)
            txn = self._build(self._new_id(), clean)
            self._transactions.append(txn)
            self._persist()
        self._notify()
        return txn

    def update(self, transaction_id: str, draft: TransactionDraft) -> Transaction:
        """
        Replace every field of a transaction except its id.

        The record keeps its position in the ledger.

        Raises:
            StoreNotLoadedError: If load() hasn't completed
            TransactionNotFoundError: If the id isn't in the ledger
            ValidationError: If the draft is invalid
        """
        with self._lock:
            self._require_loaded()
            index = self._index_of(transaction_id)
            clean = validate_draft(draft)
            txn = self._build(transaction_id, clean)
            self._transactions[index] = txn
            self._persist()
        self._notify()
        return txn

    def remove(self, transaction_id: str) -> Transaction:
        """
        Permanently delete a transaction.

        Destructive: callers should confirm with the user first.

        Raises:
            StoreNotLoadedError: If load() hasn't completed
            TransactionNotFoundError: If the id isn't in the ledger

        Returns:
            The removed transaction
        """
        with self._lock:
            self._require_loaded()
            index = self._index_of(transaction_id)
            txn = self._transactions.pop(index)
            self._persist()
        self._notify()
        return txn

    def clear(self) -> int:
        """
        Delete every transaction and the persisted entry.

        Returns:
            Number of transactions removed
        """
        with self._lock:
            self._require_loaded()
            count = len(self._transactions)
            self._transactions = []
            try:
                self.storage.delete(self.key)
                self._last_persistence_error = None
            except PersistenceError as e:
                _logger.warning("Could not delete persisted transactions: %s", e)
                self._last_persistence_error = e
        self._notify()
        return count

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise StoreNotLoadedError("Transactions haven't been loaded yet; call load() first")

    def _index_of(self, transaction_id: str) -> int:
        for index, txn in enumerate(self._transactions):
            if txn.id == transaction_id:
                return index
        raise TransactionNotFoundError(transaction_id)

    def _new_id(self, taken=None) -> str:
        taken = taken if taken is not None else {t.id for t in self._transactions}
        while True:
            candidate = self._id_factory()
            if candidate not in taken:
                return candidate

    @staticmethod
    def _build(transaction_id: str, draft: TransactionDraft) -> Transaction:
        return Transaction(
            id=transaction_id,
            description=draft.description,
            amount=draft.amount,
            date=draft.date,
            is_expense=draft.is_expense,
        )

    def _persist(self) -> None:
        """Write the whole ledger. Failures are recorded, not raised."""
        try:
            self.storage.set(self.key, encode_transactions(self._transactions))
        except PersistenceError as e:
            _logger.warning("Changes may not survive a restart: %s", e)
            self._last_persistence_error = e
        else:
            self._last_persistence_error = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list(self) -> Tuple[Transaction, ...]:
        """Snapshot of the full ledger in insertion order"""
        with self._lock:
            return tuple(self._transactions)

    def get(self, transaction_id: str) -> Transaction:
        """
        Raises:
            TransactionNotFoundError: If the id isn't in the ledger
        """
        with self._lock:
            return self._transactions[self._index_of(transaction_id)]

    @property
    def filter_mode(self) -> FilterMode:
        return self._filter_mode

    def set_filter_mode(self, mode: FilterMode | str) -> None:
        """Choose which slice get_filtered_view() returns. Not persisted."""
        self._filter_mode = FilterMode.parse(mode)
        self._notify()

    def get_filtered_view(self) -> Tuple[Transaction, ...]:
        return filter_view(self.list(), self._filter_mode)

    def get_aggregates(self) -> LedgerSummary:
        """Totals over the full ledger, whatever the filter mode"""
        return summarize(self.list())
