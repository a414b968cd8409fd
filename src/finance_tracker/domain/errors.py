"""
Ledger error hierarchy.

Everything the core raises to its callers derives from FinanceTrackerError,
so the presentation layer can catch one type.
"""


class FinanceTrackerError(Exception):
    """Base class for all finance tracker errors."""
    pass

class ValidationError(FinanceTrackerError, ValueError):
    """Raised when a draft fails validation. No state was changed."""
    pass

class TransactionNotFoundError(FinanceTrackerError):
    """Raised when a transaction id is not in the ledger."""

    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction with ID {transaction_id} not found")
        self.transaction_id = transaction_id

class StoreNotLoadedError(FinanceTrackerError):
    """Raised when a mutation arrives before the store finished loading."""
    pass
