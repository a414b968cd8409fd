from typing import Sequence, Tuple

from finance_tracker.domain.enums import FilterMode
from finance_tracker.domain.models import Transaction

def filter_view(
    transactions: Sequence[Transaction],
    mode: FilterMode,
) -> Tuple[Transaction, ...]:
    """
    Derive the displayed subset of the ledger.

    Keeps input order and never touches the input.

    Args:
        transactions: Ledger snapshot
        mode: ALL, INCOME or EXPENSE

    Returns:
        Matching transactions
    """
    mode = FilterMode.parse(mode)

    if mode is FilterMode.INCOME:
        return tuple(t for t in transactions if not t.is_expense)
    if mode is FilterMode.EXPENSE:
        return tuple(t for t in transactions if t.is_expense)
    return tuple(transactions)
