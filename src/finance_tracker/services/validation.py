from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from finance_tracker.domain.errors import ValidationError
from finance_tracker.domain.models import TransactionDraft

def validate_draft(draft: TransactionDraft) -> TransactionDraft:
    """
    Check a draft against the ledger invariants.

    Args:
        draft: Caller-supplied fields

    Raises:
        ValidationError: On an empty description, a non-numeric or non-positive
            amount, a non-date date or a non-boolean expense flag

    Returns:
        A normalized draft: trimmed description, Decimal amount, plain date
    """
    if not isinstance(draft.description, str) or not draft.description.strip():
        raise ValidationError("Description is required")

    if isinstance(draft.date, datetime):
        txn_date = draft.date.date()
    elif isinstance(draft.date, date):
        txn_date = draft.date
    else:
        raise ValidationError(f"Date must be a calendar date, got {draft.date!r}")

    if not isinstance(draft.is_expense, bool):
        raise ValidationError(f"Expense flag must be a boolean, got {draft.is_expense!r}")

    return TransactionDraft(
        description=draft.description.strip(),
        amount=parse_amount(draft.amount),
        date=txn_date,
        is_expense=draft.is_expense,
    )

def parse_amount(value: Any) -> Decimal:
    """Turn user input into a positive, finite Decimal"""
    if isinstance(value, bool):
        raise ValidationError(f"Amount must be a number, got {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        # str() first so 4.1 stays 4.1 rather than its binary expansion
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation:
            raise ValidationError(f"Amount must be a number, got {value!r}") from None
    else:
        raise ValidationError(f"Amount must be a number, got {value!r}")

    if not amount.is_finite():
        raise ValidationError(f"Amount must be a finite number, got {value!r}")
    if amount <= 0:
        raise ValidationError(f"Amount must be greater than zero, got {amount}")

    return amount
