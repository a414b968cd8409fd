from decimal import Decimal
from typing import Iterable

from finance_tracker.domain.models import Transaction
from finance_tracker.services.models import LedgerSummary

ZERO = Decimal("0")

def total_income(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of all inflows"""
    return sum((t.amount for t in transactions if not t.is_expense), ZERO)

def total_expense(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of all outflows"""
    return sum((t.amount for t in transactions if t.is_expense), ZERO)

def balance(transactions: Iterable[Transaction]) -> Decimal:
    """Income minus expenses"""
    return sum((t.signed_amount for t in transactions), ZERO)

def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    """
    Compute every aggregate in one pass.

    Pass the full ledger, never a filtered view.
    """
    income = expense = ZERO
    income_count = expense_count = 0

    for txn in transactions:
        if txn.is_expense:
            expense += txn.amount
            expense_count += 1
        else:
            income += txn.amount
            income_count += 1

    return LedgerSummary(
        total_income=income,
        total_expense=expense,
        income_count=income_count,
        expense_count=expense_count,
    )
