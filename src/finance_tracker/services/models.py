"""
Service layer models - results of read operations, not domain entities.
"""
from dataclasses import dataclass
from decimal import Decimal

@dataclass(frozen=True)
class LedgerSummary:
    """
    Totals over the whole ledger.

    Always built from the full, unfiltered collection. Balance is derived,
    so it can't drift from the two totals.
    """

    total_income: Decimal
    total_expense: Decimal
    income_count: int = 0
    expense_count: int = 0

    @property
    def balance(self) -> Decimal:
        """Income minus expenses"""
        return self.total_income - self.total_expense

    @property
    def total_transactions(self) -> int:
        return self.income_count + self.expense_count

    def __str__(self) -> str:
        "Human-readable summary"
        lines = [
            f"Transactions: {self.total_transactions}",
            f"  💰 Income:   ${self.total_income:,.2f} ({self.income_count} transactions)",
            f"  💸 Expenses: ${self.total_expense:,.2f} ({self.expense_count} transactions)",
            f"  {'📈' if self.balance >= 0 else '📉'} Balance:  ${self.balance:,.2f}",
        ]
        return "\n".join(lines)
