from dataclasses import dataclass, field
from decimal import Decimal
from datetime import date
from typing import Union

# Anything a caller may hand us as an amount; validation turns it into a Decimal
AmountLike = Union[Decimal, int, float, str]

@dataclass(frozen=True)
class Transaction:
    """Core domain model representing a single ledger entry"""
    id: str
    description: str
    amount: Decimal
    date: date
    is_expense: bool

    @property
    def signed_amount(self) -> Decimal:
        """Return amount with sign for net calculations"""
        return -self.amount if self.is_expense else self.amount

    def __repr__(self):
        sign = "-" if self.is_expense else "+"
        return f"Transaction({self.id[:8]}, {self.date}, {self.description[:30]}, {sign}${self.amount})"

@dataclass(frozen=True)
class TransactionDraft:
    """
    Caller-supplied fields for creating or replacing a transaction.

    A draft never carries an id: ids are assigned by the store on add
    and preserved by the store on update.
    """
    description: str
    amount: AmountLike
    date: date = field(default_factory=date.today)
    is_expense: bool = True
