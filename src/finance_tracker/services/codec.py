"""
Wire format for the persisted ledger.

The ``transactions`` entry is a UTF-8 JSON array of objects::

    [{"id": "...", "description": "Coffee", "amount": 4.50,
      "date": "2024-01-01", "isExpense": true}, ...]

Numbers are read back as ``Decimal`` so amounts keep the precision they
were written with. Older data stored full timestamps
(``2024-01-01T10:30:00.000Z``); those decode to their calendar date.
"""
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, List

from finance_tracker.domain.errors import FinanceTrackerError
from finance_tracker.domain.models import Transaction

class CorruptDataError(FinanceTrackerError, ValueError):
    """Raised when persisted bytes can't be decoded into transactions."""
    pass

def encode_transactions(transactions: Iterable[Transaction]) -> bytes:
    """
    Serialize transactions, in order, to the persisted JSON blob.

    Amounts are written as the exact Decimal literal, never through float,
    so any amount the store accepts reads back unchanged.
    """
    records = ", ".join(_encode_record(txn) for txn in transactions)
    return f"[{records}]".encode("utf-8")

def _encode_record(txn: Transaction) -> str:
    return (
        "{"
        f'"id": {json.dumps(txn.id, ensure_ascii=False)}, '
        f'"description": {json.dumps(txn.description, ensure_ascii=False)}, '
        f'"amount": {_amount_literal(txn.amount)}, '
        f'"date": "{txn.date.isoformat()}", '
        f'"isExpense": {json.dumps(txn.is_expense)}'
        "}"
    )

def _amount_literal(amount: Decimal) -> str:
    # str() of a finite Decimal ("4.50", "1E+400") is already a valid JSON number
    if not amount.is_finite():
        raise ValueError(f"Cannot store non-finite amount {amount}")
    return str(amount)

def decode_transactions(data: bytes) -> List[Transaction]:
    """
    Deserialize the persisted JSON blob.

    Args:
        data: Bytes previously produced by encode_transactions

    Raises:
        CorruptDataError: If the bytes aren't valid JSON or any record is malformed

    Returns:
        Transactions in stored order
    """
    try:
        payload = json.loads(data, parse_float=Decimal, parse_int=Decimal)
    except (UnicodeDecodeError, ValueError) as e:
        raise CorruptDataError(f"Stored transactions are not valid JSON: {e}") from e

    if not isinstance(payload, list):
        raise CorruptDataError(
            f"Expected a JSON array of transactions, got {type(payload).__name__}"
        )

    return [_record_to_transaction(record, index) for index, record in enumerate(payload)]

def _record_to_transaction(record: Any, index: int) -> Transaction:
    if not isinstance(record, dict):
        raise CorruptDataError(f"Record {index} is not an object")

    try:
        raw_id = record["id"]
        description = record["description"]
        amount = record["amount"]
        raw_date = record["date"]
        is_expense = record["isExpense"]
    except KeyError as e:
        raise CorruptDataError(f"Record {index} is missing field {e}") from None

    # ids were numeric timestamps rendered as strings; tolerate the bare number
    if isinstance(raw_id, Decimal) and raw_id == raw_id.to_integral_value():
        raw_id = str(raw_id)
    if not isinstance(raw_id, str) or not raw_id:
        raise CorruptDataError(f"Record {index} has an invalid id: {raw_id!r}")

    if not isinstance(description, str) or not description.strip():
        raise CorruptDataError(f"Record {index} has an empty description")

    if not isinstance(amount, Decimal):
        raise CorruptDataError(f"Record {index} has a non-numeric amount: {amount!r}")
    if not amount.is_finite() or amount <= 0:
        raise CorruptDataError(f"Record {index} has a non-positive amount: {amount}")

    if not isinstance(is_expense, bool):
        raise CorruptDataError(f"Record {index} has a non-boolean isExpense: {is_expense!r}")

    return Transaction(
        id=raw_id,
        description=description,
        amount=amount,
        date=_parse_date(raw_date, index),
        is_expense=is_expense,
    )

def _parse_date(value: Any, index: int) -> date:
    """Accept 'YYYY-MM-DD' or a full ISO-8601 timestamp"""
    if not isinstance(value, str):
        raise CorruptDataError(f"Record {index} has a non-string date: {value!r}")

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        # fromisoformat only understands a trailing 'Z' from 3.11 on
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise CorruptDataError(f"Record {index} has an invalid date: {value!r}") from None
