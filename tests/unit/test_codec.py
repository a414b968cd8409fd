import json
import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.domain.models import Transaction
from finance_tracker.services.codec import (
    CorruptDataError,
    decode_transactions,
    encode_transactions,
)

@pytest.fixture
def ledger():
    return [
        Transaction("a1", "Coffee", Decimal("4.50"), date(2024, 1, 1), True),
        Transaction("b2", "Salary", Decimal("2000.00"), date(2024, 1, 2), False),
        Transaction("c3", "Café crème", Decimal("0.01"), date(2023, 12, 31), True),
    ]

@pytest.mark.unit
class TestEncode:
    """Test the persisted wire format"""

    def test_encode_uses_original_field_names(self, ledger):
        # Act
        payload = json.loads(encode_transactions(ledger[:1]))

        # Assert
        assert payload == [{
            "id": "a1",
            "description": "Coffee",
            "amount": 4.5,
            "date": "2024-01-01",
            "isExpense": True,
        }]

    def test_encode_empty_ledger(self):
        assert encode_transactions([]) == b"[]"

    def test_encode_writes_exact_amount_literal(self, ledger):
        # Act
        data = encode_transactions(ledger[:1])

        # Assert
        assert b'"amount": 4.50,' in data

    def test_encode_rejects_non_finite_amount(self):
        # Arrange
        txn = Transaction("a1", "Coffee", Decimal("NaN"), date(2024, 1, 1), True)

        # Act & Assert
        with pytest.raises(ValueError):
            encode_transactions([txn])


@pytest.mark.unit
class TestDecode:
    """Test reading persisted data back"""

    def test_round_trip(self, ledger):
        # Act
        decoded = decode_transactions(encode_transactions(ledger))

        # Assert
        assert decoded == ledger
        assert all(isinstance(t.amount, Decimal) for t in decoded)

    def test_decimal_precision_preserved(self):
        # Arrange
        amounts = ["99.99", "0.01", "1234567.89", "19.95", "0.33"]
        ledger = [
            Transaction(str(i), "Test", Decimal(a), date(2024, 1, 1), True)
            for i, a in enumerate(amounts)
        ]

        # Act
        decoded = decode_transactions(encode_transactions(ledger))

        # Assert
        for original, restored in zip(ledger, decoded):
            assert restored.amount == original.amount, f"Lost precision for {original.amount}"

    @pytest.mark.parametrize("amount", [
        "12345678901234567.89",
        "1E-18",
        "1E-400",
        "1E+400",
        "4.50",
        "9999999999999999999999999999999.99",
    ])
    def test_amounts_beyond_float_range_and_precision(self, amount):
        # Arrange
        original = Transaction("a1", "Big", Decimal(amount), date(2024, 1, 1), True)

        # Act
        [restored] = decode_transactions(encode_transactions([original]))

        # Assert
        assert restored.amount == original.amount
        assert str(restored.amount) == amount

    def test_decode_accepts_timestamp_dates(self):
        """Older data stored full ISO timestamps"""
        # Arrange
        data = (
            b'[{"id": "1704103800000", "description": "Coffee", "amount": 4.5,'
            b' "date": "2024-01-01T10:30:00.000Z", "isExpense": true}]'
        )

        # Act
        [txn] = decode_transactions(data)

        # Assert
        assert txn.date == date(2024, 1, 1)
        assert txn.id == "1704103800000"

    def test_decode_accepts_integer_amounts_and_ids(self):
        # Arrange
        data = b'[{"id": 17, "description": "Salary", "amount": 2000, "date": "2024-01-02", "isExpense": false}]'

        # Act
        [txn] = decode_transactions(data)

        # Assert
        assert txn.id == "17"
        assert txn.amount == Decimal("2000")
        assert txn.is_expense is False

    @pytest.mark.parametrize("data", [
        b"",
        b"not json",
        b"\xff\xfe\x00",
        b'{"id": "a"}',
        b'["Coffee"]',
        b'[{"id": "a", "description": "Coffee", "amount": 4.5, "date": "2024-01-01"}]',
        b'[{"id": "a", "description": "", "amount": 4.5, "date": "2024-01-01", "isExpense": true}]',
        b'[{"id": "a", "description": "Coffee", "amount": "4.5", "date": "2024-01-01", "isExpense": true}]',
        b'[{"id": "a", "description": "Coffee", "amount": -4.5, "date": "2024-01-01", "isExpense": true}]',
        b'[{"id": "a", "description": "Coffee", "amount": 4.5, "date": "yesterday", "isExpense": true}]',
        b'[{"id": "a", "description": "Coffee", "amount": 4.5, "date": "2024-01-01", "isExpense": "yes"}]',
        b'[{"id": "", "description": "Coffee", "amount": 4.5, "date": "2024-01-01", "isExpense": true}]',
    ])
    def test_decode_rejects_malformed_data(self, data):
        with pytest.raises(CorruptDataError):
            decode_transactions(data)
