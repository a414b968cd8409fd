import pytest
from datetime import date
from decimal import Decimal

from finance_tracker.domain.enums import FilterMode
from finance_tracker.domain.models import Transaction
from finance_tracker.services.filters import filter_view

@pytest.fixture
def ledger():
    return (
        Transaction("1", "Coffee", Decimal("4.50"), date(2024, 1, 1), True),
        Transaction("2", "Salary", Decimal("2000.00"), date(2024, 1, 2), False),
        Transaction("3", "Rent", Decimal("900.00"), date(2024, 1, 3), True),
        Transaction("4", "Refund", Decimal("12.00"), date(2024, 1, 4), False),
    )

@pytest.mark.unit
class TestFilterView:
    """Test deriving views from the ledger"""

    def test_all_returns_input_unchanged(self, ledger):
        assert filter_view(ledger, FilterMode.ALL) == ledger

    def test_income_keeps_only_inflows_in_order(self, ledger):
        # Act
        view = filter_view(ledger, FilterMode.INCOME)

        # Assert
        assert [t.id for t in view] == ["2", "4"]

    def test_expense_keeps_only_outflows_in_order(self, ledger):
        # Act
        view = filter_view(ledger, FilterMode.EXPENSE)

        # Assert
        assert [t.id for t in view] == ["1", "3"]

    def test_does_not_mutate_input(self, ledger):
        # Arrange
        as_list = list(ledger)

        # Act
        filter_view(as_list, FilterMode.INCOME)

        # Assert
        assert as_list == list(ledger)

    def test_empty_input(self):
        assert filter_view([], FilterMode.EXPENSE) == ()

    def test_accepts_mode_names(self, ledger):
        assert filter_view(ledger, "Income") == filter_view(ledger, FilterMode.INCOME)


@pytest.mark.unit
class TestFilterModeParse:
    """Test parsing filter modes from user input"""

    @pytest.mark.parametrize("value,expected", [
        ("all", FilterMode.ALL),
        ("INCOME", FilterMode.INCOME),
        (" expense ", FilterMode.EXPENSE),
        (FilterMode.EXPENSE, FilterMode.EXPENSE),
    ])
    def test_parse(self, value, expected):
        assert FilterMode.parse(value) is expected

    def test_parse_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown filter mode"):
            FilterMode.parse("savings")
