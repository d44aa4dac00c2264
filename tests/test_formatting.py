"""
Тесты форматирования сумм и дат.
"""
from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.utils.formatting import format_amount, format_date


@pytest.mark.parametrize("amount, expected", [
    (Decimal("50000"), "₹50,000"),
    (Decimal("1234.5"), "₹1,234.50"),
    (0, "₹0"),
    (Decimal("-700"), "-₹700"),
    (12.25, "₹12.25"),
])
def test_format_amount(amount, expected):
    assert format_amount(amount, symbol="₹") == expected


def test_format_amount_custom_symbol():
    assert format_amount(10, symbol="$") == "$10"


def test_format_date():
    assert format_date(date(2024, 1, 5), "%d.%m.%Y") == "05.01.2024"
