"""Форматирование сумм и дат для отображения."""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

from expense_tracker.config import settings


def format_amount(amount: Union[Decimal, float, int], symbol: Optional[str] = None) -> str:
    """
    Форматирует сумму: ₹50,000 или ₹1,234.50.

    Копейки показываются только если они есть.
    """
    symbol = settings.currency_symbol if symbol is None else symbol
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    value = abs(value)
    if value == value.to_integral_value():
        return f"{sign}{symbol}{value:,.0f}"
    return f"{sign}{symbol}{value:,.2f}"


def format_date(value: date, date_format: Optional[str] = None) -> str:
    return value.strftime(date_format or settings.date_format)
