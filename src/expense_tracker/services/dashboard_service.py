"""
Сервис агрегатов для дашборда и отчётов.

Функции не обращаются к сети: на вход получают уже загруженные записи
(record_service.list_records), на выходе возвращают данные для карточек и графиков.
Параметр today позволяет считать периоды относительно произвольной даты.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from expense_tracker.models import Expense, Income, InventoryItem

logger = logging.getLogger(__name__)

INCOME_COLOR = "#10B981"
EXPENSE_COLOR = "#EF4444"
SAVINGS_COLOR = "#8B5CF6"

TOP_SOURCES_LIMIT = 5
ACTIVITY_DAYS = 7
RECENT_LIMIT = 5

Record = Union[Income, Expense]


def _sum(records: Iterable[Record]) -> Decimal:
    return sum((r.amount for r in records), Decimal("0"))


def get_totals(incomes: Sequence[Income], expenses: Sequence[Expense]) -> Dict[str, Decimal]:
    """
    Рассчитывает итоговые суммы для карточек дашборда.

    Returns:
        {"income": сумма доходов, "expense": сумма расходов, "savings": доходы - расходы}

    Example:
        >>> totals = get_totals(incomes, expenses)
        >>> totals["savings"] == totals["income"] - totals["expense"]
        True
    """
    total_income = _sum(incomes)
    total_expense = _sum(expenses)
    return {
        "income": total_income,
        "expense": total_expense,
        "savings": total_income - total_expense,
    }


def get_period_sums(records: Sequence[Record], today: Optional[date] = None) -> Dict[str, Decimal]:
    """
    Суммы за текущий месяц, текущий год и за всё время.

    Args:
        records: Доходы или расходы
        today: Опорная дата (по умолчанию сегодня)

    Returns:
        {"month": ..., "year": ..., "total": ...}
    """
    today = today or date.today()
    month = _sum(r for r in records if r.date.year == today.year and r.date.month == today.month)
    year = _sum(r for r in records if r.date.year == today.year)
    return {"month": month, "year": year, "total": _sum(records)}


def get_top_expense_sources(expenses: Sequence[Expense], limit: int = TOP_SOURCES_LIMIT) -> List[Dict[str, Any]]:
    """
    Категории расходов с наибольшей суммой.

    Returns:
        Список {"name": категория, "amount": сумма} по убыванию суммы,
        при равных суммах по имени категории; не длиннее limit
    """
    by_category: Dict[str, Decimal] = defaultdict(Decimal)
    for expense in expenses:
        by_category[expense.category] += expense.amount

    ranked = sorted(by_category.items(), key=lambda item: (-item[1], item[0]))
    return [{"name": name, "amount": amount} for name, amount in ranked[:max(limit, 0)]]


def get_expense_activity(expenses: Sequence[Expense], days: int = ACTIVITY_DAYS,
                         today: Optional[date] = None) -> List[Dict[str, Any]]:
    """
    Расходы по дням за последние days дней, включая сегодняшний.

    Дни без расходов присутствуют с нулевой суммой.

    Returns:
        Ровно days элементов {"day": date, "amount": сумма} от старых к новым
    """
    today = today or date.today()
    start = today - timedelta(days=days - 1)

    by_day: Dict[date, Decimal] = defaultdict(Decimal)
    for expense in expenses:
        if start <= expense.date <= today:
            by_day[expense.date] += expense.amount

    return [
        {"day": day, "amount": by_day.get(day, Decimal("0"))}
        for day in (start + timedelta(days=offset) for offset in range(max(days, 0)))
    ]


def get_recent_records(records: Sequence[Record], limit: int = RECENT_LIMIT) -> List[Record]:
    """Последние записи: от новых к старым, не больше limit."""
    return sorted(records, key=lambda r: r.date, reverse=True)[:max(limit, 0)]


def get_report_overview(incomes: Sequence[Income], expenses: Sequence[Expense]) -> List[Dict[str, Any]]:
    """
    Данные круговой диаграммы "Обзор".

    Отрицательные накопления отображаются как ноль: сектор не может быть отрицательным.

    Returns:
        [{"name": "Доходы"|"Расходы"|"Накопления", "value": сумма, "color": "#RRGGBB"}, ...]
    """
    totals = get_totals(incomes, expenses)
    return [
        {"name": "Доходы", "value": totals["income"], "color": INCOME_COLOR},
        {"name": "Расходы", "value": totals["expense"], "color": EXPENSE_COLOR},
        {"name": "Накопления", "value": max(totals["savings"], Decimal("0")), "color": SAVINGS_COLOR},
    ]


def get_inventory_value(items: Sequence[InventoryItem]) -> Decimal:
    """Стоимость склада: сумма quantity × unit_price."""
    return sum((item.total_value for item in items), Decimal("0"))


def get_dashboard_data(incomes: Sequence[Income], expenses: Sequence[Expense],
                       today: Optional[date] = None) -> Dict[str, Any]:
    """
    Собирает все данные главной страницы одним вызовом.

    Returns:
        {"totals", "top_expenses", "overview", "activity", "recent_expenses"}
    """
    data = {
        "totals": get_totals(incomes, expenses),
        "top_expenses": get_top_expense_sources(expenses),
        "overview": get_report_overview(incomes, expenses),
        "activity": get_expense_activity(expenses, today=today),
        "recent_expenses": get_recent_records(expenses),
    }
    logger.debug(
        f"Данные дашборда: доходов={len(incomes)}, расходов={len(expenses)}, "
        f"накопления={data['totals']['savings']}"
    )
    return data
