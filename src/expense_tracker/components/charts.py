"""
Графики главной страницы и отчётов на базе встроенных диаграмм Flet.

- build_top_expenses_chart: столбцы "Топ-5 категорий расходов"
- build_overview_chart: круговая диаграмма доходы/расходы/накопления
- build_activity_chart: линия расходов по дням
"""

from decimal import Decimal
from typing import Any, Dict, List, Sequence

import flet as ft

from expense_tracker.services.dashboard_service import EXPENSE_COLOR, SAVINGS_COLOR
from expense_tracker.utils.formatting import format_amount

_GRID_COLOR = ft.Colors.with_opacity(0.2, ft.Colors.ON_SURFACE)
_WEEKDAYS = ("Пн", "Вт", "Ср", "Чт", "Пт", "Сб", "Вс")


def _axis_max(values: Sequence[Decimal]) -> float:
    """Верхняя граница оси Y с запасом 10%; для пустых данных 1."""
    top = max((float(v) for v in values), default=0.0)
    return top * 1.1 if top > 0 else 1.0


def _empty_placeholder(text: str = "Нет данных") -> ft.Control:
    return ft.Container(
        content=ft.Text(text, color=ft.Colors.OUTLINE),
        alignment=ft.alignment.center,
        height=200,
    )


def build_top_expenses_chart(items: List[Dict[str, Any]]) -> ft.Control:
    """Столбчатая диаграмма категорий расходов ({"name", "amount"})."""
    if not items:
        return _empty_placeholder()

    return ft.BarChart(
        bar_groups=[
            ft.BarChartGroup(
                x=index,
                bar_rods=[
                    ft.BarChartRod(
                        from_y=0,
                        to_y=float(item["amount"]),
                        width=28,
                        color=SAVINGS_COLOR,
                        tooltip=f"{item['name']}: {format_amount(item['amount'])}",
                        border_radius=4,
                    )
                ],
            )
            for index, item in enumerate(items)
        ],
        bottom_axis=ft.ChartAxis(
            labels=[
                ft.ChartAxisLabel(value=index, label=ft.Text(item["name"], size=11))
                for index, item in enumerate(items)
            ],
            labels_size=32,
        ),
        left_axis=ft.ChartAxis(labels_size=56),
        horizontal_grid_lines=ft.ChartGridLines(color=_GRID_COLOR, width=1, dash_pattern=[3, 3]),
        max_y=_axis_max([item["amount"] for item in items]),
        interactive=True,
        height=300,
    )


def build_overview_chart(sections: List[Dict[str, Any]]) -> ft.Control:
    """Круговая диаграмма ({"name", "value", "color"}); нулевые секторы не рисуются."""
    visible = [s for s in sections if s["value"] > 0]
    if not visible:
        return _empty_placeholder()

    return ft.Column(
        controls=[
            ft.PieChart(
                sections=[
                    ft.PieChartSection(
                        float(section["value"]),
                        title=format_amount(section["value"]),
                        title_style=ft.TextStyle(size=12, color=ft.Colors.WHITE, weight=ft.FontWeight.BOLD),
                        color=section["color"],
                        radius=90,
                    )
                    for section in visible
                ],
                sections_space=2,
                center_space_radius=0,
                height=240,
            ),
            ft.Row(
                controls=[
                    ft.Row(
                        controls=[
                            ft.Container(width=12, height=12, bgcolor=section["color"], border_radius=6),
                            ft.Text(section["name"], size=12),
                        ],
                        spacing=4,
                        tight=True,
                    )
                    for section in sections
                ],
                alignment=ft.MainAxisAlignment.CENTER,
            ),
        ],
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
    )


def build_activity_chart(points: List[Dict[str, Any]]) -> ft.Control:
    """Линейный график расходов по дням ({"day": date, "amount"})."""
    if not points:
        return _empty_placeholder()

    return ft.LineChart(
        data_series=[
            ft.LineChartData(
                data_points=[
                    ft.LineChartDataPoint(
                        index,
                        float(point["amount"]),
                        tooltip=format_amount(point["amount"]),
                    )
                    for index, point in enumerate(points)
                ],
                stroke_width=2,
                color=EXPENSE_COLOR,
                curved=True,
            )
        ],
        bottom_axis=ft.ChartAxis(
            labels=[
                ft.ChartAxisLabel(value=index, label=ft.Text(_WEEKDAYS[point["day"].weekday()], size=11))
                for index, point in enumerate(points)
            ],
            labels_size=28,
        ),
        left_axis=ft.ChartAxis(labels_size=56),
        horizontal_grid_lines=ft.ChartGridLines(color=_GRID_COLOR, width=1, dash_pattern=[3, 3]),
        min_x=0,
        max_x=max(len(points) - 1, 1),
        min_y=0,
        max_y=_axis_max([point["amount"] for point in points]),
        interactive=True,
        height=250,
    )
