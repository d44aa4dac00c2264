from typing import Any, Dict

import flet as ft

from expense_tracker.components.charts import (
    build_activity_chart,
    build_overview_chart,
    build_top_expenses_chart,
)
from expense_tracker.components.stat_card import StatCard
from expense_tracker.services.api_client import ApiClient
from expense_tracker.utils.formatting import format_amount, format_date
from expense_tracker.utils.logger import get_logger
from expense_tracker.views.dashboard_presenter import DashboardPresenter
from expense_tracker.views.interfaces import IDashboardViewCallbacks

logger = get_logger(__name__)


def _panel(title: str, content: ft.Control) -> ft.Container:
    return ft.Container(
        content=ft.Column(
            controls=[ft.Text(title, size=16, weight=ft.FontWeight.W_600), content],
            spacing=12,
        ),
        padding=20,
        border_radius=12,
        border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
        expand=True,
    )


class HomeView(ft.Column, IDashboardViewCallbacks):
    """
    Главная страница (/dashboard).

    Состоит из:
    - Карточек "Всего доходов", "Всего расходов", "Накопления"
    - Столбчатой диаграммы топ-5 категорий расходов и круговой диаграммы обзора
    - Графика расходов за 7 дней и списка последних расходов

    Данные загружаются DashboardPresenter после монтирования.
    """

    def __init__(self, page: ft.Page, api_client: ApiClient):
        super().__init__(expand=True, scroll=ft.ScrollMode.AUTO, spacing=20)
        self.page = page
        self.presenter = DashboardPresenter(api_client, self)

        self.income_card = StatCard("Всего доходов", format_amount(0), ft.Icons.ATTACH_MONEY, ft.Colors.GREEN)
        self.expense_card = StatCard("Всего расходов", format_amount(0), ft.Icons.CREDIT_CARD, ft.Colors.RED)
        self.savings_card = StatCard("Накопления", format_amount(0), ft.Icons.SAVINGS, ft.Colors.PURPLE)

        self.top_expenses_slot = ft.Container()
        self.overview_slot = ft.Container()
        self.activity_slot = ft.Container()
        self.recent_list = ft.Column(spacing=8)

        self.controls = [
            ft.Row(controls=[self.income_card, self.expense_card, self.savings_card], spacing=20),
            ft.Row(
                controls=[
                    _panel("Топ-5 категорий расходов", self.top_expenses_slot),
                    _panel("Обзор", self.overview_slot),
                ],
                spacing=20,
                vertical_alignment=ft.CrossAxisAlignment.START,
            ),
            ft.Row(
                controls=[
                    _panel("Расходы за 7 дней", self.activity_slot),
                    _panel("Последние расходы", self.recent_list),
                ],
                spacing=20,
                vertical_alignment=ft.CrossAxisAlignment.START,
            ),
        ]

    def did_mount(self):
        self.presenter.load_dashboard()

    # ========== IDashboardViewCallbacks Implementation ==========

    def update_dashboard(self, data: Dict[str, Any]) -> None:
        totals = data["totals"]
        self.income_card.set_value(format_amount(totals["income"]))
        self.expense_card.set_value(format_amount(totals["expense"]))
        self.savings_card.set_value(format_amount(totals["savings"]))

        self.top_expenses_slot.content = build_top_expenses_chart(data["top_expenses"])
        self.overview_slot.content = build_overview_chart(data["overview"])
        self.activity_slot.content = build_activity_chart(data["activity"])

        self.recent_list.controls = [
            ft.ListTile(
                leading=ft.Text(expense.icon or "💸", size=20),
                title=ft.Text(expense.category, weight=ft.FontWeight.W_500),
                subtitle=ft.Text(format_date(expense.date), size=12),
                trailing=ft.Text(format_amount(expense.amount), color=ft.Colors.RED, weight=ft.FontWeight.W_600),
                dense=True,
            )
            for expense in data["recent_expenses"]
        ] or [ft.Text("Расходов пока нет", color=ft.Colors.OUTLINE)]

        self.page.update()

    def show_message(self, message: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(message)))

    def show_error(self, error: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(error), bgcolor=ft.Colors.ERROR))
