from typing import Any, Dict

import flet as ft

from expense_tracker.components.charts import build_overview_chart, build_top_expenses_chart
from expense_tracker.components.stat_card import StatCard
from expense_tracker.services.api_client import ApiClient
from expense_tracker.utils.formatting import format_amount
from expense_tracker.utils.logger import get_logger
from expense_tracker.views.dashboard_presenter import DashboardPresenter
from expense_tracker.views.interfaces import IDashboardViewCallbacks

logger = get_logger(__name__)

_PERIODS = (("month", "Этот месяц"), ("year", "Этот год"), ("total", "Всего"))


class ReportsView(ft.Column, IDashboardViewCallbacks):
    """
    Страница отчётов (/reports).

    Итоги доходов и расходов по периодам, стоимость склада,
    обзорная диаграмма и распределение расходов по категориям.
    """

    def __init__(self, page: ft.Page, api_client: ApiClient):
        super().__init__(expand=True, scroll=ft.ScrollMode.AUTO, spacing=20)
        self.page = page
        self.presenter = DashboardPresenter(api_client, self)

        self.income_cards = {key: StatCard(f"Доходы: {label.lower()}", format_amount(0), ft.Icons.ATTACH_MONEY,
                                           ft.Colors.GREEN) for key, label in _PERIODS}
        self.expense_cards = {key: StatCard(f"Расходы: {label.lower()}", format_amount(0), ft.Icons.CREDIT_CARD,
                                            ft.Colors.RED) for key, label in _PERIODS}
        self.savings_card = StatCard("Накопления", format_amount(0), ft.Icons.SAVINGS, ft.Colors.PURPLE)
        self.inventory_card = StatCard("Стоимость склада", format_amount(0), ft.Icons.INVENTORY_2, ft.Colors.BLUE)

        self.overview_slot = ft.Container(expand=True)
        self.top_expenses_slot = ft.Container(expand=True)

        self.controls = [
            ft.Row(
                controls=[
                    ft.Text("Отчёты", size=22, weight=ft.FontWeight.BOLD),
                    ft.IconButton(icon=ft.Icons.REFRESH, tooltip="Обновить", on_click=self._refresh),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            ft.Row(controls=list(self.income_cards.values()), spacing=20),
            ft.Row(controls=list(self.expense_cards.values()), spacing=20),
            ft.Row(controls=[self.savings_card, self.inventory_card], spacing=20),
            ft.Row(
                controls=[self.overview_slot, self.top_expenses_slot],
                spacing=20,
                vertical_alignment=ft.CrossAxisAlignment.START,
            ),
        ]

    def did_mount(self):
        self.presenter.load_reports()

    def _refresh(self, e=None):
        self.presenter.load_reports()

    # ========== IDashboardViewCallbacks Implementation ==========

    def update_dashboard(self, data: Dict[str, Any]) -> None:
        for key, _ in _PERIODS:
            self.income_cards[key].set_value(format_amount(data["income_periods"][key]))
            self.expense_cards[key].set_value(format_amount(data["expense_periods"][key]))
        self.savings_card.set_value(format_amount(data["totals"]["savings"]))
        self.inventory_card.set_value(format_amount(data["inventory_value"]))

        self.overview_slot.content = build_overview_chart(data["overview"])
        self.top_expenses_slot.content = build_top_expenses_chart(data["top_expenses"])
        self.page.update()

    def show_message(self, message: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(message)))

    def show_error(self, error: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(error), bgcolor=ft.Colors.ERROR))
