from typing import Any, Dict, List

import flet as ft

from expense_tracker.components.inventory_item_modal import InventoryItemModal
from expense_tracker.components.stat_card import StatCard
from expense_tracker.models import RecordKind
from expense_tracker.services.api_client import ApiClient
from expense_tracker.utils.formatting import format_amount
from expense_tracker.utils.logger import get_logger
from expense_tracker.views.interfaces import IRecordsViewCallbacks
from expense_tracker.views.records_presenter import RecordsPresenter

logger = get_logger(__name__)


class InventoryView(ft.Column, IRecordsViewCallbacks):
    """
    Страница склада (/inventory): таблица позиций и общая стоимость запасов.
    """

    def __init__(self, page: ft.Page, api_client: ApiClient):
        super().__init__(expand=True, scroll=ft.ScrollMode.AUTO, spacing=20)
        self.page = page
        self.presenter = RecordsPresenter(api_client, RecordKind.INVENTORY, self)

        self.item_modal = InventoryItemModal(
            on_save=self.presenter.create_record,
            on_update=self.presenter.update_record,
        )

        self.value_card = StatCard("Стоимость склада", format_amount(0), ft.Icons.INVENTORY_2, ft.Colors.PURPLE)
        self.count_card = StatCard("Позиций", "0", ft.Icons.LIST, ft.Colors.BLUE)

        self.data_table = ft.DataTable(
            columns=[
                ft.DataColumn(ft.Text("Наименование")),
                ft.DataColumn(ft.Text("Категория")),
                ft.DataColumn(ft.Text("Количество"), numeric=True),
                ft.DataColumn(ft.Text("Цена"), numeric=True),
                ft.DataColumn(ft.Text("Стоимость"), numeric=True),
                ft.DataColumn(ft.Text("")),
            ],
            rows=[],
        )
        self.empty_text = ft.Text("На складе пока нет позиций", color=ft.Colors.OUTLINE, visible=False)

        self.controls = [
            ft.Row(
                controls=[
                    ft.Text("Управление складом", size=22, weight=ft.FontWeight.BOLD),
                    ft.ElevatedButton("Добавить позицию", icon=ft.Icons.ADD, on_click=self.open_add_modal),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            ft.Row(controls=[self.value_card, self.count_card], spacing=20),
            ft.Container(
                content=ft.Column(controls=[self.data_table, self.empty_text], scroll=ft.ScrollMode.AUTO),
                padding=20,
                border_radius=12,
                border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
            ),
        ]

    def did_mount(self):
        self.presenter.load_records()

    # ========== IRecordsViewCallbacks Implementation ==========

    def update_records(self, records: List[Any], summary: Dict[str, Any]) -> None:
        self.value_card.set_value(format_amount(summary["total_value"]))
        self.count_card.set_value(str(summary["items"]))

        self.data_table.rows = [self._build_row(item) for item in records]
        self.empty_text.visible = not records
        self.page.update()

    def show_message(self, message: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(message)))

    def show_error(self, error: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(error), bgcolor=ft.Colors.ERROR))

    def _build_row(self, item) -> ft.DataRow:
        return ft.DataRow(
            cells=[
                ft.DataCell(ft.Text(item.name)),
                ft.DataCell(ft.Text(item.category or "-")),
                ft.DataCell(ft.Text(str(item.quantity))),
                ft.DataCell(ft.Text(format_amount(item.unit_price))),
                ft.DataCell(ft.Text(format_amount(item.total_value), weight=ft.FontWeight.W_600)),
                ft.DataCell(
                    ft.Row(
                        controls=[
                            ft.IconButton(
                                icon=ft.Icons.EDIT_OUTLINED,
                                tooltip="Редактировать",
                                on_click=lambda e, i=item: self.item_modal.open(self.page, i),
                            ),
                            ft.IconButton(
                                icon=ft.Icons.DELETE_OUTLINE,
                                tooltip="Удалить",
                                icon_color=ft.Colors.ERROR,
                                on_click=lambda e, i=item: self.confirm_delete(i),
                            ),
                        ],
                        tight=True,
                    )
                ),
            ]
        )

    def open_add_modal(self, e=None):
        self.item_modal.open(self.page)

    def confirm_delete(self, item):
        def confirm(e):
            self.page.close(dialog)
            self.presenter.delete_record(item.id)

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Удалить позицию?"),
            content=ft.Text(f"Вы действительно хотите удалить '{item.name}'?"),
            actions=[
                ft.TextButton("Отмена", on_click=lambda e: self.page.close(dialog)),
                ft.TextButton("Удалить", on_click=confirm, style=ft.ButtonStyle(color=ft.Colors.ERROR)),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        self.page.open(dialog)
