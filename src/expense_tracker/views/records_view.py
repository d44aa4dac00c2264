from decimal import Decimal
from typing import Any, Dict, List

import flet as ft

from expense_tracker.components.record_modal import RecordModal
from expense_tracker.components.stat_card import StatCard
from expense_tracker.models import RecordKind
from expense_tracker.services.api_client import ApiClient
from expense_tracker.utils.formatting import format_amount, format_date
from expense_tracker.utils.logger import get_logger
from expense_tracker.views.interfaces import IRecordsViewCallbacks
from expense_tracker.views.records_presenter import RecordsPresenter

logger = get_logger(__name__)

_TEXTS = {
    RecordKind.INCOME: {
        "title": "Управление доходами",
        "subtitle": "Отслеживайте источники дохода",
        "add": "Добавить доход",
        "total": "Всего доходов",
        "list": "Последние доходы",
        "empty": "Записей о доходах нет",
        "first": "Добавьте первый доход",
        "icon": ft.Icons.ATTACH_MONEY,
        "color": ft.Colors.GREEN,
    },
    RecordKind.EXPENSE: {
        "title": "Управление расходами",
        "subtitle": "Отслеживайте категории расходов",
        "add": "Добавить расход",
        "total": "Всего расходов",
        "list": "Последние расходы",
        "empty": "Записей о расходах нет",
        "first": "Добавьте первый расход",
        "icon": ft.Icons.CREDIT_CARD,
        "color": ft.Colors.RED,
    },
}


class RecordsView(ft.Column, IRecordsViewCallbacks):
    """
    Страница доходов (/income) или расходов (/expense).

    Шапка с кнопкой добавления, карточки "Этот месяц" / "Этот год" / "Всего",
    список записей с редактированием и удалением, заглушка для пустого списка.
    """

    def __init__(self, page: ft.Page, api_client: ApiClient, kind: RecordKind):
        super().__init__(expand=True, scroll=ft.ScrollMode.AUTO, spacing=20)
        if kind not in _TEXTS:
            raise ValueError(f"RecordsView не поддерживает {kind}")
        self.page = page
        self.kind = kind
        self.texts = _TEXTS[kind]
        self.presenter = RecordsPresenter(api_client, kind, self)

        self.record_modal = RecordModal(
            kind,
            on_save=self.presenter.create_record,
            on_update=self.presenter.update_record,
        )

        self.month_card = StatCard("Этот месяц", format_amount(0), ft.Icons.CALENDAR_MONTH, self.texts["color"])
        self.year_card = StatCard("Этот год", format_amount(0), ft.Icons.CALENDAR_TODAY, ft.Colors.BLUE)
        self.total_card = StatCard(self.texts["total"], format_amount(0), self.texts["icon"], ft.Colors.PURPLE)

        self.records_list = ft.Column(spacing=6)

        self.controls = [
            ft.Container(
                content=ft.Row(
                    controls=[
                        ft.Row(
                            controls=[
                                ft.Container(
                                    content=ft.Icon(self.texts["icon"], color=ft.Colors.WHITE),
                                    width=48,
                                    height=48,
                                    border_radius=12,
                                    bgcolor=self.texts["color"],
                                    alignment=ft.alignment.center,
                                ),
                                ft.Column(
                                    controls=[
                                        ft.Text(self.texts["title"], size=22, weight=ft.FontWeight.BOLD),
                                        ft.Text(self.texts["subtitle"], color=ft.Colors.OUTLINE),
                                    ],
                                    spacing=2,
                                ),
                            ],
                            spacing=12,
                        ),
                        ft.ElevatedButton(self.texts["add"], icon=ft.Icons.ADD, on_click=self.open_add_modal),
                    ],
                    alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                ),
                padding=20,
                border_radius=12,
                border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
            ),
            ft.Row(controls=[self.month_card, self.year_card, self.total_card], spacing=20),
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Text(self.texts["list"], size=16, weight=ft.FontWeight.W_600),
                        self.records_list,
                    ],
                    spacing=12,
                ),
                padding=20,
                border_radius=12,
                border=ft.border.all(1, ft.Colors.OUTLINE_VARIANT),
            ),
        ]

    def did_mount(self):
        self.presenter.load_records()

    # ========== IRecordsViewCallbacks Implementation ==========

    def update_records(self, records: List[Any], summary: Dict[str, Decimal]) -> None:
        self.month_card.set_value(format_amount(summary["month"]))
        self.year_card.set_value(format_amount(summary["year"]))
        self.total_card.set_value(format_amount(summary["total"]))

        self.records_list.controls = [self._build_row(r) for r in records] or [self._build_empty_state()]
        self.page.update()

    def show_message(self, message: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(message)))

    def show_error(self, error: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(error), bgcolor=ft.Colors.ERROR))

    # ========== UI ==========

    def _record_name(self, record) -> str:
        return record.source if self.kind == RecordKind.INCOME else record.category

    def _build_row(self, record) -> ft.ListTile:
        sign = "+" if self.kind == RecordKind.INCOME else "-"
        return ft.ListTile(
            leading=ft.Text(record.icon or ("💰" if self.kind == RecordKind.INCOME else "💸"), size=22),
            title=ft.Text(self._record_name(record), weight=ft.FontWeight.W_500),
            subtitle=ft.Text(format_date(record.date), size=12),
            trailing=ft.Row(
                controls=[
                    ft.Text(
                        f"{sign}{format_amount(record.amount)}",
                        color=self.texts["color"],
                        weight=ft.FontWeight.W_600,
                    ),
                    ft.IconButton(
                        icon=ft.Icons.EDIT_OUTLINED,
                        tooltip="Редактировать",
                        on_click=lambda e, r=record: self.open_edit_modal(r),
                    ),
                    ft.IconButton(
                        icon=ft.Icons.DELETE_OUTLINE,
                        tooltip="Удалить",
                        icon_color=ft.Colors.ERROR,
                        on_click=lambda e, r=record: self.confirm_delete(r),
                    ),
                ],
                tight=True,
            ),
        )

    def _build_empty_state(self) -> ft.Control:
        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Icon(self.texts["icon"], size=40, color=ft.Colors.OUTLINE),
                    ft.Text(self.texts["empty"], color=ft.Colors.OUTLINE),
                    ft.ElevatedButton(self.texts["first"], on_click=self.open_add_modal),
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                spacing=12,
            ),
            alignment=ft.alignment.center,
            padding=40,
        )

    # ========== UI Event Handlers (делегируют в Presenter) ==========

    def open_add_modal(self, e=None):
        self.record_modal.open(self.page)

    def open_edit_modal(self, record):
        self.record_modal.open(self.page, record)

    def confirm_delete(self, record):
        """Диалог подтверждения удаления."""
        def confirm(e):
            self.page.close(dialog)
            self.presenter.delete_record(record.id)

        def cancel(e):
            self.page.close(dialog)

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Удалить запись?"),
            content=ft.Column(
                controls=[
                    ft.Text(f"{self._record_name(record)}: {format_amount(record.amount)}"),
                    ft.Text(f"Дата: {format_date(record.date)}"),
                    ft.Text("Это действие нельзя отменить!", color=ft.Colors.ERROR, weight=ft.FontWeight.BOLD),
                ],
                tight=True,
                spacing=10,
            ),
            actions=[
                ft.TextButton("Отмена", on_click=cancel),
                ft.ElevatedButton("Удалить", on_click=confirm, bgcolor=ft.Colors.ERROR, color=ft.Colors.ON_ERROR),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )
        self.page.open(dialog)
