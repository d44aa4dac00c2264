"""
Модальное окно создания и редактирования позиции склада.
"""

import logging
from typing import Callable, Optional

import flet as ft
from pydantic import ValidationError as PydanticValidationError

from expense_tracker.config import settings
from expense_tracker.models import InventoryItem, InventoryItemCreate
from expense_tracker.utils.exceptions import ValidationError
from expense_tracker.utils.validation import parse_amount, parse_quantity

logger = logging.getLogger(__name__)


class InventoryItemModal:
    """
    Форма позиции склада: наименование, количество, цена за единицу, категория.
    """

    def __init__(
        self,
        on_save: Callable[[InventoryItemCreate], None],
        on_update: Optional[Callable[[str, InventoryItemCreate], None]] = None,
    ):
        self.on_save = on_save
        self.on_update = on_update
        self.page: Optional[ft.Page] = None
        self.edit_item_id: Optional[str] = None

        self.name_field = ft.TextField(
            label="Наименование *",
            hint_text="Например: Кофе в зёрнах",
            autofocus=True,
            on_change=self._clear_error,
        )
        self.quantity_field = ft.TextField(
            label="Количество *",
            keyboard_type=ft.KeyboardType.NUMBER,
            input_filter=ft.NumbersOnlyInputFilter(),
            on_change=self._clear_error,
        )
        self.price_field = ft.TextField(
            label="Цена за единицу *",
            prefix_text=settings.currency_symbol,
            keyboard_type=ft.KeyboardType.NUMBER,
            on_change=self._clear_error,
        )
        self.category_field = ft.TextField(
            label="Категория",
            on_change=self._clear_error,
        )
        self.error_text = ft.Text(color=ft.Colors.ERROR, size=12)

        self.dialog_title = ft.Text("Новая позиция")
        self.dialog = ft.AlertDialog(
            modal=True,
            title=self.dialog_title,
            content=ft.Column(
                controls=[
                    self.name_field,
                    self.quantity_field,
                    self.price_field,
                    self.category_field,
                    self.error_text,
                ],
                width=400,
                tight=True,
                spacing=15,
            ),
            actions=[
                ft.TextButton("Отмена", on_click=self.close),
                ft.ElevatedButton("Сохранить", on_click=self._save),
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )

    def open(self, page: ft.Page, item: Optional[InventoryItem] = None):
        self.page = page

        if item:
            self.edit_item_id = item.id
            self.dialog_title.value = f"Редактировать: {item.name}"
            self.name_field.value = item.name
            self.quantity_field.value = str(item.quantity)
            self.price_field.value = str(item.unit_price)
            self.category_field.value = item.category or ""
        else:
            self.edit_item_id = None
            self.dialog_title.value = "Новая позиция"
            self.name_field.value = ""
            self.quantity_field.value = ""
            self.price_field.value = ""
            self.category_field.value = ""

        self.error_text.value = ""

        if self.dialog not in page.overlay:
            page.overlay.append(self.dialog)
        self.dialog.open = True
        page.update()

    def close(self, e=None):
        if self.dialog and self.page:
            self.dialog.open = False
            self.page.update()

    def _clear_error(self, e=None):
        if self.error_text.value:
            self.error_text.value = ""
            if self.page:
                self.page.update()

    def build_data(self) -> InventoryItemCreate:
        """
        Raises:
            ValidationError: Поле заполнено некорректно
        """
        name = (self.name_field.value or "").strip()
        if not name:
            raise ValidationError("Наименование не может быть пустым")
        quantity = parse_quantity(self.quantity_field.value)
        unit_price = parse_amount(self.price_field.value, allow_zero=True)
        category = (self.category_field.value or "").strip() or None

        try:
            return InventoryItemCreate(name=name, quantity=quantity, unit_price=unit_price, category=category)
        except PydanticValidationError as e:
            raise ValidationError(e.errors()[0]["msg"]) from e

    def _save(self, e):
        try:
            data = self.build_data()
        except ValidationError as ve:
            self.error_text.value = str(ve)
            if self.page:
                self.page.update()
            return

        item_id = self.edit_item_id
        self.close()
        if item_id is not None:
            if self.on_update:
                self.on_update(item_id, data)
        elif self.on_save:
            self.on_save(data)
