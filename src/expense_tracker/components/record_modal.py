"""
Модальное окно создания и редактирования дохода или расхода.
"""

import datetime
import logging
from typing import Callable, Optional, Union

import flet as ft
from pydantic import ValidationError as PydanticValidationError

from expense_tracker.config import settings
from expense_tracker.models import Expense, ExpenseCreate, Income, IncomeCreate, RecordKind
from expense_tracker.utils.exceptions import ValidationError
from expense_tracker.utils.formatting import format_date
from expense_tracker.utils.validation import parse_amount

logger = logging.getLogger(__name__)

_LABELS = {
    RecordKind.INCOME: ("Новый доход", "Редактировать доход", "Источник *", "Например: Зарплата"),
    RecordKind.EXPENSE: ("Новый расход", "Редактировать расход", "Категория *", "Например: Продукты"),
}


class RecordModal:
    """
    Форма записи дохода/расхода.

    Поля: источник (для дохода) или категория (для расхода), сумма, дата, иконка.
    """

    def __init__(
        self,
        kind: RecordKind,
        on_save: Callable[[Union[IncomeCreate, ExpenseCreate]], None],
        on_update: Optional[Callable[[str, Union[IncomeCreate, ExpenseCreate]], None]] = None,
    ):
        """
        Args:
            kind: RecordKind.INCOME или RecordKind.EXPENSE
            on_save: Callback создания, параметр - модель *Create
            on_update: Callback изменения, параметры - id записи и модель *Create
        """
        if kind not in _LABELS:
            raise ValueError(f"RecordModal не поддерживает {kind}")
        self.kind = kind
        self.on_save = on_save
        self.on_update = on_update
        self.page: Optional[ft.Page] = None
        self.edit_record_id: Optional[str] = None
        self.current_date = datetime.date.today()

        new_title, _, name_label, name_hint = _LABELS[kind]

        self.name_field = ft.TextField(
            label=name_label,
            hint_text=name_hint,
            autofocus=True,
            on_change=self._clear_error,
        )
        self.amount_field = ft.TextField(
            label="Сумма *",
            prefix_text=settings.currency_symbol,
            keyboard_type=ft.KeyboardType.NUMBER,
            on_change=self._clear_error,
        )
        self.icon_field = ft.TextField(
            label="Иконка",
            hint_text="Эмодзи, например 💼",
            max_length=4,
            on_change=self._clear_error,
        )
        self.date_button = ft.ElevatedButton(
            text=format_date(self.current_date),
            icon=ft.Icons.CALENDAR_TODAY,
            on_click=self._open_date_picker,
        )
        self.date_picker = ft.DatePicker(
            on_change=self._on_date_change,
            first_date=datetime.date(2000, 1, 1),
            last_date=datetime.date(2100, 12, 31),
        )
        self.error_text = ft.Text(color=ft.Colors.ERROR, size=12)

        self.dialog_title = ft.Text(new_title)
        self.dialog = ft.AlertDialog(
            modal=True,
            title=self.dialog_title,
            content=ft.Column(
                controls=[
                    self.name_field,
                    self.amount_field,
                    self.date_button,
                    self.icon_field,
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

    def open(self, page: ft.Page, record: Optional[Union[Income, Expense]] = None):
        """
        Открытие модального окна.

        Args:
            page: Страница Flet
            record: Запись для редактирования (None = создание новой)
        """
        self.page = page
        new_title, edit_title, _, _ = _LABELS[self.kind]

        if record:
            self.edit_record_id = record.id
            self.dialog_title.value = edit_title
            self.name_field.value = record.source if self.kind == RecordKind.INCOME else record.category
            self.amount_field.value = str(record.amount)
            self.icon_field.value = record.icon or ""
            self.current_date = record.date
        else:
            self.edit_record_id = None
            self.dialog_title.value = new_title
            self.name_field.value = ""
            self.amount_field.value = ""
            self.icon_field.value = ""
            self.current_date = datetime.date.today()

        self.date_button.text = format_date(self.current_date)
        self.error_text.value = ""

        for control in (self.date_picker, self.dialog):
            if control not in page.overlay:
                page.overlay.append(control)
        self.dialog.open = True
        page.update()

    def close(self, e=None):
        if self.dialog and self.page:
            self.dialog.open = False
            self.page.update()

    def _open_date_picker(self, e):
        self.date_picker.value = self.current_date
        self.date_picker.pick_date()

    def _on_date_change(self, e):
        if self.date_picker.value:
            value = self.date_picker.value
            self.current_date = value.date() if isinstance(value, datetime.datetime) else value
            self.date_button.text = format_date(self.current_date)
            if self.page:
                self.page.update()

    def _clear_error(self, e=None):
        if self.error_text.value:
            self.error_text.value = ""
            if self.page:
                self.page.update()

    def _show_error(self, message: str):
        self.error_text.value = message
        if self.page:
            self.page.update()

    def build_data(self) -> Union[IncomeCreate, ExpenseCreate]:
        """
        Собирает модель из полей формы.

        Raises:
            ValidationError: Поле заполнено некорректно
        """
        name = (self.name_field.value or "").strip()
        if not name:
            raise ValidationError(
                "Укажите источник дохода" if self.kind == RecordKind.INCOME else "Укажите категорию расхода"
            )
        amount = parse_amount(self.amount_field.value)
        icon = (self.icon_field.value or "").strip() or None

        try:
            if self.kind == RecordKind.INCOME:
                return IncomeCreate(source=name, amount=amount, date=self.current_date, icon=icon)
            return ExpenseCreate(category=name, amount=amount, date=self.current_date, icon=icon)
        except PydanticValidationError as e:
            raise ValidationError(e.errors()[0]["msg"]) from e

    def _save(self, e):
        try:
            data = self.build_data()
        except ValidationError as ve:
            self._show_error(str(ve))
            return

        logger.debug(f"Сохранение {self.kind.value} в режиме: {'редактирование' if self.edit_record_id else 'создание'}")

        # Закрываем диалог ПЕРЕД вызовом callback'ов: callback перерисовывает список
        record_id = self.edit_record_id
        self.close()
        if record_id is not None:
            if self.on_update:
                self.on_update(record_id, data)
        elif self.on_save:
            self.on_save(data)
