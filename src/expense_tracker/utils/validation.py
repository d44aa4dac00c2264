"""
Клиентская валидация форм.

Все проверки выполняются до любого сетевого вызова и блокируют отправку формы.
Ошибки возвращаются через ValidationError с текстом, готовым для показа пользователю.
"""

import re
import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

from expense_tracker.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def validate_email(email: Optional[str]) -> bool:
    """Проверяет формат email (что-то@что-то.что-то, без пробелов)."""
    if not email:
        return False
    return bool(EMAIL_PATTERN.match(email.strip()))


def validate_login_form(email: Optional[str], password: Optional[str]) -> None:
    """
    Проверяет форму входа.

    Raises:
        ValidationError: Некорректный email или пустой пароль
    """
    if not validate_email(email):
        raise ValidationError("Пожалуйста, введите корректный email")
    if not password:
        raise ValidationError("Пожалуйста, введите пароль")


def validate_signup_form(full_name: Optional[str], email: Optional[str], password: Optional[str]) -> None:
    """
    Проверяет форму регистрации.

    Порядок проверок: имя, email, наличие пароля, длина пароля.

    Raises:
        ValidationError: Первая найденная ошибка
    """
    if not full_name or not full_name.strip():
        raise ValidationError("Пожалуйста, введите имя")
    if not validate_email(email):
        raise ValidationError("Пожалуйста, введите корректный email")
    if not password:
        raise ValidationError("Пожалуйста, введите пароль")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Пароль должен содержать не менее {MIN_PASSWORD_LENGTH} символов")


def validate_password_confirmation(password: Optional[str], confirm_password: Optional[str]) -> None:
    """
    Raises:
        ValidationError: Пароли не совпадают
    """
    if (password or "") != (confirm_password or ""):
        raise ValidationError("Пароли не совпадают")


def parse_amount(value: Optional[str], allow_zero: bool = False) -> Decimal:
    """
    Разбирает сумму из текстового поля.

    Допускает запятую как десятичный разделитель и пробелы между разрядами.

    Raises:
        ValidationError: Пустое, нечисловое или неположительное значение
    """
    if value is None or not str(value).strip():
        raise ValidationError("Введите сумму")
    normalized = str(value).strip().replace(" ", "").replace(",", ".")
    try:
        amount = Decimal(normalized)
    except InvalidOperation:
        raise ValidationError(f"Некорректная сумма: {value}")
    if not amount.is_finite():
        raise ValidationError(f"Некорректная сумма: {value}")
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError("Сумма должна быть больше нуля")
    try:
        return amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ValidationError(f"Некорректная сумма: {value}")


def parse_quantity(value: Optional[str]) -> int:
    """
    Raises:
        ValidationError: Не целое или отрицательное количество
    """
    try:
        quantity = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError("Количество должно быть целым числом")
    if quantity < 0:
        raise ValidationError("Количество не может быть отрицательным")
    return quantity
