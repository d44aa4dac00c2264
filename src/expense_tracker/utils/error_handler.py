"""
Модуль централизованной обработки ошибок.
Предоставляет инструменты для перехвата, логирования и отображения ошибок в UI.
"""

import functools
import logging
import traceback
from typing import Callable, Optional
import flet as ft

from expense_tracker.utils.exceptions import (
    ValidationError,
    StorageError,
    ApiError,
    NetworkError,
    AuthError,
    AccountNotFoundError,
    UploadError,
    UpdateError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Что-то пошло не так"

# Ошибки, текст которых можно показывать пользователю как есть
_USER_FACING = (AuthError, AccountNotFoundError, UploadError, UpdateError, NetworkError, ApiError)


class ErrorHandler:
    """
    Класс для централизованной обработки ошибок.
    """

    def __init__(self, page: Optional[ft.Page] = None):
        self.page = page

    def handle(self, exception: Exception, context_message: str = ""):
        """
        Обрабатывает возникшее исключение: логирует и показывает уведомление пользователю.

        Args:
            exception: Исключение, которое нужно обработать.
            context_message: Дополнительное сообщение о контексте ошибки.
        """
        error_message = self.get_user_message(exception)
        log_message = f"{context_message}: {str(exception)}" if context_message else str(exception)

        if isinstance(exception, (ValidationError,) + _USER_FACING):
            logger.warning(f"User error: {log_message}")
        else:
            logger.error(f"System error: {log_message}\n{traceback.format_exc()}")

        if self.page:
            self._show_error_snack_bar(error_message)

    @staticmethod
    def get_user_message(exception: Exception) -> str:
        """Возвращает понятное пользователю сообщение об ошибке."""
        if isinstance(exception, ValidationError):
            return f"Ошибка ввода: {str(exception)}"
        elif isinstance(exception, StorageError):
            return "Не удалось сохранить данные сессии. Попробуйте позже."
        elif isinstance(exception, _USER_FACING):
            return str(exception) or GENERIC_ERROR_MESSAGE
        else:
            return GENERIC_ERROR_MESSAGE

    def _show_error_snack_bar(self, message: str):
        """Показывает SnackBar с ошибкой."""
        self.page.open(ft.SnackBar(
            content=ft.Text(message, color=ft.Colors.WHITE),
            bgcolor=ft.Colors.ERROR,
            action="OK",
        ))


def safe_handler(page_getter: Callable[[], Optional[ft.Page]] = None):
    """
    Декоратор для обработчиков событий UI.
    Автоматически перехватывает ошибки и передает их в ErrorHandler.

    Args:
        page_getter: Опциональная функция, возвращающая текущий объект ft.Page.
                     Если не указана, берётся page из self (первого аргумента).
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                page = None
                if args and hasattr(args[0], 'page'):
                    page = args[0].page
                if not page and callable(page_getter):
                    page = page_getter()

                ErrorHandler(page).handle(e, context_message=f"Error in {func.__name__}")
        return wrapper
    return decorator
