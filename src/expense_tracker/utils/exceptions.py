"""
Модуль пользовательских исключений приложения.
"""

from typing import Optional


class ExpenseTrackerError(Exception):
    """Базовый класс для всех исключений приложения."""
    pass


class ValidationError(ExpenseTrackerError):
    """Исключение при ошибке валидации данных (пользовательский ввод)."""
    pass


class StorageError(ExpenseTrackerError):
    """Исключение при ошибках локального хранилища сессии."""
    pass


class ApiError(ExpenseTrackerError):
    """
    Неуспешный ответ REST API.

    Attributes:
        status_code: HTTP статус (None, если сервер ответил 2xx с success=false)
        server_message: Поле message из тела ответа, если сервер его прислал
    """

    def __init__(self, message: str = "Ошибка API", status_code: Optional[int] = None,
                 server_message: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message


class NetworkError(ExpenseTrackerError):
    """Сервер недоступен, соединение сброшено или истёк таймаут."""

    def __init__(self, message: str = "Сервер недоступен"):
        super().__init__(message)


class AuthError(ExpenseTrackerError):
    """Вход или регистрация не удались (неверные данные или ошибка сети)."""
    pass


class AccountNotFoundError(ExpenseTrackerError):
    """Аккаунт отсутствует в списке известных аккаунтов."""
    pass


class UploadError(ExpenseTrackerError):
    """Не удалось загрузить изображение профиля."""
    pass


class UpdateError(ExpenseTrackerError):
    """Не удалось обновить профиль."""
    pass
