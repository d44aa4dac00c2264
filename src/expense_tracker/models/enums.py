"""
Модуль перечислений (enums) для Expense Tracker.

Содержит все Enum классы, используемые в моделях, сервисах и представлениях.
"""

from enum import Enum


class AuthState(str, Enum):
    """
    Состояние аутентификации клиента.

    Attributes:
        UNAUTHENTICATED: Нет активной сессии
        AUTHENTICATED: Есть активный аккаунт и токен
    """
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class StorageKey(str, Enum):
    """
    Ключи персистентного хранилища сессии.

    Имена повторяют ключи localStorage веб-версии. В client_storage страницы
    они хранятся с префиксом приложения, поэтому не пересекаются с другими данными.
    """
    TOKEN = "token"
    USER = "user"
    ACCOUNTS = "accounts"
    CURRENT_ACCOUNT_ID = "currentAccountId"


class StorageBackend(str, Enum):
    """Тип хранилища сессии."""
    SQLITE = "sqlite"
    CLIENT_STORAGE = "client_storage"


class RecordKind(str, Enum):
    """
    Коллекция записей на сервере.

    Значение используется как сегмент пути REST API (/income, /expense, /inventory).
    """
    INCOME = "income"
    EXPENSE = "expense"
    INVENTORY = "inventory"


class AppRoute(str, Enum):
    """Маршруты страниц приложения."""
    ROOT = "/"
    LOGIN = "/login"
    SIGN_UP = "/signUp"
    DASHBOARD = "/dashboard"
    INCOME = "/income"
    EXPENSE = "/expense"
    INVENTORY = "/inventory"
    REPORTS = "/reports"


class AuthMode(str, Enum):
    """Режим окна добавления аккаунта."""
    LOGIN = "login"
    SIGN_UP = "signup"
