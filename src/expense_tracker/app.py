import flet as ft

from expense_tracker.config import settings
from expense_tracker.database import init_db
from expense_tracker.models import StorageBackend
from expense_tracker.services.account_manager import AccountManager
from expense_tracker.services.api_client import ApiClient
from expense_tracker.services.session_store import SessionStore
from expense_tracker.services.storage import (
    ClientStorageKeyValueStore,
    KeyValueStore,
    SqlKeyValueStore,
)
from expense_tracker.utils.logger import setup_logging, get_logger
from expense_tracker.views.router import Router

logger = get_logger(__name__)

CLIENT_STORAGE_PREFIX = "expense_tracker."


def setup_page(page: ft.Page) -> None:
    """Настройка основных параметров страницы."""
    page.title = "Expense Tracker"
    page.theme_mode = ft.ThemeMode.LIGHT if settings.theme_mode == "light" else ft.ThemeMode.DARK
    page.theme = ft.Theme(color_scheme_seed=ft.Colors.PURPLE)
    page.padding = 0

    page.window.width = settings.window_width
    page.window.height = settings.window_height
    if settings.window_top is not None:
        page.window.top = settings.window_top
    if settings.window_left is not None:
        page.window.left = settings.window_left


def create_store(page: ft.Page) -> KeyValueStore:
    """
    Создаёт хранилище сессии по settings.storage_backend.

    Для sqlite инициализирует локальную базу.
    """
    if settings.storage_backend == StorageBackend.CLIENT_STORAGE.value:
        logger.info("Хранилище сессии: client_storage")
        return ClientStorageKeyValueStore(page, prefix=CLIENT_STORAGE_PREFIX)

    init_db()
    logger.info("Хранилище сессии: SQLite")
    return SqlKeyValueStore()


def main(page: ft.Page):
    # 1. Настройка логирования
    setup_logging()
    logger.info("Запуск приложения Expense Tracker")

    setup_page(page)

    # 2. Хранилище сессии
    try:
        store = create_store(page)
    except Exception as e:
        logger.error(f"Ошибка инициализации хранилища: {e}")
        page.add(ft.Text(f"Критическая ошибка: {e}", color=ft.Colors.ERROR))
        return

    # 3. Менеджер аккаунтов и маршрутизация
    api_client = ApiClient(settings.api_base_url, timeout=settings.request_timeout)
    account_manager = AccountManager(SessionStore(store), api_client)
    router = Router(page, account_manager)

    def on_disconnect(e):
        router.stop()
        account_manager.teardown()

    page.on_disconnect = on_disconnect

    # Пока менеджер не загрузил состояние, Router показывает "Загрузка..."
    router.start()
    account_manager.initialize()
