"""
Базовый класс для тестов View компонентов.

Предоставляет общие вспомогательные методы для тестирования View:
- Создание моков для page, ApiClient и AccountManager
- Проверка вызовов сервисов
- Проверка открытия диалогов и SnackBar
- Общие setUp/tearDown методы
"""
import unittest
from unittest.mock import Mock, MagicMock, patch
from typing import Any, List, Optional

import flet as ft

from expense_tracker.services.account_manager import AccountManager
from expense_tracker.services.api_client import ApiClient


class ViewTestBase(unittest.TestCase):
    """
    Базовый класс для тестов View компонентов.

    Предоставляет общие методы для:
    - Создания моков page, api_client и account_manager
    - Проверки вызовов сервисов
    - Проверки открытия SnackBar и модальных окон
    - Управления патчами
    """

    def setUp(self):
        """
        Базовая настройка перед каждым тестом.

        Создаёт:
        - Мок для page
        - Мок для ApiClient
        - Мок для AccountManager без активной сессии
        - Список активных патчей для автоматической очистки
        """
        self.page = self.create_mock_page()
        self.api_client = Mock(spec=ApiClient)
        self.account_manager = self.create_mock_account_manager()
        self.patchers: List[Any] = []

    def tearDown(self):
        """Останавливает все активные патчи."""
        for patcher in self.patchers:
            patcher.stop()
        self.patchers.clear()

    def create_mock_page(self) -> MagicMock:
        """
        Создание мока для Flet Page.

        Returns:
            MagicMock: Мок объекта page с overlay, views и методами update/open/close/go
        """
        page = MagicMock(spec=ft.Page)
        page.overlay = []
        page.views = []
        page.route = "/"
        page.update = MagicMock()
        page.open = MagicMock()
        page.close = MagicMock()
        page.go = MagicMock()
        return page

    def create_mock_account_manager(self, user=None, accounts=None) -> Mock:
        """
        Создание мока AccountManager.

        Args:
            user: Активный аккаунт; None означает отсутствие сессии
            accounts: Список известных аккаунтов
        """
        manager = Mock(spec=AccountManager)
        manager.api_client = self.api_client
        manager.user = user
        manager.accounts = list(accounts or ([user] if user else []))
        manager.current_account_id = user.id if user else None
        manager.is_authenticated = user is not None
        manager.is_loading = False
        manager.subscribe = Mock(return_value=Mock())
        return manager

    def add_patcher(self, target: str, **kwargs) -> Mock:
        """
        Создание и запуск патча с автоматической регистрацией для очистки.

        Example:
            mock_service = self.add_patcher('module.service_function', return_value=[])
        """
        patcher = patch(target, **kwargs)
        mock_obj = patcher.start()
        self.patchers.append(patcher)
        return mock_obj

    def assert_service_called(self, mock_service: Mock, *args, **kwargs):
        """Проверка, что сервис был вызван (с указанными аргументами, если они заданы)."""
        if args or kwargs:
            mock_service.assert_called_with(*args, **kwargs)
        else:
            mock_service.assert_called()

    def assert_service_not_called(self, mock_service: Mock):
        mock_service.assert_not_called()

    def opened_controls(self, control_type: Optional[type] = None) -> List[Any]:
        """
        Возвращает контролы, переданные в page.open().

        Args:
            control_type: Если указан, только контролы этого типа
        """
        controls = [c.args[0] for c in self.page.open.call_args_list if c.args]
        if control_type is None:
            return controls
        return [c for c in controls if isinstance(c, control_type)]

    def assert_snack_bar_shown(self, text: Optional[str] = None):
        """
        Проверка, что был показан SnackBar (с указанным текстом, если он задан).
        """
        snack_bars = self.opened_controls(ft.SnackBar)
        self.assertTrue(snack_bars, "SnackBar не был показан")
        if text is not None:
            texts = [sb.content.value for sb in snack_bars]
            self.assertIn(text, texts)
