"""
Маршрутизация страниц и защита маршрутов.

- "/" ведёт на /dashboard при активной сессии, иначе на /login
- защищённые маршруты без сессии ведут на /login
- пока AccountManager загружает состояние, вместо страницы показывается "Загрузка..."
"""

from typing import Callable, Dict, Optional

import flet as ft

from expense_tracker.config import settings
from expense_tracker.models import AppRoute, RecordKind
from expense_tracker.services.account_manager import AccountManager
from expense_tracker.utils.logger import get_logger
from expense_tracker.views.dashboard_layout import DashboardLayout
from expense_tracker.views.home_view import HomeView
from expense_tracker.views.inventory_view import InventoryView
from expense_tracker.views.login_view import LoginView
from expense_tracker.views.records_view import RecordsView
from expense_tracker.views.reports_view import ReportsView
from expense_tracker.views.signup_view import SignUpView

logger = get_logger(__name__)

PUBLIC_ROUTES = frozenset({AppRoute.LOGIN.value, AppRoute.SIGN_UP.value})
PROTECTED_ROUTES = frozenset({
    AppRoute.DASHBOARD.value,
    AppRoute.INCOME.value,
    AppRoute.EXPENSE.value,
    AppRoute.INVENTORY.value,
    AppRoute.REPORTS.value,
})

LOADING_TEXT = "Загрузка..."


def resolve_route(route: str, is_authenticated: bool, is_loading: bool = False,
                  home: str = AppRoute.DASHBOARD.value) -> Optional[str]:
    """
    Определяет, какую страницу показать для запрошенного маршрута.

    Args:
        home: Куда вести с "/" при активной сессии (последний открытый раздел)

    Returns:
        Итоговый маршрут или None, если нужно показать заглушку загрузки.
        Страницы входа и регистрации доступны всегда; неизвестный маршрут
        обрабатывается как "/".
    """
    if route in PUBLIC_ROUTES:
        return route
    if is_loading:
        return None
    if route in PROTECTED_ROUTES:
        return route if is_authenticated else AppRoute.LOGIN.value
    if not is_authenticated:
        return AppRoute.LOGIN.value
    return home if home in PROTECTED_ROUTES else AppRoute.DASHBOARD.value


class Router:
    """
    Обработчик page.on_route_change.

    Подписан на AccountManager: после смены сессии (вход в другой аккаунт,
    выход, удаление аккаунта) перестраивает текущую защищённую страницу
    или уводит на /login.
    """

    def __init__(self, page: ft.Page, account_manager: AccountManager):
        self.page = page
        self.account_manager = account_manager
        self._unsubscribe: Optional[Callable[[], None]] = None

        self._builders: Dict[str, Callable[[], ft.Control]] = {
            AppRoute.LOGIN.value: lambda: LoginView(page, account_manager),
            AppRoute.SIGN_UP.value: lambda: SignUpView(page, account_manager),
            AppRoute.DASHBOARD.value: lambda: HomeView(page, account_manager.api_client),
            AppRoute.INCOME.value: lambda: RecordsView(page, account_manager.api_client, RecordKind.INCOME),
            AppRoute.EXPENSE.value: lambda: RecordsView(page, account_manager.api_client, RecordKind.EXPENSE),
            AppRoute.INVENTORY.value: lambda: InventoryView(page, account_manager.api_client),
            AppRoute.REPORTS.value: lambda: ReportsView(page, account_manager.api_client),
        }

    def start(self, initial_route: Optional[str] = None) -> None:
        """Подключает обработчики и открывает начальный маршрут."""
        self.page.on_route_change = self.on_route_change
        self._unsubscribe = self.account_manager.subscribe(self.on_session_change)
        route = initial_route or self.page.route or AppRoute.ROOT.value
        logger.info(f"Старт маршрутизации с {route}")
        self.show_route(route)

    def stop(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def on_route_change(self, e: ft.RouteChangeEvent) -> None:
        self.show_route(e.route)

    def on_session_change(self, manager: AccountManager) -> None:
        """Публичные страницы не перестраиваются: форма сама переходит после успеха."""
        route = self.page.route
        if route in PUBLIC_ROUTES:
            return
        self.show_route(route)

    def show_route(self, route: str) -> None:
        target = resolve_route(
            route,
            self.account_manager.is_authenticated,
            self.account_manager.is_loading,
            home=settings.last_route,
        )

        if target is None:
            self._show(route, self._build_loading())
            return
        if target != route:
            logger.debug(f"Перенаправление {route} -> {target}")
            self.page.go(target)
            return

        body = self._builders[target]()
        if target in PROTECTED_ROUTES:
            body = DashboardLayout(self.page, self.account_manager, target, body)
            self._remember_route(target)
        self._show(target, body)

    def _show(self, route: str, content: ft.Control) -> None:
        self.page.views.clear()
        self.page.views.append(ft.View(route=route, controls=[content], padding=0))
        self.page.update()

    def _build_loading(self) -> ft.Control:
        return ft.Container(
            content=ft.Column(
                controls=[ft.ProgressRing(), ft.Text(LOADING_TEXT)],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                tight=True,
            ),
            alignment=ft.alignment.center,
            expand=True,
        )

    def _remember_route(self, route: str) -> None:
        if settings.last_route != route:
            settings.last_route = route
            settings.save()
