"""
Каркас защищённых страниц: навигация слева, шапка с аккаунтами и профилем, контент.
"""

from typing import List, Tuple

import flet as ft

from expense_tracker.components.account_switcher import AccountSwitcher, build_avatar
from expense_tracker.components.add_account_modal import AddAccountModal
from expense_tracker.components.profile_modal import ProfileModal
from expense_tracker.models import AppRoute
from expense_tracker.services.account_manager import AccountManager
from expense_tracker.utils.error_handler import safe_handler
from expense_tracker.utils.logger import get_logger

logger = get_logger(__name__)

# (маршрут, подпись, иконка, иконка выбранного пункта, заголовок страницы)
NAV_ITEMS: List[Tuple[AppRoute, str, str, str, str]] = [
    (AppRoute.DASHBOARD, "Дашборд", ft.Icons.DASHBOARD_OUTLINED, ft.Icons.DASHBOARD, "Дашборд"),
    (AppRoute.INCOME, "Продажи", ft.Icons.ATTACH_MONEY_OUTLINED, ft.Icons.ATTACH_MONEY, "Доходы"),
    (AppRoute.EXPENSE, "Закупки", ft.Icons.CREDIT_CARD_OUTLINED, ft.Icons.CREDIT_CARD, "Расходы"),
    (AppRoute.INVENTORY, "Склад", ft.Icons.INVENTORY_2_OUTLINED, ft.Icons.INVENTORY_2, "Склад"),
    (AppRoute.REPORTS, "Отчёты", ft.Icons.ASSESSMENT_OUTLINED, ft.Icons.ASSESSMENT, "Отчёты"),
]


def nav_index(route: str) -> int:
    """Индекс пункта навигации для маршрута; 0 для неизвестного."""
    for index, item in enumerate(NAV_ITEMS):
        if item[0].value == route:
            return index
    return 0


class DashboardLayout(ft.Row):
    """
    Общий каркас страниц /dashboard, /income, /expense, /inventory, /reports.

    Содержит:
    - NavigationRail с разделами и кнопкой выхода
    - Шапку: заголовок раздела, переключатель аккаунтов, аватар (открывает профиль)
    - Область контента страницы

    Переходы после смены сессии (выход, удаление последнего аккаунта)
    выполняет Router, подписанный на AccountManager.
    """

    def __init__(self, page: ft.Page, account_manager: AccountManager, route: str, body: ft.Control):
        super().__init__(expand=True, spacing=0)
        self.page = page
        self.account_manager = account_manager
        self.route = route

        self.profile_modal = ProfileModal(account_manager)
        self.add_account_modal = AddAccountModal(account_manager)
        self.account_switcher = AccountSwitcher(
            on_switch=self.on_switch_account,
            on_remove=self.on_remove_account,
            on_add=self.on_add_account,
        )

        selected = nav_index(route)
        self.rail = ft.NavigationRail(
            selected_index=selected,
            label_type=ft.NavigationRailLabelType.ALL,
            min_width=100,
            min_extended_width=200,
            group_alignment=-0.9,
            leading=ft.Container(
                content=ft.Icon(ft.Icons.TRENDING_UP, color=ft.Colors.PURPLE, size=32),
                padding=ft.padding.only(top=16, bottom=8),
                tooltip="Expense Tracker",
            ),
            destinations=[
                ft.NavigationRailDestination(icon=icon, selected_icon=selected_icon, label=label)
                for _, label, icon, selected_icon, _ in NAV_ITEMS
            ],
            trailing=ft.Container(
                content=ft.TextButton(
                    "Выйти",
                    icon=ft.Icons.LOGOUT,
                    style=ft.ButtonStyle(color=ft.Colors.RED),
                    on_click=self.on_sign_out,
                ),
                padding=ft.padding.only(top=24),
            ),
            on_change=self.on_nav_change,
        )

        user = account_manager.user
        header = ft.Container(
            content=ft.Row(
                controls=[
                    ft.Text(NAV_ITEMS[selected][4], size=24, weight=ft.FontWeight.BOLD),
                    ft.Row(
                        controls=[
                            ft.TextButton(
                                text=user.full_name if user else "",
                                icon=ft.Icons.SWITCH_ACCOUNT,
                                tooltip="Аккаунты",
                                on_click=self.on_open_accounts,
                            ),
                            ft.Container(
                                content=build_avatar(user),
                                on_click=self.on_open_profile,
                                tooltip="Профиль",
                                border_radius=20,
                            ),
                        ],
                        spacing=8,
                    ),
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            padding=ft.padding.symmetric(horizontal=24, vertical=16),
            border=ft.border.only(bottom=ft.BorderSide(1, ft.Colors.OUTLINE_VARIANT)),
        )

        self.controls = [
            self.rail,
            ft.VerticalDivider(width=1),
            ft.Column(
                controls=[
                    header,
                    ft.Container(content=body, padding=24, expand=True),
                ],
                spacing=0,
                expand=True,
            ),
        ]

    def on_nav_change(self, e):
        index = e.control.selected_index
        target = NAV_ITEMS[index][0].value
        if target != self.route:
            self.page.go(target)

    @safe_handler()
    def on_sign_out(self, e=None):
        self.account_manager.logout()
        self.page.open(ft.SnackBar(content=ft.Text("Вы вышли из аккаунта")))

    def on_open_profile(self, e=None):
        self.profile_modal.open(self.page)

    def on_open_accounts(self, e=None):
        self.account_switcher.open(
            self.page,
            self.account_manager.accounts,
            self.account_manager.current_account_id,
        )

    def on_add_account(self):
        self.add_account_modal.open(self.page)

    @safe_handler()
    def on_switch_account(self, account_id: str):
        self.account_manager.switch_account(account_id)
        user = self.account_manager.user
        self.page.open(ft.SnackBar(content=ft.Text(f"Активный аккаунт: {user.full_name or user.email}")))

    @safe_handler()
    def on_remove_account(self, account_id: str):
        self.account_manager.remove_account(account_id)
        self.page.open(ft.SnackBar(content=ft.Text("Аккаунт удалён из списка")))
