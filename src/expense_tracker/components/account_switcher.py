"""
Окно переключения между известными аккаунтами.
"""

from typing import Callable, List, Optional

import flet as ft

from expense_tracker.models import Account


def build_avatar(account: Optional[Account], radius: int = 20) -> ft.CircleAvatar:
    """Аватар аккаунта: фото профиля или первая буква имени."""
    if account is not None and account.profile_image_url:
        return ft.CircleAvatar(foreground_image_src=account.profile_image_url, radius=radius)
    return ft.CircleAvatar(
        content=ft.Text(
            account.initial if account else "?",
            weight=ft.FontWeight.BOLD,
            color=ft.Colors.WHITE,
            size=radius * 0.8,
        ),
        bgcolor=ft.Colors.PURPLE,
        radius=radius,
    )


class AccountSwitcher:
    """
    Список известных аккаунтов с текущим отмеченным галочкой.

    Позволяет:
    - Переключиться на другой аккаунт (клик по строке)
    - Удалить аккаунт из списка
    - Открыть окно добавления аккаунта
    """

    def __init__(
        self,
        on_switch: Callable[[str], None],
        on_remove: Callable[[str], None],
        on_add: Callable[[], None],
    ):
        """
        Args:
            on_switch: Callback выбора аккаунта, параметр account_id
            on_remove: Callback удаления аккаунта, параметр account_id
            on_add: Callback кнопки "Добавить аккаунт"
        """
        self.on_switch = on_switch
        self.on_remove = on_remove
        self.on_add = on_add
        self.page: Optional[ft.Page] = None

        self.accounts_list = ft.Column(spacing=4, tight=True, scroll=ft.ScrollMode.AUTO)

        self.dialog = ft.AlertDialog(
            modal=False,
            title=ft.Text("Аккаунты"),
            content=ft.Container(content=self.accounts_list, width=420),
            actions=[
                ft.TextButton("Добавить аккаунт", icon=ft.Icons.PERSON_ADD, on_click=self._add),
                ft.TextButton("Закрыть", on_click=self.close),
            ],
            actions_alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )

    def open(self, page: ft.Page, accounts: List[Account], current_account_id: Optional[str]):
        """Открывает окно со списком accounts."""
        self.page = page
        self.accounts_list.controls = [
            self._build_row(account, account.id == current_account_id) for account in accounts
        ]
        if not accounts:
            self.accounts_list.controls = [ft.Text("Нет сохранённых аккаунтов", color=ft.Colors.OUTLINE)]

        if self.dialog not in page.overlay:
            page.overlay.append(self.dialog)
        self.dialog.open = True
        page.update()

    def close(self, e=None):
        if self.dialog and self.page:
            self.dialog.open = False
            self.page.update()

    def _build_row(self, account: Account, is_current: bool) -> ft.ListTile:
        return ft.ListTile(
            leading=build_avatar(account),
            title=ft.Text(account.full_name or account.email, weight=ft.FontWeight.W_500),
            subtitle=ft.Text(account.email, size=12),
            trailing=ft.Row(
                controls=[
                    ft.Icon(ft.Icons.CHECK, color=ft.Colors.GREEN) if is_current else ft.Container(width=24),
                    ft.IconButton(
                        icon=ft.Icons.CLOSE,
                        tooltip="Удалить из списка",
                        on_click=lambda e, account_id=account.id: self._remove(account_id),
                    ),
                ],
                tight=True,
            ),
            selected=is_current,
            on_click=None if is_current else (lambda e, account_id=account.id: self._switch(account_id)),
        )

    def _switch(self, account_id: str):
        self.close()
        self.on_switch(account_id)

    def _remove(self, account_id: str):
        self.close()
        self.on_remove(account_id)

    def _add(self, e=None):
        self.close()
        self.on_add()
