"""
Модальное окно добавления аккаунта: вход в существующий или регистрация нового.
"""

import logging
from typing import Callable, Optional

import flet as ft

from expense_tracker.models import AuthMode
from expense_tracker.services.account_manager import AccountManager
from expense_tracker.views.auth_presenter import AuthPresenter
from expense_tracker.views.interfaces import IAuthViewCallbacks

logger = logging.getLogger(__name__)

ACCOUNT_ADDED_MESSAGE = "Аккаунт добавлен!"
ACCOUNT_CREATED_MESSAGE = "Новый аккаунт создан и добавлен!"


class AddAccountModal(IAuthViewCallbacks):
    """
    Окно с переключателем режима "Войти в существующий" / "Создать новый".

    При регистрации пароль и подтверждение сверяются до обращения к серверу.
    Добавленный аккаунт становится активным.
    """

    def __init__(self, account_manager: AccountManager, on_added: Optional[Callable[[], None]] = None):
        """
        Args:
            account_manager: Менеджер аккаунтов
            on_added: Callback после успешного входа или регистрации
        """
        self.on_added = on_added
        self.page: Optional[ft.Page] = None
        self.mode = AuthMode.LOGIN
        self.presenter = AuthPresenter(account_manager, self)

        self.mode_selector = ft.SegmentedButton(
            segments=[
                ft.Segment(value=AuthMode.LOGIN.value, label=ft.Text("Войти в существующий")),
                ft.Segment(value=AuthMode.SIGN_UP.value, label=ft.Text("Создать новый")),
            ],
            selected={AuthMode.LOGIN.value},
            allow_empty_selection=False,
            on_change=self._on_mode_change,
        )

        self.full_name_field = ft.TextField(
            label="Полное имя",
            prefix_icon=ft.Icons.PERSON_OUTLINE,
            visible=False,
            on_change=self._clear_error,
        )
        self.email_field = ft.TextField(
            label="Email",
            prefix_icon=ft.Icons.MAIL_OUTLINE,
            keyboard_type=ft.KeyboardType.EMAIL,
            autofocus=True,
            on_change=self._clear_error,
        )
        self.password_field = ft.TextField(
            label="Пароль",
            prefix_icon=ft.Icons.LOCK_OUTLINE,
            password=True,
            can_reveal_password=True,
            on_change=self._clear_error,
            on_submit=self._submit,
        )
        self.confirm_password_field = ft.TextField(
            label="Подтверждение пароля",
            prefix_icon=ft.Icons.LOCK_OUTLINE,
            password=True,
            can_reveal_password=True,
            visible=False,
            on_change=self._clear_error,
            on_submit=self._submit,
        )

        self.error_text = ft.Text(color=ft.Colors.ERROR, size=12)
        self.progress = ft.ProgressRing(width=16, height=16, stroke_width=2, visible=False)
        self.submit_button = ft.ElevatedButton("Добавить аккаунт", on_click=self._submit)

        self.dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Добавить аккаунт"),
            content=ft.Column(
                controls=[
                    self.mode_selector,
                    self.full_name_field,
                    self.email_field,
                    self.password_field,
                    self.confirm_password_field,
                    self.error_text,
                ],
                width=420,
                tight=True,
                spacing=15,
            ),
            actions=[
                self.progress,
                ft.TextButton("Отмена", on_click=self.close),
                self.submit_button,
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )

    def open(self, page: ft.Page):
        self.page = page
        self._set_mode(AuthMode.LOGIN)
        self._reset_form()

        if self.dialog not in page.overlay:
            page.overlay.append(self.dialog)
        self.dialog.open = True
        page.update()

    def close(self, e=None):
        if self.dialog and self.page:
            self.dialog.open = False
            self.page.update()

    # ========== IAuthViewCallbacks Implementation ==========

    def set_busy(self, busy: bool) -> None:
        self.progress.visible = busy
        self.submit_button.disabled = busy
        if self.page:
            self.page.update()

    def show_form_error(self, error: str) -> None:
        self.error_text.value = error
        if self.page:
            self.page.update()

    def on_auth_success(self) -> None:
        self.close()
        self._reset_form()
        if self.on_added:
            self.on_added()

    def show_message(self, message: str) -> None:
        if self.page:
            self.page.open(ft.SnackBar(content=ft.Text(message)))

    def show_error(self, error: str) -> None:
        if self.page:
            self.page.open(ft.SnackBar(content=ft.Text(error), bgcolor=ft.Colors.ERROR))

    # ========== Обработчики ==========

    def _on_mode_change(self, e):
        selected = next(iter(self.mode_selector.selected), AuthMode.LOGIN.value)
        self._set_mode(AuthMode(selected))
        self._reset_form()
        if self.page:
            self.page.update()

    def _set_mode(self, mode: AuthMode):
        self.mode = mode
        is_signup = mode == AuthMode.SIGN_UP
        self.mode_selector.selected = {mode.value}
        self.full_name_field.visible = is_signup
        self.confirm_password_field.visible = is_signup
        self.submit_button.text = "Создать аккаунт" if is_signup else "Добавить аккаунт"

    def _reset_form(self):
        self.full_name_field.value = ""
        self.email_field.value = ""
        self.password_field.value = ""
        self.confirm_password_field.value = ""
        self.error_text.value = ""

    def _clear_error(self, e=None):
        if self.error_text.value:
            self.error_text.value = ""
            if self.page:
                self.page.update()

    def _submit(self, e=None):
        if self.mode == AuthMode.SIGN_UP:
            self.presenter.register(
                self.full_name_field.value,
                self.email_field.value,
                self.password_field.value,
                confirm_password=self.confirm_password_field.value or "",
                success_message=ACCOUNT_CREATED_MESSAGE,
            )
        else:
            self.presenter.login(
                self.email_field.value,
                self.password_field.value,
                success_message=ACCOUNT_ADDED_MESSAGE,
            )
