import flet as ft

from expense_tracker.models import AppRoute
from expense_tracker.services.account_manager import AccountManager
from expense_tracker.utils.logger import get_logger
from expense_tracker.views.auth_layout import PRIMARY_COLOR, build_auth_layout
from expense_tracker.views.auth_presenter import AuthPresenter
from expense_tracker.views.interfaces import IAuthViewCallbacks

logger = get_logger(__name__)


class LoginView(ft.Container, IAuthViewCallbacks):
    """
    Страница входа (/login).

    Email и пароль проверяются до обращения к серверу. После успешного входа
    выполняется переход на /dashboard.
    """

    def __init__(self, page: ft.Page, account_manager: AccountManager):
        super().__init__(expand=True)
        self.page = page
        self.presenter = AuthPresenter(account_manager, self)

        self.email_field = ft.TextField(
            label="Email",
            hint_text="john@example.com",
            prefix_icon=ft.Icons.MAIL_OUTLINE,
            keyboard_type=ft.KeyboardType.EMAIL,
            autofocus=True,
            on_change=self._clear_error,
        )
        self.password_field = ft.TextField(
            label="Пароль",
            hint_text="Минимум 6 символов",
            prefix_icon=ft.Icons.LOCK_OUTLINE,
            password=True,
            can_reveal_password=True,
            on_change=self._clear_error,
            on_submit=self._on_login,
        )
        self.error_text = ft.Text(color=ft.Colors.ERROR, size=12)
        self.login_button = ft.ElevatedButton(
            "ВОЙТИ",
            bgcolor=PRIMARY_COLOR,
            color=ft.Colors.WHITE,
            height=44,
            width=float("inf"),
            on_click=self._on_login,
        )
        self.progress = ft.ProgressBar(visible=False, color=PRIMARY_COLOR)

        form = ft.Column(
            controls=[
                ft.Text("С возвращением", size=22, weight=ft.FontWeight.BOLD),
                ft.Text("Введите данные для входа", size=13, color=ft.Colors.OUTLINE),
                self.email_field,
                self.password_field,
                self.error_text,
                self.progress,
                self.login_button,
                ft.Row(
                    controls=[
                        ft.Text("Нет аккаунта?", size=13),
                        ft.TextButton("Зарегистрироваться", on_click=self._go_sign_up),
                    ],
                    spacing=4,
                ),
            ],
            spacing=14,
            width=420,
        )
        self.content = build_auth_layout(form)

    # ========== IAuthViewCallbacks Implementation ==========

    def set_busy(self, busy: bool) -> None:
        self.progress.visible = busy
        self.login_button.disabled = busy
        self.page.update()

    def show_form_error(self, error: str) -> None:
        self.error_text.value = error
        self.page.update()

    def on_auth_success(self) -> None:
        self.page.go(AppRoute.DASHBOARD.value)

    def show_message(self, message: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(message)))

    def show_error(self, error: str) -> None:
        self.page.open(ft.SnackBar(content=ft.Text(error), bgcolor=ft.Colors.ERROR))

    # ========== UI Event Handlers ==========

    def _on_login(self, e=None):
        self.presenter.login(self.email_field.value, self.password_field.value)

    def _go_sign_up(self, e=None):
        self.page.go(AppRoute.SIGN_UP.value)

    def _clear_error(self, e=None):
        if self.error_text.value:
            self.error_text.value = ""
            self.page.update()
