import flet as ft

from expense_tracker.components.profile_photo_selector import ProfilePhotoSelector
from expense_tracker.models import AppRoute
from expense_tracker.services.account_manager import AccountManager
from expense_tracker.utils.logger import get_logger
from expense_tracker.views.auth_layout import PRIMARY_COLOR, build_auth_layout
from expense_tracker.views.auth_presenter import AuthPresenter
from expense_tracker.views.interfaces import IAuthViewCallbacks

logger = get_logger(__name__)


class SignUpView(ft.Container, IAuthViewCallbacks):
    """
    Страница регистрации (/signUp).

    Фото профиля необязательно. Если оно выбрано, сначала загружается фото,
    затем создаётся аккаунт; при ошибке загрузки аккаунт создаётся без фото.
    """

    def __init__(self, page: ft.Page, account_manager: AccountManager):
        super().__init__(expand=True)
        self.page = page
        self.presenter = AuthPresenter(account_manager, self)

        self.photo_selector = ProfilePhotoSelector()
        self.photo_selector.attach(page)

        self.full_name_field = ft.TextField(
            label="Полное имя",
            hint_text="John Doe",
            prefix_icon=ft.Icons.PERSON_OUTLINE,
            autofocus=True,
            on_change=self._clear_error,
        )
        self.email_field = ft.TextField(
            label="Email",
            hint_text="john@example.com",
            prefix_icon=ft.Icons.MAIL_OUTLINE,
            keyboard_type=ft.KeyboardType.EMAIL,
            on_change=self._clear_error,
        )
        self.password_field = ft.TextField(
            label="Пароль",
            hint_text="Минимум 6 символов",
            prefix_icon=ft.Icons.LOCK_OUTLINE,
            password=True,
            can_reveal_password=True,
            on_change=self._clear_error,
            on_submit=self._on_sign_up,
        )
        self.error_text = ft.Text(color=ft.Colors.ERROR, size=12)
        self.sign_up_button = ft.ElevatedButton(
            "ЗАРЕГИСТРИРОВАТЬСЯ",
            bgcolor=PRIMARY_COLOR,
            color=ft.Colors.WHITE,
            height=44,
            width=float("inf"),
            on_click=self._on_sign_up,
        )
        self.progress = ft.ProgressBar(visible=False, color=PRIMARY_COLOR)

        form = ft.Column(
            controls=[
                ft.Text("Создайте аккаунт", size=22, weight=ft.FontWeight.BOLD),
                ft.Text("Заполните данные ниже, чтобы начать", size=13, color=ft.Colors.OUTLINE),
                self.photo_selector,
                ft.Row(controls=[self.full_name_field, self.email_field], spacing=12),
                self.password_field,
                self.error_text,
                self.progress,
                self.sign_up_button,
                ft.Row(
                    controls=[
                        ft.Text("Уже есть аккаунт?", size=13),
                        ft.TextButton("Войти", on_click=self._go_login),
                    ],
                    spacing=4,
                ),
            ],
            spacing=14,
            width=560,
        )
        self.content = build_auth_layout(form)

    def will_unmount(self):
        self.photo_selector.detach(self.page)

    # ========== IAuthViewCallbacks Implementation ==========

    def set_busy(self, busy: bool) -> None:
        self.progress.visible = busy
        self.sign_up_button.disabled = busy
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

    def _on_sign_up(self, e=None):
        self.presenter.register(
            self.full_name_field.value,
            self.email_field.value,
            self.password_field.value,
            image_path=self.photo_selector.selected_path,
        )

    def _go_login(self, e=None):
        self.page.go(AppRoute.LOGIN.value)

    def _clear_error(self, e=None):
        if self.error_text.value:
            self.error_text.value = ""
            self.page.update()
