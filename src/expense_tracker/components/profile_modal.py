"""
Модальное окно профиля активного пользователя.
"""

import logging
from typing import Callable, Optional

import flet as ft

from expense_tracker.components.profile_photo_selector import ProfilePhotoSelector
from expense_tracker.models import ProfileUpdate
from expense_tracker.services.account_manager import AccountManager
from expense_tracker.utils.error_handler import ErrorHandler
from expense_tracker.utils.exceptions import ExpenseTrackerError

logger = logging.getLogger(__name__)


class ProfileModal:
    """
    Профиль: аватар, полное имя, email.

    Позволяет изменить имя и фото. Новое фото сначала загружается через
    /auth/upload-image, затем URL сохраняется вместе с остальными полями.
    """

    def __init__(self, account_manager: AccountManager, on_updated: Optional[Callable[[], None]] = None):
        self.account_manager = account_manager
        self.on_updated = on_updated
        self.page: Optional[ft.Page] = None
        self._photo_removed = False

        self.photo_selector = ProfilePhotoSelector(on_change=self._on_photo_change)
        self.full_name_field = ft.TextField(
            label="Полное имя",
            prefix_icon=ft.Icons.PERSON_OUTLINE,
            on_change=self._clear_error,
        )
        self.email_text = ft.Text(size=14)
        self.error_text = ft.Text(color=ft.Colors.ERROR, size=12)
        self.save_button = ft.ElevatedButton("Сохранить", on_click=self._save)

        self.dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Профиль"),
            content=ft.Column(
                controls=[
                    self.photo_selector,
                    self.full_name_field,
                    ft.Row(
                        controls=[ft.Icon(ft.Icons.MAIL_OUTLINE, color=ft.Colors.PURPLE), self.email_text],
                        spacing=10,
                    ),
                    self.error_text,
                ],
                width=420,
                tight=True,
                spacing=15,
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            actions=[
                ft.TextButton("Закрыть", on_click=self.close),
                self.save_button,
            ],
            actions_alignment=ft.MainAxisAlignment.END,
        )

    def open(self, page: ft.Page):
        self.page = page
        self._refresh_from_server()
        self._fill_form()

        self.photo_selector.attach(page)
        if self.dialog not in page.overlay:
            page.overlay.append(self.dialog)
        self.dialog.open = True
        page.update()

    def close(self, e=None):
        if self.dialog and self.page:
            self.dialog.open = False
            self.page.update()

    def _refresh_from_server(self):
        """Подтягивает актуальный профиль; при ошибке показывает сохранённый."""
        try:
            self.account_manager.refresh_user()
        except ExpenseTrackerError as e:
            logger.warning(f"Профиль не обновлён с сервера, показан сохранённый: {e}")

    def _fill_form(self):
        user = self.account_manager.user
        self._photo_removed = False
        self.full_name_field.value = user.full_name if user else ""
        self.email_text.value = user.email if user else ""
        self.error_text.value = ""
        self.photo_selector.reset(
            image_url=user.profile_image_url if user else None,
            initial=user.initial if user else "",
        )

    def _on_photo_change(self, path: Optional[str]):
        self._photo_removed = path is None

    def _clear_error(self, e=None):
        if self.error_text.value:
            self.error_text.value = ""
            if self.page:
                self.page.update()

    def _show_error(self, message: str):
        self.error_text.value = message
        if self.page:
            self.page.update()

    def _save(self, e=None):
        full_name = (self.full_name_field.value or "").strip()
        if not full_name:
            self._show_error("Пожалуйста, введите имя")
            return

        try:
            fields = ProfileUpdate(full_name=full_name)
            if self.photo_selector.selected_path:
                fields.profile_image_url = self.account_manager.upload_image(self.photo_selector.selected_path)
            elif self._photo_removed:
                fields.profile_image_url = ""

            self.account_manager.update_profile(fields)
        except ExpenseTrackerError as ex:
            self._show_error(ErrorHandler.get_user_message(ex))
            return

        # Закрываем диалог до callback: он перерисовывает layout
        self.close()
        if self.page:
            self.page.open(ft.SnackBar(content=ft.Text("Профиль обновлён")))
        if self.on_updated:
            self.on_updated()
