"""
Выбор фото профиля через FilePicker.
"""

import logging
from typing import Callable, Optional

import flet as ft

logger = logging.getLogger(__name__)


class ProfilePhotoSelector(ft.Column):
    """
    Круглый аватар с кнопками "Выбрать фото" и "Убрать".

    Хранит только путь к выбранному файлу; загрузка на сервер выполняется
    при отправке формы.
    """

    def __init__(self, image_url: Optional[str] = None, initial: str = "",
                 on_change: Optional[Callable[[Optional[str]], None]] = None, radius: int = 40):
        super().__init__(horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=8)
        self.image_url = image_url
        self.initial = initial
        self.on_change = on_change
        self.radius = radius
        self.selected_path: Optional[str] = None

        self.file_picker = ft.FilePicker(on_result=self._on_file_picked)

        self.avatar = ft.CircleAvatar(radius=radius, bgcolor=ft.Colors.PURPLE)
        self.remove_button = ft.TextButton("Убрать", icon=ft.Icons.DELETE_OUTLINE, on_click=self._clear)
        self.controls = [
            self.avatar,
            ft.Row(
                controls=[
                    ft.TextButton("Выбрать фото", icon=ft.Icons.UPLOAD, on_click=self._pick),
                    self.remove_button,
                ],
                alignment=ft.MainAxisAlignment.CENTER,
                tight=True,
            ),
        ]
        self._refresh_avatar()

    def attach(self, page: ft.Page) -> None:
        """FilePicker должен находиться в overlay страницы до вызова pick_files()."""
        if self.file_picker not in page.overlay:
            page.overlay.append(self.file_picker)

    def detach(self, page: ft.Page) -> None:
        if self.file_picker in page.overlay:
            page.overlay.remove(self.file_picker)

    def reset(self, image_url: Optional[str] = None, initial: str = "") -> None:
        self.image_url = image_url
        self.initial = initial
        self.selected_path = None
        self._refresh_avatar()

    def _pick(self, e=None):
        self.file_picker.pick_files(
            dialog_title="Фото профиля",
            allow_multiple=False,
            file_type=ft.FilePickerFileType.IMAGE,
        )

    def _on_file_picked(self, e: ft.FilePickerResultEvent):
        if not e.files:
            return
        self.selected_path = e.files[0].path
        logger.debug(f"Выбрано фото профиля: {e.files[0].name}")
        self._refresh_avatar()
        if self.on_change:
            self.on_change(self.selected_path)

    def _clear(self, e=None):
        self.selected_path = None
        self.image_url = None
        self._refresh_avatar()
        if self.on_change:
            self.on_change(None)

    def _refresh_avatar(self):
        source = self.selected_path or self.image_url
        self.avatar.foreground_image_src = source
        self.avatar.content = None if source else ft.Text(
            self.initial or "", size=self.radius * 0.8, weight=ft.FontWeight.BOLD, color=ft.Colors.WHITE
        )
        if not self.initial and not source:
            self.avatar.content = ft.Icon(ft.Icons.PERSON, color=ft.Colors.WHITE, size=self.radius)
        self.remove_button.visible = bool(source)
        if self.page:
            self.update()
