"""
Карточка итоговой суммы (доходы, расходы, накопления, периоды).
"""

import flet as ft


class StatCard(ft.Container):
    """
    Карточка с подписью, значением и иконкой.

    Значение меняется через set_value() без пересоздания карточки.
    """

    def __init__(self, title: str, value: str = "", icon: str = ft.Icons.PAYMENTS,
                 color: str = ft.Colors.PURPLE):
        super().__init__()
        self.title_text = ft.Text(title, size=12, color=ft.Colors.OUTLINE)
        self.value_text = ft.Text(value, size=24, weight=ft.FontWeight.BOLD, color=color)

        self.content = ft.Row(
            controls=[
                ft.Column(controls=[self.title_text, self.value_text], spacing=2, expand=True),
                ft.Container(
                    content=ft.Icon(icon, color=color, size=26),
                    width=48,
                    height=48,
                    border_radius=12,
                    bgcolor=ft.Colors.with_opacity(0.1, color),
                    alignment=ft.alignment.center,
                ),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )
        self.padding = 20
        self.border_radius = 12
        self.bgcolor = ft.Colors.SURFACE
        self.border = ft.border.all(1, ft.Colors.OUTLINE_VARIANT)
        self.expand = True

    def set_value(self, value: str) -> None:
        self.value_text.value = value
        if self.page:
            self.update()
