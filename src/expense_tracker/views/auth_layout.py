"""
Каркас страниц входа и регистрации: форма слева, декоративная панель справа.
"""

import flet as ft

from expense_tracker.components.stat_card import StatCard

PRIMARY_COLOR = "#777C6D"
BACKGROUND_COLOR = "#EEEEEE"
ACCENT_COLOR = "#B7B89F"
MUTED_COLOR = "#CBCBCB"


def build_brand_title() -> ft.Row:
    return ft.Row(
        controls=[
            ft.Icon(ft.Icons.TRENDING_UP, color=PRIMARY_COLOR),
            ft.Text("Expense Tracker", size=18, weight=ft.FontWeight.W_500, color=PRIMARY_COLOR),
        ],
        spacing=8,
    )


def build_auth_layout(form: ft.Control) -> ft.Row:
    """
    Args:
        form: Форма входа или регистрации

    Returns:
        Row на всю страницу
    """
    info_card = StatCard(
        "Отслеживайте доходы и расходы",
        "₹430,000",
        icon=ft.Icons.TRENDING_UP,
        color=PRIMARY_COLOR,
    )
    info_card.expand = False
    info_card.bgcolor = BACKGROUND_COLOR

    decoration = ft.Container(
        content=ft.Stack(
            controls=[
                ft.Container(width=190, height=190, border_radius=40, bgcolor=PRIMARY_COLOR, left=-20, top=-28),
                ft.Container(
                    width=190, height=220, border_radius=40,
                    border=ft.border.all(20, MUTED_COLOR), right=-40, top=220,
                ),
                ft.Container(width=190, height=190, border_radius=40, bgcolor=MUTED_COLOR, left=-20, bottom=-28),
                ft.Container(content=info_card, left=32, right=32, top=40),
            ],
            expand=True,
        ),
        bgcolor=ACCENT_COLOR,
        expand=2,
    )

    return ft.Row(
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=[build_brand_title(), form],
                    spacing=40,
                    scroll=ft.ScrollMode.AUTO,
                ),
                padding=ft.padding.symmetric(horizontal=48, vertical=32),
                bgcolor=BACKGROUND_COLOR,
                expand=3,
            ),
            decoration,
        ],
        spacing=0,
        expand=True,
    )
