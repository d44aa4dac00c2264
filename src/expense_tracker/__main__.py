"""
Точка входа для запуска через python -m expense_tracker
"""
import flet as ft

from expense_tracker.app import main


def run():
    # Нативное десктопное окно; для запуска в браузере используйте `flet run --web`
    ft.app(target=main, view=ft.AppView.FLET_APP)


if __name__ == "__main__":
    run()
