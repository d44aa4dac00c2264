from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List


class IMessageCallbacks(ABC):
    """Общие уведомления пользователя."""

    @abstractmethod
    def show_message(self, message: str) -> None:
        """
        Показать информационное сообщение.

        Args:
            message: Текст сообщения
        """
        pass

    @abstractmethod
    def show_error(self, error: str) -> None:
        """
        Показать сообщение об ошибке.

        Args:
            error: Текст ошибки
        """
        pass


class IAuthViewCallbacks(IMessageCallbacks):
    """Интерфейс обратных вызовов от AuthPresenter к форме входа/регистрации."""

    @abstractmethod
    def set_busy(self, busy: bool) -> None:
        """Заблокировать/разблокировать форму на время запроса."""
        pass

    @abstractmethod
    def show_form_error(self, error: str) -> None:
        """
        Показать ошибку под формой.

        Args:
            error: Текст ошибки (пустая строка скрывает сообщение)
        """
        pass

    @abstractmethod
    def on_auth_success(self) -> None:
        """Вход или регистрация прошли успешно."""
        pass


class IRecordsViewCallbacks(IMessageCallbacks):
    """Интерфейс обратных вызовов от RecordsPresenter к спискам доходов/расходов/склада."""

    @abstractmethod
    def update_records(self, records: List[Any], summary: Dict[str, Decimal]) -> None:
        """
        Обновить список записей и карточки итогов.

        Args:
            records: Записи, от новых к старым (склад - в порядке сервера)
            summary: Для доходов/расходов {"month", "year", "total"},
                     для склада {"total_value", "items"}
        """
        pass


class IDashboardViewCallbacks(IMessageCallbacks):
    """Интерфейс обратных вызовов от DashboardPresenter к главной странице и отчётам."""

    @abstractmethod
    def update_dashboard(self, data: Dict[str, Any]) -> None:
        """
        Обновить карточки и графики.

        Args:
            data: Результат dashboard_service.get_dashboard_data()
                  (для отчётов дополнен ключами "income_periods", "expense_periods")
        """
        pass
