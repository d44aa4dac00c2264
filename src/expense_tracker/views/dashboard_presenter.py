import logging
from datetime import date
from typing import Callable

from expense_tracker.models import RecordKind
from expense_tracker.services import dashboard_service, record_service
from expense_tracker.services.api_client import ApiClient
from expense_tracker.utils.error_handler import GENERIC_ERROR_MESSAGE
from expense_tracker.utils.exceptions import ExpenseTrackerError
from expense_tracker.views.interfaces import IDashboardViewCallbacks

logger = logging.getLogger(__name__)


class DashboardPresenter:
    """Presenter главной страницы и отчётов: загрузка записей и расчёт агрегатов."""

    def __init__(self, api_client: ApiClient, callbacks: IDashboardViewCallbacks,
                 today_provider: Callable[[], date] = date.today):
        self.api_client = api_client
        self.callbacks = callbacks
        self.today_provider = today_provider

    def load_dashboard(self) -> None:
        """Загрузить данные для карточек и графиков главной страницы."""
        try:
            incomes = record_service.list_records(self.api_client, RecordKind.INCOME)
            expenses = record_service.list_records(self.api_client, RecordKind.EXPENSE)
            data = dashboard_service.get_dashboard_data(incomes, expenses, today=self.today_provider())
        except Exception as e:
            self._handle_error("Ошибка загрузки дашборда", e)
            return

        self.callbacks.update_dashboard(data)

    def load_reports(self) -> None:
        """
        Загрузить данные отчётов: итоги доходов и расходов по периодам,
        стоимость склада и обзорную диаграмму.
        """
        try:
            today = self.today_provider()
            incomes = record_service.list_records(self.api_client, RecordKind.INCOME)
            expenses = record_service.list_records(self.api_client, RecordKind.EXPENSE)
            inventory = record_service.list_records(self.api_client, RecordKind.INVENTORY)

            data = dashboard_service.get_dashboard_data(incomes, expenses, today=today)
            data["income_periods"] = dashboard_service.get_period_sums(incomes, today=today)
            data["expense_periods"] = dashboard_service.get_period_sums(expenses, today=today)
            data["inventory_value"] = dashboard_service.get_inventory_value(inventory)
        except Exception as e:
            self._handle_error("Ошибка загрузки отчётов", e)
            return

        self.callbacks.update_dashboard(data)

    def _handle_error(self, message: str, exception: Exception) -> None:
        if isinstance(exception, ExpenseTrackerError):
            logger.warning(f"{message}: {exception}")
            self.callbacks.show_error(f"{message}: {exception}")
        else:
            logger.error(f"{message}: {exception}", exc_info=True)
            self.callbacks.show_error(GENERIC_ERROR_MESSAGE)
