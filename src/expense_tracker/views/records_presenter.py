import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from expense_tracker.models import RecordKind
from expense_tracker.services import dashboard_service, record_service
from expense_tracker.services.api_client import ApiClient
from expense_tracker.utils.error_handler import GENERIC_ERROR_MESSAGE
from expense_tracker.utils.exceptions import ApiError, ExpenseTrackerError, NetworkError
from expense_tracker.views.interfaces import IRecordsViewCallbacks

logger = logging.getLogger(__name__)

# (создано, изменено, удалено)
_MESSAGES = {
    RecordKind.INCOME: ("Доход добавлен", "Доход изменён", "Доход удалён"),
    RecordKind.EXPENSE: ("Расход добавлен", "Расход изменён", "Расход удалён"),
    RecordKind.INVENTORY: ("Позиция добавлена", "Позиция изменена", "Позиция удалена"),
}


class RecordsPresenter:
    """Presenter страниц доходов, расходов и склада: загрузка списка и CRUD."""

    def __init__(self, api_client: ApiClient, kind: RecordKind, callbacks: IRecordsViewCallbacks,
                 today_provider: Callable[[], date] = date.today):
        self.api_client = api_client
        self.kind = kind
        self.callbacks = callbacks
        self.today_provider = today_provider
        self.records: List[Any] = []

    def load_records(self) -> None:
        """Загрузить записи и пересчитать итоги."""
        try:
            records = record_service.list_records(self.api_client, self.kind)
        except Exception as e:
            self._handle_error("Ошибка загрузки записей", e)
            return

        if self.kind is RecordKind.INVENTORY:
            self.records = list(records)
            summary = {
                "total_value": dashboard_service.get_inventory_value(self.records),
                "items": len(self.records),
            }
        else:
            self.records = dashboard_service.get_recent_records(records, limit=len(records))
            summary = dashboard_service.get_period_sums(self.records, today=self.today_provider())

        self.callbacks.update_records(self.records, summary)

    def get_record(self, record_id: str) -> Optional[Any]:
        return next((r for r in self.records if r.id == record_id), None)

    def create_record(self, data: Union[Dict[str, Any], Any]) -> bool:
        """
        Создать запись.

        Returns:
            True при успехе
        """
        try:
            record_service.create_record(self.api_client, self.kind, data)
        except Exception as e:
            self._handle_error("Ошибка создания записи", e)
            return False

        self.callbacks.show_message(_MESSAGES[self.kind][0])
        self.load_records()
        return True

    def update_record(self, record_id: str, data: Union[Dict[str, Any], Any]) -> bool:
        """Изменить запись."""
        try:
            record_service.update_record(self.api_client, self.kind, record_id, data)
        except Exception as e:
            logger.error(f"Ошибка изменения записи {self.kind.value} {record_id}: {e}", extra={
                "record_id": record_id,
                "kind": self.kind.value,
            })
            self._handle_error("Ошибка изменения записи", e)
            return False

        self.callbacks.show_message(_MESSAGES[self.kind][1])
        self.load_records()
        return True

    def delete_record(self, record_id: str) -> bool:
        """Удалить запись."""
        try:
            record_service.delete_record(self.api_client, self.kind, record_id)
        except Exception as e:
            self._handle_error("Ошибка удаления записи", e)
            return False

        self.callbacks.show_message(_MESSAGES[self.kind][2])
        self.load_records()
        return True

    def _handle_error(self, message: str, exception: Exception) -> None:
        """Обработать ошибку с логированием и уведомлением View."""
        if isinstance(exception, (ApiError, NetworkError)):
            logger.warning(f"{message}: {exception}")
            self.callbacks.show_error(f"{message}: {exception}")
        elif isinstance(exception, PydanticValidationError):
            logger.warning(f"{message}: {exception}")
            first = exception.errors()[0]["msg"] if exception.errors() else str(exception)
            self.callbacks.show_error(f"Ошибка ввода: {first}")
        elif isinstance(exception, ExpenseTrackerError):
            logger.error(f"{message}: {exception}")
            self.callbacks.show_error(f"{message}: {exception}")
        else:
            logger.error(f"{message}: {exception}", exc_info=True)
            self.callbacks.show_error(GENERIC_ERROR_MESSAGE)
