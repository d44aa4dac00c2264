"""
CRUD операции над коллекциями записей: доходы, расходы, склад.

Эндпоинты:
    GET    /{kind}        - список
    POST   /{kind}        - создание
    PUT    /{kind}/{id}   - изменение
    DELETE /{kind}/{id}   - удаление
"""

import logging
from typing import Any, Dict, List, Type, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError

from expense_tracker.models import (
    Expense,
    ExpenseCreate,
    Income,
    IncomeCreate,
    InventoryItem,
    InventoryItemCreate,
    RecordKind,
)
from expense_tracker.services.api_client import ApiClient
from expense_tracker.utils.exceptions import ApiError

logger = logging.getLogger(__name__)

Record = Union[Income, Expense, InventoryItem]
RecordCreate = Union[IncomeCreate, ExpenseCreate, InventoryItemCreate]

RECORD_MODELS: Dict[RecordKind, Type[BaseModel]] = {
    RecordKind.INCOME: Income,
    RecordKind.EXPENSE: Expense,
    RecordKind.INVENTORY: InventoryItem,
}

CREATE_MODELS: Dict[RecordKind, Type[BaseModel]] = {
    RecordKind.INCOME: IncomeCreate,
    RecordKind.EXPENSE: ExpenseCreate,
    RecordKind.INVENTORY: InventoryItemCreate,
}

# Ключи, под которыми сервер может вернуть коллекцию или запись
_LIST_KEYS = {
    RecordKind.INCOME: ("income", "incomes", "data"),
    RecordKind.EXPENSE: ("expense", "expenses", "data"),
    RecordKind.INVENTORY: ("inventory", "items", "data"),
}
_ITEM_KEYS = {
    RecordKind.INCOME: ("income", "data"),
    RecordKind.EXPENSE: ("expense", "data"),
    RecordKind.INVENTORY: ("item", "inventory", "data"),
}


def _path(kind: RecordKind, record_id: str = None) -> str:
    return f"/{kind.value}" if record_id is None else f"/{kind.value}/{record_id}"


def _extract(body: Any, keys) -> Any:
    if isinstance(body, dict):
        for key in keys:
            if key in body:
                return body[key]
    return body


def _to_payload(kind: RecordKind, data: Union[RecordCreate, dict]) -> dict:
    if isinstance(data, dict):
        data = CREATE_MODELS[kind].model_validate(data)
    return data.to_payload()


def _parse_record(kind: RecordKind, raw: Any) -> Record:
    try:
        return RECORD_MODELS[kind].model_validate(raw)
    except PydanticValidationError as e:
        logger.error(f"Некорректная запись {kind.value} в ответе сервера: {e}")
        raise ApiError("Некорректный ответ сервера")


def list_records(client: ApiClient, kind: RecordKind) -> List[Record]:
    """
    Загружает все записи коллекции.

    Записи, которые не удалось разобрать, пропускаются с предупреждением.

    Raises:
        ApiError: Ошибка сервера или ответ без списка
        NetworkError: Сервер недоступен
    """
    items = _extract(client.get(_path(kind)), _LIST_KEYS[kind])
    if not isinstance(items, list):
        logger.error(f"Ответ /{kind.value} не содержит списка записей")
        raise ApiError("Некорректный ответ сервера")

    records: List[Record] = []
    model = RECORD_MODELS[kind]
    for raw in items:
        try:
            records.append(model.model_validate(raw))
        except PydanticValidationError as e:
            logger.warning(f"Пропущена некорректная запись {kind.value}: {e}")

    logger.debug(f"Загружено записей {kind.value}: {len(records)}")
    return records


def create_record(client: ApiClient, kind: RecordKind, data: Union[RecordCreate, dict]) -> Record:
    """
    Создаёт запись.

    Args:
        data: Модель *Create или словарь с её полями

    Raises:
        pydantic.ValidationError: Данные не прошли валидацию
        ApiError, NetworkError: Ошибка сервера или сети
    """
    body = client.post(_path(kind), json_data=_to_payload(kind, data))
    record = _parse_record(kind, _extract(body, _ITEM_KEYS[kind]))
    logger.info(f"Создана запись {kind.value}: {record.id}")
    return record


def update_record(client: ApiClient, kind: RecordKind, record_id: str,
                  data: Union[RecordCreate, dict]) -> Record:
    """
    Изменяет запись.

    Raises:
        pydantic.ValidationError: Данные не прошли валидацию
        ApiError, NetworkError: Ошибка сервера или сети
    """
    body = client.put(_path(kind, record_id), json_data=_to_payload(kind, data))
    raw = _extract(body, _ITEM_KEYS[kind])
    if isinstance(raw, dict) and not raw.get("_id") and not raw.get("id"):
        raw = {**raw, "_id": record_id}
    record = _parse_record(kind, raw)
    logger.info(f"Изменена запись {kind.value}: {record_id}")
    return record


def delete_record(client: ApiClient, kind: RecordKind, record_id: str) -> None:
    """
    Удаляет запись.

    Raises:
        ApiError, NetworkError: Ошибка сервера или сети
    """
    client.delete(_path(kind, record_id))
    logger.info(f"Удалена запись {kind.value}: {record_id}")
