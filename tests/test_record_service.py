"""
Тесты CRUD сервиса записей.
"""
from datetime import date
from decimal import Decimal
from unittest.mock import Mock

import pytest
from pydantic import ValidationError as PydanticValidationError

from expense_tracker.models import ExpenseCreate, Income, InventoryItem, RecordKind
from expense_tracker.services import record_service
from expense_tracker.services.api_client import ApiClient
from expense_tracker.utils.exceptions import ApiError


@pytest.fixture
def client():
    return Mock(spec=ApiClient)


class TestListRecords:
    def test_income_list(self, client):
        client.get.return_value = {
            "success": True,
            "income": [
                {"_id": "i1", "source": "Зарплата", "amount": 50000, "date": "2024-01-10T00:00:00.000Z"},
            ],
        }

        records = record_service.list_records(client, RecordKind.INCOME)

        client.get.assert_called_once_with("/income")
        assert records == [
            Income(id="i1", source="Зарплата", amount=Decimal("50000"), date=date(2024, 1, 10)),
        ]

    def test_inventory_list_under_items_key(self, client):
        client.get.return_value = {
            "success": True,
            "items": [{"_id": "p1", "name": "Чай", "quantity": 3, "unitPrice": 10.5}],
        }

        records = record_service.list_records(client, RecordKind.INVENTORY)

        assert isinstance(records[0], InventoryItem)
        assert records[0].total_value == Decimal("31.5")

    def test_bare_list_response(self, client):
        client.get.return_value = [{"_id": "e1", "category": "Еда", "amount": 10, "date": "2024-01-01"}]

        records = record_service.list_records(client, RecordKind.EXPENSE)

        assert [r.id for r in records] == ["e1"]

    def test_invalid_records_are_skipped(self, client):
        client.get.return_value = {
            "success": True,
            "expense": [
                {"_id": "e1", "category": "Еда", "amount": 10, "date": "2024-01-01"},
                {"_id": "e2", "category": "", "amount": 10, "date": "2024-01-01"},
                {"_id": "e3", "category": "Такси", "amount": -5, "date": "2024-01-01"},
            ],
        }

        records = record_service.list_records(client, RecordKind.EXPENSE)

        assert [r.id for r in records] == ["e1"]

    def test_response_without_list_is_api_error(self, client):
        client.get.return_value = {"success": True, "message": "ok"}

        with pytest.raises(ApiError):
            record_service.list_records(client, RecordKind.INCOME)


class TestCreateRecord:
    def test_create_from_model(self, client):
        client.post.return_value = {
            "success": True,
            "expense": {"_id": "e9", "category": "Еда", "amount": 99.5, "date": "2024-02-01"},
        }

        record = record_service.create_record(
            client, RecordKind.EXPENSE,
            ExpenseCreate(category="Еда", amount=Decimal("99.50"), date=date(2024, 2, 1)),
        )

        client.post.assert_called_once_with(
            "/expense", json_data={"category": "Еда", "amount": 99.5, "date": "2024-02-01"}
        )
        assert record.id == "e9"

    def test_create_from_dict_uses_server_field_names(self, client):
        client.post.return_value = {
            "success": True,
            "item": {"_id": "p1", "name": "Чай", "quantity": 2, "unitPrice": 5},
        }

        record_service.create_record(client, RecordKind.INVENTORY, {"name": "Чай", "quantity": 2, "unit_price": "5"})

        _, kwargs = client.post.call_args
        assert kwargs["json_data"] == {"name": "Чай", "quantity": 2, "unitPrice": 5.0}

    def test_invalid_data_is_not_sent(self, client):
        with pytest.raises(PydanticValidationError):
            record_service.create_record(client, RecordKind.INCOME, {"source": "  ", "amount": 10})

        client.post.assert_not_called()

    def test_malformed_response_is_api_error(self, client):
        client.post.return_value = {"success": True, "income": {"source": "x"}}

        with pytest.raises(ApiError):
            record_service.create_record(client, RecordKind.INCOME, {"source": "Подарок", "amount": 10})


class TestUpdateAndDelete:
    def test_update_puts_to_record_path(self, client):
        client.put.return_value = {
            "success": True,
            "income": {"source": "Бонус", "amount": 500, "date": "2024-03-01"},
        }

        record = record_service.update_record(
            client, RecordKind.INCOME, "i7",
            {"source": "Бонус", "amount": "500", "date": "2024-03-01"},
        )

        args, _ = client.put.call_args
        assert args == ("/income/i7",)
        assert record.id == "i7"

    def test_delete(self, client):
        record_service.delete_record(client, RecordKind.EXPENSE, "e1")

        client.delete.assert_called_once_with("/expense/e1")
