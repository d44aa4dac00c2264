"""
Конфигурация pytest для тестов expense_tracker.
"""
import json
from contextlib import contextmanager
from datetime import date
from decimal import Decimal
from unittest.mock import Mock, MagicMock

import pytest
import flet as ft
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from expense_tracker.models import Base, Account, Income, Expense, InventoryItem
from expense_tracker.services.api_client import ApiClient
from expense_tracker.services.session_store import SessionStore
from expense_tracker.services.storage import SqlKeyValueStore


def make_response(body=None, status_code=200):
    """
    Создаёт мок requests.Response.

    Args:
        body: Тело ответа (dict/list) или None для пустого ответа
        status_code: HTTP статус
    """
    response = Mock()
    response.status_code = status_code
    response.content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.json = Mock(return_value=body)
    return response


@pytest.fixture
def db_engine():
    """
    Временная БД в памяти.

    StaticPool нужен, чтобы все сессии видели одну и ту же базу в памяти.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """
    Сессия временной БД. Автоматически закрывается после теста.
    """
    Session = sessionmaker(bind=db_engine)
    session = Session()

    yield session

    session.close()


@pytest.fixture
def session_factory(db_engine):
    """
    Фабрика сессий в формате database.get_db_session (контекстный менеджер).
    """
    Session = sessionmaker(bind=db_engine)

    @contextmanager
    def factory():
        session = Session()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@pytest.fixture
def kv_store(session_factory):
    """SqlKeyValueStore поверх временной БД."""
    return SqlKeyValueStore(session_factory=session_factory)


@pytest.fixture
def session_store(kv_store):
    return SessionStore(kv_store)


@pytest.fixture
def http_session():
    """
    Мок requests.Session.

    headers - настоящий словарь, чтобы проверять заголовок Authorization.
    """
    session = Mock()
    session.headers = {}
    session.request = Mock(return_value=make_response({"success": True}))
    session.close = Mock()
    return session


@pytest.fixture
def api_client(http_session):
    return ApiClient("http://api.test/api/v1", timeout=5, session=http_session)


@pytest.fixture
def mock_page():
    """
    Фикстура для создания мока Flet Page.

    Использует современный Flet Dialog API (>= 0.25.0):
    - page.open(dialog) - для SnackBar и AlertDialog
    - page.close(dialog) - для их закрытия
    - page.overlay - для модальных окон, которые держат свой диалог

    Returns:
        MagicMock: Мок объекта page с методами update/open/close/go
                   и словарём client_storage
    """
    page = MagicMock(spec=ft.Page)
    page.overlay = []
    page.views = []
    page.route = "/"
    page.update = MagicMock()
    page.open = MagicMock()
    page.close = MagicMock()
    page.go = MagicMock()
    page.width = 1200
    page.height = 800
    page.theme_mode = "light"

    storage = {}
    page.client_storage = MagicMock()
    page.client_storage.get = MagicMock(side_effect=lambda key: storage.get(key))
    page.client_storage.set = MagicMock(side_effect=lambda key, value: storage.__setitem__(key, value))
    page.client_storage.contains_key = MagicMock(side_effect=lambda key: key in storage)
    page.client_storage.remove = MagicMock(side_effect=lambda key: storage.pop(key, None))
    page.client_storage.data = storage
    return page


@pytest.fixture
def alice():
    return Account(id="u1", full_name="Alice", email="alice@example.com")


@pytest.fixture
def bob():
    return Account(id="u2", full_name="Bob", email="bob@example.com",
                   profile_image_url="http://img.test/bob.png")


@pytest.fixture
def sample_incomes():
    """Доходы за январь 2024 и декабрь 2023."""
    return [
        Income(id="i1", source="Зарплата", amount=Decimal("50000"), date=date(2024, 1, 10)),
        Income(id="i2", source="Фриланс", amount=Decimal("12000"), date=date(2024, 1, 20)),
        Income(id="i3", source="Зарплата", amount=Decimal("48000"), date=date(2023, 12, 10)),
    ]


@pytest.fixture
def sample_expenses():
    """Расходы за январь 2024 и декабрь 2023."""
    return [
        Expense(id="e1", category="Еда", amount=Decimal("1500"), date=date(2024, 1, 18)),
        Expense(id="e2", category="Транспорт", amount=Decimal("700"), date=date(2024, 1, 19)),
        Expense(id="e3", category="Еда", amount=Decimal("2500"), date=date(2024, 1, 20)),
        Expense(id="e4", category="Аренда", amount=Decimal("20000"), date=date(2023, 12, 1)),
    ]


@pytest.fixture
def sample_inventory():
    return [
        InventoryItem(id="p1", name="Чай", quantity=10, unit_price=Decimal("150.50"), category="Напитки"),
        InventoryItem(id="p2", name="Кофе", quantity=0, unit_price=Decimal("900")),
    ]
