"""
Модуль моделей данных для Expense Tracker.

Содержит:
- KeyValueDB: SQLAlchemy модель локального хранилища "ключ → значение"
- Account, AuthSession, SessionSnapshot: модели мульти-аккаунтной сессии
- LoginRequest, RegisterRequest, ProfileUpdate: тела запросов к /auth
- Income, Expense, InventoryItem (+ *Create): записи коллекций REST API

Pydantic модели принимают имена полей в формате сервера (camelCase, `_id`)
и сериализуются обратно в тот же формат через `by_alias=True`.
"""

from datetime import datetime
from datetime import date as date_type
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


# Декларативная база для SQLAlchemy моделей
class Base(DeclarativeBase):
    """Базовый класс для всех SQLAlchemy моделей."""
    pass


class KeyValueDB(Base):
    """
    Запись локального хранилища сессии.

    Attributes:
        key: Ключ (token, user, accounts, currentAccountId)
        value: Строковое значение (JSON или сырой токен)
        updated_at: Дата последней записи
    """
    __tablename__ = "key_values"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


def _id_field():
    return Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")


def _parse_iso_date(value):
    """Сервер может вернуть дату с временем ("2024-01-15T00:00:00.000Z")."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        return value[:10]
    return value


# =============================================================================
# Аккаунты и сессия
# =============================================================================

class Account(BaseModel):
    """
    Аккаунт, под которым пользователь входил на этом клиенте.

    Attributes:
        id: Идентификатор пользователя на сервере (`_id`)
        full_name: Полное имя (`fullName`)
        email: Email
        profile_image_url: Ссылка на фото профиля (`profileImageUrl`), может отсутствовать
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = _id_field()
    full_name: str = Field(
        default="",
        validation_alias=AliasChoices("fullName", "full_name"),
        serialization_alias="fullName",
    )
    email: str = ""
    profile_image_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("profileImageUrl", "profile_image_url"),
        serialization_alias="profileImageUrl",
    )

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        """Числовые идентификаторы приводятся к строке."""
        if v is None:
            raise ValueError("Идентификатор аккаунта обязателен")
        return str(v)

    @field_validator('profile_image_url')
    @classmethod
    def empty_url_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Пустая строка означает отсутствие фото."""
        return v or None

    @property
    def initial(self) -> str:
        """Первая буква имени для аватара без фото."""
        name = (self.full_name or self.email or "?").strip()
        return name[:1].upper() if name else "?"

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True)


class AuthSession(BaseModel):
    """
    Активная сессия: не более одной в каждый момент времени.

    Attributes:
        active_user_id: Идентификатор активного аккаунта
        auth_token: Токен доступа к API
    """
    model_config = ConfigDict(frozen=True)

    active_user_id: str
    auth_token: str


class SessionSnapshot(BaseModel):
    """
    Полное персистентное состояние мульти-аккаунтной сессии.

    Сохраняется целиком после каждой мутации.
    """
    token: Optional[str] = None
    user: Optional[Account] = None
    accounts: List[Account] = Field(default_factory=list)
    current_account_id: Optional[str] = None


class AuthResponse(BaseModel):
    """Ответ /auth/login и /auth/register."""
    model_config = ConfigDict(extra="ignore")

    user: Account
    token: str


# =============================================================================
# Тела запросов /auth
# =============================================================================

class LoginRequest(BaseModel):
    """Учётные данные для входа."""
    email: str
    password: str


class RegisterRequest(BaseModel):
    """
    Данные регистрации нового пользователя.

    profile_image_url заполняется после загрузки фото через /auth/upload-image;
    пустая строка означает "без фото".
    """
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(serialization_alias="fullName", validation_alias=AliasChoices("fullName", "full_name"))
    email: str
    password: str
    profile_image_url: str = Field(
        default="",
        serialization_alias="profileImageUrl",
        validation_alias=AliasChoices("profileImageUrl", "profile_image_url"),
    )


class ProfileUpdate(BaseModel):
    """
    Изменяемые поля профиля.

    Все поля опциональные - отправляются только указанные.
    """
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(
        default=None,
        serialization_alias="fullName",
        validation_alias=AliasChoices("fullName", "full_name"),
    )
    email: Optional[str] = None
    profile_image_url: Optional[str] = Field(
        default=None,
        serialization_alias="profileImageUrl",
        validation_alias=AliasChoices("profileImageUrl", "profile_image_url"),
    )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# =============================================================================
# Записи коллекций
# =============================================================================

class _RecordPayload(BaseModel):
    """Общие правила сериализации записей в JSON тела запроса."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"id"})


class IncomeCreate(_RecordPayload):
    """
    Pydantic модель для создания дохода с валидацией.

    Attributes:
        source: Источник дохода (не может быть пустым)
        amount: Сумма (должна быть больше 0)
        date: Дата поступления (по умолчанию сегодня)
        icon: Необязательная иконка/emoji источника
    """
    source: str = Field(min_length=1)
    amount: Decimal = Field(gt=Decimal('0'), description="Сумма дохода должна быть положительной")
    date: date_type = Field(default_factory=date_type.today)
    icon: Optional[str] = None

    @field_validator('source')
    @classmethod
    def strip_source(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Источник дохода не может быть пустым")
        return v

    @field_validator('date', mode='before')
    @classmethod
    def parse_date(cls, v):
        return _parse_iso_date(v)

    @field_serializer('amount')
    def serialize_amount(self, v: Decimal) -> float:
        return float(v)


class Income(IncomeCreate):
    """Доход, полученный с сервера."""
    id: str = _id_field()

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v)


class ExpenseCreate(_RecordPayload):
    """
    Pydantic модель для создания расхода с валидацией.

    Attributes:
        category: Категория расхода (не может быть пустой)
        amount: Сумма (должна быть больше 0)
        date: Дата расхода (по умолчанию сегодня)
        icon: Необязательная иконка/emoji категории
    """
    category: str = Field(min_length=1)
    amount: Decimal = Field(gt=Decimal('0'), description="Сумма расхода должна быть положительной")
    date: date_type = Field(default_factory=date_type.today)
    icon: Optional[str] = None

    @field_validator('category')
    @classmethod
    def strip_category(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Категория расхода не может быть пустой")
        return v

    @field_validator('date', mode='before')
    @classmethod
    def parse_date(cls, v):
        return _parse_iso_date(v)

    @field_serializer('amount')
    def serialize_amount(self, v: Decimal) -> float:
        return float(v)


class Expense(ExpenseCreate):
    """Расход, полученный с сервера."""
    id: str = _id_field()

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v)


class InventoryItemCreate(_RecordPayload):
    """
    Pydantic модель для создания позиции склада.

    Attributes:
        name: Наименование (не может быть пустым)
        quantity: Количество на складе (>= 0)
        unit_price: Цена за единицу (>= 0), `unitPrice` на сервере
        category: Необязательная категория товара
    """
    name: str = Field(min_length=1)
    quantity: int = Field(ge=0)
    unit_price: Decimal = Field(
        ge=Decimal('0'),
        serialization_alias="unitPrice",
        validation_alias=AliasChoices("unitPrice", "unit_price"),
    )
    category: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Наименование не может быть пустым")
        return v

    @field_serializer('unit_price')
    def serialize_price(self, v: Decimal) -> float:
        return float(v)

    @property
    def total_value(self) -> Decimal:
        return self.unit_price * self.quantity


class InventoryItem(InventoryItemCreate):
    """Позиция склада, полученная с сервера."""
    id: str = _id_field()

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        return str(v)
