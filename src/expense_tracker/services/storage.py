"""
Хранилища "ключ → строка" для состояния сессии.

- SqlKeyValueStore: таблица key_values в локальной SQLite (десктоп, по умолчанию)
- ClientStorageKeyValueStore: page.client_storage Flet (localStorage браузера в веб-режиме)

Значение None в write() означает удаление ключа.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Callable, Dict, Iterable, Optional

import flet as ft
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from expense_tracker.database import get_db_session
from expense_tracker.models import KeyValueDB
from expense_tracker.utils.exceptions import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Интерфейс персистентного хранилища "ключ → строка"."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Возвращает значение или None, если ключа нет."""
        pass

    @abstractmethod
    def write(self, values: Dict[str, Optional[str]]) -> None:
        """
        Записывает набор ключей одной операцией.

        Args:
            values: {ключ: значение}; None удаляет ключ
        """
        pass

    def read(self, keys: Iterable[str]) -> Dict[str, Optional[str]]:
        return {key: self.get(key) for key in keys}

    def set(self, key: str, value: str) -> None:
        self.write({key: value})

    def remove(self, key: str) -> None:
        self.write({key: None})


class SqlKeyValueStore(KeyValueStore):
    """
    Хранилище в таблице key_values.

    write() выполняется в одной транзакции: либо записаны все ключи, либо ни один.
    """

    def __init__(self, session_factory: Callable[[], AbstractContextManager] = get_db_session):
        """
        Args:
            session_factory: Контекстный менеджер, выдающий сессию SQLAlchemy
                             (по умолчанию database.get_db_session)
        """
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        try:
            with self._session_factory() as session:
                row = session.get(KeyValueDB, key)
                return row.value if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Ошибка чтения ключа '{key}' из хранилища: {e}")
            raise StorageError(f"Не удалось прочитать '{key}'") from e

    def write(self, values: Dict[str, Optional[str]]) -> None:
        try:
            with self._session_factory() as session:
                for key, value in values.items():
                    self._write_one(session, key, value)
                session.commit()
            logger.debug(f"В хранилище записаны ключи: {sorted(values)}")
        except SQLAlchemyError as e:
            logger.error(f"Ошибка записи в хранилище, транзакция отменена: {e}")
            raise StorageError("Не удалось сохранить состояние сессии") from e

    @staticmethod
    def _write_one(session: Session, key: str, value: Optional[str]) -> None:
        row = session.get(KeyValueDB, key)
        if value is None:
            if row is not None:
                session.delete(row)
            return
        if row is None:
            session.add(KeyValueDB(key=key, value=value))
        else:
            row.value = value
            row.updated_at = datetime.now()


class ClientStorageKeyValueStore(KeyValueStore):
    """
    Хранилище поверх page.client_storage.

    Клиентское хранилище не поддерживает транзакции, ключи пишутся по одному.
    """

    def __init__(self, page: ft.Page, prefix: str = ""):
        """
        Args:
            page: Страница Flet
            prefix: Префикс ключей (client_storage общий для всех приложений на flet-клиенте)
        """
        self.page = page
        self.prefix = prefix

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.page.client_storage.get(self._full_key(key))
        except Exception as e:
            logger.error(f"Ошибка чтения '{key}' из client_storage: {e}")
            raise StorageError(f"Не удалось прочитать '{key}'") from e
        return None if value is None else str(value)

    def write(self, values: Dict[str, Optional[str]]) -> None:
        try:
            for key, value in values.items():
                full_key = self._full_key(key)
                if value is None:
                    if self.page.client_storage.contains_key(full_key):
                        self.page.client_storage.remove(full_key)
                else:
                    self.page.client_storage.set(full_key, value)
        except Exception as e:
            logger.error(f"Ошибка записи в client_storage: {e}")
            raise StorageError("Не удалось сохранить состояние сессии") from e
