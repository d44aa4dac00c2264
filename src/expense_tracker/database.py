"""
Модуль управления локальной базой данных Expense Tracker.

База хранит только состояние сессии (таблица key_values): токен, активный
пользователь, список известных аккаунтов. Доходы, расходы и склад живут на сервере.

Содержит функции для:
- Инициализации базы данных и создания таблиц
- Управления сессиями БД через контекстный менеджер
- Обработки ошибок с автоматическим откатом транзакций

Путь к базе данных определяется в config.py через settings.db_path
"""

from contextlib import contextmanager
from typing import Generator, Optional
import logging
import atexit

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from expense_tracker.config import settings
from expense_tracker.models import Base

logger = logging.getLogger(__name__)


# Глобальные переменные для engine и session factory
_engine: Engine = None
_SessionLocal: sessionmaker = None


def init_db(db_path: Optional[str] = None) -> Engine:
    """
    Инициализирует подключение к базе данных и создаёт таблицы.

    Args:
        db_path: Путь к файлу SQLite; по умолчанию settings.db_path.
                 ":memory:" создаёт базу в памяти.
    """
    global _engine, _SessionLocal

    try:
        db_path = db_path or settings.db_path
        database_url = f"sqlite:///{db_path}"

        logger.info(f"Инициализация базы данных: {database_url}")

        _engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},  # Обработчики Flet работают в разных потоках
            echo=False
        )

        Base.metadata.create_all(bind=_engine)
        logger.info("Таблицы базы данных успешно созданы/проверены")

        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=_engine
        )

        atexit.register(close_db)

        logger.info("База данных успешно инициализирована")
        return _engine

    except SQLAlchemyError as e:
        logger.error(f"Ошибка при инициализации базы данных: {e}")
        raise


@contextmanager
def get_db_session() -> Generator[Session, None, None]:
    """
    Контекстный менеджер для работы с сессией базы данных.

    Откатывает транзакцию при любой ошибке и всегда закрывает сессию.
    """
    if _SessionLocal is None:
        error_msg = "База данных не инициализирована. Вызовите init_db() перед использованием."
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    session: Session = _SessionLocal()

    try:
        logger.debug("Создана новая сессия БД")
        yield session

    except SQLAlchemyError as e:
        logger.error(f"Ошибка SQLAlchemy, откат транзакции: {e}")
        session.rollback()
        raise

    except Exception as e:
        logger.error(f"Неожиданная ошибка, откат транзакции: {e}")
        session.rollback()
        raise

    finally:
        session.close()
        logger.debug("Сессия БД закрыта")


def close_db() -> None:
    """
    Закрывает соединение с базой данных и освобождает ресурсы.

    Должна вызываться при завершении работы приложения.
    """
    global _engine, _SessionLocal

    if _engine is not None:
        logger.info("Закрытие соединения с базой данных...")
        _engine.dispose()
        _engine = None
        _SessionLocal = None
        logger.info("Соединение с базой данных закрыто")
