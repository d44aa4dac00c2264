"""
Модуль настройки логирования для Expense Tracker.

Обеспечивает:
- Структурированное логирование (JSON формат) в файл
- Отдельный файл лога на каждый запуск
- Читаемый вывод в консоль
"""

import json
import logging
import sys
from pathlib import Path
from datetime import datetime, date
from typing import Any, Dict
from decimal import Decimal

from expense_tracker.config import settings

# Стандартные атрибуты LogRecord, которые не попадают в extra
_RESERVED_ATTRS = {
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "levelname", "levelno", "lineno", "module",
    "msecs", "message", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread", "threadName",
    "taskName",
}

# Поля extra, значения которых нельзя писать в лог
_SECRET_KEYS = {"token", "password", "auth_token", "authorization"}


class JsonFormatter(logging.Formatter):
    """
    Форматтер для вывода логов в формате JSON.
    """
    def format(self, record: logging.LogRecord) -> str:
        """
        Форматирует запись лога в JSON строку.

        Args:
            record: Запись лога

        Returns:
            str: JSON строка
        """
        log_record: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S'),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        # Дополнительные поля из extra, например logger.info("...", extra={"account_id": "42"})
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            if key.lower() in _SECRET_KEYS:
                log_record[key] = "***"
            else:
                log_record[key] = self._serialize_value(value)

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_record, ensure_ascii=False)

    def _serialize_value(self, value: Any) -> Any:
        """Преобразует значение в JSON-сериализуемый формат."""
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        elif isinstance(value, Decimal):
            return float(value)
        elif hasattr(value, '__dict__'):
            return str(value)
        else:
            return value


def setup_logging() -> None:
    """
    Настраивает систему логирования приложения.

    - Создаёт новый файл лога для каждого запуска (expense_tracker_YYYYMMDD_HHMMSS.log)
    - JSON форматирование для файла
    - Текстовый формат для консоли
    """
    log_dir = Path(settings.log_file).parent

    if not log_dir.exists():
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print(f"КРИТИЧЕСКАЯ ОШИБКА: Не удалось создать директорию логов: {e}")
            return

    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    session_log_file = log_dir / f"expense_tracker_{timestamp}.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers = []

    try:
        file_handler = logging.FileHandler(session_log_file, encoding='utf-8')
        file_handler.setFormatter(JsonFormatter())
        root_logger.addHandler(file_handler)
    except OSError as e:
        print(f"КРИТИЧЕСКАЯ ОШИБКА: Не удалось настроить файл логов: {e}")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s | %(levelname)-8s | %(module)s:%(funcName)s | %(message)s',
        datefmt='%H:%M:%S'
    ))
    root_logger.addHandler(console_handler)

    # requests/urllib3 на уровне DEBUG печатают заголовки с токеном
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.info("Система логирования инициализирована")
    logging.info(f"Логи записываются в: {session_log_file}")


def get_logger(name: str) -> logging.Logger:
    """
    Возвращает логгер с указанным именем.

    Args:
        name: Имя логгера (обычно __name__)
    """
    return logging.getLogger(name)
