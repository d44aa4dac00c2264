"""
Модуль конфигурации клиента Expense Tracker.

Содержит настройки:
- Основные параметры приложения (название, версия)
- Подключение к REST API (базовый URL, таймаут)
- Выбор хранилища сессии (SQLite или client_storage страницы)
- Настройки интерфейса (тема, размеры окна, последний маршрут)
- Настройки логирования
- Персистентность настроек (загрузка/сохранение)
"""

import os
import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "http://localhost:8000/api/v1"
API_URL_ENV_VAR = "EXPENSE_TRACKER_API_URL"


class Config:
    """
    Класс конфигурации приложения.
    Реализует паттерн Singleton для доступа к настройкам из любой части приложения.

    Все пользовательские данные (хранилище сессии, логи, настройки) находятся в
    директории ~/.expense_tracker_data/.
    """

    _instance = None

    # Константы приложения
    APP_NAME = "Expense Tracker"
    VERSION = "1.0.0"

    @staticmethod
    def get_user_data_dir() -> Path:
        """
        Возвращает путь к директории пользовательских данных.

        Создаёт директорию ~/.expense_tracker_data/ и поддиректорию logs/.

        Returns:
            Path: Путь к ~/.expense_tracker_data/
        """
        data_dir = Path.home() / ".expense_tracker_data"
        data_dir.mkdir(exist_ok=True)
        logger.info(f"Директория пользовательских данных: {data_dir}")

        logs_dir = data_dir / "logs"
        logs_dir.mkdir(exist_ok=True)
        logger.debug(f"Директория логов: {logs_dir}")

        return data_dir

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True

        self.user_data_dir = self.get_user_data_dir()

        # Пути к файлам
        self.db_path: str = str(self.user_data_dir / "session.db")
        self.config_file: str = str(self.user_data_dir / "config.json")
        self.log_file: str = str(self.user_data_dir / "logs" / "expense_tracker.log")

        # Подключение к API
        self.api_base_url: str = DEFAULT_API_BASE_URL
        # Значение из config.json; переменная окружения его не перезаписывает
        self._file_api_base_url: str = DEFAULT_API_BASE_URL
        self._env_api_base_url: Optional[str] = None
        self.request_timeout: float = 15.0

        # Хранилище сессии: sqlite | client_storage
        self.storage_backend: str = "sqlite"

        # Значения по умолчанию для UI
        self.theme_mode: str = "light"
        self.window_width: int = 1280
        self.window_height: int = 820
        self.window_top: Optional[int] = None
        self.window_left: Optional[int] = None

        self.log_level: str = "INFO"

        # Форматы
        self.date_format: str = "%Y-%m-%d"
        self.currency_symbol: str = "₹"

        # Последний открытый раздел
        self.last_route: str = "/dashboard"

        self.load()
        self._apply_env_overrides()

    def load(self) -> None:
        """
        Загружает настройки из файла конфигурации.

        Если файл не существует, используются значения по умолчанию.
        """
        if not os.path.exists(self.config_file):
            logger.info(f"Файл конфигурации не найден, используются значения по умолчанию: {self.config_file}")
            return

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            self.api_base_url = data.get("api_base_url", DEFAULT_API_BASE_URL)
            self._file_api_base_url = self.api_base_url
            self.request_timeout = float(data.get("request_timeout", 15.0))
            self.storage_backend = data.get("storage_backend", "sqlite")

            self.theme_mode = data.get("theme_mode", "light")
            self.window_width = data.get("window_width", 1280)
            self.window_height = data.get("window_height", 820)
            self.window_top = data.get("window_top")
            self.window_left = data.get("window_left")

            self.log_level = data.get("log_level", "INFO")
            self.date_format = data.get("date_format", "%Y-%m-%d")
            self.currency_symbol = data.get("currency_symbol", "₹")
            self.last_route = data.get("last_route", "/dashboard")

            logger.info(f"Конфигурация загружена из {self.config_file}")

        except Exception as e:
            logger.error(f"Ошибка при загрузке конфигурации: {e}")

    def _apply_env_overrides(self) -> None:
        """Переменная окружения имеет приоритет над файлом конфигурации."""
        env_url = os.environ.get(API_URL_ENV_VAR)
        if env_url:
            self.api_base_url = env_url
            self._env_api_base_url = env_url
            logger.info(f"Базовый URL API взят из {API_URL_ENV_VAR}: {env_url}")

    def _stored_api_base_url(self) -> str:
        """URL для записи в файл: значение из окружения в config.json не попадает."""
        if self._env_api_base_url is not None and self.api_base_url == self._env_api_base_url:
            return self._file_api_base_url
        return self.api_base_url

    def save(self) -> None:
        """Сохраняет текущие настройки в файл конфигурации."""
        data = {
            "api_base_url": self._stored_api_base_url(),
            "request_timeout": self.request_timeout,
            "storage_backend": self.storage_backend,
            "theme_mode": self.theme_mode,
            "window_width": self.window_width,
            "window_height": self.window_height,
            "window_top": self.window_top,
            "window_left": self.window_left,
            "log_level": self.log_level,
            "date_format": self.date_format,
            "currency_symbol": self.currency_symbol,
            "last_route": self.last_route,
        }

        try:
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=4, ensure_ascii=False)
            logger.info(f"Конфигурация сохранена в {self.config_file}")
        except Exception as e:
            logger.error(f"Ошибка при сохранении конфигурации: {e}")


# Глобальный экземпляр конфигурации
settings = Config()
