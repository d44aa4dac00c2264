"""Клиент REST API Expense Tracker.

Все ответы сервера имеют вид {success: bool, message?: str, <ресурс>: ...}.
Авторизация: заголовок `Authorization: Bearer <token>`.
Повторов и backoff нет: запрос либо выполняется, либо возвращает ошибку.
"""

import logging
from typing import Any, Dict, Optional

import requests

from expense_tracker.utils.exceptions import ApiError, NetworkError

logger = logging.getLogger(__name__)


class ApiClient:
    """Тонкая обёртка над requests.Session с разбором конверта ответа."""

    def __init__(self, base_url: str, timeout: float = 15.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")
        self._token: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        """Устанавливает (или снимает при None) токен для последующих запросов."""
        self._token = token
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"
        else:
            self._session.headers.pop("Authorization", None)

    def request(self, method: str, endpoint: str, json_data: Optional[Dict[str, Any]] = None,
                params: Optional[Dict[str, Any]] = None, files: Optional[Dict[str, Any]] = None) -> Any:
        """
        Выполняет запрос и возвращает разобранное тело ответа.

        Raises:
            NetworkError: Таймаут или ошибка соединения
            ApiError: HTTP статус >= 400, success=false или не-JSON ответ
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"{method} {endpoint}")
        try:
            resp = self._session.request(
                method, url, json=json_data, params=params, files=files,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logger.warning(f"Таймаут запроса {method} {endpoint}")
            raise NetworkError("Сервер не ответил вовремя. Попробуйте позже.")
        except requests.exceptions.ConnectionError as e:
            logger.warning(f"Нет соединения с {self.base_url}: {e}")
            raise NetworkError("Не удалось подключиться к серверу")
        except requests.exceptions.RequestException as e:
            logger.error(f"Ошибка запроса {method} {endpoint}: {e}")
            raise NetworkError(f"Ошибка сети: {e}")

        body = self._parse_json(resp)
        server_message = body.get("message") if isinstance(body, dict) else None

        if resp.status_code >= 400:
            logger.warning(f"{method} {endpoint} -> HTTP {resp.status_code}: {server_message}")
            raise ApiError(
                server_message or f"HTTP {resp.status_code}",
                status_code=resp.status_code,
                server_message=server_message,
            )

        if isinstance(body, dict) and body.get("success") is False:
            logger.warning(f"{method} {endpoint} -> success=false: {server_message}")
            raise ApiError(
                server_message or "Сервер отклонил запрос",
                status_code=resp.status_code,
                server_message=server_message,
            )

        return body

    def _parse_json(self, resp: requests.Response) -> Any:
        """Пустое тело (например, 204) считается пустым объектом."""
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"Некорректный JSON в ответе (HTTP {resp.status_code}): {e}")
            raise ApiError("Некорректный ответ сервера", status_code=resp.status_code)

    def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, json_data: Optional[Dict[str, Any]] = None,
             files: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("POST", endpoint, json_data=json_data, files=files)

    def put(self, endpoint: str, json_data: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PUT", endpoint, json_data=json_data)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)

    def close(self) -> None:
        """Закрывает HTTP сессию."""
        if self._session:
            self._session.close()
