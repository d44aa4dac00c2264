"""
Вызовы эндпоинтов /auth.

Функции не хранят состояние: токен и кэш аккаунтов ведёт AccountManager.
Ошибки транспорта и сервера пробрасываются как NetworkError / ApiError.
"""

import logging
import mimetypes
import os

from pydantic import ValidationError as PydanticValidationError

from expense_tracker.models import (
    Account,
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
)
from expense_tracker.services.api_client import ApiClient
from expense_tracker.utils.exceptions import ApiError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
GET_USER_PATH = "/auth/getuser"
UPLOAD_IMAGE_PATH = "/auth/upload-image"
UPDATE_PROFILE_PATH = "/auth/update-profile"


def _parse_auth_response(body) -> AuthResponse:
    try:
        return AuthResponse.model_validate(body)
    except PydanticValidationError as e:
        logger.error(f"Ответ сервера не содержит user/token: {e}")
        raise ApiError("Некорректный ответ сервера")


def _parse_user(body) -> Account:
    user = body.get("user") if isinstance(body, dict) else None
    try:
        return Account.model_validate(user)
    except PydanticValidationError as e:
        logger.error(f"Ответ сервера не содержит пользователя: {e}")
        raise ApiError("Некорректный ответ сервера")


def login(client: ApiClient, credentials: LoginRequest) -> AuthResponse:
    """
    POST /auth/login.

    Returns:
        Пользователь и токен
    """
    body = client.post(LOGIN_PATH, json_data=credentials.model_dump())
    response = _parse_auth_response(body)
    logger.info(f"Успешный вход пользователя {response.user.id}")
    return response


def register(client: ApiClient, data: RegisterRequest) -> AuthResponse:
    """
    POST /auth/register.

    Returns:
        Созданный пользователь и токен
    """
    body = client.post(REGISTER_PATH, json_data=data.model_dump(by_alias=True))
    response = _parse_auth_response(body)
    logger.info(f"Зарегистрирован пользователь {response.user.id}")
    return response


def get_user(client: ApiClient) -> Account:
    """GET /auth/getuser - профиль владельца текущего токена."""
    return _parse_user(client.get(GET_USER_PATH))


def upload_image(client: ApiClient, file_path: str) -> str:
    """
    POST /auth/upload-image (multipart, поле image).

    Returns:
        URL загруженного изображения

    Raises:
        OSError: Файл не удалось прочитать
    """
    file_name = os.path.basename(file_path)
    content_type = mimetypes.guess_type(file_name)[0] or "application/octet-stream"

    with open(file_path, "rb") as fh:
        body = client.post(UPLOAD_IMAGE_PATH, files={"image": (file_name, fh, content_type)})

    image_url = body.get("imageUrl") if isinstance(body, dict) else None
    if not image_url:
        logger.error("Ответ сервера не содержит imageUrl")
        raise ApiError("Некорректный ответ сервера")

    logger.info(f"Изображение {file_name} загружено")
    return image_url


def update_profile(client: ApiClient, data: ProfileUpdate) -> Account:
    """
    PUT /auth/update-profile.

    Returns:
        Обновлённый пользователь
    """
    user = _parse_user(client.put(UPDATE_PROFILE_PATH, json_data=data.to_payload()))
    logger.info(f"Профиль пользователя {user.id} обновлён")
    return user
