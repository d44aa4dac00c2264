"""
Менеджер аккаунтов: мульти-аккаунтная сессия клиента.

Состояния:
    UNAUTHENTICATED --login/register--> AUTHENTICATED(active=A)
    AUTHENTICATED --login/register/switch_account--> AUTHENTICATED(active=B)
    AUTHENTICATED --remove_account--> AUTHENTICATED | UNAUTHENTICATED
    AUTHENTICATED --logout--> UNAUTHENTICATED

Инварианты:
- accounts не содержит двух аккаунтов с одинаковым id
- current_account_id, если задан, ссылается на элемент accounts
- каждая мутация сохраняет состояние целиком; при ошибке сохранения
  состояние в памяти не меняется
"""

import logging
import os
from typing import Callable, List, Optional, Union

from expense_tracker.models import (
    Account,
    AuthResponse,
    AuthSession,
    AuthState,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    SessionSnapshot,
)
from expense_tracker.services import auth_service
from expense_tracker.services.api_client import ApiClient
from expense_tracker.services.session_store import SessionStore
from expense_tracker.utils.exceptions import (
    AccountNotFoundError,
    ApiError,
    AuthError,
    NetworkError,
    StorageError,
    UpdateError,
    UploadError,
)

logger = logging.getLogger(__name__)

Listener = Callable[["AccountManager"], None]

LOGIN_FAILED_MESSAGE = "Не удалось войти"
REGISTER_FAILED_MESSAGE = "Не удалось зарегистрироваться"
UPLOAD_FAILED_MESSAGE = "Не удалось загрузить изображение"
UPDATE_FAILED_MESSAGE = "Не удалось обновить профиль"
ACCOUNT_NOT_FOUND_MESSAGE = "Аккаунт не найден"


class AccountManager:
    """
    Единственный владелец состояния сессии.

    Создаётся при старте приложения и передаётся в представления явно.
    Жизненный цикл: initialize() при старте, teardown() при закрытии страницы.
    """

    def __init__(self, session_store: SessionStore, api_client: ApiClient):
        self.session_store = session_store
        self.api_client = api_client

        self._token: Optional[str] = None
        self._user: Optional[Account] = None
        self._accounts: List[Account] = []
        self._current_account_id: Optional[str] = None
        self._loading = True
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Состояние
    # ------------------------------------------------------------------

    @property
    def user(self) -> Optional[Account]:
        return self._user

    @property
    def accounts(self) -> List[Account]:
        return list(self._accounts)

    @property
    def current_account_id(self) -> Optional[str]:
        return self._current_account_id

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and bool(self._token)

    @property
    def state(self) -> AuthState:
        return AuthState.AUTHENTICATED if self.is_authenticated else AuthState.UNAUTHENTICATED

    @property
    def session(self) -> Optional[AuthSession]:
        """Активная сессия или None."""
        if not self.is_authenticated:
            return None
        return AuthSession(active_user_id=self._user.id, auth_token=self._token)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            token=self._token,
            user=self._user,
            accounts=list(self._accounts),
            current_account_id=self._current_account_id,
        )

    # ------------------------------------------------------------------
    # Жизненный цикл
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """
        Загружает сохранённое состояние.

        Если хранилище недоступно, клиент стартует без сессии.
        """
        try:
            snapshot = self.session_store.load()
        except StorageError as e:
            logger.error(f"Не удалось загрузить сессию, старт без аккаунтов: {e}")
            snapshot = SessionSnapshot()

        user = snapshot.user if snapshot.token else None
        accounts = list(snapshot.accounts)
        if user is not None and self._find_in(accounts, user.id) is None:
            logger.warning(f"Активный пользователь {user.id} отсутствовал в списке аккаунтов, добавлен")
            accounts.append(user)

        self._token = snapshot.token if user else None
        self._user = user
        self._accounts = accounts
        self._current_account_id = user.id if user else None
        self.api_client.set_token(self._token)
        self._loading = False

        logger.info(f"Менеджер аккаунтов инициализирован, состояние: {self.state.value}")
        self._notify()

    def teardown(self) -> None:
        """Освобождает ресурсы. Сохранённое состояние не трогает."""
        self._listeners.clear()
        self.api_client.close()
        logger.info("Менеджер аккаунтов остановлен")

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Подписывает на изменения состояния.

        Returns:
            Функция отписки
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    # ------------------------------------------------------------------
    # Операции
    # ------------------------------------------------------------------

    def login(self, email: str, password: str) -> AuthSession:
        """
        Вход по email и паролю. Аккаунт добавляется в список известных (без дубликатов)
        и становится активным.

        Raises:
            AuthError: Неверные данные или ошибка сети (текст для пользователя)
            StorageError: Не удалось сохранить сессию
        """
        try:
            response = auth_service.login(self.api_client, LoginRequest(email=email, password=password))
        except ApiError as e:
            logger.warning(f"Вход отклонён сервером: {e}")
            raise AuthError(e.server_message or LOGIN_FAILED_MESSAGE) from e
        except NetworkError as e:
            raise AuthError(str(e)) from e

        return self._activate(response)

    def register(self, profile: Union[RegisterRequest, dict]) -> AuthSession:
        """
        Регистрация нового пользователя. Как и при входе, аккаунт добавляется
        в список известных и становится активным.

        Raises:
            AuthError: Сервер отклонил регистрацию или ошибка сети
            StorageError: Не удалось сохранить сессию
        """
        if isinstance(profile, dict):
            profile = RegisterRequest.model_validate(profile)
        try:
            response = auth_service.register(self.api_client, profile)
        except ApiError as e:
            logger.warning(f"Регистрация отклонена сервером: {e}")
            raise AuthError(e.server_message or REGISTER_FAILED_MESSAGE) from e
        except NetworkError as e:
            raise AuthError(str(e)) from e

        return self._activate(response)

    def switch_account(self, account_id: str) -> None:
        """
        Делает активным ранее известный аккаунт.

        Новый токен не запрашивается: используется кэшированный профиль и текущий токен.

        Raises:
            AccountNotFoundError: id нет в списке известных аккаунтов
            AuthError: Нет активной сессии
        """
        account = self._find_in(self._accounts, account_id)
        if account is None:
            logger.warning(f"Переключение на неизвестный аккаунт {account_id}")
            raise AccountNotFoundError(ACCOUNT_NOT_FOUND_MESSAGE)
        if not self.is_authenticated:
            raise AuthError("Войдите в аккаунт, чтобы переключиться")
        if account_id == self._current_account_id:
            return

        self._commit(self._token, account, self._accounts, account.id)
        logger.info(f"Активный аккаунт переключён на {account_id}")

    def remove_account(self, account_id: str) -> None:
        """
        Удаляет аккаунт из списка известных.

        Если удалён активный аккаунт, активным становится первый оставшийся;
        если аккаунтов не осталось, сессия завершается. Неизвестный id игнорируется.
        """
        remaining = [a for a in self._accounts if a.id != account_id]
        if len(remaining) == len(self._accounts):
            logger.info(f"Аккаунт {account_id} не найден в списке, удалять нечего")
            return

        if not remaining:
            self._commit(None, None, [], None)
            logger.info(f"Удалён последний аккаунт {account_id}, сессия завершена")
        elif account_id == self._current_account_id:
            successor = remaining[0]
            self._commit(self._token, successor, remaining, successor.id)
            logger.info(f"Удалён активный аккаунт {account_id}, активным стал {successor.id}")
        else:
            self._commit(self._token, self._user, remaining, self._current_account_id)
            logger.info(f"Аккаунт {account_id} удалён из списка")

    def logout(self) -> None:
        """Завершает активную сессию. Список известных аккаунтов не меняется."""
        self._commit(None, None, self._accounts, None)
        logger.info("Выход из аккаунта")

    def upload_image(self, file_path: str) -> str:
        """
        Загружает изображение профиля.

        Returns:
            URL изображения

        Raises:
            UploadError: Файл не читается, сервер отклонил загрузку или ошибка сети
        """
        try:
            return auth_service.upload_image(self.api_client, file_path)
        except ApiError as e:
            raise UploadError(e.server_message or UPLOAD_FAILED_MESSAGE) from e
        except NetworkError as e:
            raise UploadError(str(e)) from e
        except OSError as e:
            logger.error(f"Не удалось прочитать файл {file_path}: {e}")
            raise UploadError(f"Не удалось прочитать файл {os.path.basename(file_path)}") from e

    def update_profile(self, fields: Union[ProfileUpdate, dict]) -> Account:
        """
        Обновляет профиль активного пользователя и его запись в списке аккаунтов.

        Raises:
            UpdateError: Нет активной сессии, сервер отклонил изменения или ошибка сети
        """
        if not self.is_authenticated:
            raise UpdateError("Войдите в аккаунт, чтобы изменить профиль")
        if isinstance(fields, dict):
            fields = ProfileUpdate.model_validate(fields)

        try:
            user = auth_service.update_profile(self.api_client, fields)
        except ApiError as e:
            raise UpdateError(e.server_message or UPDATE_FAILED_MESSAGE) from e
        except NetworkError as e:
            raise UpdateError(str(e)) from e

        self._commit(self._token, user, self._upsert(self._accounts, user), user.id)
        return user

    def refresh_user(self) -> Optional[Account]:
        """
        Перечитывает профиль активного пользователя с сервера.

        Returns:
            Обновлённый профиль или None без активной сессии

        Raises:
            AuthError: Сервер отклонил токен или ошибка сети
        """
        if not self.is_authenticated:
            return None
        try:
            user = auth_service.get_user(self.api_client)
        except (ApiError, NetworkError) as e:
            raise AuthError(str(e)) from e

        if user.id != self._current_account_id:
            logger.warning(f"Токен принадлежит аккаунту {user.id}, а активен {self._current_account_id}")
        self._commit(self._token, user, self._upsert(self._accounts, user), user.id)
        return user

    # ------------------------------------------------------------------
    # Внутреннее
    # ------------------------------------------------------------------

    def _activate(self, response: AuthResponse) -> AuthSession:
        user = response.user
        accounts = self._upsert(self._accounts, user)
        self._commit(response.token, user, accounts, user.id)
        logger.info(f"Активный аккаунт: {user.id}, известных аккаунтов: {len(accounts)}")
        return AuthSession(active_user_id=user.id, auth_token=response.token)

    def _commit(self, token: Optional[str], user: Optional[Account],
                accounts: List[Account], current_account_id: Optional[str]) -> None:
        """Сохраняет новое состояние и только после успеха применяет его в памяти."""
        snapshot = SessionSnapshot(
            token=token,
            user=user,
            accounts=list(accounts),
            current_account_id=current_account_id,
        )
        self.session_store.save(snapshot)

        self._token = token
        self._user = user
        self._accounts = list(accounts)
        self._current_account_id = current_account_id
        self.api_client.set_token(token)
        self._notify()

    @staticmethod
    def _find_in(accounts: List[Account], account_id: str) -> Optional[Account]:
        return next((a for a in accounts if a.id == account_id), None)

    @staticmethod
    def _upsert(accounts: List[Account], account: Account) -> List[Account]:
        """Добавляет аккаунт в конец или обновляет существующий, не меняя порядок."""
        result = list(accounts)
        for index, existing in enumerate(result):
            if existing.id == account.id:
                result[index] = account
                return result
        result.append(account)
        return result

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"Ошибка в подписчике менеджера аккаунтов: {e}", exc_info=True)
