import logging
from typing import Optional

from expense_tracker.models import RegisterRequest
from expense_tracker.services.account_manager import AccountManager
from expense_tracker.utils.error_handler import ErrorHandler, GENERIC_ERROR_MESSAGE
from expense_tracker.utils.exceptions import (
    AuthError,
    ExpenseTrackerError,
    UploadError,
    ValidationError,
)
from expense_tracker.utils.validation import (
    validate_login_form,
    validate_password_confirmation,
    validate_signup_form,
)
from expense_tracker.views.interfaces import IAuthViewCallbacks

logger = logging.getLogger(__name__)

LOGIN_SUCCESS_MESSAGE = "Вход выполнен"
SIGNUP_SUCCESS_MESSAGE = "Аккаунт успешно создан!"
PHOTO_UPLOAD_FAILED_MESSAGE = "Не удалось загрузить фото профиля"


class AuthPresenter:
    """
    Presenter форм входа и регистрации.

    Используется страницами /login и /signUp, а также окном добавления аккаунта.
    Валидация формы выполняется до любого сетевого вызова.
    """

    def __init__(self, account_manager: AccountManager, callbacks: IAuthViewCallbacks):
        self.account_manager = account_manager
        self.callbacks = callbacks

    def login(self, email: Optional[str], password: Optional[str],
              success_message: str = LOGIN_SUCCESS_MESSAGE) -> bool:
        """
        Вход в аккаунт.

        Returns:
            True при успешном входе
        """
        email = (email or "").strip()
        try:
            validate_login_form(email, password)
        except ValidationError as e:
            self.callbacks.show_form_error(str(e))
            return False

        self.callbacks.show_form_error("")
        self.callbacks.set_busy(True)
        try:
            self.account_manager.login(email, password)
        except Exception as e:
            self._handle_error("Ошибка входа", e)
            return False
        finally:
            self.callbacks.set_busy(False)

        self.callbacks.show_message(success_message)
        self.callbacks.on_auth_success()
        return True

    def register(self, full_name: Optional[str], email: Optional[str], password: Optional[str],
                 image_path: Optional[str] = None, confirm_password: Optional[str] = None,
                 success_message: str = SIGNUP_SUCCESS_MESSAGE) -> bool:
        """
        Регистрация нового пользователя.

        Если выбрано фото, оно загружается первым; ошибка загрузки не прерывает
        регистрацию, аккаунт создаётся без фото.

        Args:
            confirm_password: Подтверждение пароля; None - форма без подтверждения

        Returns:
            True при успешной регистрации
        """
        full_name = (full_name or "").strip()
        email = (email or "").strip()
        try:
            if confirm_password is not None:
                validate_password_confirmation(password, confirm_password)
            validate_signup_form(full_name, email, password)
        except ValidationError as e:
            self.callbacks.show_form_error(str(e))
            return False

        self.callbacks.show_form_error("")
        self.callbacks.set_busy(True)
        try:
            profile_image_url = self._upload_photo(image_path) if image_path else ""
            self.account_manager.register(RegisterRequest(
                full_name=full_name,
                email=email,
                password=password,
                profile_image_url=profile_image_url,
            ))
        except Exception as e:
            self._handle_error("Ошибка регистрации", e)
            return False
        finally:
            self.callbacks.set_busy(False)

        self.callbacks.show_message(success_message)
        self.callbacks.on_auth_success()
        return True

    def _upload_photo(self, image_path: str) -> str:
        try:
            return self.account_manager.upload_image(image_path)
        except UploadError as e:
            logger.warning(f"Фото профиля не загружено, регистрация без фото: {e}")
            self.callbacks.show_error(PHOTO_UPLOAD_FAILED_MESSAGE)
            return ""

    def _handle_error(self, message: str, exception: Exception) -> None:
        """Показывает ошибку под формой и во всплывающем сообщении."""
        if isinstance(exception, AuthError):
            logger.warning(f"{message}: {exception}")
            text = str(exception)
        elif isinstance(exception, ExpenseTrackerError):
            logger.error(f"{message}: {exception}")
            text = ErrorHandler.get_user_message(exception)
        else:
            logger.error(f"{message}: {exception}", exc_info=True)
            text = GENERIC_ERROR_MESSAGE

        self.callbacks.show_form_error(text)
        self.callbacks.show_error(text)
