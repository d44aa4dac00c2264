"""Утилиты приложения."""

from expense_tracker.utils.logger import setup_logging, get_logger
from expense_tracker.utils.error_handler import ErrorHandler, safe_handler, GENERIC_ERROR_MESSAGE
from expense_tracker.utils.exceptions import (
    ExpenseTrackerError,
    ValidationError,
    StorageError,
    ApiError,
    NetworkError,
    AuthError,
    AccountNotFoundError,
    UploadError,
    UpdateError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "ErrorHandler",
    "safe_handler",
    "GENERIC_ERROR_MESSAGE",
    "ExpenseTrackerError",
    "ValidationError",
    "StorageError",
    "ApiError",
    "NetworkError",
    "AuthError",
    "AccountNotFoundError",
    "UploadError",
    "UpdateError",
]
