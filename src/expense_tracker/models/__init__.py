from expense_tracker.models.enums import (
    AuthState,
    StorageKey,
    StorageBackend,
    RecordKind,
    AppRoute,
    AuthMode,
)
from expense_tracker.models.models import (
    Base,
    KeyValueDB,
    Account,
    AuthSession,
    SessionSnapshot,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    ProfileUpdate,
    IncomeCreate,
    Income,
    ExpenseCreate,
    Expense,
    InventoryItemCreate,
    InventoryItem,
)

__all__ = [
    "AuthState",
    "StorageKey",
    "StorageBackend",
    "RecordKind",
    "AppRoute",
    "AuthMode",
    "Base",
    "KeyValueDB",
    "Account",
    "AuthSession",
    "SessionSnapshot",
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "ProfileUpdate",
    "IncomeCreate",
    "Income",
    "ExpenseCreate",
    "Expense",
    "InventoryItemCreate",
    "InventoryItem",
]
