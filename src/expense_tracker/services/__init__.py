__all__ = [
    "KeyValueStore",
    "SqlKeyValueStore",
    "ClientStorageKeyValueStore",
    "SessionStore",
    "ApiClient",
    "AccountManager",
    "list_records",
    "create_record",
    "update_record",
    "delete_record",
    "get_totals",
    "get_period_sums",
    "get_top_expense_sources",
    "get_expense_activity",
    "get_recent_records",
    "get_report_overview",
    "get_inventory_value",
    "get_dashboard_data",
]

from expense_tracker.services.storage import (
    KeyValueStore,
    SqlKeyValueStore,
    ClientStorageKeyValueStore,
)
from expense_tracker.services.session_store import SessionStore
from expense_tracker.services.api_client import ApiClient
from expense_tracker.services.account_manager import AccountManager
from expense_tracker.services.record_service import (
    list_records,
    create_record,
    update_record,
    delete_record,
)
from expense_tracker.services.dashboard_service import (
    get_totals,
    get_period_sums,
    get_top_expense_sources,
    get_expense_activity,
    get_recent_records,
    get_report_overview,
    get_inventory_value,
    get_dashboard_data,
)
