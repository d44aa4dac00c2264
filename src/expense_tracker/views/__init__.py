__all__ = [
    "AuthPresenter",
    "RecordsPresenter",
    "DashboardPresenter",
    "IAuthViewCallbacks",
    "IRecordsViewCallbacks",
    "IDashboardViewCallbacks",
]

from expense_tracker.views.interfaces import (
    IAuthViewCallbacks,
    IRecordsViewCallbacks,
    IDashboardViewCallbacks,
)
from expense_tracker.views.auth_presenter import AuthPresenter
from expense_tracker.views.records_presenter import RecordsPresenter
from expense_tracker.views.dashboard_presenter import DashboardPresenter
