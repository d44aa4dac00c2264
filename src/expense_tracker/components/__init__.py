__all__ = [
    "StatCard",
    "ProfilePhotoSelector",
    "AccountSwitcher",
    "build_avatar",
    "AddAccountModal",
    "ProfileModal",
    "RecordModal",
    "InventoryItemModal",
    "build_top_expenses_chart",
    "build_overview_chart",
    "build_activity_chart",
]

from expense_tracker.components.stat_card import StatCard
from expense_tracker.components.profile_photo_selector import ProfilePhotoSelector
from expense_tracker.components.account_switcher import AccountSwitcher, build_avatar
from expense_tracker.components.add_account_modal import AddAccountModal
from expense_tracker.components.profile_modal import ProfileModal
from expense_tracker.components.record_modal import RecordModal
from expense_tracker.components.inventory_item_modal import InventoryItemModal
from expense_tracker.components.charts import (
    build_top_expenses_chart,
    build_overview_chart,
    build_activity_chart,
)
