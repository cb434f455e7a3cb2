"""Database models."""
from subsentinel.models.admin import Admin
from subsentinel.models.category import Category
from subsentinel.models.device_token import DeviceToken
from subsentinel.models.preferences import AlertTiming, SpendingAwareness, UserPreferences
from subsentinel.models.subscription import Subscription, SubscriptionStatus
from subsentinel.models.user import User

__all__ = [
    "Admin",
    "AlertTiming",
    "Category",
    "DeviceToken",
    "SpendingAwareness",
    "Subscription",
    "SubscriptionStatus",
    "User",
    "UserPreferences",
]
