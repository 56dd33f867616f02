"""
Finance Auth Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status"""

    active = "active"
    invited = "invited"
    suspended = "suspended"


class PlanTier(str, Enum):
    """Subscription plan embedded in access tokens"""

    free = "free"
    pro = "pro"
    family = "family"
