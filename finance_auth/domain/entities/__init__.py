"""
Finance Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import PlanTier, UserStatus

# Export all entities
from .user import User
from .credential import Credential
from .refresh_token import RefreshToken
from .email_verification_token import EmailVerificationToken
from .password_reset_token import PasswordResetToken
from .audit_event import SYSTEM_ACTOR, AuditEvent

__all__ = [
    # Enums
    "UserStatus",
    "PlanTier",
    # Entities
    "User",
    "Credential",
    "RefreshToken",
    "EmailVerificationToken",
    "PasswordResetToken",
    "AuditEvent",
    "SYSTEM_ACTOR",
]
