from abc import ABC, abstractmethod
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from finance_auth.domain.entities import User


class VerificationEmail(BaseModel):
    """Payload for the email verification message"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: User
    token: str
    expires_at: datetime


class PasswordResetEmail(BaseModel):
    """Payload for the password reset message"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    user: User
    token: str
    expires_at: datetime


class NotificationSender(ABC):
    """Outbound email delivery - fire-and-forget from the use case's perspective"""

    @abstractmethod
    async def send_verification_email(self, message: VerificationEmail) -> None:
        pass

    @abstractmethod
    async def send_password_reset_email(self, message: PasswordResetEmail) -> None:
        pass
