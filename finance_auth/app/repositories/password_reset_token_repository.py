from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from finance_auth.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def consume(
        self, token_hash: str, consumed_at: datetime
    ) -> Optional[PasswordResetToken]:
        """
        Mark an unconsumed token as consumed.

        Returns the consumed token, or None when it does not exist or was
        already consumed. Expiry is left to the caller.
        """
        pass
