from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from finance_auth.domain.entities import EmailVerificationToken


class IEmailVerificationTokenRepository(ABC):
    """EmailVerificationToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: EmailVerificationToken) -> EmailVerificationToken:
        """Create a new email verification token"""
        pass

    @abstractmethod
    async def consume(
        self, token_hash: str, consumed_at: datetime
    ) -> Optional[EmailVerificationToken]:
        """
        Mark an unconsumed token as consumed.

        Returns the consumed token, or None when it does not exist or was
        already consumed. Expiry is left to the caller.
        """
        pass
