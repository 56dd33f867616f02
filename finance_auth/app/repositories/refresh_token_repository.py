from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from finance_auth.domain.entities import RefreshToken, User


class IRefreshTokenRepository(ABC):
    """RefreshToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: RefreshToken) -> RefreshToken:
        """Persist a newly issued refresh token"""
        pass

    @abstractmethod
    async def get_with_user(
        self, token_id: UUID
    ) -> Optional[Tuple[RefreshToken, User]]:
        """Get refresh token by ID joined with its owning user"""
        pass

    @abstractmethod
    async def revoke(
        self,
        token_id: UUID,
        revoked_at: datetime,
        replaced_by_token_id: Optional[UUID] = None,
    ) -> bool:
        """
        Revoke a token if it is still unrevoked (single conditional update).

        Returns True only for the caller that actually revoked it.
        """
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, revoked_at: datetime) -> int:
        """Revoke all unrevoked tokens of a user. Returns count of revoked tokens."""
        pass
