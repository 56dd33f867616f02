from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from sqlmodel import col, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from finance_auth.app.repositories.refresh_token_repository import IRefreshTokenRepository
from finance_auth.domain.entities import RefreshToken, User


class RefreshTokenRepository(IRefreshTokenRepository):
    """RefreshToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: RefreshToken) -> RefreshToken:
        """Persist a newly issued refresh token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_with_user(
        self, token_id: UUID
    ) -> Optional[Tuple[RefreshToken, User]]:
        """Get refresh token by ID joined with its owning user"""
        stmt = (
            select(RefreshToken, User)
            .join(User, User.id == RefreshToken.user_id)
            .where(RefreshToken.id == token_id)
        )
        result = await self.session.exec(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        token, user = row
        return token, user

    async def revoke(
        self,
        token_id: UUID,
        revoked_at: datetime,
        replaced_by_token_id: Optional[UUID] = None,
    ) -> bool:
        """
        Conditional update gated on revoked_at IS NULL.

        Of two concurrent callers only one sees rowcount == 1.
        """
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.id == token_id,
                col(RefreshToken.revoked_at).is_(None),
            )
            .values(revoked_at=revoked_at, replaced_by_token_id=replaced_by_token_id)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_by_user_id(self, user_id: UUID, revoked_at: datetime) -> int:
        """Revoke all active tokens for a user"""
        stmt = (
            update(RefreshToken)
            .where(
                RefreshToken.user_id == user_id,
                col(RefreshToken.revoked_at).is_(None),
            )
            .values(revoked_at=revoked_at)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
