from datetime import datetime
from typing import Optional

from sqlmodel import col, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from finance_auth.app.repositories.email_verification_token_repository import (
    IEmailVerificationTokenRepository,
)
from finance_auth.domain.entities import EmailVerificationToken


class EmailVerificationTokenRepository(IEmailVerificationTokenRepository):
    """EmailVerificationToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: EmailVerificationToken) -> EmailVerificationToken:
        """Create a new email verification token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def consume(
        self, token_hash: str, consumed_at: datetime
    ) -> Optional[EmailVerificationToken]:
        """Set consumed_at only if still unconsumed, then return the row"""
        stmt = (
            update(EmailVerificationToken)
            .where(
                EmailVerificationToken.token_hash == token_hash,
                col(EmailVerificationToken.consumed_at).is_(None),
            )
            .values(consumed_at=consumed_at)
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None

        await self.session.flush()
        stmt = select(EmailVerificationToken).where(
            EmailVerificationToken.token_hash == token_hash
        )
        found = await self.session.exec(stmt)
        return found.one_or_none()
