from sqlmodel.ext.asyncio.session import AsyncSession

from finance_auth.adapter.repositories.audit_event_repository import AuditEventRepository
from finance_auth.adapter.repositories.email_verification_token_repository import (
    EmailVerificationTokenRepository,
)
from finance_auth.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from finance_auth.adapter.repositories.refresh_token_repository import RefreshTokenRepository
from finance_auth.adapter.repositories.user_repository import UserRepository
from finance_auth.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.refresh_tokens = RefreshTokenRepository(self.session)
        self.email_verification_tokens = EmailVerificationTokenRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
