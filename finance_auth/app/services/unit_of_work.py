from abc import ABC, abstractmethod

from finance_auth.app.repositories.audit_event_repository import IAuditEventRepository
from finance_auth.app.repositories.email_verification_token_repository import (
    IEmailVerificationTokenRepository,
)
from finance_auth.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from finance_auth.app.repositories.refresh_token_repository import IRefreshTokenRepository
from finance_auth.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    refresh_tokens: IRefreshTokenRepository
    email_verification_tokens: IEmailVerificationTokenRepository
    password_reset_tokens: IPasswordResetTokenRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
