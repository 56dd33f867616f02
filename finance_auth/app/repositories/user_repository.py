from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from finance_auth.domain.entities import Credential, User


class EmailAlreadyExistsError(Exception):
    """Raised when the unique email constraint rejects a new user"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email {email!r} already exists")


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email address"""
        pass

    @abstractmethod
    async def get_with_credential_by_email(
        self, email: str
    ) -> Optional[Tuple[User, Credential]]:
        """Get user together with its credential by normalized email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User, password_hash: str) -> User:
        """
        Create a user and its credential in the current transaction.

        Raises:
            EmailAlreadyExistsError: the email is already registered
        """
        pass

    @abstractmethod
    async def mark_email_verified(
        self, user_id: UUID, verified_at: datetime
    ) -> Optional[User]:
        """Set email_verified_at and activate invited users"""
        pass

    @abstractmethod
    async def update_password_hash(
        self, user_id: UUID, password_hash: str, when: datetime
    ) -> bool:
        """Replace the user's credential. Returns True if a credential was updated."""
        pass

    @abstractmethod
    async def update_last_login(self, user_id: UUID, when: datetime) -> None:
        """Record a successful login"""
        pass
