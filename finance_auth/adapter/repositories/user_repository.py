from datetime import datetime
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from finance_auth.app.repositories.user_repository import (
    EmailAlreadyExistsError,
    IUserRepository,
)
from finance_auth.domain.entities import Credential, User, UserStatus


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_with_credential_by_email(
        self, email: str
    ) -> Optional[Tuple[User, Credential]]:
        """Get user and credential in one query"""
        stmt = (
            select(User, Credential)
            .join(Credential, Credential.user_id == User.id)
            .where(User.email == email)
        )
        result = await self.session.exec(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        user, credential = row
        return user, credential

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, user: User, password_hash: str) -> User:
        """Create user and credential; unique email violations become EmailAlreadyExistsError"""
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            raise EmailAlreadyExistsError(user.email) from exc

        self.session.add(Credential(user_id=user.id, password_hash=password_hash))
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def mark_email_verified(
        self, user_id: UUID, verified_at: datetime
    ) -> Optional[User]:
        """Set email_verified_at; invited users become active"""
        user = await self.get_by_id(user_id)
        if user is None:
            return None

        user.email_verified_at = verified_at
        user.updated_at = verified_at
        if user.status == UserStatus.invited:
            user.status = UserStatus.active

        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update_password_hash(
        self, user_id: UUID, password_hash: str, when: datetime
    ) -> bool:
        """Replace the credential's hash and touch the user"""
        stmt = (
            update(Credential)
            .where(Credential.user_id == user_id)
            .values(password_hash=password_hash, updated_at=when)
        )
        result = await self.session.execute(stmt)
        await self.session.execute(
            update(User).where(User.id == user_id).values(updated_at=when)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def update_last_login(self, user_id: UUID, when: datetime) -> None:
        """Record a successful login"""
        stmt = update(User).where(User.id == user_id).values(last_login_at=when)
        await self.session.execute(stmt)
        await self.session.flush()
