"""
User Entity

Represents a person who owns a finance workspace.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import PlanTier, UserStatus


class User(SQLModel, table=True):
    """
    User entity - identity record, never hard-deleted.

    Business Rules:
    - Email is stored trimmed and lowercased and must be unique
    - Secret material lives in Credential, created in the same transaction
    - email_verified_at stays null until a verification token is consumed
    - Suspended users cannot log in or refresh sessions
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)

    status: UserStatus = Field(default=UserStatus.active)
    plan_tier: PlanTier = Field(default=PlanTier.free)

    email_verified_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    # Optional profile
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    timezone: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_status", "status"),)

    @property
    def email_verified(self) -> bool:
        return self.email_verified_at is not None
