"""
EmailVerificationToken Entity

Single-use token proving ownership of the account email.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class EmailVerificationToken(SQLModel, table=True):
    """
    EmailVerificationToken entity - single-use, time-boxed.

    Business Rules:
    - token_hash is the SHA-256 hex digest of the emailed token
    - Consumable at most once (consumed_at set on consumption)
    - Expiry is checked at consumption time
    """

    __tablename__ = "email_verification_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    consumed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_email_verification_expires_at", "expires_at"),)
