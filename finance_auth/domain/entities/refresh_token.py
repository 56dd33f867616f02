"""
RefreshToken Entity

Rotating session grant. The public token is "<id>.<secret>".
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class RefreshToken(SQLModel, table=True):
    """
    RefreshToken entity - one link in a rotation chain.

    Business Rules:
    - id is the plaintext lookup half of the composite token
    - token_hash is the Argon2id hash of the secret half
    - Usable only while revoked_at is null and expires_at is in the future
    - Rotation revokes the old record and points replaced_by_token_id at the new one
    - Revocation is terminal
    """

    __tablename__ = "refresh_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    token_hash: str = Field(max_length=255)

    issued_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    replaced_by_token_id: Optional[UUID] = Field(default=None)

    # Audit only
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    __table_args__ = (
        Index("idx_refresh_token_expires_at", "expires_at"),
        Index("idx_refresh_token_user_revoked", "user_id", "revoked_at"),
    )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now

    def is_active(self, now: datetime) -> bool:
        return self.revoked_at is None and not self.is_expired(now)
