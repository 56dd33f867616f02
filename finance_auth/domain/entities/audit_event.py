"""
AuditEvent Entity

Immutable log of all authentication events.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from ..base import utcnow

SYSTEM_ACTOR = "system"


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - append-only log of sensitive operations.

    Business Rules:
    - Immutable (never updated or deleted)
    - actor is a user id or "system"
    - user_id nullable for events that never resolve the owner (logout)
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    action: str = Field(max_length=100)  # e.g., "auth.login", "auth.signup"
    actor: str = Field(max_length=64)
    user_id: Optional[UUID] = Field(default=None, index=True)

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_action", "action"),
    )
