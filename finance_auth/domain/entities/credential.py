"""
Credential Entity

Password hash owned 1:1 by a User.
"""

from datetime import datetime
from uuid import UUID

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class Credential(SQLModel, table=True):
    """
    Credential entity - never holds the raw password.

    Business Rules:
    - Created atomically with its User
    - password_hash is an Argon2id encoded hash
    - Replaced on password reset
    """

    __tablename__ = "credentials"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    password_hash: str = Field(max_length=255)

    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
