"""Entity builders shared by unit and integration tests"""

from datetime import timedelta
from uuid import uuid4

from finance_auth.domain.base import utcnow
from finance_auth.domain.entities import (
    EmailVerificationToken,
    PasswordResetToken,
    RefreshToken,
    User,
    UserStatus,
)


def make_user(**overrides) -> User:
    now = utcnow()
    values = dict(
        id=uuid4(),
        email="user@example.com",
        status=UserStatus.active,
        created_at=now,
        updated_at=now,
    )
    values.update(overrides)
    return User(**values)


def make_refresh_token(user: User, token_hash: str, **overrides) -> RefreshToken:
    now = utcnow()
    values = dict(
        id=uuid4(),
        user_id=user.id,
        token_hash=token_hash,
        issued_at=now,
        expires_at=now + timedelta(days=7),
    )
    values.update(overrides)
    return RefreshToken(**values)


def make_verification_token(user: User, token_hash: str, **overrides):
    now = utcnow()
    values = dict(
        user_id=user.id,
        token_hash=token_hash,
        expires_at=now + timedelta(hours=24),
        consumed_at=now,
    )
    values.update(overrides)
    return EmailVerificationToken(**values)


def make_reset_token(user: User, token_hash: str, **overrides):
    now = utcnow()
    values = dict(
        user_id=user.id,
        token_hash=token_hash,
        expires_at=now + timedelta(minutes=30),
        consumed_at=now,
    )
    values.update(overrides)
    return PasswordResetToken(**values)
