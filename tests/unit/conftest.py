from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from finance_auth.app.services.auth_settings import AuthSettings
from finance_auth.app.services.credential_hasher import CredentialHasher
from finance_auth.app.services.token_codec import TokenCodec
from finance_auth.domain.entities import Credential
from tests.fixtures.factories import make_user


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_with_credential_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user, password_hash: user)
    uow.users.mark_email_verified = AsyncMock()
    uow.users.update_password_hash = AsyncMock(return_value=True)
    uow.users.update_last_login = AsyncMock()

    uow.refresh_tokens = MagicMock()
    uow.refresh_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.refresh_tokens.get_with_user = AsyncMock(return_value=None)
    uow.refresh_tokens.revoke = AsyncMock(return_value=True)
    uow.refresh_tokens.revoke_all_by_user_id = AsyncMock(return_value=0)

    uow.email_verification_tokens = MagicMock()
    uow.email_verification_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.email_verification_tokens.consume = AsyncMock(return_value=None)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.consume = AsyncMock(return_value=None)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow


@pytest.fixture
def settings():
    return AuthSettings(
        jwt_access_secret="unit-test-secret",
        access_token_ttl_seconds=900,
        refresh_token_ttl_seconds=30 * 24 * 60 * 60,
    )


@pytest.fixture(scope="session")
def hasher():
    # Minimum Argon2id cost keeps the suite fast
    return CredentialHasher(memory_cost=8, time_cost=1, parallelism=1)


@pytest.fixture
def token_codec(settings):
    return TokenCodec(
        secret=settings.jwt_access_secret,
        issuer=settings.access_token_issuer,
        audience=settings.access_token_audience,
    )


@pytest.fixture
def notifier():
    sender = MagicMock()
    sender.send_verification_email = AsyncMock()
    sender.send_password_reset_email = AsyncMock()
    return sender


@pytest.fixture
def user():
    return make_user()


@pytest.fixture
def password():
    return "Sup3rSecurePass!"


@pytest_asyncio.fixture
async def credential(user, hasher, password):
    return Credential(user_id=user.id, password_hash=await hasher.hash(password))
