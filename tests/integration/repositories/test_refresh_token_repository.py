from datetime import timedelta
from uuid import uuid4

import pytest
import pytest_asyncio

from finance_auth.adapter.repositories.refresh_token_repository import (
    RefreshTokenRepository,
)
from finance_auth.adapter.repositories.user_repository import UserRepository
from finance_auth.domain.base import utcnow
from tests.fixtures.factories import make_refresh_token, make_user


@pytest_asyncio.fixture
async def stored_token(session_factory):
    user = make_user()
    token = make_refresh_token(user, "hash")
    async with session_factory() as session:
        await UserRepository(session).create(user, "password-hash")
        await RefreshTokenRepository(session).create(token)
        await session.commit()
    return token


@pytest.mark.asyncio
async def test_get_with_user(session_factory, stored_token):
    async with session_factory() as session:
        found = await RefreshTokenRepository(session).get_with_user(stored_token.id)

    token, user = found
    assert token.id == stored_token.id
    assert user.id == stored_token.user_id


@pytest.mark.asyncio
async def test_revoke_only_once(session_factory, stored_token):
    now = utcnow()
    async with session_factory() as session:
        repo = RefreshTokenRepository(session)
        assert await repo.revoke(stored_token.id, now) is True
        assert await repo.revoke(stored_token.id, now + timedelta(seconds=1)) is False
        await session.commit()

    async with session_factory() as session:
        token, _ = await RefreshTokenRepository(session).get_with_user(stored_token.id)
        assert token.revoked_at == now


@pytest.mark.asyncio
async def test_concurrent_rotation_has_single_winner(session_factory, stored_token):
    """Two sessions read the same active token; only the first revoke applies"""
    first_session = session_factory()
    second_session = session_factory()
    try:
        first = RefreshTokenRepository(first_session)
        second = RefreshTokenRepository(second_session)

        seen_by_first, _ = await first.get_with_user(stored_token.id)
        seen_by_second, _ = await second.get_with_user(stored_token.id)
        assert seen_by_first.revoked_at is None
        assert seen_by_second.revoked_at is None

        winner_id = uuid4()
        assert await first.revoke(
            stored_token.id, utcnow(), replaced_by_token_id=winner_id
        )
        await first_session.commit()

        loser_id = uuid4()
        assert (
            await second.revoke(
                stored_token.id, utcnow(), replaced_by_token_id=loser_id
            )
            is False
        )
        await second_session.rollback()
    finally:
        await first_session.close()
        await second_session.close()

    async with session_factory() as session:
        token, _ = await RefreshTokenRepository(session).get_with_user(stored_token.id)
        assert token.replaced_by_token_id == winner_id


@pytest.mark.asyncio
async def test_revoke_all_by_user_id(session_factory, stored_token):
    async with session_factory() as session:
        repo = RefreshTokenRepository(session)
        await repo.create(
            make_refresh_token(make_user(id=stored_token.user_id), "second")
        )
        revoked = await repo.revoke_all_by_user_id(stored_token.user_id, utcnow())
        await session.commit()

    assert revoked == 2

    async with session_factory() as session:
        assert (
            await RefreshTokenRepository(session).revoke_all_by_user_id(
                stored_token.user_id, utcnow()
            )
            == 0
        )
