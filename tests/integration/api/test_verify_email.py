import pytest
from httpx import AsyncClient
from sqlmodel import select, update

from finance_auth.domain.base import utcnow
from finance_auth.domain.entities import EmailVerificationToken, User, UserStatus


async def signup(client: AsyncClient, test_data) -> str:
    response = await client.post(
        "/auth/signup", json=test_data.get_copy("signup_request")
    )
    assert response.status_code == 201
    client.cookies.clear()
    return response.json()["debug"]["email_verification_token"]


@pytest.mark.asyncio
async def test_verify_email(client: AsyncClient, session_factory, test_data):
    token = await signup(client, test_data)

    response = await client.post("/auth/email/verify", json={"token": token})

    assert response.status_code == 200
    assert response.json()["user"]["email_verified_at"] is not None
    assert response.json()["user"]["email_verified_at"].endswith(("Z", "+00:00"))

    login = await client.post("/auth/login", json=test_data.get_copy("login_request"))
    assert login.json()["email_verified"] is True
    assert login.json()["user"]["last_login_at"].endswith(("Z", "+00:00"))

    async with session_factory() as session:
        stored = (await session.exec(select(EmailVerificationToken))).one()
        assert stored.consumed_at is not None


@pytest.mark.asyncio
async def test_verify_email_token_is_single_use(client: AsyncClient, test_data):
    token = await signup(client, test_data)

    first = await client.post("/auth/email/verify", json={"token": token})
    second = await client.post("/auth/email/verify", json={"token": token})

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "AUTH_INVALID_VERIFICATION_TOKEN"


@pytest.mark.asyncio
async def test_verify_email_unknown_token(client: AsyncClient):
    response = await client.post("/auth/email/verify", json={"token": "nope"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "AUTH_INVALID_VERIFICATION_TOKEN"


@pytest.mark.asyncio
async def test_verify_email_expired_token(
    client: AsyncClient, session_factory, test_data
):
    token = await signup(client, test_data)
    async with session_factory() as session:
        await session.execute(
            update(EmailVerificationToken).values(
                expires_at=utcnow().replace(year=2000)
            )
        )
        await session.commit()

    response = await client.post("/auth/email/verify", json={"token": token})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "AUTH_EXPIRED_VERIFICATION_TOKEN"
    async with session_factory() as session:
        user = (await session.exec(select(User))).one()
        assert user.email_verified_at is None
        stored = (await session.exec(select(EmailVerificationToken))).one()
        assert stored.consumed_at is not None

    retry = await client.post("/auth/email/verify", json={"token": token})
    assert retry.status_code == 400
    assert retry.json()["error"]["code"] == "AUTH_INVALID_VERIFICATION_TOKEN"


@pytest.mark.asyncio
async def test_verify_email_keeps_suspended_user_suspended(
    client: AsyncClient, session_factory, test_data
):
    token = await signup(client, test_data)
    async with session_factory() as session:
        await session.execute(update(User).values(status=UserStatus.suspended))
        await session.commit()

    response = await client.post("/auth/email/verify", json={"token": token})

    assert response.status_code == 200
    assert response.json()["user"]["status"] == "suspended"


@pytest.mark.asyncio
async def test_verify_email_activates_invited_user(
    client: AsyncClient, session_factory, test_data
):
    token = await signup(client, test_data)
    async with session_factory() as session:
        await session.execute(update(User).values(status=UserStatus.invited))
        await session.commit()

    response = await client.post("/auth/email/verify", json={"token": token})

    assert response.status_code == 200
    assert response.json()["user"]["status"] == "active"
