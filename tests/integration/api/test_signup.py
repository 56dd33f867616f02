import pytest
from httpx import AsyncClient
from sqlmodel import select

from finance_auth.domain.entities import (
    AuditEvent,
    Credential,
    EmailVerificationToken,
    RefreshToken,
    User,
)
from finance_auth.app.use_cases.auth.helpers import hash_single_use_token
from tests.utils.json_compare import exclude_keys


@pytest.mark.asyncio
async def test_successful_signup(client: AsyncClient, session_factory, notifier, test_data):
    """Signup creates the account and returns a usable session"""
    response = await client.post(
        "/auth/signup", json=test_data.get_copy("signup_request")
    )

    assert response.status_code == 201
    data = response.json()
    assert data["requires_email_verification"] is True
    assert (
        exclude_keys(data["user"], {"id", "created_at", "updated_at"})
        == test_data.get("signup_user")
    )
    assert data["tokens"]["access_token"]
    assert data["user"]["created_at"].endswith(("Z", "+00:00"))
    assert data["user"]["updated_at"].endswith(("Z", "+00:00"))
    verification_token = data["debug"]["email_verification_token"]

    assert "fm_access" in response.cookies
    assert response.cookies["fm_refresh"] == data["tokens"]["refresh_token"]

    async with session_factory() as session:
        user = (await session.exec(select(User))).one()
        assert user.email == "owner@example.com"

        credential = (await session.exec(select(Credential))).one()
        assert credential.user_id == user.id
        assert credential.password_hash.startswith("$argon2id$")
        assert "Sup3rSecurePass!" not in credential.password_hash

        stored = (await session.exec(select(EmailVerificationToken))).one()
        assert stored.token_hash == hash_single_use_token(verification_token)
        assert stored.consumed_at is None

        refresh = (await session.exec(select(RefreshToken))).one()
        assert data["tokens"]["refresh_token"].split(".")[0] == str(refresh.id)
        assert refresh.token_hash.startswith("$argon2id$")

        audit_event = (await session.exec(select(AuditEvent))).one()
        assert audit_event.action == "auth.signup"
        assert audit_event.user_id == user.id

    assert len(notifier.verification_emails) == 1
    assert notifier.verification_emails[0].token == verification_token


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient, test_data):
    payload = test_data.get_copy("signup_request")
    await client.post("/auth/signup", json=payload)

    payload["email"] = "OWNER@example.COM"
    response = await client.post("/auth/signup", json=payload)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "AUTH_EMAIL_EXISTS"


@pytest.mark.asyncio
async def test_signup_terms_not_accepted(client: AsyncClient, session_factory, test_data):
    payload = test_data.get_copy("signup_request")
    payload["accept_terms"] = False

    response = await client.post("/auth/signup", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "AUTH_TERMS_NOT_ACCEPTED"
    async with session_factory() as session:
        assert (await session.exec(select(User))).all() == []


@pytest.mark.asyncio
async def test_signup_weak_password(client: AsyncClient, test_data):
    payload = test_data.get_copy("signup_request")
    payload["password"] = "weakpassword"

    response = await client.post("/auth/signup", json=payload)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "AUTH_VALIDATION_FAILED"
    assert error["details"][0]["field"] == "password"


@pytest.mark.asyncio
async def test_signup_invalid_email(client: AsyncClient, test_data):
    payload = test_data.get_copy("signup_request")
    payload["email"] = "not-an-email"

    response = await client.post("/auth/signup", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "AUTH_VALIDATION_FAILED"
