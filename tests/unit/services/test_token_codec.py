from datetime import timedelta
from uuid import UUID

import pytest
from jose import jwt

from finance_auth.app.services.token_codec import TokenCodec
from finance_auth.domain.base import utcnow
from finance_auth.domain.entities import PlanTier
from tests.fixtures.factories import make_user


def test_access_token_claims(token_codec, settings):
    user = make_user(plan_tier=PlanTier.family, email_verified_at=utcnow())
    now = utcnow()

    token = token_codec.encode_access_token(
        user, issued_at=now, expires_at=now + timedelta(minutes=15)
    )
    claims = token_codec.decode_access_token(token)

    assert claims["sub"] == str(user.id)
    assert claims["email"] == user.email
    assert claims["planTier"] == "family"
    assert claims["emailVerified"] is True
    assert claims["iss"] == settings.access_token_issuer
    assert claims["aud"] == settings.access_token_audience
    assert claims["exp"] - claims["iat"] == 15 * 60
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_expired_access_token_rejected(token_codec):
    now = utcnow()
    token = token_codec.encode_access_token(
        make_user(), issued_at=now - timedelta(hours=1), expires_at=now - timedelta(minutes=1)
    )

    assert token_codec.decode_access_token(token) is None


def test_access_token_with_wrong_audience_rejected(token_codec, settings):
    other = TokenCodec(
        secret=settings.jwt_access_secret,
        issuer=settings.access_token_issuer,
        audience="someone-else",
    )
    now = utcnow()
    token = other.encode_access_token(
        make_user(), issued_at=now, expires_at=now + timedelta(minutes=5)
    )

    assert token_codec.decode_access_token(token) is None


def test_access_token_with_wrong_secret_rejected(token_codec, settings):
    other = TokenCodec(
        secret="another-secret",
        issuer=settings.access_token_issuer,
        audience=settings.access_token_audience,
    )
    now = utcnow()
    token = other.encode_access_token(
        make_user(), issued_at=now, expires_at=now + timedelta(minutes=5)
    )

    assert token_codec.decode_access_token(token) is None


def test_generate_refresh_token_is_composite():
    parts = TokenCodec.generate_refresh_token()

    token_id, secret = parts.value.split(".")
    assert UUID(token_id) == parts.id
    assert secret == parts.secret
    assert len(secret) >= 64
    assert TokenCodec.generate_refresh_token().secret != parts.secret


def test_parse_refresh_token_roundtrip():
    parts = TokenCodec.generate_refresh_token()

    assert TokenCodec.parse_refresh_token(parts.value) == parts


@pytest.mark.parametrize(
    "token",
    [
        None,
        "",
        "onlyonepart",
        "a.b.c",
        "6f1c2f9e-5a4b-4f8e-9c55-5b8d1b2c3d4e.",
        ".secret",
        "not-a-uuid.secret",
    ],
)
def test_parse_refresh_token_rejects_malformed(token):
    assert TokenCodec.parse_refresh_token(token) is None


@pytest.mark.parametrize("missing", ["sub", "email", "planTier", "emailVerified"])
def test_access_token_missing_session_claim_rejected(token_codec, settings, missing):
    now = utcnow()
    claims = {
        "sub": "3f0c1d9e-0000-4000-8000-000000000000",
        "email": "owner@example.com",
        "planTier": PlanTier.pro.value,
        "emailVerified": False,
        "iss": settings.access_token_issuer,
        "aud": settings.access_token_audience,
        "exp": now + timedelta(minutes=5),
    }
    del claims[missing]
    token = jwt.encode(claims, settings.jwt_access_secret, algorithm="HS256")

    assert token_codec.decode_access_token(token) is None
