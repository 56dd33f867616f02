"""Session cookie helpers for the auth routes."""

from datetime import UTC, datetime
from math import ceil

from fastapi import Response

from finance_auth.app.services.auth_settings import AuthSettings
from finance_auth.app.use_cases.auth import SessionTokens

COOKIE_PATH = "/"


def _remaining_seconds(expires_at: datetime) -> int:
    remaining = (expires_at - datetime.now(UTC)).total_seconds()
    return max(0, ceil(remaining))


def set_session_cookies(
    response: Response, tokens: SessionTokens, settings: AuthSettings
) -> None:
    """Set httpOnly access and refresh cookies living as long as their tokens"""
    for name, value, expires_at in (
        (settings.access_cookie_name, tokens.access_token, tokens.access_token_expires_at),
        (settings.refresh_cookie_name, tokens.refresh_token, tokens.refresh_token_expires_at),
    ):
        response.set_cookie(
            key=name,
            value=value,
            max_age=_remaining_seconds(expires_at),
            httponly=True,
            secure=settings.cookie_secure,
            samesite="lax",
            path=COOKIE_PATH,
            domain=settings.cookie_domain,
        )


def clear_session_cookies(response: Response, settings: AuthSettings) -> None:
    for name in (settings.access_cookie_name, settings.refresh_cookie_name):
        response.delete_cookie(
            key=name,
            path=COOKIE_PATH,
            domain=settings.cookie_domain,
            secure=settings.cookie_secure,
            httponly=True,
            samesite="lax",
        )
