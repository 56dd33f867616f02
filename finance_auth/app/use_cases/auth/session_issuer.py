"""
Session Issuer

Shared "issue session" step used by signup, login and refresh.
"""

import logging
from datetime import timedelta
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from finance_auth.app.services.auth_settings import AuthSettings
from finance_auth.app.services.credential_hasher import CredentialHasher
from finance_auth.app.services.token_codec import TokenCodec
from finance_auth.app.services.unit_of_work import UnitOfWork
from finance_auth.domain.base import as_utc, utcnow
from finance_auth.domain.entities import RefreshToken, User
from .dtos import RequestContext, SessionTokens
from .errors import REFRESH_TOKEN_REVOKED

logger = logging.getLogger(__name__)


class SessionIssuer:
    """
    Issues an access/refresh token pair inside the caller's unit of work.

    Business Rules:
    - Refresh lifetime is capped at 7 days unless remember_me is set
    - Only the Argon2id hash of the refresh secret is persisted
    - When rotating, the previous token is revoked and linked to the new one;
      if it was already revoked (a concurrent rotation won) issuing fails
    - The caller commits
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        hasher: CredentialHasher,
        token_codec: TokenCodec,
    ):
        self.uow = uow
        self.settings = settings
        self.hasher = hasher
        self.token_codec = token_codec

    async def issue(
        self,
        user: User,
        context: RequestContext,
        previous_token_id: Optional[UUID] = None,
        remember_me: bool = False,
    ) -> Result[SessionTokens]:
        now = utcnow()
        access_token_expires_at = now + timedelta(
            seconds=self.settings.access_token_ttl_seconds
        )
        refresh_token_expires_at = now + timedelta(
            seconds=self.settings.refresh_token_ttl(remember_me)
        )

        parts = self.token_codec.generate_refresh_token()
        token_hash = await self.hasher.hash(parts.secret)

        await self.uow.refresh_tokens.create(
            RefreshToken(
                id=parts.id,
                user_id=user.id,
                token_hash=token_hash,
                issued_at=now,
                expires_at=refresh_token_expires_at,
                ip_address=context.ip_address,
                user_agent=context.user_agent,
            )
        )

        if previous_token_id is not None:
            rotated = await self.uow.refresh_tokens.revoke(
                previous_token_id, now, replaced_by_token_id=parts.id
            )
            if not rotated:
                logger.warning(
                    "Refresh token %s was revoked concurrently, rotation aborted",
                    previous_token_id,
                )
                return Return.err(REFRESH_TOKEN_REVOKED)

        access_token = self.token_codec.encode_access_token(
            user, issued_at=now, expires_at=access_token_expires_at
        )

        return Return.ok(
            SessionTokens(
                access_token=access_token,
                access_token_expires_at=as_utc(access_token_expires_at),
                refresh_token=parts.value,
                refresh_token_expires_at=as_utc(refresh_token_expires_at),
            )
        )
