"""
Refresh Session Use Case

Rotates a refresh token and issues a new session. Reuse of a rotated token is
rejected (replay detection).
"""

import logging
from typing import Optional

from libs.result import Result, Return
from finance_auth.app.services.auth_settings import AuthSettings
from finance_auth.app.services.credential_hasher import CredentialHasher
from finance_auth.app.services.token_codec import TokenCodec
from finance_auth.app.services.unit_of_work import UnitOfWork
from finance_auth.domain.base import utcnow
from finance_auth.domain.entities import AuditEvent, UserStatus
from .dtos import RefreshSessionResponse, RequestContext, UserInfo
from .errors import (
    ACCOUNT_SUSPENDED,
    INVALID_REFRESH_TOKEN,
    REFRESH_TOKEN_EXPIRED,
    REFRESH_TOKEN_REVOKED,
)
from .session_issuer import SessionIssuer

logger = logging.getLogger(__name__)


class RefreshSessionUseCase:
    """
    Use case for refreshing a session.

    Business Rules (checked in this order):
    1. Malformed token -> AUTH_INVALID_REFRESH_TOKEN
    2. Unknown id -> AUTH_INVALID_REFRESH_TOKEN
    3. Already revoked -> AUTH_REFRESH_TOKEN_REVOKED (replay)
    4. Expired -> revoke, AUTH_REFRESH_TOKEN_EXPIRED
    5. Secret mismatch -> revoke, AUTH_INVALID_REFRESH_TOKEN
    6. Owner suspended -> revoke, AUTH_ACCOUNT_SUSPENDED
    7. Issue new pair, revoke old token with replaced_by_token_id -> new id

    Forced revocations in 4-6 are committed before the error is returned.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        hasher: CredentialHasher,
        token_codec: TokenCodec,
    ):
        self.uow = uow
        self.hasher = hasher
        self.token_codec = token_codec
        self.session_issuer = SessionIssuer(uow, settings, hasher, token_codec)

    async def execute(
        self, refresh_token: Optional[str], context: Optional[RequestContext] = None
    ) -> Result[RefreshSessionResponse]:
        """
        Execute refresh session use case.

        Args:
            refresh_token: Composite "<id>.<secret>" token
            context: Client ip/user agent

        Returns:
            Result with RefreshSessionResponse containing the new pair, or Error
        """
        context = context or RequestContext()

        parts = self.token_codec.parse_refresh_token(refresh_token)
        if parts is None:
            return Return.err(INVALID_REFRESH_TOKEN)

        async with self.uow:
            found = await self.uow.refresh_tokens.get_with_user(parts.id)
            if found is None:
                return Return.err(INVALID_REFRESH_TOKEN)

            record, user = found
            now = utcnow()

            if record.revoked_at is not None:
                logger.warning(
                    "Revoked refresh token %s presented for user %s",
                    record.id,
                    user.id,
                )
                return Return.err(REFRESH_TOKEN_REVOKED)

            if record.is_expired(now):
                await self._revoke(record.id, now)
                return Return.err(REFRESH_TOKEN_EXPIRED)

            secret_valid = await self.hasher.verify(record.token_hash, parts.secret)
            if not secret_valid:
                logger.warning(
                    "Refresh token %s secret mismatch, revoking", record.id
                )
                await self._revoke(record.id, now)
                return Return.err(INVALID_REFRESH_TOKEN)

            if user.status == UserStatus.suspended:
                await self._revoke(record.id, now)
                return Return.err(ACCOUNT_SUSPENDED)

            tokens = await self.session_issuer.issue(
                user, context, previous_token_id=record.id
            )
            if tokens.is_err():
                return Return.err(tokens.error)

            await self.uow.audit_events.create(
                AuditEvent(
                    action="auth.refresh",
                    actor=str(user.id),
                    user_id=user.id,
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    event_metadata={"refresh_token_id": str(record.id)},
                )
            )

            await self.uow.commit()

            return Return.ok(
                RefreshSessionResponse(
                    user=UserInfo.model_validate(user), tokens=tokens.value
                )
            )

    async def _revoke(self, token_id, now) -> None:
        await self.uow.refresh_tokens.revoke(token_id, now)
        await self.uow.commit()
