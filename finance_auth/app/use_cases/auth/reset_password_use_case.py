"""
Reset Password Use Case

Consumes a reset token, replaces the password and revokes every session.
"""

import logging
from typing import Optional

from libs.result import Result, Return
from finance_auth.app.services.credential_hasher import CredentialHasher
from finance_auth.app.services.unit_of_work import UnitOfWork
from finance_auth.domain.base import utcnow
from finance_auth.domain.entities import AuditEvent
from .dtos import RequestContext, ResetPasswordResponse, UserInfo
from .errors import INVALID_RESET_TOKEN, RESET_TOKEN_EXPIRED, RESET_UNKNOWN_USER
from .helpers import hash_single_use_token

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token is looked up by its SHA-256 hash and consumed atomically
    - Missing or already consumed -> AUTH_INVALID_RESET_TOKEN
    - Expiry is checked after consumption -> AUTH_RESET_TOKEN_EXPIRED; the
      consumption is still committed, so the token cannot be retried
    - Password is re-hashed with Argon2id
    - All refresh tokens of the user are revoked
    """

    def __init__(self, uow: UnitOfWork, hasher: CredentialHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(
        self,
        token: str,
        new_password: str,
        context: Optional[RequestContext] = None,
    ) -> Result[ResetPasswordResponse]:
        """
        Execute reset password use case.

        Args:
            token: Password reset token (plain text from email)
            new_password: New password, already checked against the policy
            context: Client ip/user agent

        Returns:
            Result with the user, or Error

        Errors:
            - AUTH_INVALID_RESET_TOKEN: Token not found or already consumed
            - AUTH_RESET_TOKEN_EXPIRED: Token has expired
            - AUTH_RESET_UNKNOWN_USER: Token owner no longer exists
        """
        context = context or RequestContext()

        async with self.uow:
            now = utcnow()
            reset_token = await self.uow.password_reset_tokens.consume(
                hash_single_use_token(token), now
            )

            if reset_token is None:
                return Return.err(INVALID_RESET_TOKEN)

            if reset_token.expires_at < now:
                # Burn the token so a retry reports it as invalid
                await self.uow.commit()
                return Return.err(RESET_TOKEN_EXPIRED)

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return Return.err(RESET_UNKNOWN_USER)

            password_hash = await self.hasher.hash(new_password)
            await self.uow.users.update_password_hash(user.id, password_hash, now)

            revoked_count = await self.uow.refresh_tokens.revoke_all_by_user_id(
                user.id, now
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    action="auth.password-reset",
                    actor=str(user.id),
                    user_id=user.id,
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    event_metadata={
                        "token_id": str(reset_token.id),
                        "sessions_revoked": revoked_count,
                    },
                )
            )

            await self.uow.commit()

        logger.info(
            "Password reset for user %s, %d session(s) revoked", user.id, revoked_count
        )

        return Return.ok(ResetPasswordResponse(user=UserInfo.model_validate(user)))
