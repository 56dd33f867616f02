"""
Verify Email Use Case

Handles email verification via single-use token.
"""

from typing import Optional

from libs.result import Result, Return
from finance_auth.app.services.unit_of_work import UnitOfWork
from finance_auth.domain.base import utcnow
from finance_auth.domain.entities import AuditEvent
from .dtos import RequestContext, UserInfo, VerifyEmailResponse
from .errors import EXPIRED_VERIFICATION_TOKEN, INVALID_VERIFICATION_TOKEN
from .helpers import hash_single_use_token


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token is consumed atomically (single-use)
    - Missing or already consumed -> AUTH_INVALID_VERIFICATION_TOKEN
    - Expiry is checked after consumption -> AUTH_EXPIRED_VERIFICATION_TOKEN;
      the consumption is still committed, so the token cannot be retried
    - Sets email_verified_at and activates invited users
    - Records audit event
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, token: str, context: Optional[RequestContext] = None
    ) -> Result[VerifyEmailResponse]:
        """
        Execute email verification use case.

        Args:
            token: Verification token from email link
            context: Client ip/user agent

        Returns:
            Result with the verified user, or Error
        """
        context = context or RequestContext()

        async with self.uow:
            now = utcnow()
            record = await self.uow.email_verification_tokens.consume(
                hash_single_use_token(token), now
            )

            if record is None:
                return Return.err(INVALID_VERIFICATION_TOKEN)

            if record.expires_at < now:
                # Burn the token so a retry reports it as invalid
                await self.uow.commit()
                return Return.err(EXPIRED_VERIFICATION_TOKEN)

            user = await self.uow.users.mark_email_verified(record.user_id, now)
            if user is None:
                return Return.err(INVALID_VERIFICATION_TOKEN)

            await self.uow.audit_events.create(
                AuditEvent(
                    action="auth.verify-email",
                    actor=str(user.id),
                    user_id=user.id,
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                )
            )

            await self.uow.commit()

            return Return.ok(VerifyEmailResponse(user=UserInfo.model_validate(user)))
