"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

import logging
from datetime import timedelta
from typing import Optional

from libs.result import Result, Return
from finance_auth.app.services.auth_settings import AuthSettings
from finance_auth.app.services.notification_sender import (
    NotificationSender,
    PasswordResetEmail,
)
from finance_auth.app.services.unit_of_work import UnitOfWork
from finance_auth.domain.base import as_utc, utcnow
from finance_auth.domain.entities import AuditEvent, PasswordResetToken
from .dtos import RequestContext, RequestPasswordResetResponse
from .helpers import RESET_TOKEN_BYTES, generate_single_use_token, normalize_email

logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate cryptographically secure token, store only its SHA-256 hash
    - Token expires after PASSWORD_RESET_TOKEN_TTL_MINUTES
    - No email enumeration (same response for valid/invalid emails)
    - Audit event created for security tracking
    - Reset email sent after commit; delivery failures are not surfaced
    """

    def __init__(
        self, uow: UnitOfWork, settings: AuthSettings, notifier: NotificationSender
    ):
        self.uow = uow
        self.settings = settings
        self.notifier = notifier

    async def execute(
        self, email: str, context: Optional[RequestContext] = None
    ) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address
            context: Client ip/user agent

        Returns:
            Result with requested=True whether or not the email exists
        """
        context = context or RequestContext()

        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            if user is None:
                return Return.ok(RequestPasswordResetResponse(requested=True))

            reset_token, token_hash = generate_single_use_token(RESET_TOKEN_BYTES)
            expires_at = utcnow() + timedelta(
                minutes=self.settings.password_reset_token_ttl_minutes
            )

            password_reset_token = PasswordResetToken(
                user_id=user.id,
                token_hash=token_hash,
                expires_at=expires_at,
            )
            await self.uow.password_reset_tokens.create(password_reset_token)

            await self.uow.audit_events.create(
                AuditEvent(
                    action="auth.password-reset-request",
                    actor=str(user.id),
                    user_id=user.id,
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    event_metadata={"token_id": str(password_reset_token.id)},
                )
            )

            await self.uow.commit()

        try:
            await self.notifier.send_password_reset_email(
                PasswordResetEmail(
                    user=user, token=reset_token, expires_at=as_utc(expires_at)
                )
            )
        except Exception:
            logger.exception("Failed to send password reset email to user %s", user.id)

        return Return.ok(RequestPasswordResetResponse(requested=True))
