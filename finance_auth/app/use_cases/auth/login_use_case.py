"""
Login Use Case

Handles password authentication and issues a new session.
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
from .dtos import LoginResponse, RequestContext, UserInfo
from .errors import ACCOUNT_SUSPENDED, INVALID_CREDENTIALS
from .helpers import normalize_email
from .session_issuer import SessionIssuer

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email and wrong password return the same error
    - Unknown email still pays for one hash verification (timing)
    - Suspension is checked only after the password verifies
    - Refresh lifetime capped at 7 days unless remember_me
    - Updates user.last_login_at
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
        self.session_issuer = SessionIssuer(uow, settings, hasher, token_codec)

    async def execute(
        self,
        email: str,
        password: str,
        remember_me: bool = False,
        context: Optional[RequestContext] = None,
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email (normalized here)
            password: Plain text password
            remember_me: Keep the full configured refresh lifetime
            context: Client ip/user agent

        Returns:
            Result with LoginResponse containing user and tokens, or Error
        """
        context = context or RequestContext()

        async with self.uow:
            record = await self.uow.users.get_with_credential_by_email(
                normalize_email(email)
            )

            if record is None:
                await self.hasher.verify_dummy(password)
                return Return.err(INVALID_CREDENTIALS)

            user, credential = record

            password_valid = await self.hasher.verify(credential.password_hash, password)
            if not password_valid:
                logger.info("Failed login for user %s", user.id)
                return Return.err(INVALID_CREDENTIALS)

            if user.status == UserStatus.suspended:
                logger.warning("Suspended user %s attempted to log in", user.id)
                return Return.err(ACCOUNT_SUSPENDED)

            tokens = await self.session_issuer.issue(
                user, context, remember_me=remember_me
            )
            if tokens.is_err():
                return Return.err(tokens.error)

            now = utcnow()
            await self.uow.users.update_last_login(user.id, now)
            user.last_login_at = now

            await self.uow.audit_events.create(
                AuditEvent(
                    action="auth.login",
                    actor=str(user.id),
                    user_id=user.id,
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    event_metadata={"remember_me": remember_me},
                )
            )

            await self.uow.commit()

            return Return.ok(
                LoginResponse(
                    user=UserInfo.model_validate(user),
                    tokens=tokens.value,
                    email_verified=user.email_verified_at is not None,
                )
            )
