import logging
from datetime import timedelta
from typing import Optional

from libs.result import Result, Return
from finance_auth.app.repositories.user_repository import EmailAlreadyExistsError
from finance_auth.app.services.auth_settings import AuthSettings
from finance_auth.app.services.credential_hasher import CredentialHasher
from finance_auth.app.services.notification_sender import (
    NotificationSender,
    VerificationEmail,
)
from finance_auth.app.services.token_codec import TokenCodec
from finance_auth.app.services.unit_of_work import UnitOfWork
from finance_auth.domain.base import as_utc, utcnow
from finance_auth.domain.entities import AuditEvent, EmailVerificationToken, User
from .dtos import RequestContext, SignupCommand, SignupDebug, SignupResponse, UserInfo
from .errors import EMAIL_EXISTS, TERMS_NOT_ACCEPTED
from .helpers import (
    VERIFICATION_TOKEN_BYTES,
    generate_single_use_token,
    normalize_email,
    normalize_optional_string,
)
from .session_issuer import SessionIssuer

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand (validated business intent)
    - Output: Result[SignupResponse] (structured response)

    Business Logic:
    1. Reject when terms were not accepted
    2. Normalize email and check it is not registered (best effort; the
       unique constraint is authoritative)
    3. Hash password with Argon2id
    4. Create User + Credential in one transaction
    5. Store email verification token (hash only)
    6. Create AuditEvent with action=auth.signup
    7. Issue session (unverified users still get a usable pair)
    8. Commit, then send the verification email
    """

    def __init__(
        self,
        uow: UnitOfWork,
        settings: AuthSettings,
        hasher: CredentialHasher,
        token_codec: TokenCodec,
        notifier: NotificationSender,
    ):
        self.uow = uow
        self.settings = settings
        self.hasher = hasher
        self.notifier = notifier
        self.session_issuer = SessionIssuer(uow, settings, hasher, token_codec)

    async def execute(
        self, command: SignupCommand, context: Optional[RequestContext] = None
    ) -> Result[SignupResponse]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with validated email, password and profile
            context: Client ip/user agent

        Returns:
            Result[SignupResponse] with user, tokens and verification flag
            or Error(AUTH_TERMS_NOT_ACCEPTED / AUTH_EMAIL_EXISTS)
        """
        context = context or RequestContext()

        if not command.accept_terms:
            return Return.err(TERMS_NOT_ACCEPTED)

        email = normalize_email(command.email)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(EMAIL_EXISTS)

            password_hash = await self.hasher.hash(command.password)

            user = User(
                email=email,
                plan_tier=command.plan_tier,
                first_name=normalize_optional_string(command.first_name),
                last_name=normalize_optional_string(command.last_name),
                timezone=normalize_optional_string(command.timezone),
            )
            try:
                user = await self.uow.users.create(user, password_hash)
            except EmailAlreadyExistsError:
                logger.info("Concurrent signup lost the unique email race")
                return Return.err(EMAIL_EXISTS)

            verification_token, token_hash = generate_single_use_token(
                VERIFICATION_TOKEN_BYTES
            )
            verification_expires_at = utcnow() + timedelta(
                hours=self.settings.email_verification_token_ttl_hours
            )
            await self.uow.email_verification_tokens.create(
                EmailVerificationToken(
                    user_id=user.id,
                    token_hash=token_hash,
                    expires_at=verification_expires_at,
                )
            )

            await self.uow.audit_events.create(
                AuditEvent(
                    action="auth.signup",
                    actor=str(user.id),
                    user_id=user.id,
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    event_metadata={
                        "marketing_opt_in": command.marketing_opt_in,
                        "plan_tier": command.plan_tier.value,
                    },
                )
            )

            tokens = await self.session_issuer.issue(user, context)
            if tokens.is_err():
                return Return.err(tokens.error)

            await self.uow.commit()

        logger.info("User %s signed up", user.id)

        try:
            await self.notifier.send_verification_email(
                VerificationEmail(
                    user=user,
                    token=verification_token,
                    expires_at=as_utc(verification_expires_at),
                )
            )
        except Exception:
            # Account is already committed at this point
            logger.exception("Failed to send verification email to user %s", user.id)

        debug = None
        if not self.settings.is_production:
            debug = SignupDebug(email_verification_token=verification_token)

        return Return.ok(
            SignupResponse(
                user=UserInfo.model_validate(user),
                tokens=tokens.value,
                requires_email_verification=True,
                debug=debug,
            )
        )
