from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from finance_auth.api.error import raise_for_error
from finance_auth.api.utils.cookies import clear_session_cookies, set_session_cookies
from finance_auth.api.utils.password_policy import validate_password_policy
from finance_auth.app.services.auth_settings import AuthSettings
from finance_auth.app.services.credential_hasher import CredentialHasher
from finance_auth.app.services.notification_sender import NotificationSender
from finance_auth.app.services.token_codec import TokenCodec
from finance_auth.app.services.unit_of_work import UnitOfWork
from finance_auth.app.use_cases.auth import (
    SignupCommand,
    SignupResponse,
    SignupUseCase,
    LoginUseCase,
    LoginResponse,
    RefreshSessionUseCase,
    RefreshSessionResponse,
    LogoutUseCase,
    RequestContext,
    RequestPasswordResetUseCase,
    RequestPasswordResetResponse,
    ResetPasswordUseCase,
    ResetPasswordResponse,
    VerifyEmailUseCase,
    VerifyEmailResponse,
)
from finance_auth.domain.entities import PlanTier
from finance_auth.depends import (
    get_auth_settings,
    get_credential_hasher,
    get_current_user,
    get_notification_sender,
    get_token_codec,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def request_context(request: Request) -> RequestContext:
    """Client ip and user agent for audit records"""
    return RequestContext(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    API layer responsibility: HTTP validation and serialization.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="Password meeting the complexity policy")
    accept_terms: bool = Field(False, description="Terms of service accepted")
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    timezone: Optional[str] = Field(None, max_length=64)
    plan_tier: PlanTier = Field(PlanTier.free)
    marketing_opt_in: bool = Field(False)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password_policy(value)


@router.post(
    "/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse
)
async def signup(
    request: SignupRequest,
    response: Response,
    context: RequestContext = Depends(request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    token_codec: TokenCodec = Depends(get_token_codec),
    notifier: NotificationSender = Depends(get_notification_sender),
):
    """
    User Signup

    Creates the account, stores an email verification token and starts a
    session. The account is usable before verification.

    Raises:
        - 400 Bad Request: Terms not accepted or invalid input
        - 409 Conflict: Email already exists
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        email=request.email,
        password=request.password,
        accept_terms=request.accept_terms,
        first_name=request.first_name,
        last_name=request.last_name,
        timezone=request.timezone,
        plan_tier=request.plan_tier,
        marketing_opt_in=request.marketing_opt_in,
    )

    use_case = SignupUseCase(uow, settings, hasher, token_codec, notifier)
    result = await use_case.execute(command, context)

    if result.is_err():
        raise_for_error(result.error)

    set_session_cookies(response, result.value.tokens, settings)
    return result.value


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Validates incoming login request.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., max_length=128, description="User password")
    remember_me: bool = Field(False, description="Keep the session beyond 7 days")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    context: RequestContext = Depends(request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    User Login

    Raises:
        - 401 Unauthorized: Invalid credentials (same for unknown email)
        - 403 Forbidden: Account suspended
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, settings, hasher, token_codec)
    result = await use_case.execute(
        request.email, request.password, request.remember_me, context
    )

    if result.is_err():
        raise_for_error(result.error)

    set_session_cookies(response, result.value.tokens, settings)
    return result.value


class RefreshRequest(BaseModel):
    """
    Refresh token HTTP request payload

    The token may instead come from the refresh cookie.
    """

    refresh_token: Optional[str] = Field(None, description="Composite refresh token")


@router.post(
    "/refresh", status_code=status.HTTP_200_OK, response_model=RefreshSessionResponse
)
async def refresh(
    http_request: Request,
    response: Response,
    request: Optional[RefreshRequest] = None,
    context: RequestContext = Depends(request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    token_codec: TokenCodec = Depends(get_token_codec),
):
    """
    Refresh Session

    Rotates the refresh token: the presented token is revoked and linked to
    its replacement. Presenting a rotated token again is rejected.

    Raises:
        - 401 Unauthorized: Invalid, revoked or expired refresh token
        - 403 Forbidden: Account suspended
        - 500 Internal Server Error: Server error
    """
    refresh_token = request.refresh_token if request else None
    if not refresh_token:
        refresh_token = http_request.cookies.get(settings.refresh_cookie_name)

    use_case = RefreshSessionUseCase(uow, settings, hasher, token_codec)
    result = await use_case.execute(refresh_token, context)

    if result.is_err():
        raise_for_error(result.error)

    set_session_cookies(response, result.value.tokens, settings)
    return result.value


async def _body_refresh_token(http_request: Request) -> Optional[str]:
    """refresh_token from a JSON object body; anything else reads as absent"""
    try:
        payload = await http_request.json()
    except ValueError:
        return None

    if not isinstance(payload, dict):
        return None
    refresh_token = payload.get("refresh_token")
    return refresh_token if isinstance(refresh_token, str) else None


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    http_request: Request,
    context: RequestContext = Depends(request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Logout

    Revokes the refresh token when one is present and well-formed, and always
    clears the session cookies. Never reports failure, so the body is read
    leniently instead of being validated.
    """
    refresh_token = await _body_refresh_token(http_request)
    if not refresh_token:
        refresh_token = http_request.cookies.get(settings.refresh_cookie_name)

    use_case = LogoutUseCase(uow)
    await use_case.execute(refresh_token, context)

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_session_cookies(response, settings)
    return response


class RequestPasswordResetRequest(BaseModel):
    """
    Request password reset HTTP request payload
    """

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/password/reset-request",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=RequestPasswordResetResponse,
)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    context: RequestContext = Depends(request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    notifier: NotificationSender = Depends(get_notification_sender),
):
    """
    Request Password Reset

    Security:
        - No email enumeration (same response for valid/invalid emails)

    Returns:
        - 202 Accepted: Always {"requested": true}
        - 500 Internal Server Error: Server error
    """
    use_case = RequestPasswordResetUseCase(uow, settings, notifier)
    result = await use_case.execute(request.email, context)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload
    """

    token: str = Field(..., min_length=1, description="Password reset token from email")
    new_password: str = Field(..., description="New password meeting the complexity policy")

    @field_validator("new_password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return validate_password_policy(value)


@router.post(
    "/password/reset",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    response: Response,
    context: RequestContext = Depends(request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: AuthSettings = Depends(get_auth_settings),
    hasher: CredentialHasher = Depends(get_credential_hasher),
):
    """
    Reset Password

    Replaces the password and revokes every session; the caller's cookies are
    cleared so a fresh login is required.

    Raises:
        - 400 Bad Request: Invalid, consumed or expired token
        - 500 Internal Server Error: Server error
    """
    use_case = ResetPasswordUseCase(uow, hasher)
    result = await use_case.execute(request.token, request.new_password, context)

    if result.is_err():
        raise_for_error(result.error)

    clear_session_cookies(response, settings)
    return result.value


class VerifyEmailRequest(BaseModel):
    """
    Verify email HTTP request payload
    """

    token: str = Field(..., min_length=1, description="Email verification token")


@router.post(
    "/email/verify", status_code=status.HTTP_200_OK, response_model=VerifyEmailResponse
)
async def verify_email(
    request: VerifyEmailRequest,
    context: RequestContext = Depends(request_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Email Verification

    Raises:
        - 400 Bad Request: Invalid, consumed or expired token
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyEmailUseCase(uow)
    result = await use_case.execute(request.token, context)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK)
async def me(current_user: dict = Depends(get_current_user)):
    """Claims of the caller's access token"""
    return {
        "id": current_user["sub"],
        "email": current_user["email"],
        "plan_tier": current_user["planTier"],
        "email_verified": current_user["emailVerified"],
    }
