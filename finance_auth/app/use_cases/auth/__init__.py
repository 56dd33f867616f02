"""
Authentication Use Cases

All session-lifecycle business logic.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .refresh_session_use_case import RefreshSessionUseCase
from .logout_use_case import LogoutUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .session_issuer import SessionIssuer
from .dtos import (
    RequestContext,
    SignupCommand,
    UserInfo,
    SessionTokens,
    SignupDebug,
    SignupResponse,
    LoginResponse,
    RefreshSessionResponse,
    RequestPasswordResetResponse,
    ResetPasswordResponse,
    VerifyEmailResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "RefreshSessionUseCase",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "VerifyEmailUseCase",
    "SessionIssuer",
    # DTOs - Commands
    "RequestContext",
    "SignupCommand",
    # DTOs - Responses
    "SignupResponse",
    "LoginResponse",
    "RefreshSessionResponse",
    "RequestPasswordResetResponse",
    "ResetPasswordResponse",
    "VerifyEmailResponse",
    # DTOs - Nested Models
    "UserInfo",
    "SessionTokens",
    "SignupDebug",
]
