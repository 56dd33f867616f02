"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from finance_auth.domain.base import as_utc
from finance_auth.domain.entities import PlanTier, UserStatus


# ============================================================================
# Command DTOs
# ============================================================================


class RequestContext(BaseModel):
    """Client metadata recorded on refresh tokens and audit events"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    password: str
    accept_terms: bool = False
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    timezone: Optional[str] = None
    plan_tier: PlanTier = PlanTier.free
    marketing_opt_in: bool = False


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public view of a user (no secret material)"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    status: UserStatus
    plan_tier: PlanTier
    email_verified_at: Optional[datetime] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    timezone: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    last_login_at: Optional[datetime] = None

    @field_validator(
        "email_verified_at", "created_at", "updated_at", "last_login_at", mode="after"
    )
    @classmethod
    def attach_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Stored naive, always UTC
        return as_utc(value) if value is not None else None


class SessionTokens(BaseModel):
    """Access and refresh tokens, always issued together"""

    access_token: str
    access_token_expires_at: datetime
    refresh_token: str
    refresh_token_expires_at: datetime


class SignupDebug(BaseModel):
    """Development-only echo of the emailed verification token"""

    email_verification_token: str


class SignupResponse(BaseModel):
    """Response for signup use case"""

    user: UserInfo
    tokens: SessionTokens
    requires_email_verification: bool = True
    debug: Optional[SignupDebug] = None


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: UserInfo
    tokens: SessionTokens
    email_verified: bool


class RefreshSessionResponse(BaseModel):
    """Response for refresh session use case"""

    user: UserInfo
    tokens: SessionTokens


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case - identical for unknown emails"""

    requested: bool = True


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    user: UserInfo


class VerifyEmailResponse(BaseModel):
    """Response for email verification use case"""

    user: UserInfo
