"""
Token Codec

Signs short-lived access tokens and builds/parses the composite
"<id>.<secret>" refresh tokens.
"""

import secrets
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from jose import JWTError, jwt
from pydantic import BaseModel

from finance_auth.domain.base import as_utc
from finance_auth.domain.entities import PlanTier, User

ACCESS_TOKEN_ALGORITHM = "HS256"
REFRESH_SECRET_BYTES = 48
REQUIRED_ACCESS_CLAIMS = ("sub", "email", "planTier", "emailVerified")


class RefreshTokenParts(BaseModel):
    """Both halves of a composite refresh token"""

    id: UUID
    secret: str

    @property
    def value(self) -> str:
        return f"{self.id}.{self.secret}"


class TokenCodec:
    """Access-token signing plus refresh-token generation and parsing"""

    def __init__(self, secret: str, issuer: str, audience: str):
        self.secret = secret
        self.issuer = issuer
        self.audience = audience

    def encode_access_token(
        self, user: User, issued_at: datetime, expires_at: datetime
    ) -> str:
        """
        Sign an access token for a user.

        Args:
            user: Token subject
            issued_at: iat claim
            expires_at: exp claim

        Returns:
            JWT string (HS256) carrying subject, email, plan tier and
            email-verified flag
        """
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "planTier": PlanTier(user.plan_tier).value,
            "emailVerified": user.email_verified_at is not None,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": as_utc(issued_at),
            "exp": as_utc(expires_at),
        }
        return jwt.encode(payload, self.secret, algorithm=ACCESS_TOKEN_ALGORITHM)

    def decode_access_token(self, token: str) -> Optional[dict]:
        """
        Verify signature, expiry, issuer and audience.

        Returns the claims, or None when verification fails or any of the
        session claims is missing.
        """
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[ACCESS_TOKEN_ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
            )
        except JWTError:
            return None

        if any(claim not in claims for claim in REQUIRED_ACCESS_CLAIMS):
            return None
        return claims

    @staticmethod
    def generate_refresh_token() -> RefreshTokenParts:
        return RefreshTokenParts(
            id=uuid4(), secret=secrets.token_urlsafe(REFRESH_SECRET_BYTES)
        )

    @staticmethod
    def parse_refresh_token(token: Optional[str]) -> Optional[RefreshTokenParts]:
        """
        Split "<id>.<secret>" into its parts.

        Returns None for anything that is not exactly two non-empty segments
        with a UUID id; callers decide whether that is an error.
        """
        if not token:
            return None

        segments = token.split(".")
        if len(segments) != 2 or not segments[0] or not segments[1]:
            return None

        try:
            token_id = UUID(segments[0])
        except ValueError:
            return None

        return RefreshTokenParts(id=token_id, secret=segments[1])
