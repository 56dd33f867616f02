from typing import Optional

from pydantic import BaseModel

REMEMBER_ME_DISABLED_MAX_REFRESH_TTL_SECONDS = 7 * 24 * 60 * 60


class AuthSettings(BaseModel):
    """
    Session-lifecycle configuration.

    Built once at startup from ApplicationConfig and injected into use cases.
    """

    jwt_access_secret: str
    access_token_issuer: str = "finance-manager-auth"
    access_token_audience: str = "finance-manager-dashboard"
    access_token_ttl_seconds: int = 15 * 60
    refresh_token_ttl_seconds: int = 30 * 24 * 60 * 60
    email_verification_token_ttl_hours: int = 24
    password_reset_token_ttl_minutes: int = 30
    is_production: bool = False

    access_cookie_name: str = "fm_access"
    refresh_cookie_name: str = "fm_refresh"
    cookie_secure: bool = False
    cookie_domain: Optional[str] = None

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        return cls(
            jwt_access_secret=config.JWT_ACCESS_SECRET,
            access_token_issuer=config.ACCESS_TOKEN_ISSUER,
            access_token_audience=config.ACCESS_TOKEN_AUDIENCE,
            access_token_ttl_seconds=int(config.ACCESS_TOKEN_TTL_SECONDS),
            refresh_token_ttl_seconds=int(config.REFRESH_TOKEN_TTL_SECONDS),
            email_verification_token_ttl_hours=int(
                config.EMAIL_VERIFICATION_TOKEN_TTL_HOURS
            ),
            password_reset_token_ttl_minutes=int(
                config.PASSWORD_RESET_TOKEN_TTL_MINUTES
            ),
            is_production=config.ENVIRONMENT == "production",
            access_cookie_name=config.ACCESS_COOKIE_NAME,
            refresh_cookie_name=config.REFRESH_COOKIE_NAME,
            cookie_secure=bool(config.COOKIE_SECURE),
            cookie_domain=config.COOKIE_DOMAIN or None,
        )

    def refresh_token_ttl(self, remember_me: bool) -> int:
        """Refresh lifetime in seconds: full TTL with remember-me, else at most 7 days"""
        if remember_me:
            return self.refresh_token_ttl_seconds
        return min(
            self.refresh_token_ttl_seconds,
            REMEMBER_ME_DISABLED_MAX_REFRESH_TTL_SECONDS,
        )
