from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from finance_auth.adapter.services.notification_sender import LoggingNotificationSender
from finance_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from finance_auth.app.services.auth_settings import AuthSettings
from finance_auth.app.services.credential_hasher import CredentialHasher
from finance_auth.app.services.notification_sender import NotificationSender
from finance_auth.app.services.token_codec import TokenCodec

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_auth_settings() -> AuthSettings:
    return AuthSettings.from_config(ApplicationConfig)


@lru_cache
def get_credential_hasher() -> CredentialHasher:
    return CredentialHasher()


def get_token_codec(settings: AuthSettings = Depends(get_auth_settings)) -> TokenCodec:
    return TokenCodec(
        secret=settings.jwt_access_secret,
        issuer=settings.access_token_issuer,
        audience=settings.access_token_audience,
    )


@lru_cache
def get_notification_sender() -> NotificationSender:
    return LoggingNotificationSender()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: AuthSettings = Depends(get_auth_settings),
    token_codec: TokenCodec = Depends(get_token_codec),
) -> dict:
    """
    Dependency to extract and verify the access token.

    The token is read from the Authorization header, falling back to the
    access cookie.

    Returns:
        Decoded JWT claims (sub, email, planTier, emailVerified)

    Raises:
        HTTPException: 401 if token is missing, invalid or expired
    """
    token = credentials.credentials if credentials else None
    if token is None:
        token = request.cookies.get(settings.access_cookie_name)

    payload = token_codec.decode_access_token(token) if token else None

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload
