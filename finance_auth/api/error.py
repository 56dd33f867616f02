from fastapi import status
from libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


# Known auth error codes and the status they are reported with
ERROR_STATUS_CODES = {
    "AUTH_TERMS_NOT_ACCEPTED": status.HTTP_400_BAD_REQUEST,
    "AUTH_EMAIL_EXISTS": status.HTTP_409_CONFLICT,
    "AUTH_INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "AUTH_ACCOUNT_SUSPENDED": status.HTTP_403_FORBIDDEN,
    "AUTH_INVALID_REFRESH_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "AUTH_REFRESH_TOKEN_REVOKED": status.HTTP_401_UNAUTHORIZED,
    "AUTH_REFRESH_TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "AUTH_INVALID_RESET_TOKEN": status.HTTP_400_BAD_REQUEST,
    "AUTH_RESET_TOKEN_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "AUTH_RESET_UNKNOWN_USER": status.HTTP_400_BAD_REQUEST,
    "AUTH_INVALID_VERIFICATION_TOKEN": status.HTTP_400_BAD_REQUEST,
    "AUTH_EXPIRED_VERIFICATION_TOKEN": status.HTTP_400_BAD_REQUEST,
}


def raise_for_error(error: Error) -> None:
    """Raise ClientError for a known code, ServerError otherwise"""
    status_code = ERROR_STATUS_CODES.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
