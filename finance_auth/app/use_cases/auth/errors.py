"""
Authentication error catalogue.

Stable machine-readable codes returned inside Result errors. Credential and
refresh-token messages stay generic to avoid account enumeration.
"""

from libs.result import Error

TERMS_NOT_ACCEPTED = Error(
    "AUTH_TERMS_NOT_ACCEPTED", "You must accept the terms of service."
)
EMAIL_EXISTS = Error("AUTH_EMAIL_EXISTS", "An account already exists for this email.")
INVALID_CREDENTIALS = Error(
    "AUTH_INVALID_CREDENTIALS", "Email or password is incorrect."
)
ACCOUNT_SUSPENDED = Error(
    "AUTH_ACCOUNT_SUSPENDED", "Your account is currently suspended."
)

INVALID_REFRESH_TOKEN = Error(
    "AUTH_INVALID_REFRESH_TOKEN", "Refresh token is invalid or expired."
)
REFRESH_TOKEN_REVOKED = Error(
    "AUTH_REFRESH_TOKEN_REVOKED", "Refresh token is no longer valid."
)
REFRESH_TOKEN_EXPIRED = Error("AUTH_REFRESH_TOKEN_EXPIRED", "Refresh token expired.")

INVALID_RESET_TOKEN = Error(
    "AUTH_INVALID_RESET_TOKEN", "Reset token is invalid or expired."
)
RESET_TOKEN_EXPIRED = Error("AUTH_RESET_TOKEN_EXPIRED", "Reset token expired.")
RESET_UNKNOWN_USER = Error(
    "AUTH_RESET_UNKNOWN_USER", "Associated user not found for token."
)

INVALID_VERIFICATION_TOKEN = Error(
    "AUTH_INVALID_VERIFICATION_TOKEN", "Verification token is invalid or expired."
)
EXPIRED_VERIFICATION_TOKEN = Error(
    "AUTH_EXPIRED_VERIFICATION_TOKEN", "Verification token expired."
)
