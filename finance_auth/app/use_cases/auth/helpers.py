import hashlib
import secrets
from typing import Optional, Tuple

VERIFICATION_TOKEN_BYTES = 32
RESET_TOKEN_BYTES = 40


def normalize_email(raw: str) -> str:
    return raw.strip().lower()


def normalize_optional_string(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    trimmed = value.strip()
    return trimmed or None


def hash_single_use_token(token: str) -> str:
    """SHA-256 hex digest stored in place of verification/reset tokens"""
    return hashlib.sha256(token.encode()).hexdigest()


def generate_single_use_token(nbytes: int) -> Tuple[str, str]:
    """Returns (plain token for the email, hash for storage)"""
    token = secrets.token_urlsafe(nbytes)
    return token, hash_single_use_token(token)
