"""
VeggieFresh Admin API — Password Hashing & Token Signing
==========================================================

What:  bcrypt password hashing and HS256 JWT access/refresh tokens.
How:   `bcrypt` for hashes (cost from settings.bcrypt_rounds), `python-jose`
       for signing and verification.

Token payload:
    {
        "userId": "7b0e...",       # User.id as string
        "type": "access",          # or "refresh"
        "iat": 1718000000,
        "exp": 1718086400
    }
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

import bcrypt
from jose import JWTError, jwt

from app.config import settings
from app.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


# ══════════════════════════════════════════════════════════════════════════
# Passwords
# ══════════════════════════════════════════════════════════════════════════

def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Returns a bcrypt hash (utf-8 string) of `password`."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Checks `password` against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch, never as a server error.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# ══════════════════════════════════════════════════════════════════════════
# Tokens
# ══════════════════════════════════════════════════════════════════════════

def _require_secret() -> str:
    if not settings.jwt_secret:
        raise ConfigurationError(
            message="JWT_SECRET is not configured",
            context={"setting": "JWT_SECRET"},
        )
    return settings.jwt_secret


def create_token(user_id: str, token_type: str, expires_delta: timedelta) -> str:
    """Signs a token of `token_type` for `user_id` valid for `expires_delta`."""
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, _require_secret(), algorithm=settings.jwt_algorithm)


def create_token_pair(user_id: str) -> Tuple[str, str]:
    """Returns `(access_token, refresh_token)` for `user_id`."""
    access_token = create_token(
        user_id,
        ACCESS_TOKEN,
        timedelta(minutes=settings.access_token_expire_minutes),
    )
    refresh_token = create_token(
        user_id,
        REFRESH_TOKEN,
        timedelta(days=settings.refresh_token_expire_days),
    )
    return access_token, refresh_token


def decode_token(token: str, expected_type: str = ACCESS_TOKEN) -> Dict[str, Any]:
    """
    Verifies signature, expiry and token type; returns the payload.

    Raises:
        ConfigurationError: JWT_SECRET is not set
        AuthenticationError: anything wrong with the token itself
    """
    secret = _require_secret()
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthenticationError(
            message="Invalid or expired token",
            context={"reason": type(e).__name__},
        )

    if payload.get("type") != expected_type or not payload.get("userId"):
        raise AuthenticationError(
            message="Invalid or expired token",
            context={"reason": "unexpected_token_type"},
        )
    return payload
