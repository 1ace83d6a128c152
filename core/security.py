"""
Password hashing and access tokens.

Passwords are stored as bcrypt hashes. Access tokens are HS256 JWTs carrying
the user id in ``sub`` and the role in ``role``.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import jwt

from core.config import settings

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base class for login failures."""


class UserNotFoundError(AuthenticationError):
    pass


class InvalidPasswordError(AuthenticationError):
    pass


class AccountBannedError(AuthenticationError):
    pass


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Check a password against a bcrypt hash.

    A malformed or empty hash counts as a mismatch instead of raising.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    user_id: int,
    role: str,
    expires_delta: Optional[timedelta] = None,
    secret: Optional[str] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        user_id: Subject of the token
        role: User role stored in the ``role`` claim
        expires_delta: Lifetime (defaults to ACCESS_TOKEN_EXPIRE_DAYS)
        secret: Signing key (defaults to JWT_SECRET_KEY)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.access_token_expire_days))
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(
        payload, secret or settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def decode_token(token: str, secret: Optional[str] = None) -> Optional[dict[str, Any]]:
    """Decode and verify a token. Returns None when it is invalid or expired."""
    try:
        payload = jwt.decode(
            token,
            secret or settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.debug("Rejected expired access token")
        return None
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected invalid access token: {e}")
        return None

    try:
        payload["sub"] = int(payload["sub"])
    except (TypeError, ValueError):
        return None
    return payload
