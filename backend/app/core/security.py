"""
Security utilities for authentication.

Provides password hashing (bcrypt) and JWT session token management.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from jwt.exceptions import InvalidTokenError
from passlib.context import CryptContext

from app.core.config import settings

# Cost 10 is the floor; anything configured lower is raised to it.
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=max(settings.BCRYPT_ROUNDS, 10),
)

# Verified against when no account matches, so an unknown email costs the
# same as a wrong password.
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The stored hash, or None when there is no account

    Returns:
        True if password matches, False otherwise
    """
    if hashed_password is None:
        pwd_context.verify(plain_password, _DUMMY_HASH)
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognised hash format in the store.
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def session_lifetime() -> timedelta:
    return timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)


def create_access_token(account_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token for an account.

    Args:
        account_id: The account the token is bound to
        expires_delta: Optional custom lifetime, defaults to the session lifetime

    Returns:
        The encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta if expires_delta is not None else session_lifetime())

    to_encode = {
        "sub": str(account_id),
        "iat": now,
        "exp": expire,
    }

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT access token.

    Returns:
        The decoded token payload, or None if invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except InvalidTokenError:
        return None


def get_token_account_id(token: str) -> Optional[int]:
    """
    Extract the account id from a session token.

    Returns:
        The account id, or None if the token is invalid
    """
    payload = decode_access_token(token)
    if payload is None:
        return None
    try:
        return int(payload["sub"])
    except (TypeError, ValueError):
        return None
