"""
Security Service

Handles password hashing and session token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib)
2. Signed session tokens (python-jose, HS256, 1 day lifetime)
3. Token verification that separates "expired" from "invalid"

A session token binds the user id (the `sub` claim) and the username.
Expired tokens decode to None so the request continues anonymously, while a
malformed or tampered token raises InvalidToken and is rejected outright.

Usage:
    from bookgraph.services.security import create_access_token, decode_token

    token = create_access_token(user_id=1, username="jane")
    identity = decode_token(token)
    identity.username
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from bookgraph.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("SecurePass123!")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# Session Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = 1


class InvalidToken(Exception):
    """Raised when a supplied token is malformed, tampered with or unsigned."""


@dataclass(frozen=True)
class Identity:
    """The decoded identity carried by a valid session token."""

    user_id: int
    username: str


def create_access_token(
    user_id: int | str,
    username: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed session token.

    Args:
        user_id: ID of the user (stored as the `sub` claim)
        username: Username bound into the token
        expires_delta: Optional custom lifetime (default: 1 day)

    Returns:
        Encoded JWT string
    """
    issued_at = datetime.now(UTC)
    expire = issued_at + (expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS))

    to_encode = {
        "sub": str(user_id),
        "username": username,
        "iat": issued_at,
        "exp": expire,
    }

    return jwt.encode(to_encode, settings.jwt_secret, algorithm=ALGORITHM)


def decode_token(token: str) -> Identity | None:
    """
    Decode and validate a session token.

    Args:
        token: The JWT string

    Returns:
        Identity if valid, None if the token has expired

    Raises:
        InvalidToken: Bad signature, wrong algorithm, malformed token or
            missing claims
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Expired session token, continuing anonymously")
        return None
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise InvalidToken(str(e)) from e

    subject = payload.get("sub")
    username = payload.get("username")
    if not subject or not username or not str(subject).isdigit():
        logger.warning("Session token is missing identity claims")
        raise InvalidToken("Token does not carry a user identity")

    return Identity(user_id=int(subject), username=username)
