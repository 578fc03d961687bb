# taskflow/core/security.py
"""
Security module for authentication.
Handles password hashing and the signed, time-bounded access tokens
handed to clients after registration or login.
"""
import datetime as dt
from dataclasses import dataclass

import jwt  # PyJWT
from passlib.context import CryptContext

from taskflow.config import settings
from taskflow.core.errors import ExpiredTokenError, InvalidTokenError

# Password hashing context
# Argon2 is a modern, salted, memory-hard password hashing algorithm
pwd_context = CryptContext(
    schemes=["argon2"],  # Use Argon2 for password hashing
    deprecated="auto",   # Automatically handle deprecated schemes
)

# JWT configuration
JWT_ALG = "HS256"  # JWT signing algorithm (HMAC SHA-256)
ACCESS_TOKEN_TTL = dt.timedelta(days=1)  # Fixed validity window
ACCESS_TOKEN_MAX_AGE = int(ACCESS_TOKEN_TTL.total_seconds())  # Cookie Max-Age, in seconds


@dataclass(frozen=True)
class TokenClaims:
    """Verified content of an access token."""
    user_id: str
    issued_at: dt.datetime
    expires_at: dt.datetime


def hash_password(plain: str) -> str:
    """
    Hash a plain text password using Argon2.

    Args:
        plain: Plain text password to hash

    Returns:
        Hashed password string (salted, safe to store in database)
    """
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain, hashed)


def dummy_verify() -> None:
    """Spend the same time as a real verification; used when there is no hash to check."""
    pwd_context.dummy_verify()


def create_access_token(user_id: str, now: dt.datetime | None = None) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user_id: Unique user identifier (UUID string)
        now: Issue time; defaults to the current UTC time

    Returns:
        Encoded JWT token string

    Token payload includes:
        - id: User ID
        - iat: Issued at timestamp
        - exp: Expiration timestamp (iat + 1 day)
    """
    issued = now or dt.datetime.now(dt.timezone.utc)
    payload = {
        "id": str(user_id),
        "iat": issued,
        "exp": issued + ACCESS_TOKEN_TTL,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=JWT_ALG)


def decode_access_token(token: str) -> TokenClaims:
    """
    Decode and validate a JWT access token.

    Raises:
        ExpiredTokenError: If the signature is valid but the token has expired
        InvalidTokenError: If the signature does not verify or the payload is malformed
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[JWT_ALG],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredTokenError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError("Invalid token") from exc

    user_id = payload.get("id")
    if not isinstance(user_id, str) or not user_id:
        raise InvalidTokenError("Invalid token")
    return TokenClaims(
        user_id=user_id,
        issued_at=dt.datetime.fromtimestamp(payload["iat"], tz=dt.timezone.utc),
        expires_at=dt.datetime.fromtimestamp(payload["exp"], tz=dt.timezone.utc),
    )
