"""Security utilities for password hashing and JWT token management.

User tokens and admin tokens are signed with the same secret but carry
different audiences, so a token minted for one verification path is rejected
by the other.
"""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from subsentinel.config import settings

# Password hashing with Argon2
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ADMIN_ROLE = "admin"


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Password to verify
        hashed_password: Stored password hash

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def _encode(claims: dict[str, Any], audience: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        **claims,
        "iss": settings.jwt_issuer,
        "aud": audience,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _decode(token: str, audience: str) -> dict[str, Any]:
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        audience=audience,
        issuer=settings.jwt_issuer,
    )


def create_user_token(user_id: UUID, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT for a mobile user.

    Args:
        user_id: User ID to encode in token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.user_token_expire_days)
    return _encode(
        {"sub": str(user_id), "userId": str(user_id), "type": "access"},
        settings.jwt_user_audience,
        expires_delta,
    )


def create_admin_token(admin_id: UUID, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT for an admin operator.

    Args:
        admin_id: Admin ID to encode in token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.admin_token_expire_hours)
    return _encode(
        {"sub": str(admin_id), "adminId": str(admin_id), "role": ADMIN_ROLE},
        settings.jwt_admin_audience,
        expires_delta,
    )


def decode_user_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a user JWT.

    Raises:
        JWTError: If token is invalid, expired, or minted for another audience
    """
    return _decode(token, settings.jwt_user_audience)


def decode_admin_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an admin JWT.

    Raises:
        JWTError: If token is invalid, expired, or minted for another audience
    """
    return _decode(token, settings.jwt_admin_audience)


def get_user_id_from_token(token: str) -> UUID:
    """
    Extract user ID from a user JWT.

    Raises:
        JWTError: If token is invalid or expired
        ValueError: If user ID is not a valid UUID
    """
    payload = decode_user_token(token)
    user_id_str = payload.get("userId")
    if user_id_str is None:
        raise JWTError("Token missing 'userId' claim")
    return UUID(user_id_str)


def get_admin_id_from_token(token: str) -> UUID:
    """
    Extract admin ID from an admin JWT, requiring the admin role claim.

    Raises:
        JWTError: If token is invalid, expired, or lacks admin claims
        ValueError: If admin ID is not a valid UUID
    """
    payload = decode_admin_token(token)
    admin_id_str = payload.get("adminId")
    if admin_id_str is None or payload.get("role") != ADMIN_ROLE:
        raise JWTError("Token missing admin claims")
    return UUID(admin_id_str)
