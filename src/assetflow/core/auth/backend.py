"""Authentication backend for JWT and password handling.

This module provides core authentication utilities including:
- Password hashing with bcrypt
- JWT token creation and verification

Tokens are stateless bearer credentials valid until expiry; there is no
refresh flow and no server-side revocation.
"""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from assetflow.config import settings
from assetflow.core.auth.schemas import Identity
from assetflow.core.constants import BCRYPT_ROUNDS


if TYPE_CHECKING:
    from assetflow.modules.users.models import User


# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


# ============================================================
# Password Utilities
# ============================================================


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    A malformed or unrecognised hash counts as a mismatch.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


# ============================================================
# JWT Token Utilities
# ============================================================


def create_access_token(
    user: "User",
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT access token for a user.

    Args:
        user: The user the token identifies
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT access token
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.access_token_expire_days)

    to_encode: dict[str, Any] = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "organization_id": user.organization_id,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> Identity | None:
    """Decode and validate a JWT token.

    Args:
        token: The JWT token to decode

    Returns:
        Identity if valid, None if invalid, forged or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )

        user_id = payload.get("sub")
        exp = payload.get("exp")
        email = payload.get("email")
        role = payload.get("role")

        if not user_id or exp is None or not email or not role:
            return None

        organization_id = payload.get("organization_id")

        return Identity(
            id=int(user_id),
            email=email,
            role=role,
            organization_id=int(organization_id) if organization_id is not None else None,
            exp=datetime.fromtimestamp(exp, tz=UTC),
        )

    except (JWTError, ValueError, TypeError):
        return None
