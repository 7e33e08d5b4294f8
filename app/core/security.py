"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.exceptions import InvalidTokenError

# Bcrypt cost (rounds) when the caller does not pass one.
DEFAULT_BCRYPT_ROUNDS = 10
DEFAULT_JWT_ALGORITHM = "HS256"
DEFAULT_EXPIRE_DAYS = 30


def hash_password(plain_password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: int,
    secret: str,
    *,
    algorithm: str = DEFAULT_JWT_ALGORITHM,
    expire_days: int = DEFAULT_EXPIRE_DAYS,
    now: datetime | None = None,
) -> str:
    """Create a JWT access token with sub (user id), iat and exp."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(days=expire_days),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret: str,
    *,
    algorithm: str = DEFAULT_JWT_ALGORITHM,
) -> int:
    """
    Decode and validate a JWT; return the user id from its sub claim.
    Raises InvalidTokenError on bad signature, expiry, or malformed payload.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Token is not valid", cause=e) from e
    try:
        return int(payload["sub"])
    except (TypeError, ValueError) as e:
        raise InvalidTokenError("Token is not valid", cause=e) from e
