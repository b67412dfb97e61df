"""Password hashing and JWT access/refresh token issuance and verification."""

import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

logger = logging.getLogger(__name__)

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def password_rule_violations(password: str) -> list[str]:
    """Return every password rule the candidate breaks (empty list when acceptable)."""
    violations: list[str] = []
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        violations.append(
            f"Passwords must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters."
        )
    if not any(c.isdigit() for c in password):
        violations.append("Passwords must have at least one digit ('0'-'9').")
    if not any(c.islower() for c in password):
        violations.append("Passwords must have at least one lowercase ('a'-'z').")
    if not any(c.isupper() for c in password):
        violations.append("Passwords must have at least one uppercase ('A'-'Z').")
    if all(c.isalnum() for c in password):
        violations.append("Passwords must have at least one non alphanumeric character.")
    return violations


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (some backends drop tzinfo on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _encode(payload: dict[str, Any], lifetime: timedelta) -> str:
    now = datetime.now(UTC)
    payload.update(
        {
            "jti": str(uuid.uuid4()),
            # Sub-second precision so a token issued right after a logout is
            # not caught by the threshold set in the same second.
            "iat": now.timestamp(),
            "exp": now + lifetime,
            "aud": settings.JWT_AUDIENCE,
            "iss": settings.JWT_ISSUER,
        }
    )
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def _decode(token: str, expected_type: str) -> dict[str, Any]:
    payload = jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
        options={"require": ["exp", "iat", "sub", "jti"]},
    )
    if payload.get("type") != expected_type:
        raise jwt.InvalidTokenError(f"Expected a {expected_type} token")
    return payload


def create_access_token(user_id: str, username: str, role: str) -> str:
    """Create a short-lived access token carrying sub, username and role."""
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "type": ACCESS_TOKEN_TYPE,
    }
    return _encode(payload, timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MINUTES))


def create_refresh_token(user_id: str) -> str:
    """Create a longer-lived refresh token; carries no role claim."""
    payload: dict[str, Any] = {"sub": str(user_id), "type": REFRESH_TOKEN_TYPE}
    return _encode(payload, timedelta(hours=settings.JWT_REFRESH_EXPIRE_HOURS))


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate an access token; return its payload.
    Raises jwt.PyJWTError on a bad signature, audience, issuer, type, or expiry.
    """
    return _decode(token, ACCESS_TOKEN_TYPE)


def validate_refresh_token(token: str) -> dict[str, Any] | None:
    """Return the refresh token's claims, or None when it is not acceptable. Never raises."""
    try:
        return _decode(token, REFRESH_TOKEN_TYPE)
    except jwt.PyJWTError as e:
        logger.info("Refresh token rejected: %s", e)
        return None


def issued_at(payload: dict[str, Any]) -> datetime:
    """Return the token's iat claim as an aware UTC datetime."""
    return datetime.fromtimestamp(float(payload["iat"]), tz=UTC)


def is_token_revoked(threshold: datetime | None, token_issued_at: datetime) -> bool:
    """True when the user's validity threshold is set and not earlier than the token's iat."""
    if threshold is None:
        return False
    return as_utc(threshold) >= as_utc(token_issued_at)
