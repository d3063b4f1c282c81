"""JWT helpers for tokens issued by the identity provider."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt

from app.core.config import get_settings


def create_access_token(
    subject: str, expires_delta: timedelta | None = None, **extra: Any
) -> str:
    """Create a signed token; used by tooling and tests to mint admin tokens."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=60)
    expire = datetime.now(UTC) + expires_delta
    claims: dict[str, Any] = {"sub": subject, "exp": expire}
    claims.update(extra)
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode a JWT token, raising JWTError on failure."""
    settings = get_settings()
    return jwt.decode(
        token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
    )


def has_admin_role(claims: dict[str, Any]) -> bool:
    """Return True when the token claims grant access to the admin panel."""
    settings = get_settings()
    role = claims.get(settings.admin_role_claim)
    if role is None:
        metadata = claims.get("public_metadata") or claims.get("metadata") or {}
        if isinstance(metadata, dict):
            role = metadata.get(settings.admin_role_claim)
    return role == settings.admin_role_value
