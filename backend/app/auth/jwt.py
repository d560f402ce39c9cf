"""
JWT helper utilities.

Tokens are issued by the auth service; this service only needs to verify
them. ``create_access_token`` is kept for tooling and tests.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from ..config import get_settings


def create_access_token(data: Dict[str, Any], expires_minutes: int | None = None) -> str:
    """
    Create a signed JWT access token with expiration and JTI.

    Args:
        data: Claims to include in the token (e.g., {"sub": "42"}).
        expires_minutes: Optional override for expiration window in minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    expire_delta = timedelta(minutes=expires_minutes or settings.access_token_expire_minutes)
    expire = datetime.now(timezone.utc) + expire_delta
    to_encode.update({
        "exp": expire,
        "jti": str(uuid.uuid4()),
    })
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Raises:
        ValueError: If token is invalid or signature/expiry check fails.
    """
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc


def subject_from_payload(payload: Dict[str, Any]) -> int | None:
    """
    Extract the user id from a decoded token.

    Accepts a standard ``sub`` claim or the legacy ``{"user": {"id": ...}}``
    shape issued by older clients.
    """
    subject = payload.get("sub")
    if subject is None:
        subject = (payload.get("user") or {}).get("id")
    try:
        return int(subject) if subject is not None else None
    except (TypeError, ValueError):
        return None
