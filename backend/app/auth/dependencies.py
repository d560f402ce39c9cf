"""
Authentication dependencies for FastAPI routes.

Supports both:
- ``x-auth-token`` header (legacy clients)
- Bearer token in Authorization header
"""

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from devconnector.constants import MSG_INVALID_TOKEN, MSG_NO_TOKEN
from devconnector.logging import get_logger

from ..database import get_db
from ..models import User
from .jwt import decode_access_token, subject_from_payload

logger = get_logger("auth")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    x_auth_token: str | None = Header(None, alias="x-auth-token"),
) -> str:
    """
    Extract JWT token from request.

    Checks in order:
    1. x-auth-token header
    2. Authorization header (Bearer token)
    """
    token = x_auth_token or token_header
    if token:
        return token

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=MSG_NO_TOKEN,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(get_token_from_request),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the authenticated user from a token.

    Steps:
    1) Extract token from header.
    2) Decode JWT and extract the user id.
    3) Load the user from DB or raise 401.
    """
    try:
        payload = decode_access_token(token)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MSG_INVALID_TOKEN,
        ) from None

    user_id = subject_from_payload(payload)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MSG_INVALID_TOKEN,
        )

    user = db.get(User, user_id)
    if not user:
        logger.info("token_user_missing", user_id=user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=MSG_INVALID_TOKEN,
        )
    return user
