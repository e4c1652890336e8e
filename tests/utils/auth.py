"""
Authentication utilities for testing.

This module signs user tokens the same way the identity provider does, so
route tests exercise the real token validation.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from jose import jwt

from toolkit_service.config import settings

# Default test user IDs
DEFAULT_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
DEFAULT_ADMIN_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")


def make_token(
    user_id: uuid.UUID = DEFAULT_USER_ID,
    roles: Optional[List[str]] = None,
    expires_in: timedelta = timedelta(minutes=15),
    secret: Optional[str] = None,
) -> str:
    """
    Create a signed user JWT.

    Args:
        user_id: Value of the `sub` claim
        roles: Roles granted to the user
        expires_in: Lifetime of the token (negative for an expired one)
        secret: Signing key; defaults to the configured one

    Returns:
        The encoded token
    """
    claims = {
        "sub": str(user_id),
        "roles": roles or [],
        "aud": settings.USER_JWT_AUDIENCE,
        "iss": settings.USER_JWT_ISSUER,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(
        claims,
        secret or settings.USER_JWT_SECRET_KEY,
        algorithm=settings.USER_JWT_ALGORITHM,
    )


def auth_headers(user_id: uuid.UUID = DEFAULT_USER_ID, roles: Optional[List[str]] = None) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, roles)}"}


def admin_headers() -> Dict[str, str]:
    return auth_headers(DEFAULT_ADMIN_ID, ["admin"])
