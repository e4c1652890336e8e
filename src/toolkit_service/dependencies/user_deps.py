from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from ..config import settings
from ..logging_config import logger
from ..schemas.user import UserTokenData

# Tokens are optional on public routes, so the scheme never raises by itself
bearer_scheme = HTTPBearer(auto_error=False)

credentials_exception = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


def decode_user_token(token: str) -> UserTokenData:
    """
    Decode and validate a user JWT locally.

    Checks signature, expiration, audience and issuer in one call, then
    parses the payload with the shared token schema.
    """
    try:
        payload = jwt.decode(
            token,
            settings.USER_JWT_SECRET_KEY,
            algorithms=[settings.USER_JWT_ALGORITHM],
            audience=settings.USER_JWT_AUDIENCE,
            issuer=settings.USER_JWT_ISSUER,
        )
    except JWTError as e:
        logger.warning(f"Failed to validate user token: {e}")
        raise credentials_exception

    try:
        return UserTokenData.model_validate(payload)
    except PydanticValidationError as e:
        logger.error(f"Token payload failed Pydantic validation: {e}")
        raise credentials_exception


def get_optional_token_data(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[UserTokenData]:
    """
    Token payload when a bearer token was sent, None for anonymous callers.

    A token that is present but invalid is still rejected with 401.
    """
    if credentials is None:
        return None
    return decode_user_token(credentials.credentials)


def get_optional_user_id(
    token_data: Optional[UserTokenData] = Depends(get_optional_token_data),
) -> Optional[UUID]:
    """The caller's user ID, used as `created_by`; None when anonymous."""
    return token_data.user_id if token_data else None


def get_current_user_token_data(
    token_data: Optional[UserTokenData] = Depends(get_optional_token_data),
) -> UserTokenData:
    """Like get_optional_token_data, but a token is required."""
    if token_data is None:
        raise credentials_exception
    return token_data


def require_admin_user(
    token_data: UserTokenData = Depends(get_current_user_token_data),
) -> UserTokenData:
    """
    Dependency that checks if the current user has the 'admin' role.
    Raises a 403 Forbidden error if the user is not an admin.
    """
    if "admin" not in token_data.roles:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator privileges required for this operation.",
        )
    return token_data
