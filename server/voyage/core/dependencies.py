"""FastAPI dependencies for authentication and role gating."""

from typing import Optional

from fastapi import Depends, Header
from jwt import ExpiredSignatureError, PyJWTError

from .exceptions import AuthenticationError, AuthorizationError
from .security import ADMIN_ROLE, decode_access_token


def _parse_bearer(authorization: str) -> str:
    try:
        scheme, token = authorization.split()
    except ValueError:
        raise AuthenticationError(detail="Invalid authorization header format")

    if scheme.lower() != "bearer":
        raise AuthenticationError(detail="Invalid authentication scheme")

    return token


def _user_from_token(token: str) -> dict:
    try:
        payload = decode_access_token(token)
    except ExpiredSignatureError:
        raise AuthenticationError(detail="Token has expired")
    except PyJWTError as e:
        raise AuthenticationError(detail=f"Token validation failed: {str(e)}")

    user_id = payload.get("sub")
    if user_id is None:
        raise AuthenticationError(detail="Invalid token payload")

    roles = payload.get("roles") or []
    if not isinstance(roles, list):
        roles = [roles]

    return {
        "user_id": user_id,
        "email": payload.get("email"),
        "roles": roles,
    }


async def get_current_user(
    authorization: Optional[str] = Header(None, alias="Authorization")
) -> dict:
    """
    Authentication dependency that validates Bearer tokens.

    Args:
        authorization: Authorization header with Bearer token

    Returns:
        dict: User information from validated token

    Raises:
        AuthenticationError: If token is invalid or missing
    """
    if not authorization:
        raise AuthenticationError(detail="Authorization header missing")

    return _user_from_token(_parse_bearer(authorization))


async def get_optional_user(
    authorization: Optional[str] = Header(None, alias="Authorization")
) -> Optional[dict]:
    """Like ``get_current_user`` but anonymous visitors yield ``None``."""
    if not authorization:
        return None

    return _user_from_token(_parse_bearer(authorization))


async def require_admin(user: dict = Depends(get_current_user)) -> dict:
    """Reject callers that do not carry the admin role."""
    if ADMIN_ROLE not in user["roles"]:
        raise AuthorizationError(required_roles=[ADMIN_ROLE])
    return user


def is_admin(user: Optional[dict]) -> bool:
    """Return True when ``user`` is an authenticated admin."""
    return bool(user) and ADMIN_ROLE in user["roles"]


# Shared dependency markers
OptionalAuth = Depends(get_optional_user)
AdminAuth = Depends(require_admin)
