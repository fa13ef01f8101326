"""Bearer token helpers."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from .config import settings

ALGORITHM = "HS256"
ADMIN_ROLE = "admin"


def create_access_token(
    subject: str,
    roles: list[str],
    expires_delta: Optional[timedelta] = None,
    email: Optional[str] = None,
) -> str:
    """Issue a signed bearer token for ``subject`` carrying ``roles``."""
    expire = datetime.now(tz=timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode: dict[str, Any] = {"sub": str(subject), "exp": expire, "roles": roles}
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.bearer_token_secret, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify a bearer token. Raises ``jwt.PyJWTError`` if invalid."""
    return jwt.decode(token, settings.bearer_token_secret, algorithms=[ALGORITHM])
