"""Request dependencies shared by the routers."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from ..core import get_session
from ..core.security import InvalidTokenError, decode_access_token
from ..models import User

bearer_scheme = HTTPBearer(auto_error=False)

NOT_AUTHENTICATED = "User not authenticated"


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> User:
    """Resolve the bearer token to a stored user or fail with 401."""

    if credentials is None:
        raise HTTPException(status_code=401, detail=NOT_AUTHENTICATED)
    try:
        user_id = decode_access_token(credentials.credentials)
    except InvalidTokenError:
        raise HTTPException(status_code=401, detail=NOT_AUTHENTICATED)

    user = session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=401, detail=NOT_AUTHENTICATED)
    return user


__all__ = ["NOT_AUTHENTICATED", "bearer_scheme", "get_current_user"]
