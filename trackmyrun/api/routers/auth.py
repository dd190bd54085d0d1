"""Sign-in routes backed by Strava OAuth."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from pydantic import BaseModel
from sqlmodel import Session

from ...core import FRONTEND_ORIGIN, get_session
from ...core.security import create_access_token
from ...models import User
from ...services import accounts, strava
from ...services.serializers import user_to_dict
from ..deps import get_current_user
from ..errors import failure_message
from .strava import LOGIN_STATE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class StravaLoginBody(BaseModel):
    code: Optional[str] = None


@router.get("/login/strava")
def login_with_strava() -> RedirectResponse:
    """Send the browser to Strava's consent screen for sign-in."""

    try:
        url = strava.auth_url(LOGIN_STATE)
    except Exception:
        logger.exception("Error initiating Strava login")
        return RedirectResponse(f"{FRONTEND_ORIGIN}/login?error=strava_config", status_code=302)
    return RedirectResponse(url, status_code=302)


@router.post("/login/strava/callback")
async def login_with_strava_callback(
    body: StravaLoginBody, session: Session = Depends(get_session)
) -> Dict[str, Any]:
    if not body.code:
        raise HTTPException(400, "Authorization code is required")

    with failure_message("Failed to complete Strava login"):
        token_data = await strava.exchange_code_for_token(body.code)
        user = accounts.login_with_strava(session, token_data)
        return {
            "user": user_to_dict(user),
            "message": "Login successful",
            "accessToken": create_access_token(user.id),
        }


@router.get("/me")
def me(user: User = Depends(get_current_user)) -> Dict[str, Any]:
    return {"user": user_to_dict(user)}


__all__ = ["router"]
