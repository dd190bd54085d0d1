"""Strava connection routes."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from sqlmodel import Session

from ...core import FRONTEND_ORIGIN, SYNC_PAGE_SIZE, get_session
from ...core.security import (
    InvalidTokenError,
    create_access_token,
    create_oauth_state,
    decode_oauth_state,
)
from ...models import User
from ...services import accounts, strava
from ...services.tokens import clear_tokens, get_valid_access_token
from ..deps import get_current_user
from ..errors import failure_message

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/strava", tags=["strava"])

LOGIN_STATE = "login"


def _frontend_redirect(path: str, **params: str) -> RedirectResponse:
    url = f"{FRONTEND_ORIGIN}{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return RedirectResponse(url, status_code=302)


@router.get("/connect")
def connect(user: User = Depends(get_current_user)) -> Dict[str, str]:
    """Start linking Strava to the signed-in account."""

    with failure_message("Failed to initiate Strava connection"):
        return {"authUrl": strava.auth_url(create_oauth_state(user.id))}


@router.get("/callback")
async def strava_callback(
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    session: Session = Depends(get_session),
):
    """OAuth redirect target for both sign-in and account linking."""

    if error:
        return _frontend_redirect("/login", strava="error", reason=error)
    if not code or not state:
        return _frontend_redirect("/login", strava="error", reason="missing_params")

    try:
        token_data = await strava.exchange_code_for_token(code)

        if state == LOGIN_STATE:
            user = accounts.login_with_strava(session, token_data)
            return _frontend_redirect("/auth/callback", token=create_access_token(user.id))

        try:
            user_id = decode_oauth_state(state)
        except InvalidTokenError:
            return _frontend_redirect("/dashboard", strava="error", reason="invalid_state")

        user = session.get(User, user_id)
        if not user:
            return _frontend_redirect("/dashboard", strava="error", reason="invalid_state")
        accounts.connect_strava(session, user, token_data)
        return _frontend_redirect("/dashboard", strava="success")
    except Exception:
        logger.exception("Error handling Strava callback")
        return _frontend_redirect("/login", strava="error", reason="exchange_failed")


@router.post("/disconnect")
def disconnect(
    user: User = Depends(get_current_user), session: Session = Depends(get_session)
) -> Dict[str, str]:
    with failure_message("Failed to disconnect Strava"):
        clear_tokens(user)
        session.add(user)
        session.commit()
        return {"message": "Strava disconnected successfully"}


@router.get("/status")
def status(user: User = Depends(get_current_user)) -> Dict[str, Any]:
    return {"connected": bool(user.strava_connected), "athleteId": user.strava_athlete_id}


@router.post("/sync")
async def preview_sync(
    user: User = Depends(get_current_user), session: Session = Depends(get_session)
) -> Dict[str, Any]:
    """Fetch one page of raw Strava activities without storing them."""

    if not user.strava_connected:
        raise HTTPException(400, "User is not connected to Strava")
    with failure_message("Failed to sync activities"):
        access_token = await get_valid_access_token(user, session)
        activities = await strava.get_athlete_activities(access_token, per_page=SYNC_PAGE_SIZE)
        return {
            "message": "Activities synced successfully",
            "count": len(activities),
            "activities": activities,
        }


__all__ = ["router"]
