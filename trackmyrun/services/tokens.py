"""Strava token storage and refresh."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict

from sqlmodel import Session

from ..models import User
from . import strava

logger = logging.getLogger(__name__)

# Refresh tokens that expire within this many seconds.
REFRESH_MARGIN_SECONDS = 300


class StravaNotConnectedError(Exception):
    """The user has no stored Strava credentials."""


def store_token_response(user: User, token_data: Dict[str, Any]) -> None:
    """Copy an OAuth token response onto ``user`` and mark it connected."""

    user.strava_access_token = token_data["access_token"]
    user.strava_refresh_token = token_data.get("refresh_token", user.strava_refresh_token)
    user.strava_token_expires_at = int(token_data["expires_at"])
    athlete = token_data.get("athlete") or {}
    if athlete.get("id"):
        user.strava_athlete_id = int(athlete["id"])
    user.strava_connected = True


async def get_valid_access_token(user: User, session: Session) -> str:
    """Return a usable access token for ``user``, refreshing it when needed."""

    if not user.strava_access_token or not user.strava_refresh_token:
        raise StravaNotConnectedError("User is not connected to Strava")

    expires_at = user.strava_token_expires_at or 0
    if int(time.time()) < expires_at - REFRESH_MARGIN_SECONDS:
        return user.strava_access_token

    logger.info("Refreshing Strava token for user %s", user.id)
    refreshed = await strava.refresh_access_token(user.strava_refresh_token)
    store_token_response(user, refreshed)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user.strava_access_token


def clear_tokens(user: User) -> None:
    user.strava_athlete_id = None
    user.strava_access_token = None
    user.strava_refresh_token = None
    user.strava_token_expires_at = None
    user.strava_connected = False


__all__ = [
    "REFRESH_MARGIN_SECONDS",
    "StravaNotConnectedError",
    "clear_tokens",
    "get_valid_access_token",
    "store_token_response",
]
