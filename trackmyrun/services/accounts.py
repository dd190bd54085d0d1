"""User accounts created through Strava sign-in."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlmodel import Session, func, select

from ..models import User
from .tokens import store_token_response

logger = logging.getLogger(__name__)

# Strava serves this placeholder when the athlete has no profile picture.
_DEFAULT_AVATAR_MARKER = "avatar/athlete/large"


def _avatar_from_athlete(athlete: Dict[str, Any]) -> str:
    profile = athlete.get("profile") or ""
    if not profile or _DEFAULT_AVATAR_MARKER in profile:
        return ""
    return profile


def find_by_athlete(session: Session, athlete_id: int) -> Optional[User]:
    return session.exec(select(User).where(User.strava_athlete_id == athlete_id)).first()


def login_with_strava(session: Session, token_data: Dict[str, Any]) -> User:
    """Create or refresh the account bound to the athlete in ``token_data``.

    New accounts get placeholder identity fields; the very first account in
    the store is promoted to admin.
    """

    athlete = token_data.get("athlete") or {}
    if not athlete.get("id"):
        raise ValueError("Strava token response has no athlete")
    athlete_id = int(athlete["id"])

    user = find_by_athlete(session, athlete_id)
    if user is None:
        user = User(
            name=athlete.get("lastname") or "Strava",
            forename=athlete.get("firstname") or "User",
            email=f"{athlete_id}@strava.trackmyrun.local",
            username=f"strava_{athlete_id}",
            auth_type="strava",
            avatar=_avatar_from_athlete(athlete),
        )
        if not session.exec(select(func.count(User.id))).one():
            user.role = "admin"
        logger.info("Creating account for Strava athlete %s", athlete_id)

    store_token_response(user, token_data)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def connect_strava(session: Session, user: User, token_data: Dict[str, Any]) -> User:
    """Attach a Strava authorization to an existing account."""

    store_token_response(user, token_data)
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Connected Strava athlete %s to user %s", user.strava_athlete_id, user.id)
    return user


__all__ = ["connect_strava", "find_by_athlete", "login_with_strava"]
