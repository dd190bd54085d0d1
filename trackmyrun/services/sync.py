"""Import Strava activities into the activity store."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlmodel import Session, select

from ..core import SYNC_MAX_ACTIVITIES, SYNC_PAGE_SIZE, as_utc, parse_iso
from ..models import Activity, User
from . import strava
from .tokens import get_valid_access_token

logger = logging.getLogger(__name__)


def _to_storage(value: Optional[str]) -> Optional[datetime]:
    parsed = parse_iso(value)
    return as_utc(parsed) if parsed else None


def _latlng(value: Any) -> Optional[List[float]]:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return [float(value[0]), float(value[1])]
    return None


def transform_strava_activity(payload: Dict[str, Any], user_id: int) -> Dict[str, Any]:
    """Map a Strava activity summary onto :class:`Activity` column values."""

    start_date = _to_storage(payload.get("start_date"))
    # start_date_local carries a fake "Z"; keep the wall-clock value as-is.
    start_date_local = _to_storage(payload.get("start_date_local")) or start_date
    return {
        "user_id": user_id,
        "strava_id": int(payload["id"]),
        "sport_type": payload.get("sport_type") or payload.get("type") or "Workout",
        "name": payload.get("name") or f"Activity {payload['id']}",
        "distance": payload.get("distance") or 0.0,
        "moving_time": payload.get("moving_time") or 0,
        "elapsed_time": payload.get("elapsed_time") or 0,
        "total_elevation_gain": payload.get("total_elevation_gain") or 0.0,
        "start_date": start_date,
        "start_date_local": start_date_local,
        "timezone": payload.get("timezone"),
        "average_speed": payload.get("average_speed"),
        "max_speed": payload.get("max_speed"),
        "average_heartrate": payload.get("average_heartrate"),
        "max_heartrate": payload.get("max_heartrate"),
        "has_heartrate": bool(payload.get("has_heartrate", False)),
        "average_cadence": payload.get("average_cadence"),
        "kudos_count": payload.get("kudos_count") or 0,
        "achievement_count": payload.get("achievement_count") or 0,
        "suffer_score": payload.get("suffer_score"),
        "calories": payload.get("calories"),
        "gear_id": payload.get("gear_id"),
        "start_latlng": _latlng(payload.get("start_latlng")),
        "end_latlng": _latlng(payload.get("end_latlng")),
        "manual": bool(payload.get("manual", False)),
        "visibility": payload.get("visibility") or "everyone",
    }


def upsert_activity(session: Session, values: Dict[str, Any]) -> bool:
    """Insert or overwrite the activity with ``values["strava_id"]``.

    Returns True when a new row was created.
    """

    existing = session.exec(
        select(Activity).where(Activity.strava_id == values["strava_id"])
    ).first()
    if existing is None:
        session.add(Activity(**values))
        session.flush()
        return True

    for key, value in values.items():
        setattr(existing, key, value)
    session.add(existing)
    session.flush()
    return False


async def iter_activity_pages(
    access_token: str,
    *,
    per_page: int = SYNC_PAGE_SIZE,
    limit: int = SYNC_MAX_ACTIVITIES,
) -> AsyncIterator[List[Dict[str, Any]]]:
    """Yield the athlete's activities page by page until an empty page or ``limit``."""

    fetched = 0
    page = 1
    while True:
        batch = await strava.get_athlete_activities(access_token, page=page, per_page=per_page)
        if not batch:
            break
        fetched += len(batch)
        logger.info("Fetched Strava page %s (%s activities, %s total)", page, len(batch), fetched)
        yield batch
        if fetched >= limit:
            break
        page += 1


async def sync_user_activities(session: Session, user: User) -> Dict[str, int]:
    """Pull the user's Strava history and upsert it on ``strava_id``.

    Each page is committed once it is stored, so a failure on a later page
    keeps what was already imported.
    """

    access_token = await get_valid_access_token(user, session)

    synced = 0
    updated = 0
    total = 0
    async for batch in iter_activity_pages(access_token):
        for payload in batch:
            if upsert_activity(session, transform_strava_activity(payload, user.id)):
                synced += 1
            else:
                updated += 1
        session.commit()
        total += len(batch)

    logger.info(
        "Synced activities for user %s: %s new, %s updated, %s fetched",
        user.id,
        synced,
        updated,
        total,
    )
    return {"synced": synced, "updated": updated, "total": total}


__all__ = [
    "iter_activity_pages",
    "sync_user_activities",
    "transform_strava_activity",
    "upsert_activity",
]
