"""Gear usage derived from the activity store."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlmodel import Session, func, select

from ..core.time import as_utc
from ..models import Activity, Gear
from ..models.derived import round_half_up
from .serializers import gear_to_dict

logger = logging.getLogger(__name__)


def infer_gear_type(strava_gear_id: str) -> str:
    """Strava prefixes bike ids with ``b`` and shoe ids with ``g``."""

    if strava_gear_id.startswith("b"):
        return "bike"
    if strava_gear_id.startswith("g"):
        return "shoes"
    return "other"


def list_gear(session: Session, user_id: int) -> List[Gear]:
    return list(
        session.exec(
            select(Gear).where(Gear.user_id == user_id).order_by(Gear.distance.desc())
        ).all()
    )


def sync_gear(session: Session, user_id: int) -> List[Gear]:
    """Recalculate usage for every gear id referenced by the user's activities."""

    stmt = (
        select(
            Activity.gear_id,
            func.coalesce(func.sum(Activity.distance), 0),
            func.coalesce(func.sum(Activity.moving_time), 0),
            func.count(Activity.id),
            func.avg(Activity.pace),
            func.min(Activity.start_date),
            func.max(Activity.start_date),
        )
        .where(Activity.user_id == user_id, Activity.gear_id.is_not(None))
        .group_by(Activity.gear_id)
    )

    for gear_id, distance, moving_time, count, avg_pace, first, last in session.exec(stmt).all():
        gear = session.exec(
            select(Gear).where(Gear.user_id == user_id, Gear.strava_gear_id == gear_id)
        ).first()
        if gear is None:
            gear = Gear(user_id=user_id, strava_gear_id=gear_id, name=f"Gear {gear_id}")
        gear.gear_type = infer_gear_type(gear_id)
        gear.distance = float(distance)
        gear.total_time = int(moving_time)
        gear.total_activities = count
        gear.average_pace = float(avg_pace) if avg_pace is not None else None
        gear.first_activity_date = as_utc(first) if first else None
        gear.last_activity_date = as_utc(last) if last else None
        session.add(gear)

    session.commit()
    gear_list = list_gear(session, user_id)
    logger.info("Synced %s gear items for user %s", len(gear_list), user_id)
    return gear_list


def gear_stats(session: Session, user_id: int) -> Dict[str, Any]:
    """Summary over the user's active (non-retired) gear."""

    gear_list = list(
        session.exec(
            select(Gear).where(Gear.user_id == user_id, Gear.retired == False)  # noqa: E712
        ).all()
    )
    most_used: Optional[Gear] = max(gear_list, key=lambda g: g.distance, default=None)
    total_distance = sum(g.distance or 0 for g in gear_list)
    return {
        "totalGear": len(gear_list),
        "shoesCount": sum(1 for g in gear_list if g.gear_type == "shoes"),
        "bikesCount": sum(1 for g in gear_list if g.gear_type == "bike"),
        "needingReplacement": sum(1 for g in gear_list if g.needs_replacement),
        "mostUsed": (
            {"name": most_used.name, "distance_km": round_half_up(most_used.distance / 1000)}
            if most_used
            else None
        ),
        "totalDistance_km": round_half_up(total_distance / 1000),
        "gear": [gear_to_dict(g) for g in gear_list],
    }


def update_gear(
    session: Session,
    user_id: int,
    gear_id: int,
    *,
    name: Optional[str] = None,
    distance_alert_threshold: Optional[float] = None,
    retired: Optional[bool] = None,
) -> Optional[Gear]:
    """Apply user edits; returns ``None`` when the gear is not the user's."""

    gear = session.get(Gear, gear_id)
    if gear is None or gear.user_id != user_id:
        return None
    if name:
        gear.name = name
    if distance_alert_threshold:
        gear.distance_alert_threshold = distance_alert_threshold
    if retired is not None:
        gear.retired = retired
    session.add(gear)
    session.commit()
    session.refresh(gear)
    return gear


__all__ = ["gear_stats", "infer_gear_type", "list_gear", "sync_gear", "update_gear"]
