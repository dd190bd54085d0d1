"""Database model for tracked equipment."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint, event
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow

DEFAULT_ALERT_THRESHOLD_M = 800_000


class Gear(SQLModel, table=True):
    """Shoes, bikes and other equipment referenced by activities."""

    __table_args__ = (UniqueConstraint("user_id", "strava_gear_id"),)

    id: Optional[int] = ORMField(default=None, primary_key=True)
    user_id: int = ORMField(foreign_key="user.id", index=True)
    strava_gear_id: str = ORMField(index=True)
    name: str
    brand_name: Optional[str] = None
    model_name: Optional[str] = None
    gear_type: str = "other"
    distance: float = 0.0
    retired: bool = False

    total_activities: int = 0
    total_time: int = 0
    average_pace: Optional[float] = None
    first_activity_date: Optional[datetime] = ORMField(default=None, sa_type=DateTime(timezone=True))
    last_activity_date: Optional[datetime] = ORMField(default=None, sa_type=DateTime(timezone=True))

    distance_alert_threshold: Optional[float] = DEFAULT_ALERT_THRESHOLD_M
    needs_replacement: bool = False

    created_at: datetime = ORMField(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = ORMField(default_factory=utcnow, sa_type=DateTime(timezone=True))


def flag_replacement(gear: Gear) -> None:
    """Raise the replacement flag once distance reaches the alert threshold.

    The flag is never cleared here; retiring or editing the gear is up to the user.
    """

    if gear.distance_alert_threshold and gear.distance >= gear.distance_alert_threshold:
        gear.needs_replacement = True


@event.listens_for(Gear, "before_insert")
@event.listens_for(Gear, "before_update")
def _check_replacement(mapper, connection, target: Gear) -> None:
    flag_replacement(target)


@event.listens_for(Gear, "before_update")
def _touch(mapper, connection, target: Gear) -> None:
    target.updated_at = utcnow()


__all__ = ["DEFAULT_ALERT_THRESHOLD_M", "Gear", "flag_replacement"]
