"""Database model for synced workouts."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, BigInteger, Column, DateTime, Index, event
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import as_utc, utcnow
from .derived import apply_derived_fields


class Activity(SQLModel, table=True):
    """One workout imported from Strava, keyed by its Strava id."""

    __table_args__ = (
        Index("ix_activity_user_start", "user_id", "start_date"),
        Index("ix_activity_user_sport_start", "user_id", "sport_type", "start_date"),
        Index("ix_activity_user_gear", "user_id", "gear_id"),
        Index("ix_activity_user_week", "user_id", "consistency_week"),
    )

    id: Optional[int] = ORMField(default=None, primary_key=True)
    user_id: int = ORMField(foreign_key="user.id", index=True)
    strava_id: int = ORMField(sa_type=BigInteger, unique=True, index=True)
    sport_type: str = ORMField(index=True)
    name: str
    distance: float = 0.0
    moving_time: int = 0
    elapsed_time: int = 0
    total_elevation_gain: float = 0.0
    start_date: datetime = ORMField(sa_type=DateTime(timezone=True), index=True)
    start_date_local: datetime = ORMField(sa_type=DateTime(timezone=True))
    timezone: Optional[str] = None

    average_speed: Optional[float] = None
    max_speed: Optional[float] = None
    pace: Optional[float] = None

    average_heartrate: Optional[float] = None
    max_heartrate: Optional[float] = None
    has_heartrate: bool = False

    average_cadence: Optional[float] = None

    suffer_score: Optional[float] = None
    calories: Optional[float] = None

    kudos_count: int = 0
    achievement_count: int = 0

    gear_id: Optional[str] = ORMField(default=None, index=True)

    start_latlng: Optional[List[float]] = ORMField(
        default=None, sa_column=Column(JSON(none_as_null=True))
    )
    end_latlng: Optional[List[float]] = ORMField(
        default=None, sa_column=Column(JSON(none_as_null=True))
    )

    manual: bool = False
    visibility: str = "everyone"

    consistency_week: Optional[int] = ORMField(default=None, index=True)
    training_load_score: Optional[int] = None

    created_at: datetime = ORMField(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = ORMField(default_factory=utcnow, sa_type=DateTime(timezone=True))


@event.listens_for(Activity, "before_insert")
@event.listens_for(Activity, "before_update")
def _recompute_derived_fields(mapper, connection, target: Activity) -> None:
    # Timestamps are kept as aware UTC; naive input is read as UTC.
    target.start_date = as_utc(target.start_date)
    target.start_date_local = as_utc(target.start_date_local)
    apply_derived_fields(target)


@event.listens_for(Activity, "before_update")
def _touch(mapper, connection, target: Activity) -> None:
    target.updated_at = utcnow()


__all__ = ["Activity"]
