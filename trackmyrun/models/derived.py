"""Fields derived from raw activity data before it is persisted."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

from ..core.time import naive_utc

DEFAULT_HR_FACTOR = 0.7
REFERENCE_HR = 180


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_run(sport_type: Optional[str]) -> bool:
    return "run" in (sport_type or "").lower()


def compute_pace(
    sport_type: Optional[str], distance: Optional[float], moving_time: Optional[float]
) -> Optional[float]:
    """Minutes per kilometre for running activities, ``None`` otherwise."""

    if not is_run(sport_type) or not distance or distance <= 0:
        return None
    return ((moving_time or 0) / 60) / (distance / 1000)


def consistency_week(when: datetime) -> int:
    """Return the ``YYYYWW`` bucket used for consistency tracking.

    Weeks start on Sunday; week 1 is the (possibly partial) week containing
    January 1st.
    """

    day = naive_utc(when).date()
    jan1 = date(day.year, 1, 1)
    days_since_jan1 = (day - jan1).days
    jan1_weekday = (jan1.weekday() + 1) % 7
    return day.year * 100 + math.ceil((days_since_jan1 + jan1_weekday + 1) / 7)


def training_load_score(
    moving_time: Optional[float], average_heartrate: Optional[float]
) -> Optional[int]:
    if not moving_time or moving_time <= 0:
        return None
    hr_factor = average_heartrate / REFERENCE_HR if average_heartrate else DEFAULT_HR_FACTOR
    return round_half_up((moving_time / 60) * hr_factor)


def apply_derived_fields(activity) -> None:
    """Recompute pace, week bucket and training load on ``activity`` in place."""

    activity.pace = compute_pace(activity.sport_type, activity.distance, activity.moving_time)
    if activity.start_date is not None:
        activity.consistency_week = consistency_week(activity.start_date)
    activity.training_load_score = training_load_score(
        activity.moving_time, activity.average_heartrate
    )


__all__ = [
    "DEFAULT_HR_FACTOR",
    "apply_derived_fields",
    "compute_pace",
    "consistency_week",
    "is_run",
    "round_half_up",
    "training_load_score",
]
