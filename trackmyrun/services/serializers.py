"""Serialise models to API-friendly dicts."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from ..core.time import naive_utc
from ..models import Activity, Gear, User
from ..models.derived import round_half_up

_USER_PRIVATE_FIELDS = {
    "strava_access_token",
    "strava_refresh_token",
    "strava_token_expires_at",
}


def isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    # Stored values are UTC; SQLite hands them back naive.
    return naive_utc(value).isoformat() + "Z"


def format_duration(seconds: int) -> str:
    hours, remainder = divmod(int(seconds or 0), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {secs}s"


def _dump(model, exclude: Iterable[str] = ()) -> Dict[str, Any]:
    data = model.model_dump(exclude=set(exclude))
    return {
        key: isoformat(value) if isinstance(value, datetime) else value
        for key, value in data.items()
    }


def activity_to_dict(activity: Activity) -> Dict[str, Any]:
    data = _dump(activity)
    data["distance_km"] = f"{(activity.distance or 0) / 1000:.2f}"
    data["duration_formatted"] = format_duration(activity.moving_time)
    return data


def gear_to_dict(gear: Gear) -> Dict[str, Any]:
    data = _dump(gear)
    data["distance_km"] = round_half_up((gear.distance or 0) / 1000)
    return data


def user_to_dict(user: User) -> Dict[str, Any]:
    data = _dump(user, exclude=_USER_PRIVATE_FIELDS)
    data["fullname"] = user.fullname
    return data


__all__ = [
    "activity_to_dict",
    "format_duration",
    "gear_to_dict",
    "isoformat",
    "user_to_dict",
]
