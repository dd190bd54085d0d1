"""Domain services: Strava access, sync, aggregation and gear tracking."""

from . import accounts, analytics, gear, strava, sync, tokens
from .serializers import activity_to_dict, gear_to_dict, user_to_dict

__all__ = [
    "accounts",
    "activity_to_dict",
    "analytics",
    "gear",
    "gear_to_dict",
    "strava",
    "sync",
    "tokens",
    "user_to_dict",
]
