"""Core configuration and infrastructure helpers."""

from .config import (
    ACCESS_TOKEN_TTL_SECONDS,
    ALLOWED_CORS_ORIGINS,
    DB_RESET,
    DEFAULT_MAX_HR,
    FRONTEND_ORIGIN,
    FRONTEND_ORIGINS,
    LOG_LEVEL,
    SECRET_KEY,
    STRAVA_CLIENT_ID,
    STRAVA_CLIENT_SECRET,
    STRAVA_REDIRECT_URI,
    STRAVA_SCOPES,
    SYNC_MAX_ACTIVITIES,
    SYNC_PAGE_SIZE,
)
from .database import engine, get_session
from .logging_config import setup_logging
from .time import as_utc, naive_utc, parse_iso, utcnow

__all__ = [
    "ACCESS_TOKEN_TTL_SECONDS",
    "ALLOWED_CORS_ORIGINS",
    "DB_RESET",
    "DEFAULT_MAX_HR",
    "FRONTEND_ORIGIN",
    "FRONTEND_ORIGINS",
    "LOG_LEVEL",
    "SECRET_KEY",
    "STRAVA_CLIENT_ID",
    "STRAVA_CLIENT_SECRET",
    "STRAVA_REDIRECT_URI",
    "STRAVA_SCOPES",
    "SYNC_MAX_ACTIVITIES",
    "SYNC_PAGE_SIZE",
    "as_utc",
    "engine",
    "get_session",
    "naive_utc",
    "parse_iso",
    "setup_logging",
    "utcnow",
]
