"""Aggregate API routers."""

from fastapi import APIRouter

from .activities import router as activities_router
from .auth import router as auth_router
from .gear import router as gear_router
from .strava import router as strava_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    auth_router,
    strava_router,
    activities_router,
    gear_router,
)

__all__ = ["ALL_ROUTERS"]
