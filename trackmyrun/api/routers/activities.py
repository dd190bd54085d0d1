"""Activity sync and analytics endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from ...core import DEFAULT_MAX_HR, get_session
from ...models import User
from ...services import analytics
from ...services.sync import sync_user_activities
from ...services.tokens import StravaNotConnectedError
from ..deps import get_current_user
from ..errors import failure_message

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.post("/sync")
async def sync_activities(
    user: User = Depends(get_current_user), session: Session = Depends(get_session)
) -> Dict[str, Any]:
    """Import the caller's Strava history."""

    if not user.strava_connected:
        raise HTTPException(400, "User is not connected to Strava")
    with failure_message("Failed to sync activities"):
        try:
            result = await sync_user_activities(session, user)
        except StravaNotConnectedError as exc:
            raise HTTPException(400, str(exc)) from exc
    return {"message": "Activities synced successfully", **result}


@router.get("")
def list_activities(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=200),
    sport_type: Optional[str] = None,
    year: Optional[int] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    with failure_message("Failed to get activities"):
        return analytics.list_activities(
            session,
            user.id,
            page=page,
            limit=limit,
            sport_type=sport_type,
            year=year,
            month=month,
        )


@router.get("/summary")
def summary(
    period: str = "all",
    year: Optional[int] = None,
    sport_type: Optional[str] = None,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    with failure_message("Failed to get summary"):
        return analytics.get_summary(
            session, user.id, period=period, year=year, sport_type=sport_type
        )


@router.get("/trends")
def trends(
    period: str = "month",
    sport_type: Optional[str] = None,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    with failure_message("Failed to get trends"):
        return analytics.get_trends(session, user.id, period=period, sport_type=sport_type)


@router.get("/personal-bests")
def personal_bests(
    sport_type: Optional[str] = None,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    with failure_message("Failed to get personal bests"):
        return analytics.get_personal_bests(session, user.id, sport_type=sport_type)


@router.get("/year-in-sport")
@router.get("/year-in-sport/{year}")
def year_in_sport(
    year: Optional[int] = None,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Yearly recap; defaults to the current year."""

    with failure_message("Failed to get year in sport"):
        return analytics.get_year_in_sport(session, user.id, year)


@router.get("/rolling-stats")
def rolling_stats(
    user: User = Depends(get_current_user), session: Session = Depends(get_session)
):
    with failure_message("Failed to get rolling stats"):
        return analytics.get_rolling_stats(session, user.id)


@router.get("/pace-analysis")
def pace_analysis(
    year: Optional[int] = None,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    with failure_message("Failed to get pace analysis"):
        return analytics.get_pace_analysis(session, user.id, year=year)


@router.get("/consistency")
def consistency(
    user: User = Depends(get_current_user), session: Session = Depends(get_session)
):
    with failure_message("Failed to get consistency"):
        return analytics.get_consistency(session, user.id)


@router.get("/training-load")
def training_load(
    user: User = Depends(get_current_user), session: Session = Depends(get_session)
):
    with failure_message("Failed to get training load"):
        return analytics.get_training_load(session, user.id)


@router.get("/kudos-analysis")
def kudos_analysis(
    year: Optional[int] = None,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    with failure_message("Failed to get kudos analysis"):
        return analytics.get_kudos_analysis(session, user.id, year=year)


@router.get("/hr-zones")
def hr_zones(
    year: Optional[int] = None,
    max_hr: int = Query(DEFAULT_MAX_HR, alias="maxHR", gt=0),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    with failure_message("Failed to get HR zones"):
        return analytics.get_hr_zones(session, user.id, year=year, max_hr=max_hr)


@router.get("/locations")
def locations(
    year: Optional[int] = None,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    with failure_message("Failed to get locations"):
        return analytics.get_locations(session, user.id, year=year)


@router.get("/comparisons")
def comparisons(
    user: User = Depends(get_current_user), session: Session = Depends(get_session)
):
    with failure_message("Failed to get comparisons"):
        return analytics.get_comparisons(session, user.id)


__all__ = ["router"]
