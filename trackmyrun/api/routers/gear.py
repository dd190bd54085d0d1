"""Gear tracking endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlmodel import Session

from ...core import get_session
from ...models import User
from ...services import gear as gear_service
from ...services.serializers import gear_to_dict
from ..deps import get_current_user
from ..errors import failure_message

router = APIRouter(prefix="/api/gear", tags=["gear"])


class GearUpdate(BaseModel):
    name: Optional[str] = None
    distance_alert_threshold: Optional[float] = None
    retired: Optional[bool] = None


@router.get("")
def list_gear(user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    with failure_message("Failed to get gear"):
        return {"gear": [gear_to_dict(g) for g in gear_service.list_gear(session, user.id)]}


@router.post("/sync")
def sync_gear(user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    """Rebuild gear usage from stored activities."""

    with failure_message("Failed to sync gear"):
        gear_list = gear_service.sync_gear(session, user.id)
        return {
            "message": "Gear synced successfully",
            "gear": [gear_to_dict(g) for g in gear_list],
            "count": len(gear_list),
        }


@router.get("/stats")
def gear_stats(user: User = Depends(get_current_user), session: Session = Depends(get_session)):
    with failure_message("Failed to get gear stats"):
        return gear_service.gear_stats(session, user.id)


@router.patch("/{gear_id}")
def update_gear(
    gear_id: int,
    body: GearUpdate,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    with failure_message("Failed to update gear"):
        gear = gear_service.update_gear(
            session,
            user.id,
            gear_id,
            name=body.name,
            distance_alert_threshold=body.distance_alert_threshold,
            retired=body.retired,
        )
        if gear is None:
            raise HTTPException(404, "Gear not found")
        return {"gear": gear_to_dict(gear)}


__all__ = ["router"]
