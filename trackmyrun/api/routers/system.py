"""System-level API endpoints."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, bool]:
    """Simple readiness probe."""

    return {"ok": True}


@router.get("/api/ping")
def ping() -> Dict[str, str]:
    return {"message": "The server is running!"}


__all__ = ["router"]
