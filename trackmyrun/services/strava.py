"""Strava OAuth and REST client."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from ..core import (
    STRAVA_CLIENT_ID,
    STRAVA_CLIENT_SECRET,
    STRAVA_REDIRECT_URI,
    STRAVA_SCOPES,
)

logger = logging.getLogger(__name__)

AUTH_BASE = "https://www.strava.com/oauth/authorize"
TOKEN_URL = "https://www.strava.com/oauth/token"
API_BASE = "https://www.strava.com/api/v3"

TOKEN_TIMEOUT = 20
API_TIMEOUT = 30


class StravaApiError(Exception):
    """Non-OK response from a Strava endpoint."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"Strava API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def auth_url(state: str) -> str:
    """Generate Strava OAuth authorization URL."""

    params = {
        "client_id": STRAVA_CLIENT_ID,
        "redirect_uri": STRAVA_REDIRECT_URI,
        "response_type": "code",
        "approval_prompt": "auto",
        "scope": STRAVA_SCOPES,
        "state": state,
    }
    return f"{AUTH_BASE}?{urlencode(params)}"


def _raise_for_status(response: httpx.Response) -> None:
    if response.status_code >= 400:
        raise StravaApiError(response.status_code, response.text)


async def _post_token(data: Dict[str, Any]) -> Dict[str, Any]:
    async with httpx.AsyncClient(timeout=TOKEN_TIMEOUT) as client:
        response = await client.post(
            TOKEN_URL,
            data={
                "client_id": STRAVA_CLIENT_ID,
                "client_secret": STRAVA_CLIENT_SECRET,
                **data,
            },
        )
    _raise_for_status(response)
    return response.json()


async def exchange_code_for_token(code: str) -> Dict[str, Any]:
    return await _post_token({"code": code, "grant_type": "authorization_code"})


async def refresh_access_token(refresh_token: str) -> Dict[str, Any]:
    return await _post_token(
        {"grant_type": "refresh_token", "refresh_token": refresh_token}
    )


async def api_get(
    access_token: str, path: str, params: Optional[Dict[str, Any]] = None
) -> Any:
    url = f"{API_BASE}{path}"
    async with httpx.AsyncClient(timeout=API_TIMEOUT) as client:
        response = await client.get(
            url,
            headers={"Authorization": f"Bearer {access_token}"},
            params=params or {},
        )
    _raise_for_status(response)
    return response.json()


async def get_athlete_activities(
    access_token: str,
    *,
    page: int = 1,
    per_page: int = 100,
    before: Optional[int] = None,
    after: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """Fetch one page of the athlete's activity summaries."""

    params: Dict[str, Any] = {"page": page, "per_page": per_page}
    if before:
        params["before"] = before
    if after:
        params["after"] = after
    logger.debug("Fetching Strava activities page=%s per_page=%s", page, per_page)
    return await api_get(access_token, "/athlete/activities", params=params)


__all__ = [
    "StravaApiError",
    "api_get",
    "auth_url",
    "exchange_code_for_token",
    "get_athlete_activities",
    "refresh_access_token",
]
