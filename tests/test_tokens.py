import time
from unittest.mock import AsyncMock, patch

import pytest

from trackmyrun.services.strava import StravaApiError
from trackmyrun.services.tokens import (
    StravaNotConnectedError,
    clear_tokens,
    get_valid_access_token,
    store_token_response,
)


@pytest.mark.asyncio
async def test_missing_tokens_raise(session, user):
    with pytest.raises(StravaNotConnectedError):
        await get_valid_access_token(user, session)


@pytest.mark.asyncio
async def test_fresh_token_is_reused(session, strava_user):
    with patch("trackmyrun.services.strava.refresh_access_token", AsyncMock()) as refresh:
        token = await get_valid_access_token(strava_user, session)

    assert token == "access-abc"
    refresh.assert_not_awaited()


@pytest.mark.asyncio
async def test_token_expiring_within_margin_is_refreshed(session, strava_user):
    strava_user.strava_token_expires_at = int(time.time()) + 120
    session.add(strava_user)
    session.commit()

    new_expiry = int(time.time()) + 21600
    refreshed = {"access_token": "access-new", "refresh_token": "refresh-new", "expires_at": new_expiry}
    with patch(
        "trackmyrun.services.strava.refresh_access_token", AsyncMock(return_value=refreshed)
    ) as refresh:
        token = await get_valid_access_token(strava_user, session)

    refresh.assert_awaited_once_with("refresh-abc")
    assert token == "access-new"
    session.expire_all()
    assert strava_user.strava_refresh_token == "refresh-new"
    assert strava_user.strava_token_expires_at == new_expiry


@pytest.mark.asyncio
async def test_refresh_failure_propagates(session, strava_user):
    strava_user.strava_token_expires_at = int(time.time()) - 10
    with patch(
        "trackmyrun.services.strava.refresh_access_token",
        AsyncMock(side_effect=StravaApiError(401, "invalid refresh token")),
    ):
        with pytest.raises(StravaApiError):
            await get_valid_access_token(strava_user, session)


def test_store_and_clear_tokens(user):
    store_token_response(
        user,
        {"access_token": "a", "refresh_token": "r", "expires_at": 123, "athlete": {"id": 987}},
    )
    assert user.strava_connected is True
    assert user.strava_athlete_id == 987

    clear_tokens(user)
    assert user.strava_connected is False
    assert user.strava_access_token is None
    assert user.strava_athlete_id is None
