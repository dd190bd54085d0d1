from datetime import datetime
from unittest.mock import AsyncMock, patch

from trackmyrun.core.security import create_access_token


def _headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


def test_health_and_ping(client):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/api/ping").json() == {"message": "The server is running!"}


def test_unknown_route_returns_error_body(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "The requested route /api/nothing-here was not found"}


def test_requires_bearer_token(client):
    response = client.get("/api/activities/summary")
    assert response.status_code == 401
    assert response.json() == {"error": "User not authenticated"}


def test_rejects_invalid_token(client):
    response = client.get(
        "/api/activities/summary", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "User not authenticated"}


def test_rejects_token_for_unknown_user(client):
    response = client.get("/api/activities/summary", headers={"Authorization": f"Bearer {create_access_token(99999)}"})
    assert response.status_code == 401


def test_list_and_summary(client, user, auth_headers, add_activity):
    add_activity(user.id, datetime(2025, 4, 2), name="Intervals")

    listing = client.get("/api/activities", headers=auth_headers).json()
    assert listing["pagination"]["total"] == 1
    assert listing["activities"][0]["name"] == "Intervals"
    assert listing["activities"][0]["start_date"] == "2025-04-02T00:00:00Z"

    summary = client.get("/api/activities/summary", headers=auth_headers).json()
    assert summary["summary"]["total_activities"] == 1
    assert summary["sportBreakdown"][0]["_id"] == "Run"


def test_activities_are_scoped_to_caller(client, make_user, add_activity):
    alice = make_user()
    bob = make_user()
    add_activity(alice.id, datetime(2025, 4, 2))

    listing = client.get("/api/activities", headers=_headers(bob)).json()
    assert listing["activities"] == []


def test_analytics_endpoints_respond(client, user, auth_headers, add_activity):
    add_activity(user.id, datetime(2025, 4, 2), average_heartrate=150.0, start_latlng=[1.0, 2.0])

    for path in (
        "/api/activities/trends?period=week",
        "/api/activities/personal-bests",
        "/api/activities/year-in-sport",
        "/api/activities/year-in-sport/2025",
        "/api/activities/rolling-stats",
        "/api/activities/pace-analysis?year=2025",
        "/api/activities/consistency",
        "/api/activities/training-load",
        "/api/activities/kudos-analysis",
        "/api/activities/locations",
        "/api/activities/comparisons",
    ):
        response = client.get(path, headers=auth_headers)
        assert response.status_code == 200, path


def test_hr_zones_accepts_max_hr(client, user, auth_headers, add_activity):
    add_activity(user.id, datetime(2025, 4, 2), average_heartrate=150.0)

    body = client.get("/api/activities/hr-zones?maxHR=200", headers=auth_headers).json()
    assert body["maxHRUsed"] == 200
    assert body["zones"][2]["activities"] == 1

    default = client.get("/api/activities/hr-zones", headers=auth_headers).json()
    assert default["maxHRUsed"] == 190


def test_endpoint_failure_returns_500(client, auth_headers):
    with patch(
        "trackmyrun.services.analytics.get_summary", side_effect=RuntimeError("boom")
    ):
        response = client.get("/api/activities/summary", headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to get summary"}


def test_validation_error_uses_error_body(client, auth_headers):
    response = client.get("/api/activities?page=0", headers=auth_headers)
    assert response.status_code == 422
    assert "error" in response.json()


def test_sync_requires_connection(client, auth_headers):
    response = client.post("/api/activities/sync", headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "User is not connected to Strava"}


def test_sync_reports_counts(client, strava_user):
    with patch(
        "trackmyrun.api.routers.activities.sync_user_activities",
        AsyncMock(return_value={"synced": 4, "updated": 1, "total": 5}),
    ):
        response = client.post("/api/activities/sync", headers=_headers(strava_user))

    assert response.status_code == 200
    assert response.json() == {
        "message": "Activities synced successfully",
        "synced": 4,
        "updated": 1,
        "total": 5,
    }


def test_sync_stores_strava_activities(client, session, strava_user):
    from sqlmodel import select

    from trackmyrun.models import Activity

    def run(strava_id, name):
        return {
            "id": strava_id,
            "name": name,
            "sport_type": "Run",
            "distance": 5000.0,
            "moving_time": 1500,
            "start_date": "2025-06-01T07:00:00Z",
            "start_date_local": "2025-06-01T09:00:00Z",
        }

    pages = [[run(1, "Easy"), run(2, "Tempo"), run(1, "Easy again")], []]
    with patch(
        "trackmyrun.services.strava.get_athlete_activities", AsyncMock(side_effect=pages)
    ):
        response = client.post("/api/activities/sync", headers=_headers(strava_user))

    assert response.status_code == 200
    assert response.json()["synced"] == 2
    assert response.json()["updated"] == 1
    assert len(session.exec(select(Activity)).all()) == 2

    listing = client.get("/api/activities", headers=_headers(strava_user)).json()
    assert listing["activities"][0]["start_date"] == "2025-06-01T07:00:00Z"


def test_sync_strava_failure_returns_500(client, strava_user):
    from trackmyrun.services.strava import StravaApiError

    with patch(
        "trackmyrun.services.strava.get_athlete_activities",
        AsyncMock(side_effect=StravaApiError(503, "unavailable")),
    ):
        response = client.post("/api/activities/sync", headers=_headers(strava_user))

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to sync activities"}


def test_gear_endpoints(client, user, auth_headers, add_activity):
    add_activity(user.id, datetime(2025, 4, 2), gear_id="g1", distance=820_000.0)

    synced = client.post("/api/gear/sync", headers=auth_headers).json()
    assert synced["count"] == 1
    assert synced["gear"][0]["distance_km"] == 820
    assert synced["gear"][0]["needs_replacement"] is True

    listing = client.get("/api/gear", headers=auth_headers).json()
    gear_id = listing["gear"][0]["id"]

    stats = client.get("/api/gear/stats", headers=auth_headers).json()
    assert stats["needingReplacement"] == 1
    assert stats["shoesCount"] == 1

    updated = client.patch(
        f"/api/gear/{gear_id}", json={"name": "Old faithful", "retired": True}, headers=auth_headers
    ).json()
    assert updated["gear"]["name"] == "Old faithful"
    assert updated["gear"]["retired"] is True


def test_gear_update_of_foreign_gear_is_404(client, make_user, add_gear):
    owner = make_user()
    intruder = make_user()
    gear = add_gear(owner.id)

    response = client.patch(f"/api/gear/{gear.id}", json={"name": "Mine now"}, headers=_headers(intruder))
    assert response.status_code == 404
    assert response.json() == {"error": "Gear not found"}
