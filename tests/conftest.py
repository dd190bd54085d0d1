"""Shared fixtures: in-memory database, API client and data builders."""

import os

os.environ.setdefault("STRAVA_CLIENT_ID", "12345")
os.environ.setdefault("STRAVA_CLIENT_SECRET", "test-secret")
os.environ.setdefault("STRAVA_REDIRECT_URI", "http://localhost:3000/api/strava/callback")
os.environ.setdefault("SECRET_KEY", "test-signing-key")
os.environ.setdefault("FRONTEND_ORIGIN", "http://localhost:5173")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DB_RESET"] = "false"

import time  # noqa: E402
from datetime import datetime  # noqa: E402
from itertools import count  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from trackmyrun.app import app  # noqa: E402
from trackmyrun.core import engine  # noqa: E402
from trackmyrun.core.security import create_access_token  # noqa: E402
from trackmyrun.models import Activity, Gear, User  # noqa: E402

_ids = count(1000)


@pytest.fixture(autouse=True)
def reset_database():
    SQLModel.metadata.create_all(engine)
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session():
    with Session(engine) as db:
        yield db


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(session):
    def _make_user(**overrides) -> User:
        n = next(_ids)
        values = {
            "name": "Runner",
            "forename": "test",
            "email": f"runner{n}@example.com",
            "username": f"runner{n}",
        }
        values.update(overrides)
        user = User(**values)
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def strava_user(make_user):
    return make_user(
        strava_athlete_id=555,
        strava_access_token="access-abc",
        strava_refresh_token="refresh-abc",
        strava_token_expires_at=int(time.time()) + 6 * 3600,
        strava_connected=True,
    )


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def add_activity(session):
    def _add_activity(user_id: int, start: datetime, **overrides) -> Activity:
        values = {
            "user_id": user_id,
            "strava_id": next(_ids),
            "sport_type": "Run",
            "name": "Morning Run",
            "distance": 10000.0,
            "moving_time": 3000,
            "elapsed_time": 3100,
            "start_date": start,
            "start_date_local": start,
        }
        values.update(overrides)
        activity = Activity(**values)
        session.add(activity)
        session.commit()
        session.refresh(activity)
        return activity

    return _add_activity


@pytest.fixture
def add_gear(session):
    def _add_gear(user_id: int, **overrides) -> Gear:
        values = {
            "user_id": user_id,
            "strava_gear_id": f"g{next(_ids)}",
            "name": "Daily trainers",
            "gear_type": "shoes",
        }
        values.update(overrides)
        gear = Gear(**values)
        session.add(gear)
        session.commit()
        session.refresh(gear)
        return gear

    return _add_gear
