"""Database model for application users."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, event
from sqlmodel import Field as ORMField, SQLModel

from ..core.time import utcnow


class User(SQLModel, table=True):
    """Account record with optional Strava connection state."""

    id: Optional[int] = ORMField(default=None, primary_key=True)
    name: str
    forename: str
    email: str = ORMField(index=True, unique=True)
    username: str = ORMField(index=True, unique=True)
    role: str = ORMField(default="user")
    avatar: str = ""
    auth_type: str = ORMField(default="local")

    strava_athlete_id: Optional[int] = ORMField(default=None, sa_type=BigInteger, index=True)
    strava_access_token: Optional[str] = None
    strava_refresh_token: Optional[str] = None
    strava_token_expires_at: Optional[int] = None
    strava_connected: bool = False

    created_at: datetime = ORMField(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = ORMField(default_factory=utcnow, sa_type=DateTime(timezone=True))

    @property
    def fullname(self) -> str:
        return f"{self.name.upper()} {self.forename.capitalize()}"


@event.listens_for(User, "before_update")
def _touch(mapper, connection, target: User) -> None:
    target.updated_at = utcnow()


__all__ = ["User"]
