"""Bearer token issuance and verification."""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

from authlib.jose import JoseError, jwt

from .config import ACCESS_TOKEN_TTL_SECONDS, SECRET_KEY

ALGORITHM = "HS256"
STATE_TTL_SECONDS = 600


class InvalidTokenError(Exception):
    """Raised when a bearer token or OAuth state cannot be verified."""


def _encode(claims: Dict[str, Any], ttl: int) -> str:
    now = int(time.time())
    payload = {**claims, "iat": now, "exp": now + ttl}
    return jwt.encode({"alg": ALGORITHM}, payload, SECRET_KEY).decode("ascii")


def _decode(token: str) -> Dict[str, Any]:
    try:
        claims = jwt.decode(token, SECRET_KEY)
        claims.validate()
    except (JoseError, ValueError) as exc:
        raise InvalidTokenError(str(exc)) from exc
    return dict(claims)


def create_access_token(user_id: int, ttl: Optional[int] = None) -> str:
    """Issue a signed access token whose subject is ``user_id``."""

    return _encode({"sub": str(user_id)}, ttl or ACCESS_TOKEN_TTL_SECONDS)


def decode_access_token(token: str) -> int:
    """Return the user id carried by ``token``."""

    claims = _decode(token)
    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidTokenError("Token has no valid subject") from exc


def create_oauth_state(user_id: int) -> str:
    """Sign the OAuth ``state`` used to attach a Strava account to a user."""

    return _encode({"uid": user_id, "purpose": "strava_connect"}, STATE_TTL_SECONDS)


def decode_oauth_state(state: str) -> int:
    claims = _decode(state)
    if claims.get("purpose") != "strava_connect" or "uid" not in claims:
        raise InvalidTokenError("Unexpected state payload")
    return int(claims["uid"])


__all__ = [
    "InvalidTokenError",
    "create_access_token",
    "create_oauth_state",
    "decode_access_token",
    "decode_oauth_state",
]
