# src/task_tracker/auth/tokens.py

from __future__ import annotations

import time
from dataclasses import dataclass

import jwt

from ..core.errors import AuthError

ALGORITHM = "HS256"


@dataclass(slots=True, frozen=True)
class TokenClaims:
    user_id: int
    email: str


def issue_token(user_id: int, email: str, *, secret: str, ttl_seconds: int = 7200) -> str:
    now = int(time.time())
    payload = {
        "userId": int(user_id),
        "email": email,
        "iat": now,
        "exp": now + int(ttl_seconds),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_token(token: str, *, secret: str) -> TokenClaims:
    """Validate signature + expiry. Raises AuthError(403) on any problem."""
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as exc:
        raise AuthError("Invalid or expired token", status_code=403) from exc

    try:
        return TokenClaims(user_id=int(payload["userId"]), email=str(payload["email"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise AuthError("Invalid or expired token", status_code=403) from exc
