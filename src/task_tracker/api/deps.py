# src/task_tracker/api/deps.py

from __future__ import annotations

from fastapi import Header, HTTPException, Request

from ..auth.tokens import TokenClaims
from ..core.errors import TaskTrackerError
from ..core.state import AppState
from ..tasks import task_api


def get_state(request: Request) -> AppState:
    return request.app.state.tracker


def http_error(exc: TaskTrackerError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


def current_user(request: Request, authorization: str | None = Header(default=None)) -> TokenClaims:
    """Bearer-token guard for task routes."""
    try:
        return task_api.authenticate(get_state(request), authorization)
    except TaskTrackerError as exc:
        raise http_error(exc) from exc
