# src/task_tracker/tasks/task_api.py

"""
Service functions behind the HTTP routes.

Each function takes the AppState, validates input, talks to the store and
raises core.errors exceptions; the routes only translate those to status codes.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from ..auth.passwords import MAX_PASSWORD_BYTES, hash_password, password_too_long, verify_password
from ..auth.tokens import TokenClaims, decode_token, issue_token
from ..core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from ..core.state import AppState
from .reminder_time import format_reminder_time, parse_reminder_time
from .task_models import Task, TaskState, TaskType, User

logger = logging.getLogger(__name__)


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _check_password_length(password: str) -> None:
    if password_too_long(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


# ---- accounts ----


def register_user(
    state: AppState,
    *,
    email: str | None,
    password: str | None,
    firstname: str | None,
    lastname: str | None,
) -> User:
    email_s = _clean(email).lower()
    first = _clean(firstname)
    last = _clean(lastname)
    if not email_s or not password or not first or not last:
        raise ValidationError("Email, password, firstname, and lastname are required")
    _check_password_length(password)

    if state.store.get_user_by_email(email_s) is not None:
        raise ConflictError("Email already registered")

    rounds = int(getattr(state.settings, "bcrypt_rounds", 10))
    user = state.store.add_user(
        email=email_s,
        password_hash=hash_password(password, rounds=rounds),
        firstname=first,
        lastname=last,
    )
    logger.info("Registered user id=%s email=%s", user.id, user.email)
    return user


def login(state: AppState, *, email: str | None, password: str | None) -> tuple[str, User]:
    """Returns (token, user). 404 for unknown email, 401 for a wrong password."""
    email_s = _clean(email).lower()
    if not email_s or not password:
        raise ValidationError("Email and password are required")
    _check_password_length(password)

    user = state.store.get_user_by_email(email_s)
    if user is None:
        raise NotFoundError("User not found")

    stored = state.store.get_password_hash(user.id)
    if not stored or not verify_password(password, stored):
        raise AuthError("Incorrect password", status_code=401)

    token = issue_token(
        user.id,
        user.email,
        secret=str(getattr(state.settings, "jwt_secret")),
        ttl_seconds=int(getattr(state.settings, "token_ttl_seconds", 7200)),
    )
    logger.info("User logged in id=%s", user.id)
    return token, user


def authenticate(state: AppState, authorization: str | None) -> TokenClaims:
    """Parse 'Bearer <token>'. 401 when absent, 403 when invalid or expired."""
    parts = (authorization or "").split()
    token = parts[1] if len(parts) >= 2 else None
    if not token:
        raise AuthError("Access denied: No token provided", status_code=401)
    return decode_token(token, secret=str(getattr(state.settings, "jwt_secret")))


def count_users(state: AppState) -> int:
    return state.store.count_users()


# ---- tasks ----


def create_task(
    state: AppState,
    user_id: int,
    *,
    task: str | None,
    type: str | None,
    remindertime: str | None,
    timeofentry: str | None = None,
    completestatus: bool | None = None,
    currentstatus: bool | None = None,
) -> Task:
    text = _clean(task)
    reminder = _clean(remindertime)
    if not text or not _clean(type) or not reminder:
        raise ValidationError("Task, type, and remindertime are required")

    try:
        task_type = TaskType.parse(type)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    try:
        remind_at = parse_reminder_time(reminder, state.tz)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    created = state.store.add_task(
        user_id=user_id,
        task=text,
        type=task_type.value,
        remindertime=reminder,
        remind_at=remind_at.timestamp(),
        timeofentry=_clean(timeofentry) or format_reminder_time(state.now()),
        completestatus=bool(completestatus),
        currentstatus=bool(currentstatus),
    )
    logger.info("Task created id=%s user_id=%s remind_at=%s", created.id, user_id, remind_at.isoformat())
    return created


def list_pending_tasks(state: AppState, user_id: int) -> list[Task]:
    return state.store.list_tasks(user_id, completestatus=False, currentstatus=False)


def list_completed_tasks(state: AppState, user_id: int) -> list[Task]:
    return state.store.list_tasks(user_id, completestatus=True, currentstatus=False)


def set_task_flags(
    state: AppState,
    user_id: int,
    task_id: int,
    *,
    completestatus: bool | None,
    currentstatus: bool | None,
) -> Task:
    """Mark done / archive / undo: all three are the same flag update."""
    updated = state.store.update_task_flags(
        task_id,
        user_id,
        completestatus=completestatus,
        currentstatus=currentstatus,
    )
    if updated is None:
        raise NotFoundError("Task not found or unauthorized")
    logger.info("Task %s -> %s", task_id, updated.state.value)
    return updated


def edit_task(
    state: AppState,
    user_id: int,
    task_id: int,
    *,
    editedtask: str | None,
    editedtype: str | None = None,
) -> Task:
    text = _clean(editedtask)
    if not text:
        raise ValidationError("Task content is required")

    new_type: str | None = None
    if _clean(editedtype):
        try:
            new_type = TaskType.parse(editedtype).value
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    updated = state.store.update_task_content(task_id, user_id, task=text, type=new_type)
    if updated is None:
        raise NotFoundError("Task not found or unauthorized")
    return updated


# ---- stats ----


def reminder_summary(state: AppState, user_id: int) -> dict[str, int]:
    tasks = state.store.list_user_tasks(user_id)
    pending = sum(1 for t in tasks if t.state is TaskState.PENDING)
    return {"count": len(tasks), "pendingcount": pending}


def archived_type_counts(state: AppState, user_id: int) -> dict[str, int]:
    """Per-type counts of archived tasks (feeds the pie chart)."""
    archived = state.store.list_tasks(user_id, completestatus=True, currentstatus=True)
    by_type = Counter(t.type for t in archived)
    return {
        "personalcount": by_type[TaskType.PERSONAL.value],
        "familycount": by_type[TaskType.FAMILY.value],
        "workcount": by_type[TaskType.WORK.value],
        "groupactivitycount": by_type[TaskType.GROUP_ACTIVITY.value],
    }
