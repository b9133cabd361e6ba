# src/task_tracker/api/routes/tasks.py

"""Task CRUD and per-user statistics. Every route requires a bearer token."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...auth.tokens import TokenClaims
from ...core.errors import TaskTrackerError
from ...core.state import AppState
from ...tasks import task_api
from ..deps import current_user, get_state, http_error
from ..schemas import (
    ReminderPieResponse,
    ReminderSummaryResponse,
    TaskCreateRequest,
    TaskEditRequest,
    TaskFlagsRequest,
    TaskOut,
)

router = APIRouter(tags=["tasks"])


@router.get("/tasks", response_model=list[TaskOut])
def pending_tasks(
    claims: TokenClaims = Depends(current_user),
    state: AppState = Depends(get_state),
) -> list[TaskOut]:
    """Pending tasks (not completed, not hidden), newest first."""
    return [TaskOut.from_task(t) for t in task_api.list_pending_tasks(state, claims.user_id)]


@router.get("/taskschange", response_model=list[TaskOut])
def completed_tasks(
    claims: TokenClaims = Depends(current_user),
    state: AppState = Depends(get_state),
) -> list[TaskOut]:
    """Completed tasks that are still listed, newest first."""
    return [TaskOut.from_task(t) for t in task_api.list_completed_tasks(state, claims.user_id)]


@router.post("/tasks", response_model=TaskOut, status_code=201)
def create_task(
    request: TaskCreateRequest,
    claims: TokenClaims = Depends(current_user),
    state: AppState = Depends(get_state),
) -> TaskOut:
    try:
        task = task_api.create_task(
            state,
            claims.user_id,
            task=request.task,
            type=request.type,
            remindertime=request.remindertime,
            timeofentry=request.timeofentry,
            completestatus=request.completestatus,
            currentstatus=request.currentstatus,
        )
    except TaskTrackerError as exc:
        raise http_error(exc) from exc
    return TaskOut.from_task(task)


def _set_flags(state: AppState, claims: TokenClaims, task_id: int, request: TaskFlagsRequest) -> TaskOut:
    try:
        task = task_api.set_task_flags(
            state,
            claims.user_id,
            task_id,
            completestatus=request.completestatus,
            currentstatus=request.currentstatus,
        )
    except TaskTrackerError as exc:
        raise http_error(exc) from exc
    return TaskOut.from_task(task)


@router.patch("/tasks/{task_id}", response_model=TaskOut)
def mark_task(
    task_id: int,
    request: TaskFlagsRequest,
    claims: TokenClaims = Depends(current_user),
    state: AppState = Depends(get_state),
) -> TaskOut:
    """Mark a task done (or pending again)."""
    return _set_flags(state, claims, task_id, request)


@router.patch("/dtasks/{task_id}", response_model=TaskOut)
def hide_task(
    task_id: int,
    request: TaskFlagsRequest,
    claims: TokenClaims = Depends(current_user),
    state: AppState = Depends(get_state),
) -> TaskOut:
    """Archive a completed task (removes it from both lists)."""
    return _set_flags(state, claims, task_id, request)


@router.patch("/taskschange/{task_id}", response_model=TaskOut)
def undo_task(
    task_id: int,
    request: TaskFlagsRequest,
    claims: TokenClaims = Depends(current_user),
    state: AppState = Depends(get_state),
) -> TaskOut:
    """Move a completed task back to pending."""
    return _set_flags(state, claims, task_id, request)


@router.put("/tasks/{task_id}", response_model=TaskOut)
def edit_task(
    task_id: int,
    request: TaskEditRequest,
    claims: TokenClaims = Depends(current_user),
    state: AppState = Depends(get_state),
) -> TaskOut:
    try:
        task = task_api.edit_task(
            state,
            claims.user_id,
            task_id,
            editedtask=request.editedtask,
            editedtype=request.editedtype,
        )
    except TaskTrackerError as exc:
        raise http_error(exc) from exc
    return TaskOut.from_task(task)


@router.get("/reminders", response_model=ReminderSummaryResponse)
def reminders(
    claims: TokenClaims = Depends(current_user),
    state: AppState = Depends(get_state),
) -> ReminderSummaryResponse:
    return ReminderSummaryResponse(**task_api.reminder_summary(state, claims.user_id))


@router.get("/reminderspie", response_model=ReminderPieResponse)
def reminders_pie(
    claims: TokenClaims = Depends(current_user),
    state: AppState = Depends(get_state),
) -> ReminderPieResponse:
    return ReminderPieResponse(**task_api.archived_type_counts(state, claims.user_id))
