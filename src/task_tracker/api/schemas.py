# src/task_tracker/api/schemas.py

"""Request and response models for the HTTP API.

Field names follow the stored columns (completestatus, remindertime, ...) so
the existing frontend keeps working unchanged. Required-field checks happen in
the service layer so missing fields produce the 400 messages the frontend expects.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ..tasks.reminder_scheduler import TickReport
from ..tasks.task_models import Task, User


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    firstname: Optional[str] = None
    lastname: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    id: int
    email: str
    firstname: str
    lastname: str

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(id=user.id, email=user.email, firstname=user.firstname, lastname=user.lastname)


class RegisterResponse(BaseModel):
    status: str = "success"
    message: str = "User registered successfully"
    user: UserOut


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Logged in successfully"
    token: str
    firstname: str
    lastname: str


class TaskCreateRequest(BaseModel):
    task: Optional[str] = None
    type: Optional[str] = None
    timeofentry: Optional[str] = None
    remindertime: Optional[str] = None
    completestatus: Optional[bool] = False
    currentstatus: Optional[bool] = False


class TaskFlagsRequest(BaseModel):
    completestatus: Optional[bool] = None
    currentstatus: Optional[bool] = None


class TaskEditRequest(BaseModel):
    editedtask: Optional[str] = None
    editedtype: Optional[str] = None


class TaskOut(BaseModel):
    id: int
    user_id: int
    task: str
    type: str
    timeofentry: Optional[str] = None
    remindertime: str
    completestatus: bool
    currentstatus: bool

    @classmethod
    def from_task(cls, task: Task) -> "TaskOut":
        return cls(**task.as_dict())


class ReminderSummaryResponse(BaseModel):
    count: int
    pendingcount: int


class ReminderPieResponse(BaseModel):
    personalcount: int
    familycount: int
    workcount: int
    groupactivitycount: int


class UserCountResponse(BaseModel):
    usercount: int


class TickReportOut(BaseModel):
    matched: int
    sent: int
    failed: int
    skipped: int
    aborted: bool

    @classmethod
    def from_report(cls, report: TickReport) -> "TickReportOut":
        return cls(
            matched=report.matched,
            sent=report.sent,
            failed=report.failed,
            skipped=report.skipped,
            aborted=report.aborted,
        )


class HealthResponse(BaseModel):
    status: str = "ok"
    last_reminder_tick: Optional[str] = None
    last_reminder_report: Optional[TickReportOut] = None
