# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The scheduler depends on Protocols instead of concrete implementations.
This keeps storage and mail transport swappable and makes testing easier.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

Clock = Callable[[], datetime]
# Returns an aware "now"; injected so ticks can be driven with synthetic times.


@dataclass(slots=True, frozen=True)
class EmailMessage:
    from_addr: str
    to_addr: str
    subject: str
    body: str


@dataclass(slots=True, frozen=True)
class DeliveryResult:
    ok: bool
    reason: str | None = None

    @classmethod
    def success(cls) -> DeliveryResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> DeliveryResult:
        return cls(ok=False, reason=reason)


class EmailDispatcher(Protocol):
    """
    Outbound mail port.

    send() is synchronous from the caller's viewpoint and reports the outcome
    instead of raising; callers still guard against unexpected exceptions.
    """

    def send(self, message: EmailMessage) -> DeliveryResult: ...
    def verify(self) -> bool: ...


class ReminderSource(Protocol):
    """The slice of the task store the reminder scheduler needs."""

    def find_due_tasks(self, window: Any) -> list[Any]: ...
    def resolve_owner(self, user_id: int) -> Any | None: ...


class TaskRepo(ReminderSource, Protocol):
    def close(self) -> None: ...

    # Users
    def add_user(self, *, email: str, password_hash: str, firstname: str, lastname: str) -> Any: ...
    def get_user_by_email(self, email: str) -> Any | None: ...
    def get_password_hash(self, user_id: int) -> str | None: ...
    def count_users(self) -> int: ...

    # Tasks
    def add_task(
            self,
            *,
            user_id: int,
            task: str,
            type: str,
            remindertime: str,
            remind_at: float | None,
            timeofentry: str | None = None,
            completestatus: bool = False,
            currentstatus: bool = False,
    ) -> Any: ...
    def list_tasks(self, user_id: int, *, completestatus: bool, currentstatus: bool) -> list[Any]: ...
    def list_user_tasks(self, user_id: int) -> list[Any]: ...
    def update_task_flags(
            self,
            task_id: int,
            user_id: int,
            *,
            completestatus: bool | None = None,
            currentstatus: bool | None = None,
    ) -> Any | None: ...
    def update_task_content(
            self, task_id: int, user_id: int, *, task: str, type: str | None = None
    ) -> Any | None: ...
