# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field

from task_tracker.core.ports import DeliveryResult, EmailMessage
from task_tracker.tasks.task_models import ReminderWindow, Task, User


@dataclass(slots=True)
class FakeMailer:
    """
    Recording EmailDispatcher.

    - reject: recipients that get a failure result
    - explode: recipients whose send raises (transport blew up)
    """

    sent: list[EmailMessage] = field(default_factory=list)
    attempts: list[str] = field(default_factory=list)
    reject: set[str] = field(default_factory=set)
    explode: set[str] = field(default_factory=set)

    def verify(self) -> bool:
        return True

    def send(self, message: EmailMessage) -> DeliveryResult:
        self.attempts.append(message.to_addr)
        if message.to_addr in self.explode:
            raise ConnectionError(f"connection reset while sending to {message.to_addr}")
        if message.to_addr in self.reject:
            return DeliveryResult.failure("550 mailbox unavailable")
        self.sent.append(message)
        return DeliveryResult.success()


class FakeReminderRepo:
    """
    In-memory ReminderSource used for scheduler unit tests.

    This avoids SQLite and makes tests purely about tick logic: window
    selection, owner resolution and failure isolation.
    """

    def __init__(self, tasks: list[Task], users: list[User], *, fail_queries: int = 0) -> None:
        self.tasks = list(tasks)
        self.users = {u.id: u for u in users}
        self.fail_queries = fail_queries
        self.queries = 0

    def find_due_tasks(self, window: ReminderWindow) -> list[Task]:
        self.queries += 1
        if self.fail_queries > 0:
            self.fail_queries -= 1
            raise RuntimeError("store unreachable")
        return [
            t
            for t in self.tasks
            if not t.completestatus
            and t.remind_at is not None
            and window.lower_ts <= t.remind_at <= window.upper_ts
        ]

    def resolve_owner(self, user_id: int) -> User | None:
        return self.users.get(user_id)


def make_task(
    task_id: int,
    *,
    user_id: int,
    remind_at: float | None,
    remindertime: str = "19/10/2026, 10:14:45 AM",
    text: str = "Call the plumber",
    type: str = "Personal",
    completestatus: bool = False,
    currentstatus: bool = False,
) -> Task:
    return Task(
        id=task_id,
        user_id=user_id,
        task=text,
        type=type,
        created_at=0.0,
        timeofentry=None,
        remindertime=remindertime,
        remind_at=remind_at,
        completestatus=completestatus,
        currentstatus=currentstatus,
    )
