# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum


class TaskType(StrEnum):
    """Task category as shown in the UI (values are stored verbatim)."""

    PERSONAL = "Personal"
    WORK = "Work"
    FAMILY = "Family"
    GROUP_ACTIVITY = "Group Activity"

    @classmethod
    def parse(cls, raw: str | None) -> TaskType:
        value = (raw or "").strip()
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(f"Unknown task type: {raw!r}")


class TaskState(StrEnum):
    """
    Soft state derived from the two stored flags.

    Tasks are never deleted:
    - pending:   completestatus=False, currentstatus=False
    - completed: completestatus=True,  currentstatus=False (still listed)
    - archived:  completestatus=True,  currentstatus=True  (hidden, counted in stats)
    """

    PENDING = "pending"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    HIDDEN = "hidden"  # currentstatus=True without completion; only reachable via raw flag updates


@dataclass(slots=True)
class User:
    id: int
    email: str
    firstname: str
    lastname: str


@dataclass(slots=True)
class Task:
    id: int
    user_id: int
    task: str
    type: str

    created_at: float
    timeofentry: str | None

    # Literal reminder string as the user entered it, and the parsed instant (UTC epoch).
    remindertime: str
    remind_at: float | None

    completestatus: bool
    currentstatus: bool

    @property
    def state(self) -> TaskState:
        if self.completestatus:
            return TaskState.ARCHIVED if self.currentstatus else TaskState.COMPLETED
        return TaskState.HIDDEN if self.currentstatus else TaskState.PENDING

    def as_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "task": self.task,
            "type": self.type,
            "timeofentry": self.timeofentry,
            "remindertime": self.remindertime,
            "completestatus": self.completestatus,
            "currentstatus": self.currentstatus,
        }


@dataclass(slots=True, frozen=True)
class ReminderWindow:
    """Inclusive [lower, upper] range of aware datetimes computed for one tick."""

    lower: datetime
    upper: datetime

    def contains(self, moment: datetime) -> bool:
        return self.lower <= moment <= self.upper

    @property
    def lower_ts(self) -> float:
        return self.lower.timestamp()

    @property
    def upper_ts(self) -> float:
        return self.upper.timestamp()
