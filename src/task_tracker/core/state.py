# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import pytz

from ..tasks.reminder_scheduler import SchedulerStatus
from .ports import EmailDispatcher, TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    store: TaskRepo
    mailer: EmailDispatcher
    tz: pytz.BaseTzInfo

    scheduler_status: SchedulerStatus = field(default_factory=SchedulerStatus)

    def now(self) -> datetime:
        """Aware current time in the reminder timezone (the scheduler's clock)."""
        return datetime.now(self.tz)
