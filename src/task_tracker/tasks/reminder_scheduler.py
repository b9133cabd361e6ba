# src/task_tracker/tasks/reminder_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

A small polling loop that, once per tick:
- computes a look-ahead window [now + lower_offset, now + upper_offset],
- fetches tasks that are not completed and whose reminder falls in the window,
- resolves each task's owner,
- emails the owner through an injected dispatcher.

Nothing is remembered between ticks. A task whose reminder stays inside two
consecutive windows is emailed twice (at-least-once); nothing is retried.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from ..core.ports import Clock, EmailDispatcher, EmailMessage, ReminderSource
from .reminder_time import format_reminder_time
from .task_models import ReminderWindow, Task, User

logger = logging.getLogger(__name__)

DEFAULT_LOWER_OFFSET = timedelta(minutes=14, seconds=30)
DEFAULT_UPPER_OFFSET = timedelta(minutes=15, seconds=30)

REMINDER_SUBJECT = "Upcoming Task Reminder"


@dataclass(slots=True)
class TickReport:
    """Outcome of one tick, for logs and tests."""

    window: ReminderWindow | None
    matched: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0
    aborted: bool = False
    sent_to: list[str] = field(default_factory=list)


@dataclass(slots=True)
class SchedulerStatus:
    """Mutable run info shared with the HTTP layer (/health)."""

    last_tick_at: datetime | None = None
    last_report: TickReport | None = None
    ticks: int = 0


def compute_window(
        now: datetime,
        *,
        lower_offset: timedelta = DEFAULT_LOWER_OFFSET,
        upper_offset: timedelta = DEFAULT_UPPER_OFFSET,
) -> ReminderWindow:
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")
    if upper_offset < lower_offset:
        raise ValueError("upper_offset must not be smaller than lower_offset")
    return ReminderWindow(lower=now + lower_offset, upper=now + upper_offset)


def build_reminder_message(task: Task, user: User, *, from_addr: str) -> EmailMessage:
    """Email for one due task. Quotes the reminder string exactly as the user stored it."""
    body = (
        f"Dear {user.firstname} {user.lastname},\n\n"
        f"This is a reminder for your task scheduled at {task.remindertime}\n"
        f"Type: {task.type}\n"
        f"Task: {task.task}.\n"
        "Please complete it soon!\n\n"
        "Best regards,\n"
        "Daily Task Tracker"
    )
    return EmailMessage(
        from_addr=from_addr,
        to_addr=user.email,
        subject=REMINDER_SUBJECT,
        body=body,
    )


def run_reminder_tick(
        store: ReminderSource,
        mailer: EmailDispatcher,
        *,
        now: datetime,
        from_addr: str,
        lower_offset: timedelta = DEFAULT_LOWER_OFFSET,
        upper_offset: timedelta = DEFAULT_UPPER_OFFSET,
) -> TickReport:
    """
    One sweep. Never raises for store or mail failures:
    - query failure     -> tick aborted (report.aborted=True)
    - missing owner     -> that task skipped
    - dispatch failure  -> that message counted as failed
    """
    window = compute_window(now, lower_offset=lower_offset, upper_offset=upper_offset)
    report = TickReport(window=window)
    stamp = now.isoformat()

    logger.info(
        "[%s] Checking tasks for reminder window lower=%s upper=%s",
        stamp,
        format_reminder_time(window.lower),
        format_reminder_time(window.upper),
    )

    try:
        tasks = store.find_due_tasks(window)
    except Exception:
        logger.exception("[%s] find_due_tasks failed; tick aborted", stamp)
        report.aborted = True
        return report

    report.matched = len(tasks)
    if not tasks:
        logger.info("[%s] No tasks found for reminder window", stamp)
        return report

    logger.info("[%s] Tasks found: %d", stamp, len(tasks))

    for task in tasks:
        try:
            user = store.resolve_owner(task.user_id)
        except Exception:
            logger.exception("[%s] resolve_owner failed task_id=%s user_id=%s", stamp, task.id, task.user_id)
            user = None

        if user is None:
            logger.error("[%s] Owner not found for task_id=%s user_id=%s; skipped", stamp, task.id, task.user_id)
            report.skipped += 1
            continue

        message = build_reminder_message(task, user, from_addr=from_addr)

        try:
            result = mailer.send(message)
        except Exception:
            logger.exception("[%s] Failed to send email to %s task_id=%s", stamp, user.email, task.id)
            report.failed += 1
            continue

        if result.ok:
            report.sent += 1
            report.sent_to.append(user.email)
            logger.info("[%s] Email sent to %s task_id=%s", stamp, user.email, task.id)
        else:
            report.failed += 1
            logger.error(
                "[%s] Failed to send email to %s task_id=%s: %s",
                stamp,
                user.email,
                task.id,
                result.reason,
            )

    return report


async def run_reminder_scheduler(
        store: ReminderSource,
        mailer: EmailDispatcher,
        *,
        clock: Clock,
        from_addr: str,
        interval_seconds: float = 60.0,
        lower_offset: timedelta = DEFAULT_LOWER_OFFSET,
        upper_offset: timedelta = DEFAULT_UPPER_OFFSET,
        status: SchedulerStatus | None = None,
) -> None:
    """
    Periodic driver for run_reminder_tick.

    Each tick runs in a worker thread (sqlite + smtplib block) and is awaited
    before the next sleep, so ticks never overlap. The sleep is shortened by the
    tick's own duration to keep a steady cadence.

    To stop the scheduler, cancel the coroutine/task.
    """
    period = max(0.01, float(interval_seconds))

    while True:
        started = time.monotonic()
        now = clock()

        if status is not None:
            status.last_tick_at = now
            status.ticks += 1
        logger.debug("[%s] Reminder tick triggered", now.isoformat())

        try:
            report = await asyncio.to_thread(
                run_reminder_tick,
                store,
                mailer,
                now=now,
                from_addr=from_addr,
                lower_offset=lower_offset,
                upper_offset=upper_offset,
            )
        except Exception:
            # run_reminder_tick absorbs store/mail errors; this guards the loop itself.
            logger.exception("Reminder tick crashed")
        else:
            if status is not None:
                status.last_report = report

        elapsed = time.monotonic() - started
        await asyncio.sleep(max(0.0, period - elapsed))
