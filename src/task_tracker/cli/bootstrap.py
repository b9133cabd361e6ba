# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete store and mailer into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import EmailDispatcher
from ..core.state import AppState
from ..mail.offline import LogOnlyMailer
from ..mail.smtp_mailer import SmtpMailer
from ..tasks.reminder_time import get_timezone
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_mailer(settings) -> EmailDispatcher:
    if not getattr(settings, "smtp_host", ""):
        return LogOnlyMailer()
    return SmtpMailer.from_settings(settings)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    mailer = create_mailer(settings)
    return AppState(
        settings=settings,
        store=TaskStore(settings.db_path),
        mailer=mailer,
        tz=get_timezone(settings.reminder_timezone),
    )
