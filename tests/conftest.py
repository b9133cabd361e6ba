# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest
import pytz

from task_tracker.core.state import AppState
from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeMailer

TZ_NAME = "Asia/Kolkata"


@pytest.fixture()
def tz() -> pytz.BaseTzInfo:
    return pytz.timezone(TZ_NAME)


@pytest.fixture()
def ten_am(tz) -> datetime:
    """Fixed tick time used by the window scenarios: 19 Oct 2026, 10:00:00 IST."""
    return tz.localize(datetime(2026, 10, 19, 10, 0, 0))


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the service layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Daily Task Tracker (tests)",
        data_dir=tmp_path,
        db_path=tmp_path / "tasks.sqlite3",
        cors_origins=["http://localhost:3000"],
        jwt_secret="test-secret",
        token_ttl_seconds=3600,
        # Lowest cost bcrypt accepts; keeps the suite fast.
        bcrypt_rounds=4,
        smtp_from="reminders@example.com",
        reminders_enabled=False,
        reminder_timezone=TZ_NAME,
        reminder_interval_seconds=60.0,
        reminder_lower_offset_seconds=870,
        reminder_upper_offset_seconds=930,
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.db_path)


@pytest.fixture()
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, mailer: FakeMailer, tz) -> AppState:
    """
    AppState wired with a fake mailer.

    NOTE: We keep the real SQLite TaskStore here because its window query is
    part of what we want to test.
    """
    return AppState(settings=settings, store=store, mailer=mailer, tz=tz)
