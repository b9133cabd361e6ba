# src/task_tracker/api/app.py

"""FastAPI application factory.

The reminder scheduler shares the server's event loop: it is started by the
lifespan hook and cancelled on shutdown.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Coroutine
from datetime import timedelta
from typing import Any

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..core.state import AppState
from ..tasks.reminder_scheduler import run_reminder_scheduler
from .deps import get_state
from .routes.accounts import router as accounts_router
from .routes.tasks import router as tasks_router
from .schemas import HealthResponse, TickReportOut

logger = logging.getLogger(__name__)


def _scheduler_coro(state: AppState) -> Coroutine[Any, Any, None]:
    s = state.settings
    return run_reminder_scheduler(
        state.store,
        state.mailer,
        clock=state.now,
        from_addr=str(getattr(s, "smtp_from")),
        interval_seconds=float(getattr(s, "reminder_interval_seconds", 60.0)),
        lower_offset=timedelta(seconds=int(getattr(s, "reminder_lower_offset_seconds", 870))),
        upper_offset=timedelta(seconds=int(getattr(s, "reminder_upper_offset_seconds", 930))),
        status=state.scheduler_status,
    )


def create_app(state: AppState, *, start_scheduler: bool | None = None) -> FastAPI:
    """
    Build the API around an already-wired AppState.

    start_scheduler defaults to settings.reminders_enabled; tests pass False.
    """
    if start_scheduler is None:
        start_scheduler = bool(getattr(state.settings, "reminders_enabled", True))

    @contextlib.asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        runner: asyncio.Task[None] | None = None
        if start_scheduler:
            runner = asyncio.create_task(_scheduler_coro(state), name="reminder-scheduler")
            logger.info(
                "Reminder scheduler started (every %ss, tz=%s)",
                getattr(state.settings, "reminder_interval_seconds", 60.0),
                state.tz.zone,
            )
        try:
            yield
        finally:
            if runner is not None:
                runner.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await runner
                logger.info("Reminder scheduler stopped")

    app = FastAPI(
        title=str(getattr(state.settings, "app_name", "Daily Task Tracker")),
        version="0.1.0",
        description="Personal task tracking with email reminders.",
        lifespan=lifespan,
    )
    app.state.tracker = state

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(getattr(state.settings, "cors_origins", [])),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(accounts_router)
    app.include_router(tasks_router)

    @app.get("/health", response_model=HealthResponse)
    def healthcheck(st: AppState = Depends(get_state)) -> HealthResponse:
        """Readiness probe; also shows when the reminder job last ran."""
        status = st.scheduler_status
        last = status.last_tick_at
        report = status.last_report
        return HealthResponse(
            last_reminder_tick=last.isoformat() if last else None,
            last_reminder_report=TickReportOut.from_report(report) if report else None,
        )

    return app
