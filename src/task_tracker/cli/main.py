# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, checks the SMTP transport, then serves
the HTTP API with uvicorn. The reminder scheduler runs inside the server's
event loop (see api.app).
"""

from __future__ import annotations

import logging

import uvicorn

from ..api.app import create_app
from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    # A broken transport only costs reminder emails; the API keeps serving.
    if not state.mailer.verify():
        logger.error("SMTP verification failed; reminder emails will fail until it is fixed.")

    app = create_app(state)

    try:
        uvicorn.run(
            app,
            host=settings.http_host,
            port=settings.http_port,
            log_config=None,  # keep our handlers (setup_logging) instead of uvicorn's
        )
    finally:
        state.store.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
