# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time.
- Legacy deployment variable names (SECRET, SMTP_*, SERVER_PORT) are
  still honoured as fallbacks for the prefixed ones.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "TASK_TRACKER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path

    # ---- HTTP ----
    http_host: str
    http_port: int
    cors_origins: List[str]

    # ---- Auth ----
    jwt_secret: str
    token_ttl_seconds: int
    bcrypt_rounds: int

    # ---- SMTP ----
    smtp_host: str
    smtp_port: int
    smtp_user: Optional[str]
    smtp_password: Optional[str]
    smtp_from: str
    smtp_starttls: bool
    smtp_timeout_seconds: float

    # ---- Reminders ----
    reminders_enabled: bool
    reminder_timezone: str
    reminder_interval_seconds: float
    reminder_lower_offset_seconds: int
    reminder_upper_offset_seconds: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Daily Task Tracker")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task_tracker"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "tasks.sqlite3")

        http_host = _env(_k("HTTP_HOST"), "0.0.0.0")
        http_port = _env_int(_k("HTTP_PORT"), _env_int("SERVER_PORT", 3000))
        cors_origins = _env_list(_k("CORS_ORIGINS"), ["http://localhost:3000"])

        # No secret => tokens are signed with a throwaway dev key; fine locally, never in prod.
        jwt_secret = _first_env(_k("JWT_SECRET"), "SECRET", default="dev-secret-change-me") or ""
        token_ttl_seconds = _env_int(_k("TOKEN_TTL_SECONDS"), 2 * 60 * 60)
        bcrypt_rounds = _env_int(_k("BCRYPT_ROUNDS"), 10)

        smtp_host = (_first_env(_k("SMTP_HOST"), "SMTP_HOST", default="") or "").strip()
        smtp_port = _env_int(_k("SMTP_PORT"), _env_int("SMTP_PORT", 587))
        smtp_user = _first_env(_k("SMTP_USER"), "SMTP_USER", default=None)
        smtp_password = _first_env(_k("SMTP_PASSWORD"), "SMTP_PASS", default=None)
        smtp_from = (
            _first_env(_k("SMTP_FROM"), "SMTP_EMAIL", default=None)
            or smtp_user
            or "no-reply@localhost"
        )
        smtp_starttls = _env_bool(_k("SMTP_STARTTLS"), True)
        smtp_timeout_seconds = _env_float(_k("SMTP_TIMEOUT_SECONDS"), 30.0)

        reminders_enabled = _env_bool(_k("REMINDERS_ENABLED"), True)
        reminder_timezone = _env(_k("REMINDER_TIMEZONE"), "Asia/Kolkata")
        reminder_interval_seconds = _env_float(_k("REMINDER_INTERVAL_SECONDS"), 60.0)
        reminder_lower_offset_seconds = _env_int(_k("REMINDER_LOWER_OFFSET_SECONDS"), 14 * 60 + 30)
        reminder_upper_offset_seconds = _env_int(_k("REMINDER_UPPER_OFFSET_SECONDS"), 15 * 60 + 30)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            db_path=db_path,
            http_host=http_host,
            http_port=http_port,
            cors_origins=cors_origins,
            jwt_secret=jwt_secret,
            token_ttl_seconds=token_ttl_seconds,
            bcrypt_rounds=bcrypt_rounds,
            smtp_host=smtp_host,
            smtp_port=smtp_port,
            smtp_user=smtp_user,
            smtp_password=smtp_password,
            smtp_from=smtp_from,
            smtp_starttls=smtp_starttls,
            smtp_timeout_seconds=smtp_timeout_seconds,
            reminders_enabled=reminders_enabled,
            reminder_timezone=reminder_timezone,
            reminder_interval_seconds=reminder_interval_seconds,
            reminder_lower_offset_seconds=reminder_lower_offset_seconds,
            reminder_upper_offset_seconds=reminder_upper_offset_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
