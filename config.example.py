# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASK_TRACKER_APP_NAME": "App display name (default: Daily Task Tracker).",
    "TASK_TRACKER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TASK_TRACKER_DATA_DIR": "Local data directory, also holds task_tracker.log (default: .local/task_tracker).",
    "TASK_TRACKER_DB_PATH": "SQLite path (default: <data_dir>/tasks.sqlite3).",
    # HTTP
    "TASK_TRACKER_HTTP_HOST": "Bind address (default: 0.0.0.0).",
    "TASK_TRACKER_HTTP_PORT": "Port (default: SERVER_PORT or 3000).",
    "TASK_TRACKER_CORS_ORIGINS": "Comma/space separated allowed origins.",
    # Auth
    "TASK_TRACKER_JWT_SECRET": "Token signing secret (falls back to SECRET).",
    "TASK_TRACKER_TOKEN_TTL_SECONDS": "Token lifetime (default: 7200).",
    "TASK_TRACKER_BCRYPT_ROUNDS": "bcrypt cost factor (default: 10).",
    # SMTP (empty host => reminders are only logged)
    "TASK_TRACKER_SMTP_HOST": "SMTP host (falls back to SMTP_HOST).",
    "TASK_TRACKER_SMTP_PORT": "SMTP port (falls back to SMTP_PORT, default 587).",
    "TASK_TRACKER_SMTP_USER": "SMTP login (falls back to SMTP_USER).",
    "TASK_TRACKER_SMTP_PASSWORD": "SMTP password (falls back to SMTP_PASS).",
    "TASK_TRACKER_SMTP_FROM": "From address (falls back to SMTP_EMAIL, then the SMTP user).",
    "TASK_TRACKER_SMTP_STARTTLS": "Issue STARTTLS before login (default: true).",
    "TASK_TRACKER_SMTP_TIMEOUT_SECONDS": "Socket timeout per SMTP connection (default: 30).",
    # Reminders
    "TASK_TRACKER_REMINDERS_ENABLED": "Run the reminder job inside the server (default: true).",
    "TASK_TRACKER_REMINDER_TIMEZONE": "Timezone for reminder strings and the job clock (default: Asia/Kolkata).",
    "TASK_TRACKER_REMINDER_INTERVAL_SECONDS": "Tick period (default: 60).",
    "TASK_TRACKER_REMINDER_LOWER_OFFSET_SECONDS": "Window start after now (default: 870 = 14m30s).",
    "TASK_TRACKER_REMINDER_UPPER_OFFSET_SECONDS": "Window end after now (default: 930 = 15m30s).",
}
