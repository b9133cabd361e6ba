# src/task_tracker/tasks/reminder_time.py

"""
Reminder timestamp helpers.

Clients submit reminder times as locale-formatted strings such as
"19/10/2026, 2:05:00 pm" (day/month/year, 12-hour clock). The literal string is
kept for display and for the reminder email; the parsed instant is stored next
to it so the scheduler can match on real timestamps.
"""

from __future__ import annotations

from datetime import datetime

import pytz

# d/M/yyyy, h:mm:ss a  (strptime accepts unpadded day/month/hour and any AM/PM case)
REMINDER_TIME_FORMAT = "%d/%m/%Y, %I:%M:%S %p"


def get_timezone(name: str) -> pytz.BaseTzInfo:
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as exc:
        raise ValueError(f"Unknown timezone: {name}") from exc


def localize(moment: datetime, tz: pytz.BaseTzInfo) -> datetime:
    """Attach tz to a naive datetime, or convert an aware one into tz."""
    if moment.tzinfo is None:
        return tz.localize(moment)
    return moment.astimezone(tz)


def parse_reminder_time(raw: str, tz: pytz.BaseTzInfo) -> datetime:
    """
    Parse a reminder string into an aware datetime.

    Accepts the locale format above, or ISO-8601 (naive values are read in tz).
    Raises ValueError when neither matches.
    """
    text = (raw or "").strip()
    if not text:
        raise ValueError("reminder time is empty")

    try:
        return localize(datetime.strptime(text, REMINDER_TIME_FORMAT), tz)
    except ValueError:
        pass

    try:
        return localize(datetime.fromisoformat(text), tz)
    except ValueError:
        raise ValueError(f"Unrecognised reminder time: {raw!r}") from None


def format_reminder_time(moment: datetime) -> str:
    """Inverse of the locale format: '19/10/2026, 2:05:00 PM'."""
    hour12 = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.day}/{moment.month}/{moment.year}, "
        f"{hour12}:{moment.minute:02d}:{moment.second:02d} {meridiem}"
    )
