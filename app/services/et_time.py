# app/services/et_time.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

from app.models.slate_types import Window

NY = ZoneInfo("America/New_York")


def _as_utc(dt: datetime) -> datetime:
    """Naive datetimes are taken to be UTC (CFBD start dates are)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_et(dt: datetime) -> datetime:
    return _as_utc(dt).astimezone(NY)


def window_from_et(dt: datetime) -> Window:
    """
    Viewing window from the America/New_York wall-clock hour:
    [0,15) Noon, [15,19) Afternoon, [19,22) Prime, [22,24) Late.
    """
    hour = to_et(dt).hour
    if hour < 15:
        return Window.NOON
    if hour < 19:
        return Window.AFTERNOON
    if hour < 22:
        return Window.PRIME
    return Window.LATE


def format_et_time(dt: datetime) -> str:
    """e.g. '7:30 PM' (no leading zero, ET)."""
    et = to_et(dt)
    hour12 = et.hour % 12 or 12
    suffix = "AM" if et.hour < 12 else "PM"
    return f"{hour12}:{et.minute:02d} {suffix}"


def format_et_date(dt: datetime) -> str:
    """e.g. 'Sat, Oct 17' (ET calendar date)."""
    et = to_et(dt)
    return f"{et.strftime('%a, %b')} {et.day}"


def parse_kickoff(value: Any) -> Optional[datetime]:
    """
    Parse a feed timestamp into an aware UTC datetime.
    Returns None for anything that isn't a parseable ISO string (booleans like
    start_time_tbd included).
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    return _as_utc(dt)


def iso_utc(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a trailing Z."""
    return _as_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")
