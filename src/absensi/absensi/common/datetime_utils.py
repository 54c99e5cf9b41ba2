"""Clock and calendar-day helpers.

All day-boundary math goes through one reference timezone (a fixed UTC
offset, WIB = UTC+7 by default) and never through the host's local time.
Naive datetimes are treated as UTC, which is how the database layer stores
timestamps.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterator, Optional


def reference_tz(offset_hours: float = 7) -> timezone:
    return timezone(timedelta(hours=offset_hours))


def now_local(tz: tzinfo) -> datetime:
    """Current time in the reference timezone.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(tz)


def to_local(value: datetime, tz: tzinfo) -> datetime:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def to_utc_naive(value: datetime) -> datetime:
    """Convert to a naive UTC datetime for DATETIME columns."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def local_day(value: datetime, tz: tzinfo) -> date:
    return to_local(value, tz).date()


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day in ``[start, end]``."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock_time(value: str) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS``."""
    v = (value or "").strip()
    fmt = "%H:%M:%S" if v.count(":") == 2 else "%H:%M"
    return datetime.strptime(v, fmt).time()


def format_clock(value: Optional[datetime], tz: tzinfo) -> Optional[str]:
    if value is None:
        return None
    return to_local(value, tz).strftime("%H:%M")


def period_range(kind: str, today: date) -> tuple[date, date]:
    """Date range for the recap presets: daily, weekly (Mon-Sun), monthly."""
    if kind == "daily":
        return today, today
    if kind == "weekly":
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=6)
    if kind == "monthly":
        last = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last)
    raise ValueError(f"Unknown period: {kind!r}")
