"""Work-duration conversions.

Durations travel as ``timedelta`` everywhere; text only appears at the edges.
The display form is ``"{hours}j {minutes}m"`` (j = jam). Sums are computed on
``timedelta`` values so seconds are never lost before the final formatting.
"""

from __future__ import annotations

import math
import re
from datetime import timedelta
from typing import Union

_HM_RE = re.compile(r"^\s*(\d+)\s*[jJhH]\s*(\d+)\s*[mM]\s*$")
_MINUTES_RE = re.compile(r"^\s*\d+(\.\d+)?\s*$")

ZERO = timedelta(0)


def format_duration(value: timedelta) -> str:
    """Format as ``"8j 30m"``. Seconds are truncated for display only."""
    total = max(int(value.total_seconds()), 0)
    hours, rest = divmod(total, 3600)
    return f"{hours}j {rest // 60}m"


def parse_duration(value: Union[str, int, float, timedelta]) -> timedelta:
    """Parse ``"8j 30m"`` / ``"8h 30m"`` or a minute count into a timedelta.

    Fractional minutes are kept (``90.5`` -> 1:30:30).
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError(f"Negative duration: {value!r}")
        return timedelta(minutes=value)

    text = (value or "").strip()
    m = _HM_RE.match(text)
    if m:
        return timedelta(hours=int(m.group(1)), minutes=int(m.group(2)))
    if _MINUTES_RE.match(text):
        return timedelta(minutes=float(text))
    raise ValueError(f"Invalid duration: {value!r}")


def to_minutes(value: timedelta) -> float:
    return value.total_seconds() / 60


def format_remaining(value: timedelta) -> str:
    """Human readable remaining time, e.g. ``"1 jam 2 menit 3 detik"``.

    Rounded up to the next whole second so a positive remainder never shows
    as zero.
    """
    total = max(math.ceil(value.total_seconds()), 0)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)

    parts = []
    if hours:
        parts.append(f"{hours} jam")
    if minutes:
        parts.append(f"{minutes} menit")
    if seconds or not parts:
        parts.append(f"{seconds} detik")
    return " ".join(parts)
