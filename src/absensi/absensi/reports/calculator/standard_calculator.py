from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ...common.datetime_utils import to_utc_naive
from ...common.durations import ZERO
from .base import WorkDurationCalculator


class StandardWorkDurationCalculator(WorkDurationCalculator):
    """Standard rule: out - in, zero while either side is missing, not below 0."""

    def work_duration(self, *, check_in: Optional[datetime], check_out: Optional[datetime]) -> timedelta:
        if check_in is None or check_out is None:
            return ZERO
        return max(to_utc_naive(check_out) - to_utc_naive(check_in), ZERO)
