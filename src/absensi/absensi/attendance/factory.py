from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, tzinfo

from ..common.datetime_utils import to_local
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the local wall clock."""

    def for_checkin(self, *, now: datetime, tz: tzinfo, threshold: time) -> AttendanceStrategy:
        if to_local(now, tz).time() > threshold:
            return LateStrategy()
        return PresentStrategy()
