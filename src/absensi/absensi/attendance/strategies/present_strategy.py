from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Check-in at or before the threshold."""

    def decide_checkin(self, *, local_now: datetime, threshold: time) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
