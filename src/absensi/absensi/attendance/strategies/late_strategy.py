from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Check-in after the threshold."""

    def decide_checkin(self, *, local_now: datetime, threshold: time) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.LATE,
            note=f"Masuk {local_now.strftime('%H:%M:%S')}, batas {threshold.strftime('%H:%M')}",
        )
