from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, GeoPoint


class AttendanceRepository(Protocol):
    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        location: GeoPoint,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        """Insert the day's record.

        Implementations must enforce one row per ``(user_id, work_date)`` and
        raise ``AlreadyCheckedInError`` on a conflicting insert. A permission for
        the same day raises ``DayAlreadyClaimedError``, checked atomically with
        the insert.
        """
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        location: GeoPoint,
    ) -> bool:
        """Close an open record. Returns False if it was already closed."""
        raise NotImplementedError
