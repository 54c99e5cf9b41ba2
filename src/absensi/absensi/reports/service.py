from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import local_day, now_local, period_range
from ..common.durations import to_minutes
from ..core.constants import MAX_RECAP_DAYS
from ..core.enums import Role
from ..core.exceptions import InvalidRangeError, ValidationError
from ..core.labels import permission_status_label, permission_type_label, status_label
from ..holidays.holiday_calendar import HolidayCalendar
from ..holidays.model import HolidayEntry
from ..permissions.repository import PermissionRepository
from ..users.repository import UserRepository
from .model import DateRange, ReconciledDayRecord, ReconciliationResult, UserSummary
from .reconciler import AttendanceReconciler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecapReport:
    result: ReconciliationResult
    holidays: list[HolidayEntry]

    @property
    def date_range(self) -> DateRange:
        return self.result.date_range


class RecapService:
    """Use case: admin attendance recap over a date range."""

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        permissions: PermissionRepository,
        holidays: HolidayCalendar,
        *,
        tz: tzinfo,
        reconciler: Optional[AttendanceReconciler] = None,
        max_days: int = MAX_RECAP_DAYS,
    ):
        self._users = users
        self._attendance = attendance
        self._permissions = permissions
        self._holidays = holidays
        self._tz = tz
        self._reconciler = reconciler or AttendanceReconciler(tz=tz)
        self._max_days = max_days

    def build_recap(self, *, start: date, end: date, user_id: Optional[int] = None) -> RecapReport:
        date_range = DateRange(start, end)
        if len(date_range) > self._max_days:
            raise InvalidRangeError(f"Rentang tanggal maksimal {self._max_days} hari")

        users = self._users.list_users(role=Role.USER, user_id=user_id)
        attendance = self._attendance.find_in_range(start_date=start, end_date=end, user_id=user_id)
        permissions = self._permissions.find_in_range(start_date=start, end_date=end, user_id=user_id)
        holidays = self._holidays.entries_for_range(start, end)

        result = self._reconciler.reconcile(users, date_range, attendance, permissions, holidays)
        logger.info(
            "recap %s..%s users=%d rows=%d holidays=%d",
            start,
            end,
            len(result.summary),
            len(result.detail),
            len(holidays),
        )
        return RecapReport(result=result, holidays=holidays)

    def build_period_recap(self, kind: str, *, today: Optional[date] = None, user_id: Optional[int] = None) -> RecapReport:
        today = today or local_day(now_local(self._tz), self._tz)
        try:
            start, end = period_range(kind, today)
        except ValueError:
            raise ValidationError("Periode harus daily, weekly, atau monthly")
        return self.build_recap(start=start, end=end, user_id=user_id)

    @staticmethod
    def to_payload(report: RecapReport) -> dict:
        r = report.result
        return {
            "summary": [summary_to_dict(s) for s in r.summary],
            "detail": [detail_to_dict(d) for d in r.detail],
            "dateRange": {
                "start": r.date_range.start.strftime("%Y-%m-%d"),
                "end": r.date_range.end.strftime("%Y-%m-%d"),
            },
            "totalDays": len(r.date_range),
            "holidays": [
                {"date": h.date.strftime("%Y-%m-%d"), "name": h.name, "is_national_holiday": h.is_national_holiday}
                for h in report.holidays
            ],
        }


def detail_to_dict(d: ReconciledDayRecord) -> dict:
    return {
        "userId": d.user_id,
        "name": d.name,
        "email": d.email,
        "date": d.date.strftime("%Y-%m-%d"),
        "status": d.status.value,
        "statusLabel": status_label(d.status, d.permission_type),
        "checkIn": d.check_in,
        "checkOut": d.check_out,
        "workHours": d.work_hours,
        "workMinutes": round(to_minutes(d.work_duration), 2),
        "permissionType": d.permission_type.value if d.permission_type else None,
        "permissionTypeLabel": permission_type_label(d.permission_type) if d.permission_type else None,
        "permissionStatus": d.permission_status.value if d.permission_status else None,
        "permissionStatusLabel": permission_status_label(d.permission_status) if d.permission_status else None,
        "notes": d.notes,
        "dayType": d.day_type.value,
        "holidayName": d.holiday_name,
    }


def summary_to_dict(s: UserSummary) -> dict:
    return {
        "userId": s.user_id,
        "name": s.name,
        "email": s.email,
        "present": s.present,
        "late": s.late,
        "permission": s.permission,
        "absent": s.absent,
        "holiday": s.holiday,
        "weekend": s.weekend,
        "totalDays": s.total_days,
        "totalWorkHours": s.total_work_hours,
        "totalWorkMinutes": round(to_minutes(s.total_work), 2),
    }
