"""Attendance reconciliation.

Merges three sparse per-day sources (attendance, permissions, holiday
calendar) plus weekend arithmetic into one dense timeline per employee:

    attendance > permission > holiday/weekend > absent

The reconciler is a pure function of its inputs; it performs no I/O.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Iterable, Optional, Sequence, TypeVar

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import format_clock, to_utc_naive
from ..core.enums import RecapStatus
from ..holidays.day_status import build_holiday_map, classify_day
from ..holidays.model import DayStatus, HolidayEntry
from ..permissions.model import PermissionRecord
from ..users.model import User
from .calculator.base import WorkDurationCalculator
from .calculator.standard_calculator import StandardWorkDurationCalculator
from .model import DateRange, ReconciledDayRecord, ReconciliationResult, UserSummary

logger = logging.getLogger(__name__)

R = TypeVar("R", AttendanceRecord, PermissionRecord)


def _recency(record: R) -> tuple:
    created = record.created_at
    ident = record.attendance_id if isinstance(record, AttendanceRecord) else record.permission_id
    return (created is not None, to_utc_naive(created) if created else datetime.min, ident)


def index_by_user_day(
    records: Iterable[R],
    *,
    users: set[int],
    date_range: DateRange,
    source: str,
) -> dict[tuple[int, date], R]:
    """Index records by ``(user_id, work_date)``.

    Duplicate keys keep the most recently created row (ties go to the larger
    id) and are reported as data-integrity warnings.
    """
    out: dict[tuple[int, date], R] = {}
    for rec in records:
        if rec.user_id not in users or rec.work_date not in date_range:
            continue
        key = (rec.user_id, rec.work_date)
        current = out.get(key)
        if current is None:
            out[key] = rec
            continue

        keep = rec if _recency(rec) > _recency(current) else current
        logger.warning(
            "duplicate %s rows for user=%s day=%s, keeping %s",
            source,
            key[0],
            key[1],
            _recency(keep)[2],
        )
        out[key] = keep
    return out


class AttendanceReconciler:
    def __init__(self, *, tz: tzinfo, calculator: Optional[WorkDurationCalculator] = None):
        self._tz = tz
        self._calculator = calculator or StandardWorkDurationCalculator()

    def reconcile(
        self,
        users: Sequence[User],
        date_range: DateRange,
        attendance: Iterable[AttendanceRecord],
        permissions: Iterable[PermissionRecord],
        holidays: Iterable[HolidayEntry],
    ) -> ReconciliationResult:
        ordered: list[User] = []
        seen: set[int] = set()
        for u in users:
            if u.user_id not in seen:
                seen.add(u.user_id)
                ordered.append(u)

        if not ordered:
            return ReconciliationResult(date_range=date_range, detail=[], summary=[])

        att_map = index_by_user_day(attendance, users=seen, date_range=date_range, source="attendance")
        perm_map = index_by_user_day(permissions, users=seen, date_range=date_range, source="permission")
        holiday_map = build_holiday_map(holidays)
        calendar_days = [(d, classify_day(d, holiday_map)) for d in date_range.days()]

        detail: list[ReconciledDayRecord] = []
        summary: list[UserSummary] = []
        for u in ordered:
            s = UserSummary(user_id=u.user_id, name=u.display_name, email=u.email)
            for day, day_status in calendar_days:
                rec = self._reconcile_day(
                    u,
                    day,
                    day_status,
                    att_map.get((u.user_id, day)),
                    perm_map.get((u.user_id, day)),
                )
                detail.append(rec)
                s.add(rec)
            summary.append(s)

        return ReconciliationResult(date_range=date_range, detail=detail, summary=summary)

    def _reconcile_day(
        self,
        user: User,
        day: date,
        day_status: DayStatus,
        att: Optional[AttendanceRecord],
        perm: Optional[PermissionRecord],
    ) -> ReconciledDayRecord:
        if att is not None:
            return _row(
                user,
                day,
                day_status,
                status=RecapStatus(att.status.value),
                check_in=format_clock(att.check_in_time, self._tz),
                check_out=format_clock(att.check_out_time, self._tz),
                work_duration=self._calculator.work_duration(check_in=att.check_in_time, check_out=att.check_out_time),
                notes=att.note or "",
            )

        if perm is not None:
            return _row(
                user,
                day,
                day_status,
                status=RecapStatus.PERMISSION,
                permission_type=perm.type,
                permission_status=perm.status,
                notes=perm.note or "",
            )

        if day_status.is_off_day:
            return _row(user, day, day_status, status=RecapStatus(day_status.day_type.value), notes=day_status.name or "")

        return _row(user, day, day_status, status=RecapStatus.ABSENT)


def _row(user: User, day: date, day_status: DayStatus, **fields) -> ReconciledDayRecord:
    return ReconciledDayRecord(
        user_id=user.user_id,
        name=user.display_name,
        email=user.email,
        date=day,
        day_type=day_status.day_type,
        holiday_name=day_status.name,
        **fields,
    )
