from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional

from ..common.datetime_utils import format_clock, local_day, now_local, to_local, to_utc_naive
from ..common.durations import ZERO, format_duration
from ..core.constants import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_LATE_THRESHOLD,
    DEFAULT_MIN_WORK_DURATION,
    RECENT_ACTIVITY_LIMIT,
)
from ..core.enums import AttendanceStatus, DayState, Role
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCompletedError,
    AuthorizationError,
    DayAlreadyClaimedError,
    MinimumDurationNotMetError,
    NoCheckInYetError,
    NotFoundError,
)
from ..core.labels import ATTENDANCE_STATUS_LABELS, permission_type_label
from ..permissions.repository import PermissionRepository
from ..reports.calculator.base import WorkDurationCalculator
from ..reports.calculator.standard_calculator import StandardWorkDurationCalculator
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, GeoPoint
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in/check-out state machine, one record per user per local day.

    NoRecord --checkin--> CheckedIn --checkout--> CheckedOut (final).
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        permissions: PermissionRepository,
        users: UserRepository,
        *,
        tz: tzinfo,
        late_threshold: time = DEFAULT_LATE_THRESHOLD,
        min_work_duration: timedelta = DEFAULT_MIN_WORK_DURATION,
        strategy_factory: AttendanceStrategyFactory | None = None,
        calculator: WorkDurationCalculator | None = None,
    ):
        self._attendance = attendance
        self._permissions = permissions
        self._users = users
        self._tz = tz
        self._late_threshold = late_threshold
        self._min_work_duration = min_work_duration
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._calculator = calculator or StandardWorkDurationCalculator()

    def check_in(self, user_id: int, *, location: GeoPoint, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local(self._tz)
        today = local_day(now, self._tz)

        if not self._users.get_by_id(user_id):
            raise NotFoundError("Pegawai tidak ditemukan")

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing:
            if existing.state == DayState.CHECKED_OUT:
                raise AlreadyCompletedError()
            raise AlreadyCheckedInError()

        if self._permissions.get_for_user_and_date(user_id, today):
            raise DayAlreadyClaimedError("Anda sudah mengisi keterangan hari ini, tidak bisa absen masuk")

        strategy = self._factory.for_checkin(now=now, tz=self._tz, threshold=self._late_threshold)
        decision = strategy.decide_checkin(local_now=to_local(now, self._tz), threshold=self._late_threshold)

        self._attendance.create_checkin(
            user_id=user_id,
            work_date=today,
            check_in_time=now,
            location=location,
            status=decision.status,
            note=decision.note,
        )
        logger.info("check-in user=%s day=%s status=%s", user_id, today, decision.status.value)

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            raise NoCheckInYetError("Gagal menyimpan absen masuk")
        return record

    def check_out(self, user_id: int, *, location: GeoPoint, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local(self._tz)
        today = local_day(now, self._tz)

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in_time is None:
            raise NoCheckInYetError()
        if record.state == DayState.CHECKED_OUT:
            raise AlreadyCompletedError()

        elapsed = to_utc_naive(now) - to_utc_naive(record.check_in_time)
        remaining = self._min_work_duration - elapsed
        if remaining > ZERO:
            raise MinimumDurationNotMetError(remaining)

        if not self._attendance.update_checkout(attendance_id=record.attendance_id, check_out_time=now, location=location):
            # Another request closed the record first.
            raise AlreadyCompletedError()
        logger.info("check-out user=%s day=%s worked=%s", user_id, today, format_duration(elapsed))

        return self._attendance.get_for_user_and_date(user_id, today) or record

    def day_state(self, user_id: int, *, now: datetime | None = None) -> DayState:
        record = self.get_today(user_id, now=now)
        return record.state if record else DayState.NO_RECORD

    def get_today(self, user_id: int, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        today = local_day(now or now_local(self._tz), self._tz)
        return self._attendance.get_for_user_and_date(user_id, today)

    def get_history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_user(user_id, limit)
        return [self.to_dict(r) for r in rows]

    def list_today(
        self,
        *,
        current_role: Role,
        day: date | None = None,
        now: datetime | None = None,
    ) -> dict:
        """Admin monitoring for one local day (today unless ``day`` is given).

        Returns every employee's row, headline counts and the latest
        check-in/check-out events.
        """
        if current_role != Role.ADMIN:
            raise AuthorizationError("Anda tidak memiliki akses")

        day = day or local_day(now or now_local(self._tz), self._tz)
        users = self._users.list_users(role=Role.USER)
        attendance = {r.user_id: r for r in self._attendance.find_in_range(start_date=day, end_date=day)}
        permissions = {p.user_id: p for p in self._permissions.find_in_range(start_date=day, end_date=day)}

        rows = []
        for u in users:
            rec = attendance.get(u.user_id)
            perm = permissions.get(u.user_id)
            rows.append(
                {
                    "userId": u.user_id,
                    "name": u.display_name,
                    "email": u.email,
                    "date": day.strftime("%Y-%m-%d"),
                    "state": rec.state.value if rec else DayState.NO_RECORD.value,
                    "attendance": self.to_dict(rec) if rec else None,
                    "permissionType": perm.type.value if perm else None,
                    "permissionLabel": permission_type_label(perm.type) if perm else None,
                }
            )

        names = {u.user_id: u.display_name for u in users}
        return {
            "date": day.strftime("%Y-%m-%d"),
            "rows": rows,
            "stats": _day_stats(users, attendance, permissions),
            "recentActivities": self._recent_activities(
                [r for r in attendance.values() if r.user_id in names], names
            ),
        }

    def _recent_activities(self, records: list[AttendanceRecord], names: dict[int, str]) -> list[dict]:
        events = []
        for r in records:
            if r.check_in_time is not None:
                events.append((to_utc_naive(r.check_in_time), "checkin", r))
            if r.check_out_time is not None:
                events.append((to_utc_naive(r.check_out_time), "checkout", r))
        events.sort(key=lambda e: (e[0], e[2].attendance_id), reverse=True)

        return [
            {
                "id": r.attendance_id,
                "userId": r.user_id,
                "employee": names[r.user_id],
                "action": action,
                "time": format_clock(r.check_out_time if action == "checkout" else r.check_in_time, self._tz),
                "status": "warning" if r.status == AttendanceStatus.LATE else "success",
            }
            for _, action, r in events[:RECENT_ACTIVITY_LIMIT]
        ]

    def to_dict(self, r: AttendanceRecord) -> dict:
        worked = self._calculator.work_duration(check_in=r.check_in_time, check_out=r.check_out_time)
        return {
            "id": r.attendance_id,
            "userId": r.user_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "state": r.state.value,
            "status": r.status.value,
            "statusLabel": ATTENDANCE_STATUS_LABELS[r.status],
            "checkIn": format_clock(r.check_in_time, self._tz),
            "checkOut": format_clock(r.check_out_time, self._tz),
            "checkInLocation": _point_dict(r.check_in_location),
            "checkOutLocation": _point_dict(r.check_out_location),
            "workHours": format_duration(worked),
            "notes": r.note or "",
        }


def _point_dict(p: Optional[GeoPoint]) -> Optional[dict]:
    if p is None:
        return None
    return {"lat": p.lat, "lng": p.lng}


def _day_stats(users, attendance: dict, permissions: dict) -> dict:
    present = late = on_leave = absent = 0
    for u in users:
        rec = attendance.get(u.user_id)
        if rec is not None:
            if rec.status == AttendanceStatus.LATE:
                late += 1
            else:
                present += 1
        elif u.user_id in permissions:
            on_leave += 1
        else:
            absent += 1

    total = len(users)
    return {
        "totalEmployees": total,
        "presentToday": present,
        "lateToday": late,
        "permissionToday": on_leave,
        "absentToday": absent,
        "attendanceRate": round((present + late) / total * 100) if total else 0,
    }
