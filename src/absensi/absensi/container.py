from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import parse_clock_time, reference_tz
from .core import constants
from .database.connection import DBConfig, DatabaseConnection
from .holidays.holiday_calendar import HolidayCalendar
from .holidays.provider import HolidayProvider, LiburDenoHolidayProvider
from .permissions.mysql_permission_repository import MySQLPermissionRepository
from .permissions.service import PermissionService
from .reports.reconciler import AttendanceReconciler
from .reports.service import RecapService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: Any
    attendance_repo: Any
    permissions_repo: Any

    holiday_calendar: HolidayCalendar
    reconciler: AttendanceReconciler

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    permission_service: PermissionService
    recap_service: RecapService


def wire_services(
    *,
    users_repo,
    attendance_repo,
    permissions_repo,
    settings: Any = None,
    holiday_provider: Optional[HolidayProvider] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any repository implementations (MySQL or in-memory)."""

    tz = reference_tz(float(getattr(settings, "TZ_OFFSET_HOURS", constants.DEFAULT_TZ_OFFSET_HOURS)))
    threshold_raw = getattr(settings, "LATE_THRESHOLD", None)
    late_threshold = parse_clock_time(threshold_raw) if threshold_raw else constants.DEFAULT_LATE_THRESHOLD
    min_seconds = getattr(settings, "MIN_WORK_SECONDS", None)
    min_work = (
        timedelta(seconds=int(min_seconds)) if min_seconds is not None else constants.DEFAULT_MIN_WORK_DURATION
    )

    provider = holiday_provider or LiburDenoHolidayProvider(
        getattr(settings, "HOLIDAY_API_URL", constants.DEFAULT_HOLIDAY_API_URL),
        timeout=float(getattr(settings, "HOLIDAY_API_TIMEOUT", constants.DEFAULT_HOLIDAY_API_TIMEOUT)),
    )
    holiday_calendar = HolidayCalendar(
        provider,
        ttl_seconds=float(getattr(settings, "HOLIDAY_CACHE_TTL", constants.DEFAULT_HOLIDAY_CACHE_TTL)),
    )
    reconciler = AttendanceReconciler(tz=tz)

    attendance_service = AttendanceService(
        attendance_repo,
        permissions_repo,
        users_repo,
        tz=tz,
        late_threshold=late_threshold,
        min_work_duration=min_work,
        strategy_factory=AttendanceStrategyFactory(),
    )
    permission_service = PermissionService(
        permissions_repo,
        attendance_repo,
        tz=tz,
        auto_approve=bool(getattr(settings, "PERMISSION_AUTO_APPROVE", True)),
    )
    recap_service = RecapService(
        users_repo,
        attendance_repo,
        permissions_repo,
        holiday_calendar,
        tz=tz,
        reconciler=reconciler,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        permissions_repo=permissions_repo,
        holiday_calendar=holiday_calendar,
        reconciler=reconciler,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        attendance_service=attendance_service,
        permission_service=permission_service,
        recap_service=recap_service,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        permissions_repo=MySQLPermissionRepository(conn),
        settings=settings,
        conn=conn,
    )
