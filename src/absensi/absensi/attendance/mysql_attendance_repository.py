from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import to_utc_naive
from ..core.enums import AttendanceStatus
from ..core.exceptions import AlreadyCheckedInError, DayAlreadyClaimedError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import claim_user_day, db_cursor, fetchall, fetchone, insert_row, update_rows
from .model import AttendanceRecord, GeoPoint
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, user_id, work_date, check_in_time, check_out_time,
    check_in_lat, check_in_lng, check_out_lat, check_out_lng,
    status, note, created_at
"""


def _point(lat: Any, lng: Any) -> Optional[GeoPoint]:
    if lat is None or lng is None:
        return None
    return GeoPoint(lat=float(lat), lng=float(lng))


def _to_record(r: dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        check_in_location=_point(r.get("check_in_lat"), r.get("check_in_lng")),
        check_out_location=_point(r.get("check_out_lat"), r.get("check_out_lng")),
        note=r.get("note"),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def find_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {' AND '.join(clauses)}
                ORDER BY user_id ASC, work_date ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

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
        return insert_row(
            self._conn_factory,
            """
            INSERT INTO attendance_records
                (user_id, work_date, check_in_time, check_in_lat, check_in_lng, status, note)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            """,
            (int(user_id), work_date, to_utc_naive(check_in_time), location.lat, location.lng, status.value, note),
            on_duplicate=AlreadyCheckedInError,
            before=lambda cur: claim_user_day(
                cur,
                user_id=user_id,
                work_date=work_date,
                other_table="permissions",
                on_taken=lambda: DayAlreadyClaimedError("Anda sudah mengisi keterangan hari ini, tidak bisa absen masuk"),
            ),
        )

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        location: GeoPoint,
    ) -> bool:
        return update_rows(
            self._conn_factory,
            """
            UPDATE attendance_records
            SET check_out_time=%s, check_out_lat=%s, check_out_lng=%s
            WHERE attendance_id=%s AND check_out_time IS NULL
            """,
            (to_utc_naive(check_out_time), location.lat, location.lng, int(attendance_id)),
        )
