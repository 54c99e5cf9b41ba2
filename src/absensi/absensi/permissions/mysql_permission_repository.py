from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import to_utc_naive
from ..core.enums import PermissionStatus, PermissionType
from ..core.exceptions import DayAlreadyClaimedError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import claim_user_day, db_cursor, fetchall, fetchone, insert_row, update_rows
from .model import PermissionRecord
from .repository import PermissionRepository

_COLUMNS = "permission_id, user_id, work_date, type, note, status, created_at, decided_by, decided_at"


def _to_record(r: dict[str, Any]) -> PermissionRecord:
    return PermissionRecord(
        permission_id=int(r["permission_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        type=PermissionType(r["type"]),
        note=r.get("note"),
        status=PermissionStatus(r["status"]),
        created_at=r.get("created_at"),
        decided_by=int(r["decided_by"]) if r.get("decided_by") is not None else None,
        decided_at=r.get("decided_at"),
    )


class MySQLPermissionRepository(PermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, permission_id: int) -> Optional[PermissionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM permissions WHERE permission_id=%s", (int(permission_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[PermissionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM permissions WHERE user_id=%s AND work_date=%s",
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
    ) -> Sequence[PermissionRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM permissions
                WHERE {' AND '.join(clauses)}
                ORDER BY user_id ASC, work_date ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_user(self, user_id: int, *, limit: int) -> Sequence[PermissionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM permissions WHERE user_id=%s ORDER BY work_date DESC LIMIT %s",
                (int(user_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_by_status(self, status: PermissionStatus, *, limit: int) -> Sequence[PermissionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM permissions WHERE status=%s ORDER BY work_date ASC LIMIT %s",
                (status.value, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        type: PermissionType,
        note: Optional[str],
        status: PermissionStatus,
    ) -> int:
        return insert_row(
            self._conn_factory,
            "INSERT INTO permissions (user_id, work_date, type, note, status) VALUES (%s, %s, %s, %s, %s)",
            (int(user_id), work_date, type.value, note, status.value),
            on_duplicate=lambda: DayAlreadyClaimedError("Kamu telah mengisi keterangan sebelumnya!"),
            before=lambda cur: claim_user_day(
                cur,
                user_id=user_id,
                work_date=work_date,
                other_table="attendance_records",
                on_taken=lambda: DayAlreadyClaimedError("Kamu sudah absen hari ini, keterangan tidak bisa diajukan"),
            ),
        )

    def decide(
        self,
        *,
        permission_id: int,
        status: PermissionStatus,
        decided_by: int,
        decided_at: datetime,
    ) -> bool:
        # Only pending rows move; a concurrent decision leaves rowcount at 0.
        return update_rows(
            self._conn_factory,
            """
            UPDATE permissions
            SET status=%s, decided_by=%s, decided_at=%s
            WHERE permission_id=%s AND status='pending'
            """,
            (status.value, int(decided_by), to_utc_naive(decided_at), int(permission_id)),
        )
