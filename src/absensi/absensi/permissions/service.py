from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import local_day, now_local
from ..core.constants import DEFAULT_PERMISSION_HISTORY_LIMIT
from ..core.enums import PermissionStatus, PermissionType, Role
from ..core.exceptions import AuthorizationError, DayAlreadyClaimedError, NotFoundError, ValidationError
from ..core.labels import permission_status_label, permission_type_label
from .model import PermissionRecord
from .repository import PermissionRepository

logger = logging.getLogger(__name__)


class PermissionService:
    """Use case: employees declare leave/sick/day-off for today; admins decide."""

    def __init__(
        self,
        permissions: PermissionRepository,
        attendance: AttendanceRepository,
        *,
        tz: tzinfo,
        auto_approve: bool = True,
    ):
        self._permissions = permissions
        self._attendance = attendance
        self._tz = tz
        self._auto_approve = bool(auto_approve)

    @staticmethod
    def _parse_type(value: str) -> PermissionType:
        try:
            return PermissionType((value or "").strip().lower())
        except ValueError:
            raise ValidationError("Jenis keterangan tidak valid")

    def submit(self, user_id: int, *, type: str, note: str = "", now: Optional[datetime] = None) -> PermissionRecord:
        now = now or now_local(self._tz)
        today = local_day(now, self._tz)

        ptype = self._parse_type(type)
        note = (note or "").strip() or None
        if ptype == PermissionType.IZIN and not note:
            raise ValidationError("Catatan wajib diisi untuk izin")

        if self._permissions.get_for_user_and_date(int(user_id), today):
            raise DayAlreadyClaimedError("Kamu telah mengisi keterangan sebelumnya!")
        if self._attendance.get_for_user_and_date(int(user_id), today):
            raise DayAlreadyClaimedError("Kamu sudah absen hari ini, keterangan tidak bisa diajukan")

        status = PermissionStatus.APPROVED if self._auto_approve else PermissionStatus.PENDING
        self._permissions.create(user_id=int(user_id), work_date=today, type=ptype, note=note, status=status)
        logger.info("permission %s (%s) recorded for user %s on %s", ptype.value, status.value, user_id, today)

        record = self._permissions.get_for_user_and_date(int(user_id), today)
        if not record:
            raise ValidationError("Gagal menyimpan keterangan")
        return record

    def get_today(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[PermissionRecord]:
        today = local_day(now or now_local(self._tz), self._tz)
        return self._permissions.get_for_user_and_date(int(user_id), today)

    def get_history(self, user_id: int, *, limit: int = DEFAULT_PERMISSION_HISTORY_LIMIT) -> list[dict]:
        return [self.to_dict(r) for r in self._permissions.list_for_user(int(user_id), limit=int(limit))]

    def list_pending(self, *, current_role: Role, limit: int = 500) -> Sequence[PermissionRecord]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Anda tidak memiliki akses")
        return self._permissions.list_by_status(PermissionStatus.PENDING, limit=limit)

    def approve(self, *, current_role: Role, admin_user_id: int, permission_id: int, now: Optional[datetime] = None) -> None:
        self._decide(current_role, admin_user_id, permission_id, PermissionStatus.APPROVED, now)

    def reject(self, *, current_role: Role, admin_user_id: int, permission_id: int, now: Optional[datetime] = None) -> None:
        self._decide(current_role, admin_user_id, permission_id, PermissionStatus.REJECTED, now)

    def _decide(
        self,
        current_role: Role,
        admin_user_id: int,
        permission_id: int,
        status: PermissionStatus,
        now: Optional[datetime],
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Anda tidak memiliki akses")

        record = self._permissions.get_by_id(int(permission_id))
        if not record:
            raise NotFoundError("Keterangan tidak ditemukan")
        if record.status != PermissionStatus.PENDING:
            raise ValidationError("Keterangan sudah diproses")

        ok = self._permissions.decide(
            permission_id=int(permission_id),
            status=status,
            decided_by=int(admin_user_id),
            decided_at=now or now_local(self._tz),
        )
        if not ok:
            raise ValidationError("Keterangan sudah diproses")
        logger.info("permission %s %s by admin %s", permission_id, status.value, admin_user_id)

    @staticmethod
    def to_dict(r: PermissionRecord) -> dict:
        return {
            "id": r.permission_id,
            "userId": r.user_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "type": r.type.value,
            "typeLabel": permission_type_label(r.type),
            "note": r.note or "",
            "status": r.status.value,
            "statusLabel": permission_status_label(r.status),
        }
