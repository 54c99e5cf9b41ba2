from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PermissionStatus, PermissionType


@dataclass(frozen=True)
class PermissionRecord:
    """Keterangan tidak hadir (izin/sakit/libur) untuk satu hari."""

    permission_id: int
    user_id: int
    work_date: date
    type: PermissionType
    note: Optional[str]
    status: PermissionStatus
    created_at: Optional[datetime] = None
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
