from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PermissionStatus, PermissionType
from .model import PermissionRecord


class PermissionRepository(Protocol):
    def get_by_id(self, permission_id: int) -> Optional[PermissionRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[PermissionRecord]:
        raise NotImplementedError

    def find_in_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[PermissionRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int) -> Sequence[PermissionRecord]:
        """Newest first."""
        raise NotImplementedError

    def list_by_status(self, status: PermissionStatus, *, limit: int) -> Sequence[PermissionRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        type: PermissionType,
        note: Optional[str],
        status: PermissionStatus,
    ) -> int:
        """Insert the day's permission.

        Raise ``DayAlreadyClaimedError`` on a duplicate or when an attendance
        record already holds the day, checked atomically with the insert.
        """
        raise NotImplementedError

    def decide(
        self,
        *,
        permission_id: int,
        status: PermissionStatus,
        decided_by: int,
        decided_at: datetime,
    ) -> bool:
        """Move a pending permission to approved/rejected. False if not pending."""
        raise NotImplementedError
