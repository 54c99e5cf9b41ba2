from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterator, Optional

from ..common.datetime_utils import iter_days
from ..common.durations import ZERO, format_duration
from ..core.enums import DayType, PermissionStatus, PermissionType, RecapStatus
from ..core.exceptions import InvalidRangeError


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of local calendar days."""

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidRangeError("Tanggal akhir tidak boleh sebelum tanggal mulai")

    def days(self) -> Iterator[date]:
        return iter_days(self.start, self.end)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end


@dataclass(frozen=True)
class ReconciledDayRecord:
    """Exactly one per (user, day) in the requested range."""

    user_id: int
    name: str
    email: str
    date: date
    status: RecapStatus
    day_type: DayType
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    work_duration: timedelta = ZERO
    permission_type: Optional[PermissionType] = None
    permission_status: Optional[PermissionStatus] = None
    notes: str = ""
    holiday_name: Optional[str] = None

    @property
    def work_hours(self) -> str:
        return format_duration(self.work_duration)


@dataclass
class UserSummary:
    user_id: int
    name: str
    email: str
    present: int = 0
    late: int = 0
    permission: int = 0
    absent: int = 0
    holiday: int = 0
    weekend: int = 0
    total_work: timedelta = field(default=ZERO)

    def add(self, record: ReconciledDayRecord) -> None:
        attr = record.status.value
        setattr(self, attr, getattr(self, attr) + 1)
        self.total_work += record.work_duration

    @property
    def total_days(self) -> int:
        return self.present + self.late + self.permission + self.absent + self.holiday + self.weekend

    @property
    def total_work_hours(self) -> str:
        return format_duration(self.total_work)


@dataclass(frozen=True)
class ReconciliationResult:
    date_range: Optional[DateRange]
    detail: list[ReconciledDayRecord]
    summary: list[UserSummary]

    def detail_for(self, user_id: int) -> list[ReconciledDayRecord]:
        return [r for r in self.detail if r.user_id == user_id]
