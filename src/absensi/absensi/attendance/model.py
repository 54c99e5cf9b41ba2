from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, DayState


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class AttendanceRecord:
    """Entitas domain: satu baris absen per pegawai per hari.

    ``work_date`` adalah tanggal kalender di zona waktu acuan; timestamp
    disimpan dalam UTC.
    """

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    check_in_location: Optional[GeoPoint] = None
    check_out_location: Optional[GeoPoint] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def state(self) -> DayState:
        if self.check_out_time is not None:
            return DayState.CHECKED_OUT
        return DayState.CHECKED_IN
