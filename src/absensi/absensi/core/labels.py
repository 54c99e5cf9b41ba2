"""Canonical display labels.

Every view (JSON detail, summary, CSV and PDF exports) reads labels from these
tables so the wording never drifts between formats.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from .enums import AttendanceStatus, PermissionStatus, PermissionType, RecapStatus

RECAP_STATUS_LABELS: dict[RecapStatus, str] = {
    RecapStatus.PRESENT: "Hadir",
    RecapStatus.LATE: "Terlambat",
    RecapStatus.ABSENT: "Tidak Hadir",
    RecapStatus.PERMISSION: "Izin",
    RecapStatus.HOLIDAY: "Libur Nasional",
    RecapStatus.WEEKEND: "Akhir Pekan",
}

ATTENDANCE_STATUS_LABELS: dict[AttendanceStatus, str] = {
    AttendanceStatus.PRESENT: RECAP_STATUS_LABELS[RecapStatus.PRESENT],
    AttendanceStatus.LATE: RECAP_STATUS_LABELS[RecapStatus.LATE],
}

PERMISSION_TYPE_LABELS: dict[PermissionType, str] = {
    PermissionType.IZIN: "Izin",
    PermissionType.SAKIT: "Sakit",
    PermissionType.LIBUR: "Libur",
}

PERMISSION_STATUS_LABELS: dict[PermissionStatus, str] = {
    PermissionStatus.PENDING: "Menunggu",
    PermissionStatus.APPROVED: "Disetujui",
    PermissionStatus.REJECTED: "Ditolak",
}

# date.weekday(): Monday == 0
WEEKEND_DAY_NAMES: dict[int, str] = {
    5: "Sabtu",
    6: "Minggu",
}

EMPTY = "-"


def status_label(status: RecapStatus, permission_type: Optional[PermissionType] = None) -> str:
    if status == RecapStatus.PERMISSION and permission_type is not None:
        return PERMISSION_TYPE_LABELS[permission_type]
    return RECAP_STATUS_LABELS[status]


def permission_type_label(value: Optional[PermissionType]) -> str:
    if value is None:
        return EMPTY
    return PERMISSION_TYPE_LABELS[value]


def permission_status_label(value: Optional[PermissionStatus]) -> str:
    if value is None:
        return EMPTY
    return PERMISSION_STATUS_LABELS[value]


SHORT_DAY_NAMES = ("Sen", "Sel", "Rab", "Kam", "Jum", "Sab", "Min")
SHORT_MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des")


def short_date_label(day: date) -> str:
    """``"Sen, 1 Jan"``."""
    return f"{SHORT_DAY_NAMES[day.weekday()]}, {day.day} {SHORT_MONTH_NAMES[day.month - 1]}"


def long_date_label(day: date) -> str:
    """``"01 Jan 2024"``."""
    return f"{day.day:02d} {SHORT_MONTH_NAMES[day.month - 1]} {day.year}"
