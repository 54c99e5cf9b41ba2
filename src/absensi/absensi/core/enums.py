from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Peran pengguna untuk otorisasi."""

    ADMIN = "admin"
    USER = "user"


class AttendanceStatus(str, Enum):
    """Status absen yang disimpan saat check-in."""

    PRESENT = "present"
    LATE = "late"


class PermissionType(str, Enum):
    IZIN = "izin"
    SAKIT = "sakit"
    LIBUR = "libur"


class PermissionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DayType(str, Enum):
    """Klasifikasi kalender sebuah tanggal."""

    HOLIDAY = "holiday"
    WEEKEND = "weekend"
    WORKDAY = "workday"


class DayState(str, Enum):
    """Posisi check-in/check-out satu pegawai pada satu hari."""

    NO_RECORD = "no_record"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


class RecapStatus(str, Enum):
    """Status hasil rekap per pegawai per hari."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    PERMISSION = "permission"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"
