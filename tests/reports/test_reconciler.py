from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest
from conftest import WIB, make_user, wib

from src.absensi.absensi.attendance.model import AttendanceRecord
from src.absensi.absensi.core.enums import AttendanceStatus, DayType, PermissionStatus, PermissionType, RecapStatus
from src.absensi.absensi.core.exceptions import InvalidRangeError
from src.absensi.absensi.holidays.model import HolidayEntry
from src.absensi.absensi.permissions.model import PermissionRecord
from src.absensi.absensi.reports.model import DateRange
from src.absensi.absensi.reports.reconciler import AttendanceReconciler

WEEK = DateRange(date(2024, 1, 1), date(2024, 1, 7))
NEW_YEAR = HolidayEntry(date=date(2024, 1, 1), name="Tahun Baru Masehi")


def attendance(attendance_id, user_id, day, check_in, check_out=None, status=AttendanceStatus.PRESENT, created_at=None):
    return AttendanceRecord(
        attendance_id=attendance_id,
        user_id=user_id,
        work_date=day,
        check_in_time=check_in,
        check_out_time=check_out,
        status=status,
        created_at=created_at,
    )


def permission(permission_id, user_id, day, ptype=PermissionType.SAKIT, note=None):
    return PermissionRecord(
        permission_id=permission_id,
        user_id=user_id,
        work_date=day,
        type=ptype,
        note=note,
        status=PermissionStatus.APPROVED,
    )


@pytest.fixture
def reconciler():
    return AttendanceReconciler(tz=WIB)


def test_reconciles_one_week_for_one_employee(reconciler):
    user = make_user(2, "Budi")
    att = [
        attendance(1, 2, date(2024, 1, 2), wib(2024, 1, 2, 7, 50), wib(2024, 1, 2, 16, 20)),
        attendance(2, 2, date(2024, 1, 3), wib(2024, 1, 3, 8, 15), wib(2024, 1, 3, 17, 0), status=AttendanceStatus.LATE),
    ]
    perms = [permission(1, 2, date(2024, 1, 4), note="Demam")]

    result = reconciler.reconcile([user], WEEK, att, perms, [NEW_YEAR])

    assert [r.status for r in result.detail] == [
        RecapStatus.HOLIDAY,
        RecapStatus.PRESENT,
        RecapStatus.LATE,
        RecapStatus.PERMISSION,
        RecapStatus.ABSENT,
        RecapStatus.WEEKEND,
        RecapStatus.WEEKEND,
    ]
    assert result.detail[0].holiday_name == "Tahun Baru Masehi"
    assert result.detail[1].check_in == "07:50"
    assert result.detail[1].work_hours == "8j 30m"
    assert result.detail[3].permission_type == PermissionType.SAKIT
    assert result.detail[3].notes == "Demam"
    assert result.detail[5].holiday_name == "Sabtu"

    summary = result.summary[0]
    assert (summary.present, summary.late, summary.permission, summary.absent, summary.holiday, summary.weekend) == (
        1,
        1,
        1,
        1,
        1,
        2,
    )
    assert summary.total_work == timedelta(hours=17, minutes=15)


def test_every_user_gets_exactly_one_row_per_day(reconciler):
    users = [make_user(2), make_user(3), make_user(4)]

    result = reconciler.reconcile(users, WEEK, [], [], [NEW_YEAR])

    assert len(result.detail) == len(users) * len(WEEK)
    for u in users:
        rows = result.detail_for(u.user_id)
        assert [r.date for r in rows] == list(WEEK.days())
    assert all(s.total_days == len(WEEK) for s in result.summary)


def test_attendance_outranks_permission_and_holiday(reconciler):
    user = make_user(2)
    day = date(2024, 1, 1)
    att = [attendance(1, 2, day, wib(2024, 1, 1, 7, 0), wib(2024, 1, 1, 12, 0))]
    perms = [permission(1, 2, day)]

    result = reconciler.reconcile([user], DateRange(day, day), att, perms, [NEW_YEAR])

    row = result.detail[0]
    assert row.status == RecapStatus.PRESENT
    assert row.day_type == DayType.HOLIDAY
    assert row.work_duration == timedelta(hours=5)


def test_permission_outranks_weekend(reconciler):
    saturday = date(2024, 1, 6)

    result = reconciler.reconcile([make_user(2)], DateRange(saturday, saturday), [], [permission(1, 2, saturday)], [])

    assert result.detail[0].status == RecapStatus.PERMISSION
    assert result.detail[0].day_type == DayType.WEEKEND


def test_holiday_on_weekend_counts_as_holiday(reconciler):
    sunday = date(2024, 1, 7)
    holidays = [HolidayEntry(date=sunday, name="Cuti Bersama")]

    result = reconciler.reconcile([make_user(2)], DateRange(sunday, sunday), [], [], holidays)

    assert result.detail[0].status == RecapStatus.HOLIDAY
    assert result.summary[0].weekend == 0


def test_open_checkin_has_zero_work_duration(reconciler):
    day = date(2024, 1, 2)
    att = [attendance(1, 2, day, wib(2024, 1, 2, 7, 0))]

    result = reconciler.reconcile([make_user(2)], DateRange(day, day), att, [], [])

    assert result.detail[0].check_out is None
    assert result.detail[0].work_duration == timedelta(0)


def test_duplicate_attendance_keeps_most_recent(reconciler, caplog):
    day = date(2024, 1, 2)
    older = attendance(1, 2, day, wib(2024, 1, 2, 7, 0), created_at=datetime(2024, 1, 2, 0, 0))
    newer = attendance(
        2, 2, day, wib(2024, 1, 2, 8, 30), status=AttendanceStatus.LATE, created_at=datetime(2024, 1, 2, 1, 30)
    )

    with caplog.at_level("WARNING"):
        result = reconciler.reconcile([make_user(2)], DateRange(day, day), [newer, older], [], [])

    assert result.detail[0].status == RecapStatus.LATE
    assert "duplicate attendance" in caplog.text


@pytest.mark.parametrize(
    "naive_utc, aware_local, expected",
    [
        # 01:00 UTC is 08:00 WIB, so the 09:00 WIB row is newer
        (datetime(2024, 1, 2, 1, 0), wib(2024, 1, 2, 9, 0), RecapStatus.LATE),
        (datetime(2024, 1, 2, 1, 0), wib(2024, 1, 2, 7, 30), RecapStatus.PRESENT),
    ],
)
def test_duplicate_attendance_compares_naive_and_aware_created_at(reconciler, naive_utc, aware_local, expected):
    day = date(2024, 1, 2)
    naive_row = attendance(1, 2, day, wib(2024, 1, 2, 7, 0), created_at=naive_utc)
    aware_row = attendance(
        2, 2, day, wib(2024, 1, 2, 8, 30), status=AttendanceStatus.LATE, created_at=aware_local
    )

    result = reconciler.reconcile([make_user(2)], DateRange(day, day), [naive_row, aware_row], [], [])

    assert result.detail[0].status == expected


def test_records_outside_range_or_for_unknown_users_are_ignored(reconciler):
    day = date(2024, 1, 2)
    att = [
        attendance(1, 2, date(2023, 12, 29), wib(2023, 12, 29, 7, 0)),
        attendance(2, 99, day, wib(2024, 1, 2, 7, 0)),
    ]

    result = reconciler.reconcile([make_user(2)], DateRange(day, day), att, [], [])

    assert [r.status for r in result.detail] == [RecapStatus.ABSENT]


def test_duplicate_users_are_listed_once(reconciler):
    user = make_user(2)

    result = reconciler.reconcile([user, user], WEEK, [], [], [])

    assert len(result.summary) == 1
    assert len(result.detail) == len(WEEK)


def test_empty_user_list_gives_empty_result(reconciler):
    result = reconciler.reconcile([], WEEK, [], [], [NEW_YEAR])

    assert result.detail == []
    assert result.summary == []


def test_reconcile_is_idempotent(reconciler):
    users = [make_user(2), make_user(3)]
    att = [attendance(1, 2, date(2024, 1, 2), wib(2024, 1, 2, 7, 0), wib(2024, 1, 2, 16, 0))]
    perms = [permission(1, 3, date(2024, 1, 2))]

    first = reconciler.reconcile(users, WEEK, att, perms, [NEW_YEAR])
    second = reconciler.reconcile(users, WEEK, att, perms, [NEW_YEAR])

    assert first.detail == second.detail
    assert first.summary == second.summary


def test_reversed_range_is_rejected():
    with pytest.raises(InvalidRangeError):
        DateRange(date(2024, 1, 7), date(2024, 1, 1))
