from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from src.absensi.absensi.attendance.model import AttendanceRecord
from src.absensi.absensi.common.datetime_utils import reference_tz
from src.absensi.absensi.core.enums import PermissionStatus, Role
from src.absensi.absensi.core.exceptions import AlreadyCheckedInError, DayAlreadyClaimedError, HolidayProviderError
from src.absensi.absensi.permissions.model import PermissionRecord
from src.absensi.absensi.users.model import User

WIB = reference_tz(7)


class InMemoryUserRepository:
    def __init__(self, users=(), dependents=()):
        self.users = {u.user_id: u for u in users}
        # repositories whose rows go away with the user
        self.dependents = list(dependents)

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def list_users(self, *, role=None, user_id=None):
        return [
            u
            for u in self.users.values()
            if (role is None or u.role == role) and (user_id is None or u.user_id == user_id)
        ]

    def create_user(self, *, name, email, password_hash, role):
        user_id = max(self.users, default=0) + 1
        self.users[user_id] = User(user_id=user_id, name=name, email=email, password_hash=password_hash, role=role)
        return user_id

    def update_name(self, user_id, *, name):
        if user_id not in self.users:
            return False
        self.users[user_id] = replace(self.users[user_id], name=name)
        return True

    def update_user(self, user_id, *, name, email, password_hash=None):
        if user_id not in self.users:
            return False
        changes = {"name": name, "email": email}
        if password_hash:
            changes["password_hash"] = password_hash
        self.users[user_id] = replace(self.users[user_id], **changes)
        return True

    def delete_user(self, user_id):
        for repo in self.dependents:
            repo.records = [r for r in repo.records if r.user_id != user_id]
        return self.users.pop(user_id, None) is not None


class InMemoryAttendanceRepository:
    def __init__(self, records=(), permissions=None):
        self.records = list(records)
        self.create_calls = 0
        self.permissions = permissions

    def get_recent_for_user(self, user_id, limit):
        rows = sorted((r for r in self.records if r.user_id == user_id), key=lambda r: r.work_date, reverse=True)
        return rows[:limit]

    def get_for_user_and_date(self, user_id, work_date):
        return next((r for r in self.records if r.user_id == user_id and r.work_date == work_date), None)

    def find_in_range(self, *, start_date, end_date, user_id=None):
        return [
            r
            for r in self.records
            if start_date <= r.work_date <= end_date and (user_id is None or r.user_id == user_id)
        ]

    def create_checkin(self, *, user_id, work_date, check_in_time, location, status, note=None):
        self.create_calls += 1
        if self.get_for_user_and_date(user_id, work_date):
            raise AlreadyCheckedInError()
        if self.permissions is not None and self.permissions.get_for_user_and_date(user_id, work_date):
            raise DayAlreadyClaimedError("Anda sudah mengisi keterangan hari ini, tidak bisa absen masuk")
        self.records.append(
            AttendanceRecord(
                attendance_id=len(self.records) + 1,
                user_id=user_id,
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=None,
                status=status,
                check_in_location=location,
                note=note,
            )
        )

    def update_checkout(self, *, attendance_id, check_out_time, location):
        for i, r in enumerate(self.records):
            if r.attendance_id == attendance_id and r.check_out_time is None:
                self.records[i] = replace(r, check_out_time=check_out_time, check_out_location=location)
                return True
        return False


class InMemoryPermissionRepository:
    def __init__(self, records=(), attendance=None):
        self.records = list(records)
        self.attendance = attendance

    def get_by_id(self, permission_id):
        return next((r for r in self.records if r.permission_id == permission_id), None)

    def get_for_user_and_date(self, user_id, work_date):
        return next((r for r in self.records if r.user_id == user_id and r.work_date == work_date), None)

    def find_in_range(self, *, start_date, end_date, user_id=None):
        return [
            r
            for r in self.records
            if start_date <= r.work_date <= end_date and (user_id is None or r.user_id == user_id)
        ]

    def list_for_user(self, user_id, *, limit):
        return [r for r in self.records if r.user_id == user_id][:limit]

    def list_by_status(self, status, *, limit):
        return [r for r in self.records if r.status == status][:limit]

    def create(self, *, user_id, work_date, type, note, status):
        if self.get_for_user_and_date(user_id, work_date):
            raise DayAlreadyClaimedError("Kamu telah mengisi keterangan sebelumnya!")
        if self.attendance is not None and self.attendance.get_for_user_and_date(user_id, work_date):
            raise DayAlreadyClaimedError("Kamu sudah absen hari ini, keterangan tidak bisa diajukan")
        permission_id = len(self.records) + 1
        self.records.append(
            PermissionRecord(
                permission_id=permission_id,
                user_id=user_id,
                work_date=work_date,
                type=type,
                note=note,
                status=status,
            )
        )
        return permission_id

    def decide(self, *, permission_id, status, decided_by, decided_at):
        for i, r in enumerate(self.records):
            if r.permission_id == permission_id and r.status == PermissionStatus.PENDING:
                self.records[i] = replace(r, status=status, decided_by=decided_by, decided_at=decided_at)
                return True
        return False


class FakeHolidayProvider:
    def __init__(self, by_year=None, fail=False):
        self.by_year = dict(by_year or {})
        self.fail = fail
        self.calls = []

    def fetch_holidays(self, year):
        self.calls.append(year)
        if self.fail:
            raise HolidayProviderError("provider down")
        return list(self.by_year.get(year, []))


def make_user(user_id, name="", email=None, role=Role.USER, password="secret123"):
    return User(
        user_id=user_id,
        name=name,
        email=email or f"user{user_id}@absensi.local",
        password_hash=generate_password_hash(password),
        role=role,
    )


def wib(y, m, d, hh=0, mm=0, ss=0):
    return datetime(y, m, d, hh, mm, ss, tzinfo=WIB)


@pytest.fixture
def users_repo(attendance_repo, permissions_repo):
    return InMemoryUserRepository(
        [
            make_user(1, "Admin", "admin@absensi.local", role=Role.ADMIN, password="admin123"),
            make_user(2, "Budi", "budi@absensi.local", password="pegawai123"),
        ],
        dependents=[attendance_repo, permissions_repo],
    )


@pytest.fixture
def permissions_repo():
    return InMemoryPermissionRepository()


@pytest.fixture
def attendance_repo(permissions_repo):
    repo = InMemoryAttendanceRepository(permissions=permissions_repo)
    permissions_repo.attendance = repo
    return repo


@pytest.fixture
def holiday_provider():
    return FakeHolidayProvider()
