from __future__ import annotations

from datetime import date

import pytest
from conftest import FakeHolidayProvider

import config.testing as testing_settings
from src.absensi.absensi.container import wire_services
from src.absensi.absensi.holidays.model import HolidayEntry
from src.absensi.absensi.main import create_app


@pytest.fixture
def container(users_repo, attendance_repo, permissions_repo):
    provider = FakeHolidayProvider({2024: [HolidayEntry(date=date(2024, 1, 1), name="Tahun Baru Masehi")]})
    return wire_services(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        permissions_repo=permissions_repo,
        settings=testing_settings,
        holiday_provider=provider,
    )


@pytest.fixture
def client(container):
    app = create_app(container=container, settings=testing_settings)
    return app.test_client()


def login(client, email, password):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_login_rejects_bad_password(client):
    resp = login(client, "budi@absensi.local", "wrong")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Email atau password salah"}


def test_login_is_case_insensitive_on_email(client):
    resp = login(client, "Budi@Absensi.Local", "pegawai123")

    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "user"


def test_endpoints_require_login(client):
    assert client.get("/api/attendance/today").status_code == 401
    assert client.get("/api/admin/attendance/rekap?start=2024-01-01&end=2024-01-07").status_code == 401


def test_employee_cannot_open_admin_endpoints(client):
    login(client, "budi@absensi.local", "pegawai123")

    assert client.get("/api/admin/users").status_code == 403


def test_checkin_then_early_checkout(client):
    login(client, "budi@absensi.local", "pegawai123")

    resp = client.post("/api/attendance", json={"type": "checkin", "latitude": -6.2, "longitude": 106.8})
    assert resp.status_code == 200
    assert resp.get_json()["attendance"]["state"] == "checked_in"

    again = client.post("/api/attendance", json={"type": "checkin", "latitude": -6.2, "longitude": 106.8})
    assert again.status_code == 409

    early = client.post("/api/attendance", json={"type": "checkout", "latitude": -6.2, "longitude": 106.8})
    assert early.status_code == 409
    assert "sisa waktu kerja" in early.get_json()["message"]

    today = client.get("/api/attendance/today").get_json()
    assert today["state"] == "checked_in"


def test_checkin_requires_valid_location(client):
    login(client, "budi@absensi.local", "pegawai123")

    resp = client.post("/api/attendance", json={"type": "checkin", "latitude": "abc", "longitude": 106.8})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Lokasi tidak valid"


def test_unknown_attendance_type(client):
    login(client, "budi@absensi.local", "pegawai123")

    assert client.post("/api/attendance", json={"type": "lunch"}).status_code == 400


def test_permission_blocks_checkin_for_the_day(client):
    login(client, "budi@absensi.local", "pegawai123")

    resp = client.post("/api/permission", json={"type": "sakit"})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["statusLabel"] == "Disetujui"

    blocked = client.post("/api/attendance", json={"type": "checkin", "latitude": -6.2, "longitude": 106.8})
    assert blocked.status_code == 409


def test_admin_recap_json(client):
    login(client, "admin@absensi.local", "admin123")

    resp = client.get("/api/admin/attendance/rekap?start=2024-01-01&end=2024-01-07")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["data"]["totalDays"] == 7
    assert [d["status"] for d in body["data"]["detail"]] == [
        "holiday",
        "absent",
        "absent",
        "absent",
        "absent",
        "weekend",
        "weekend",
    ]


def test_admin_recap_csv_download(client):
    login(client, "admin@absensi.local", "admin123")

    resp = client.get("/api/admin/attendance/rekap?start=2024-01-01&end=2024-01-02&format=csv")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert 'filename="rekap-absen-2024-01-01-2024-01-02.csv"' in resp.headers["Content-Disposition"]
    assert resp.data.decode("utf-8-sig").startswith('"Nama","Email","Tanggal"')


def test_admin_recap_pdf_download(client):
    login(client, "admin@absensi.local", "admin123")

    resp = client.get("/api/admin/attendance/rekap?start=2024-01-01&end=2024-01-02&format=pdf")

    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")


def test_admin_recap_rejects_reversed_range(client):
    login(client, "admin@absensi.local", "admin123")

    resp = client.get("/api/admin/attendance/rekap?start=2024-01-07&end=2024-01-01")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_admin_creates_employee(client, users_repo):
    login(client, "admin@absensi.local", "admin123")

    resp = client.post(
        "/api/admin/users",
        json={"name": "Siti", "email": "Siti@Absensi.local", "password": "rahasia1"},
    )

    assert resp.status_code == 201
    assert users_repo.get_by_email("siti@absensi.local").name == "Siti"


def test_profile_update(client):
    login(client, "budi@absensi.local", "pegawai123")

    resp = client.put("/api/profile", json={"name": "Budi Santoso"})

    assert resp.status_code == 200
    assert client.get("/api/profile").get_json()["data"]["name"] == "Budi Santoso"


def test_admin_attendance_dashboard(client):
    login(client, "admin@absensi.local", "admin123")

    resp = client.get("/api/admin/attendance?date=2024-01-02")

    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["date"] == "2024-01-02"
    assert [r["name"] for r in data["rows"]] == ["Budi"]
    assert data["stats"]["absentToday"] == 1
    assert data["recentActivities"] == []


def test_admin_attendance_rejects_bad_date(client):
    login(client, "admin@absensi.local", "admin123")

    resp = client.get("/api/admin/attendance?date=02-01-2024")

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Format tanggal harus YYYY-MM-DD"


def test_admin_recap_rejects_non_numeric_user_id(client):
    login(client, "admin@absensi.local", "admin123")

    resp = client.get("/api/admin/attendance/rekap?start=2024-01-01&end=2024-01-07&userId=budi")

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "userId harus berupa angka"}


def test_admin_recap_rejects_oversized_range(client):
    login(client, "admin@absensi.local", "admin123")

    resp = client.get("/api/admin/attendance/rekap?start=2000-01-01&end=2099-12-31")

    assert resp.status_code == 400


def test_admin_updates_employee(client, users_repo):
    login(client, "admin@absensi.local", "admin123")

    resp = client.put("/api/admin/users/2", json={"name": "Budi Santoso", "email": "budi@absensi.local"})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["name"] == "Budi Santoso"
    assert users_repo.get_by_id(2).name == "Budi Santoso"


def test_admin_update_with_taken_email(client):
    login(client, "admin@absensi.local", "admin123")

    resp = client.put("/api/admin/users/2", json={"name": "Budi", "email": "admin@absensi.local"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Email sudah terdaftar"


def test_admin_update_missing_employee(client):
    login(client, "admin@absensi.local", "admin123")

    assert client.put("/api/admin/users/99", json={"name": "X", "email": "x@absensi.local"}).status_code == 404


def test_admin_deletes_employee_with_their_rows(client, users_repo, attendance_repo):
    login(client, "budi@absensi.local", "pegawai123")
    client.post("/api/attendance", json={"type": "checkin", "latitude": -6.2, "longitude": 106.8})
    client.post("/api/auth/logout")
    login(client, "admin@absensi.local", "admin123")

    resp = client.delete("/api/admin/users/2")

    assert resp.status_code == 200
    assert users_repo.get_by_id(2) is None
    assert attendance_repo.records == []


def test_admin_account_cannot_be_deleted(client, users_repo):
    login(client, "admin@absensi.local", "admin123")

    resp = client.delete("/api/admin/users/1")

    assert resp.status_code == 403
    assert users_repo.get_by_id(1) is not None


def test_employee_cannot_delete_users(client, users_repo):
    login(client, "budi@absensi.local", "pegawai123")

    assert client.delete("/api/admin/users/2").status_code == 403
    assert users_repo.get_by_id(2) is not None
