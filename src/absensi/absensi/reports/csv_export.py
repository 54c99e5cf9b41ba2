from __future__ import annotations

import csv
import io

from ..core.labels import EMPTY, permission_status_label, permission_type_label, status_label
from .model import ReconciledDayRecord, ReconciliationResult

CSV_HEADERS = [
    "Nama",
    "Email",
    "Tanggal",
    "Status",
    "Jam Masuk",
    "Jam Keluar",
    "Jam Kerja",
    "Tipe Izin",
    "Status Izin",
    "Keterangan Libur",
    "Catatan",
]


def _csv_row(r: ReconciledDayRecord) -> list[str]:
    return [
        r.name,
        r.email,
        r.date.strftime("%Y-%m-%d"),
        status_label(r.status, r.permission_type),
        r.check_in or EMPTY,
        r.check_out or EMPTY,
        r.work_hours,
        permission_type_label(r.permission_type),
        permission_status_label(r.permission_status),
        r.holiday_name or EMPTY,
        r.notes or EMPTY,
    ]


def export_csv(result: ReconciliationResult) -> str:
    """One quoted row per detail record, localized labels."""
    out = io.StringIO()
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for r in result.detail:
        writer.writerow(_csv_row(r))
    return out.getvalue()


def export_csv_bytes(result: ReconciliationResult) -> bytes:
    # BOM so spreadsheet apps pick UTF-8.
    return export_csv(result).encode("utf-8-sig")
