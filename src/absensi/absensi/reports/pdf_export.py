"""Paginated recap document: summary table, then one detail table per employee."""

from __future__ import annotations

from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..core.enums import RecapStatus
from ..core.labels import EMPTY, long_date_label, permission_status_label, short_date_label, status_label
from .model import ReconciledDayRecord, ReconciliationResult

SUMMARY_HEADERS = ["Nama", "Hadir", "Terlambat", "Izin", "Absen", "Libur", "Weekend", "Total Jam"]
DETAIL_HEADERS = ["Tanggal", "Status", "Status Izin", "Masuk", "Pulang", "Jam Kerja", "Catatan"]

_HEADER_BLUE = colors.Color(59 / 255, 130 / 255, 246 / 255)
_HEADER_SLATE = colors.Color(100 / 255, 116 / 255, 139 / 255)


class _NumberedCanvas(canvas.Canvas):
    """Defers page output so every page can show 'Halaman i dari n'."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_pages: list[dict] = []

    def showPage(self):
        self._saved_pages.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_pages)
        for state in self._saved_pages:
            self.__dict__.update(state)
            self._draw_page_number(total)
            super().showPage()
        super().save()

    def _draw_page_number(self, total: int) -> None:
        width, _ = self._pagesize
        self.setFont("Helvetica", 8)
        self.drawCentredString(width / 2, 10 * mm, f"Halaman {self._pageNumber} dari {total}")


def _table_style(header_color) -> TableStyle:
    return TableStyle(
        [
            ("BACKGROUND", (0, 0), (-1, 0), header_color),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]
    )


def _detail_row(d: ReconciledDayRecord) -> list[str]:
    off_day = d.status in (RecapStatus.HOLIDAY, RecapStatus.WEEKEND)
    if d.status == RecapStatus.HOLIDAY and d.holiday_name:
        notes = d.holiday_name
    else:
        notes = d.notes or EMPTY
    return [
        short_date_label(d.date),
        status_label(d.status, d.permission_type),
        permission_status_label(d.permission_status),
        d.check_in or EMPTY,
        d.check_out or EMPTY,
        EMPTY if off_day else d.work_hours,
        notes,
    ]


def export_pdf(result: ReconciliationResult) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=14 * mm,
        rightMargin=14 * mm,
        topMargin=14 * mm,
        bottomMargin=18 * mm,
        title="Rekap Absensi",
    )
    styles = getSampleStyleSheet()

    story = [Paragraph("REKAP ABSENSI", styles["Title"])]
    if result.date_range is not None:
        period = f"Periode: {long_date_label(result.date_range.start)} - {long_date_label(result.date_range.end)}"
        story.append(Paragraph(period, styles["Normal"]))
    story.append(Spacer(1, 6 * mm))

    summary_rows = [SUMMARY_HEADERS] + [
        [s.name, s.present, s.late, s.permission, s.absent, s.holiday, s.weekend, s.total_work_hours]
        for s in result.summary
    ]
    summary_table = Table(summary_rows, repeatRows=1)
    summary_table.setStyle(_table_style(_HEADER_BLUE))
    story.append(summary_table)

    for s in result.summary:
        story.append(Spacer(1, 8 * mm))
        story.append(Paragraph(f"<b>Detail: {escape(s.name)}</b>", styles["Normal"]))
        story.append(Spacer(1, 2 * mm))
        rows = [DETAIL_HEADERS] + [_detail_row(d) for d in result.detail_for(s.user_id)]
        table = Table(rows, repeatRows=1)
        table.setStyle(_table_style(_HEADER_SLATE))
        story.append(table)

    doc.build(story, canvasmaker=_NumberedCanvas)
    return buffer.getvalue()
