from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, json_error
from ..container import Container
from .csv_export import export_csv_bytes
from .pdf_export import export_pdf
from .service import RecapService


def register(app: Flask, container: Container) -> None:
    service = container.recap_service

    @app.route("/api/admin/attendance/rekap", methods=["GET"], endpoint="admin_recap")
    @admin_required
    def admin_recap():
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        period = request.args.get("period")
        raw_user_id = request.args.get("userId")
        fmt = (request.args.get("format") or "json").lower()

        if fmt not in {"json", "csv", "pdf"}:
            return json_error("Format harus json, csv, atau pdf", 400)

        user_id = None
        if raw_user_id:
            try:
                user_id = int(raw_user_id)
            except ValueError:
                return json_error("userId harus berupa angka", 400)

        if start_s and end_s:
            try:
                start = parse_iso_date(start_s)
                end = parse_iso_date(end_s)
            except ValueError:
                return json_error("Format tanggal harus YYYY-MM-DD", 400)
            report = service.build_recap(start=start, end=end, user_id=user_id)
        elif period:
            report = service.build_period_recap(period, user_id=user_id)
        else:
            return json_error("Parameter start dan end wajib diisi", 400)

        stem = f"rekap-absen-{report.date_range.start:%Y-%m-%d}-{report.date_range.end:%Y-%m-%d}"
        if fmt == "csv":
            return app.response_class(
                export_csv_bytes(report.result),
                mimetype="text/csv",
                headers={"Content-Disposition": f'attachment; filename="{stem}.csv"'},
            )
        if fmt == "pdf":
            return app.response_class(
                export_pdf(report.result),
                mimetype="application/pdf",
                headers={"Content-Disposition": f'attachment; filename="{stem}.pdf"'},
            )

        return jsonify({"success": True, "data": RecapService.to_payload(report)})
