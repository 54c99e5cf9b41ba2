from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_role, current_user_id, json_error, login_required
from ..common.validators import require_coordinate
from ..container import Container
from .model import GeoPoint


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_record")
    @login_required
    def attendance_record():
        body = request.get_json(silent=True) or {}
        kind = (body.get("type") or "").strip()
        if kind not in {"checkin", "checkout"}:
            return json_error("Invalid attendance type. Must be 'checkin' or 'checkout'", 400)

        lat, lng = require_coordinate(body.get("latitude"), body.get("longitude"))
        location = GeoPoint(lat=lat, lng=lng)

        # Server clock decides the day; client timestamps are not trusted.
        if kind == "checkin":
            record = service.check_in(current_user_id(), location=location)
            message = "Absen masuk berhasil dicatat"
        else:
            record = service.check_out(current_user_id(), location=location)
            message = "Absen pulang berhasil dicatat"

        return jsonify({"success": True, "message": message, "attendance": service.to_dict(record)})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        user_id = current_user_id()
        record = service.get_today(user_id)
        return jsonify(
            {
                "success": True,
                "state": service.day_state(user_id).value,
                "attendance": service.to_dict(record) if record else None,
            }
        )

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        limit = request.args.get("limit", default=30, type=int)
        return jsonify({"success": True, "data": service.get_history(current_user_id(), limit=max(1, min(limit, 366)))})

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance_today")
    @admin_required
    def admin_attendance_today():
        raw = request.args.get("date")
        day = None
        if raw:
            try:
                day = parse_iso_date(raw)
            except ValueError:
                return json_error("Format tanggal harus YYYY-MM-DD", 400)
        return jsonify({"success": True, "data": service.list_today(current_role=current_role(), day=day)})
