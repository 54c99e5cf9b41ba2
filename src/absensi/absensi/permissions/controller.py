from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, current_role, current_user_id, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.permission_service

    @app.route("/api/permission", methods=["POST"], endpoint="permission_submit")
    @login_required
    def permission_submit():
        body = request.get_json(silent=True) or {}
        record = service.submit(current_user_id(), type=body.get("type", ""), note=body.get("note", ""))
        return jsonify({"success": True, "message": "Izin berhasil diajukan", "data": service.to_dict(record)}), 201

    @app.route("/api/permission", methods=["GET"], endpoint="permission_history")
    @login_required
    def permission_history():
        return jsonify({"success": True, "data": service.get_history(current_user_id())})

    @app.route("/api/permission/today", methods=["GET"], endpoint="permission_today")
    @login_required
    def permission_today():
        record = service.get_today(current_user_id())
        return jsonify({"success": True, "data": service.to_dict(record) if record else None})

    @app.route("/api/admin/permissions/pending", methods=["GET"], endpoint="admin_permissions_pending")
    @admin_required
    def admin_permissions_pending():
        rows = service.list_pending(current_role=current_role())
        return jsonify({"success": True, "data": [service.to_dict(r) for r in rows]})

    @app.route("/api/admin/permissions/<int:permission_id>/approve", methods=["POST"], endpoint="admin_permission_approve")
    @admin_required
    def admin_permission_approve(permission_id: int):
        service.approve(current_role=current_role(), admin_user_id=current_user_id(), permission_id=permission_id)
        return jsonify({"success": True, "message": "Keterangan disetujui"})

    @app.route("/api/admin/permissions/<int:permission_id>/reject", methods=["POST"], endpoint="admin_permission_reject")
    @admin_required
    def admin_permission_reject(permission_id: int):
        service.reject(current_role=current_role(), admin_user_id=current_user_id(), permission_id=permission_id)
        return jsonify({"success": True, "message": "Keterangan ditolak"})
