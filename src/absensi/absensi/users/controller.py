from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.http import admin_required, current_role, current_user_id, login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS
from .model import User


def _user_dict(u: User) -> dict:
    return {"id": u.user_id, "name": u.display_name, "email": u.email, "role": u.role.value}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = request.get_json(silent=True) or {}
        s_user = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))

        session.permanent = bool(body.get("remember"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["email"] = s_user.email
        session["role"] = s_user.role.value

        return jsonify(
            {
                "success": True,
                "message": "Login berhasil",
                "user": {"id": s_user.user_id, "name": s_user.name, "email": s_user.email, "role": s_user.role.value},
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logout berhasil"})

    @app.route("/api/profile", methods=["GET"], endpoint="profile")
    @login_required
    def profile():
        user = container.user_service.get_profile(current_user_id())
        return jsonify({"success": True, "data": _user_dict(user)})

    @app.route("/api/profile", methods=["PUT"], endpoint="profile_update")
    @login_required
    def profile_update():
        body = request.get_json(silent=True) or {}
        user = container.user_service.update_profile(current_user_id(), name=body.get("name", ""))
        session["name"] = user.display_name
        return jsonify({"success": True, "message": "Profil diperbarui", "data": _user_dict(user)})

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        users = container.user_service.list_employees()
        return jsonify({"success": True, "data": [_user_dict(u) for u in users]})

    @app.route("/api/admin/users", methods=["POST"], endpoint="admin_users_create")
    @admin_required
    def admin_users_create():
        body = request.get_json(silent=True) or {}
        user_id = container.user_service.create_employee(
            current_role=current_role(),
            name=body.get("name", ""),
            email=body.get("email", ""),
            password=body.get("password", ""),
        )
        return jsonify({"success": True, "message": "Pegawai ditambahkan", "id": user_id}), 201

    @app.route("/api/admin/users/<int:user_id>", methods=["PUT"], endpoint="admin_users_update")
    @admin_required
    def admin_users_update(user_id: int):
        body = request.get_json(silent=True) or {}
        user = container.user_service.update_employee(
            current_role=current_role(),
            user_id=user_id,
            name=body.get("name", ""),
            email=body.get("email", ""),
            password=body.get("password") or None,
        )
        return jsonify({"success": True, "message": "Pegawai diperbarui", "data": _user_dict(user)})

    @app.route("/api/admin/users/<int:user_id>", methods=["DELETE"], endpoint="admin_users_delete")
    @admin_required
    def admin_users_delete(user_id: int):
        container.user_service.delete_employee(current_role=current_role(), user_id=user_id)
        return jsonify({"success": True, "message": "Pegawai dihapus"})
