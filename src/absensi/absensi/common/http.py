"""Shared Flask helpers: session guards and DomainError -> JSON responses."""

from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import (
    AttendanceStateError,
    AuthenticationError,
    AuthorizationError,
    DayAlreadyClaimedError,
    DomainError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def status_for(err: DomainError) -> int:
    if isinstance(err, AuthenticationError):
        return 401
    if isinstance(err, AuthorizationError):
        return 403
    if isinstance(err, NotFoundError):
        return 404
    if isinstance(err, (AttendanceStateError, DayAlreadyClaimedError)):
        return 409
    return 400


def current_user_id() -> int:
    return int(session["user_id"])


def current_role() -> Role:
    return Role(session.get("role", Role.USER.value))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Unauthorized - Please login first", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return json_error("Unauthorized - Please login first", 401)
        if session.get("role") != Role.ADMIN.value:
            return json_error("Forbidden", 403)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(err: DomainError):
        return json_error(str(err), status_for(err))

    @app.errorhandler(Exception)
    def _unexpected(err: Exception):
        if isinstance(err, HTTPException):
            return err
        logger.exception("unhandled error")
        return json_error("Terjadi kesalahan server", 500)
