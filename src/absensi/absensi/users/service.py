from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository


def _require_admin(role: Role) -> None:
    if role != Role.ADMIN:
        raise AuthorizationError("Anda tidak memiliki akses")


def _clean_identity(name: str, email: str) -> tuple[str, str]:
    name = require_non_empty(name, "Nama")
    email = require_non_empty(email, "Email").lower()
    if "@" not in email:
        raise ValidationError("Email tidak valid")
    return name, email


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate a user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Email atau password salah")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            raise AuthenticationError("Email atau password salah")

        return SessionUser(user_id=user.user_id, name=user.display_name, email=user.email, role=user.role)


class UserService:
    """Use case: employee directory and profile."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_employees(self, *, user_id: Optional[int] = None) -> Sequence[User]:
        return self._users.list_users(role=Role.USER, user_id=user_id)

    def create_employee(self, *, current_role: Role, name: str, email: str, password: str) -> int:
        _require_admin(current_role)

        name, email = _clean_identity(name, email)
        require_min_length(password, "Password", 6)
        if self._users.get_by_email(email):
            raise ValidationError("Email sudah terdaftar")

        return self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.USER,
        )

    def update_employee(
        self,
        *,
        current_role: Role,
        user_id: int,
        name: str,
        email: str,
        password: Optional[str] = None,
    ) -> User:
        """Admin edit of a directory entry. A blank password keeps the old one."""
        _require_admin(current_role)

        user = self.get_profile(user_id)
        name, email = _clean_identity(name, email)
        if email != user.email:
            other = self._users.get_by_email(email)
            if other and other.user_id != user.user_id:
                raise ValidationError("Email sudah terdaftar")

        password_hash = None
        if password and password.strip():
            require_min_length(password, "Password", 6)
            password_hash = generate_password_hash(password)

        # 0 affected rows just means nothing changed
        self._users.update_user(user.user_id, name=name, email=email, password_hash=password_hash)
        return self.get_profile(user.user_id)

    def delete_employee(self, *, current_role: Role, user_id: int) -> None:
        _require_admin(current_role)

        user = self.get_profile(user_id)
        if user.role == Role.ADMIN:
            raise AuthorizationError("Admin tidak dapat dihapus")
        if not self._users.delete_user(user.user_id):
            raise NotFoundError("Pengguna tidak ditemukan")

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Pengguna tidak ditemukan")
        return user

    def update_profile(self, user_id: int, *, name: str) -> User:
        name = require_non_empty(name, "Nama")
        user = self.get_profile(user_id)
        # MySQL reports 0 affected rows when the name is unchanged
        self._users.update_name(user.user_id, name=name)
        return self.get_profile(user_id)
