from __future__ import annotations

from typing import Any, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, insert_row, is_duplicate_key, update_rows
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, name, email, password_hash, role, is_active"


def _to_user(row: dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_users(self, *, role: Optional[Role] = None, user_id: Optional[int] = None) -> Sequence[User]:
        clauses = ["is_active=1"]
        params: list[object] = []
        if role is not None:
            clauses.append("role=%s")
            params.append(role.value)
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE {' AND '.join(clauses)} ORDER BY name ASC, user_id ASC",
                tuple(params),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        return insert_row(
            self._conn_factory,
            "INSERT INTO users (name, email, password_hash, role) VALUES (%s, %s, %s, %s)",
            (name, email, password_hash, role.value),
            on_duplicate=lambda: ValidationError("Email sudah terdaftar"),
        )

    def update_name(self, user_id: int, *, name: str) -> bool:
        return update_rows(self._conn_factory, "UPDATE users SET name=%s WHERE user_id=%s", (name, int(user_id)))

    def update_user(self, user_id: int, *, name: str, email: str, password_hash: Optional[str] = None) -> bool:
        sets = ["name=%s", "email=%s"]
        params: list[object] = [name, email]
        if password_hash:
            sets.append("password_hash=%s")
            params.append(password_hash)
        params.append(int(user_id))
        try:
            return update_rows(
                self._conn_factory,
                f"UPDATE users SET {', '.join(sets)} WHERE user_id=%s",
                params,
            )
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ValidationError("Email sudah terdaftar") from e
            raise

    def delete_user(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE user_id=%s", (int(user_id),))
            cur.execute("DELETE FROM permissions WHERE user_id=%s", (int(user_id),))
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0
