from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(err: Exception) -> bool:
    """True for a unique-key violation (MySQL ER_DUP_ENTRY)."""
    return isinstance(err, IntegrityError) and getattr(err, "errno", None) == errorcode.ER_DUP_ENTRY


def claim_user_day(
    cur,
    *,
    user_id: int,
    work_date: Any,
    other_table: str,
    on_taken: Callable[[], Exception],
) -> None:
    """Lock the user's row, then refuse the day if ``other_table`` holds it.

    Check-ins and permissions live in separate tables, so their unique keys
    cannot see each other. Locking ``users`` FOR UPDATE serializes both
    inserts for one user until the transaction ends.
    """
    cur.execute("SELECT user_id FROM users WHERE user_id=%s FOR UPDATE", (int(user_id),))
    fetchall(cur)
    cur.execute(
        f"SELECT 1 AS taken FROM {other_table} WHERE user_id=%s AND work_date=%s LIMIT 1",
        (int(user_id), work_date),
    )
    if fetchall(cur):
        raise on_taken()


def insert_row(
    conn_factory: DatabaseConnection,
    sql: str,
    params: Sequence[Any],
    *,
    on_duplicate: Optional[Callable[[], Exception]] = None,
    before: Optional[Callable[[Any], None]] = None,
) -> int:
    """Run one INSERT and return the new id.

    A unique-key violation is re-raised as ``on_duplicate()`` when given, so
    per-day uniqueness reaches the services as a domain error. ``before``
    runs on the same cursor inside the transaction.
    """
    try:
        with db_cursor(conn_factory) as (_, cur):
            if before is not None:
                before(cur)
            cur.execute(sql, tuple(params))
            return int(cur.lastrowid)
    except IntegrityError as e:
        if on_duplicate is not None and is_duplicate_key(e):
            raise on_duplicate() from e
        raise


def update_rows(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any]) -> bool:
    """Run one UPDATE; True when at least one row changed."""
    with db_cursor(conn_factory) as (_, cur):
        cur.execute(sql, tuple(params))
        return cur.rowcount > 0
