from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        name=row["name"],
        role=Role(row.get("role") or Role.VOLUNTEER.value),
        is_test_account=bool(row.get("is_test_account", False)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, username, password_hash, name, role, is_test_account
                FROM users
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, username, password_hash, name, role, is_test_account
                FROM users
                WHERE username=%s
                """,
                (username,),
            )
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        name: str,
        role: Role,
        is_test_account: bool = False,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, password_hash, name, role, is_test_account)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (username, password_hash, name, role.value, int(bool(is_test_account))),
            )
            return int(cur.lastrowid)

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, int(user_id)))
            return cur.rowcount > 0

    def is_test_account(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT is_test_account FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return bool(row and row.get("is_test_account"))

    def list_roster(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, username, password_hash, name, role, is_test_account
                FROM users
                WHERE is_test_account=0
                ORDER BY user_id ASC
                """
            )
            return [_row_to_user(r) for r in fetchall(cur)]

    def list_test_account_ids(self) -> set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE is_test_account=1")
            return {int(r["user_id"]) for r in fetchall(cur)}
