from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import to_naive_utc
from ..core.constants import SUPERSEDE_LOCK_TIMEOUT_SECONDS
from ..core.enums import ActivityType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, utc_column
from .model import Activity
from .repository import ActivityRepository

logger = logging.getLogger(__name__)


def _row_to_activity(r: dict) -> Activity:
    return Activity(
        activity_id=int(r["activity_id"]),
        user_id=int(r["user_id"]),
        type=ActivityType(r["type"]),
        timestamp=utc_column(r["timestamp"]),
        ip=r.get("ip"),
    )


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append_event(
        self,
        *,
        user_id: int,
        type: ActivityType,
        timestamp: datetime,
        ip: Optional[str] = None,
    ) -> Activity:
        with db_cursor(self._conn_factory) as (_, cur):
            activity_id = self._insert(cur, user_id=user_id, type=type, timestamp=timestamp, ip=ip)
        return Activity(activity_id=activity_id, user_id=user_id, type=type, timestamp=timestamp, ip=ip)

    def delete_events(self, *, user_id: int, type: ActivityType, start: datetime, end: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._delete(cur, user_id=user_id, type=type, start=start, end=end)

    def supersede_signin(
        self,
        *,
        user_id: int,
        timestamp: datetime,
        day_start: datetime,
        day_end: datetime,
        ip: Optional[str] = None,
    ) -> Activity:
        # One advisory lock per (user, civil day): concurrent sign-ins of the same
        # volunteer are serialized; other users are unaffected.
        lock_name = f"volunteer_duty:supersede:{int(user_id)}:{to_naive_utc(day_start):%Y%m%d%H%M}"

        with db_cursor(self._conn_factory) as (conn, cur):
            cur.execute("SELECT GET_LOCK(%s, %s) AS acquired", (lock_name, SUPERSEDE_LOCK_TIMEOUT_SECONDS))
            acquired = fetchone(cur) or {}
            if not acquired.get("acquired"):
                logger.warning("Supersede lock %s not acquired; continuing without it", lock_name)

            try:
                try:
                    removed = self._delete(cur, user_id=user_id, type=ActivityType.SIGNOUT, start=day_start, end=day_end)
                    logger.debug("Superseded %d sign-out(s) for user %s", removed, user_id)
                except mysql.connector.Error:
                    # Best effort: the sign-in is stored even when cleanup fails.
                    logger.warning("Could not delete stale sign-outs for user %s", user_id, exc_info=True)

                activity_id = self._insert(cur, user_id=user_id, type=ActivityType.SIGNIN, timestamp=timestamp, ip=ip)
                conn.commit()
            finally:
                if acquired.get("acquired"):
                    cur.execute("SELECT RELEASE_LOCK(%s) AS released", (lock_name,))
                    fetchall(cur)

        return Activity(activity_id=activity_id, user_id=user_id, type=ActivityType.SIGNIN, timestamp=timestamp, ip=ip)

    def query_events(
        self,
        *,
        user_id: Optional[int],
        start: datetime,
        end: datetime,
        types: Optional[Sequence[ActivityType]] = None,
    ) -> Sequence[Activity]:
        clauses = ["timestamp BETWEEN %s AND %s"]
        params: list[object] = [to_naive_utc(start), to_naive_utc(end)]

        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        if types:
            clauses.append(f"type IN ({', '.join(['%s'] * len(types))})")
            params.extend(t.value for t in types)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT activity_id, user_id, type, timestamp, ip
                FROM activities
                WHERE {where}
                ORDER BY timestamp DESC, activity_id DESC
                """,
                tuple(params),
            )
            return [_row_to_activity(r) for r in fetchall(cur)]

    def recent_for_user(self, user_id: int, limit: int) -> Sequence[Activity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT activity_id, user_id, type, timestamp, ip
                FROM activities
                WHERE user_id=%s
                ORDER BY timestamp DESC, activity_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_row_to_activity(r) for r in fetchall(cur)]

    def _insert(self, cur, *, user_id: int, type: ActivityType, timestamp: datetime, ip: Optional[str]) -> int:
        cur.execute(
            """
            INSERT INTO activities(user_id, type, timestamp, ip)
            VALUES(%s,%s,%s,%s)
            """,
            (int(user_id), type.value, to_naive_utc(timestamp), ip),
        )
        return int(cur.lastrowid)

    def _delete(self, cur, *, user_id: int, type: ActivityType, start: datetime, end: datetime) -> int:
        cur.execute(
            """
            DELETE FROM activities
            WHERE user_id=%s AND type=%s AND timestamp BETWEEN %s AND %s
            """,
            (int(user_id), type.value, to_naive_utc(start), to_naive_utc(end)),
        )
        return int(cur.rowcount)
