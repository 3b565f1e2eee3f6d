from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import to_naive_utc
from ..core.enums import RescueType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, utc_column
from .model import RescueDraft, RescueRecord
from .repository import RescueRepository

_COLUMNS = """
    rescue_id, user_id, case_type, case_subtype, treatment, hospital, rescue_type,
    start_time, end_time, wound_dimensions, rescue_address, timestamp
"""


def _row_to_rescue(r: dict) -> RescueRecord:
    return RescueRecord(
        rescue_id=int(r["rescue_id"]),
        user_id=int(r["user_id"]),
        case_type=r["case_type"],
        timestamp=utc_column(r["timestamp"]),
        case_subtype=r.get("case_subtype"),
        treatment=r.get("treatment"),
        hospital=r.get("hospital"),
        rescue_type=RescueType(r["rescue_type"]) if r.get("rescue_type") else None,
        start_time=r.get("start_time"),
        end_time=r.get("end_time"),
        wound_dimensions=r.get("wound_dimensions"),
        rescue_address=r.get("rescue_address"),
    )


class MySQLRescueRepository(RescueRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append_rescue(self, *, user_id: int, timestamp: datetime, draft: RescueDraft) -> RescueRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO rescues(
                    user_id, case_type, case_subtype, treatment, hospital, rescue_type,
                    start_time, end_time, wound_dimensions, rescue_address, timestamp
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    draft.case_type,
                    draft.case_subtype,
                    draft.treatment,
                    draft.hospital,
                    draft.rescue_type.value if draft.rescue_type else None,
                    draft.start_time,
                    draft.end_time,
                    draft.wound_dimensions,
                    draft.rescue_address,
                    to_naive_utc(timestamp),
                ),
            )
            rescue_id = int(cur.lastrowid)
        return RescueRecord.from_draft(rescue_id=rescue_id, user_id=user_id, timestamp=timestamp, draft=draft)

    def query_rescues(self, *, user_id: Optional[int], start: datetime, end: datetime) -> Sequence[RescueRecord]:
        clauses = ["timestamp BETWEEN %s AND %s"]
        params: list[object] = [to_naive_utc(start), to_naive_utc(end)]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM rescues
                WHERE {" AND ".join(clauses)}
                ORDER BY timestamp DESC, rescue_id DESC
                """,
                tuple(params),
            )
            return [_row_to_rescue(r) for r in fetchall(cur)]

    def recent_for_user(self, user_id: int, limit: int) -> Sequence[RescueRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM rescues
                WHERE user_id=%s
                ORDER BY timestamp DESC, rescue_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_row_to_rescue(r) for r in fetchall(cur)]
