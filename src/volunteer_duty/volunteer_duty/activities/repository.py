from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ActivityType
from .model import Activity


class ActivityRepository(Protocol):
    """Append-only attendance event log.

    The one mutation besides appending is the sign-in supersession, which
    deletes the day's stale sign-outs before the new sign-in is stored.
    All ``start``/``end`` bounds are inclusive aware UTC datetimes.
    """

    def append_event(
        self,
        *,
        user_id: int,
        type: ActivityType,
        timestamp: datetime,
        ip: Optional[str] = None,
    ) -> Activity:
        raise NotImplementedError

    def delete_events(self, *, user_id: int, type: ActivityType, start: datetime, end: datetime) -> int:
        raise NotImplementedError

    def supersede_signin(
        self,
        *,
        user_id: int,
        timestamp: datetime,
        day_start: datetime,
        day_end: datetime,
        ip: Optional[str] = None,
    ) -> Activity:
        """Delete the user's sign-outs within the day, then insert the sign-in, as one unit.

        A failed delete must not prevent the insert.
        """

        raise NotImplementedError

    def query_events(
        self,
        *,
        user_id: Optional[int],
        start: datetime,
        end: datetime,
        types: Optional[Sequence[ActivityType]] = None,
    ) -> Sequence[Activity]:
        """Events in range, newest first. ``user_id=None`` means every user."""

        raise NotImplementedError

    def recent_for_user(self, user_id: int, limit: int) -> Sequence[Activity]:
        raise NotImplementedError
