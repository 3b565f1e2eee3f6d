from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import RescueDraft, RescueRecord


class RescueRepository(Protocol):
    def append_rescue(self, *, user_id: int, timestamp: datetime, draft: RescueDraft) -> RescueRecord:
        raise NotImplementedError

    def query_rescues(self, *, user_id: Optional[int], start: datetime, end: datetime) -> Sequence[RescueRecord]:
        """Rescues in the inclusive UTC range, newest first. ``user_id=None`` means every user."""

        raise NotImplementedError

    def recent_for_user(self, user_id: int, limit: int) -> Sequence[RescueRecord]:
        raise NotImplementedError
