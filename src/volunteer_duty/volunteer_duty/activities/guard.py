from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import ActivityType
from ..rescues.model import RescueDraft, RescueRecord
from ..rescues.repository import RescueRepository
from ..users.repository import UserRepository
from .model import Activity
from .repository import ActivityRepository

logger = logging.getLogger(__name__)

SYNTHETIC_ID = 0


class TestAccountGuard:
    """Single store-boundary check for test (demo/QA) accounts.

    Decorator Pattern: the guarded repositories below wrap the real ones, so no
    aggregator or service has to repeat the check. For a test account:

    - writes are accepted and answered with a synthetic record, but nothing is stored;
    - reads return nothing, so every aggregate comes out empty/zero;
    - all-user reads drop rows that belong to test accounts.
    """

    __test__ = False  # not a pytest test class

    def __init__(self, users: UserRepository):
        self._users = users

    def is_test_account(self, user_id: int) -> bool:
        return self._users.is_test_account(int(user_id))

    def test_account_ids(self) -> set[int]:
        return set(self._users.list_test_account_ids())

    def guard_activities(self, inner: ActivityRepository) -> "GuardedActivityRepository":
        return GuardedActivityRepository(inner, self)

    def guard_rescues(self, inner: RescueRepository) -> "GuardedRescueRepository":
        return GuardedRescueRepository(inner, self)


class GuardedActivityRepository(ActivityRepository):
    def __init__(self, inner: ActivityRepository, guard: TestAccountGuard):
        self._inner = inner
        self._guard = guard

    def append_event(
        self,
        *,
        user_id: int,
        type: ActivityType,
        timestamp: datetime,
        ip: Optional[str] = None,
    ) -> Activity:
        if self._guard.is_test_account(user_id):
            logger.info("Discarding %s event of test account %s", type.value, user_id)
            return Activity(activity_id=SYNTHETIC_ID, user_id=user_id, type=type, timestamp=timestamp, ip=ip)
        return self._inner.append_event(user_id=user_id, type=type, timestamp=timestamp, ip=ip)

    def delete_events(self, *, user_id: int, type: ActivityType, start: datetime, end: datetime) -> int:
        if self._guard.is_test_account(user_id):
            return 0
        return self._inner.delete_events(user_id=user_id, type=type, start=start, end=end)

    def supersede_signin(
        self,
        *,
        user_id: int,
        timestamp: datetime,
        day_start: datetime,
        day_end: datetime,
        ip: Optional[str] = None,
    ) -> Activity:
        if self._guard.is_test_account(user_id):
            logger.info("Discarding signin event of test account %s", user_id)
            return Activity(activity_id=SYNTHETIC_ID, user_id=user_id, type=ActivityType.SIGNIN, timestamp=timestamp, ip=ip)
        return self._inner.supersede_signin(
            user_id=user_id,
            timestamp=timestamp,
            day_start=day_start,
            day_end=day_end,
            ip=ip,
        )

    def query_events(
        self,
        *,
        user_id: Optional[int],
        start: datetime,
        end: datetime,
        types: Optional[Sequence[ActivityType]] = None,
    ) -> Sequence[Activity]:
        if user_id is not None:
            if self._guard.is_test_account(user_id):
                return []
            return self._inner.query_events(user_id=user_id, start=start, end=end, types=types)

        hidden = self._guard.test_account_ids()
        rows = self._inner.query_events(user_id=None, start=start, end=end, types=types)
        return [r for r in rows if r.user_id not in hidden]

    def recent_for_user(self, user_id: int, limit: int) -> Sequence[Activity]:
        if self._guard.is_test_account(user_id):
            return []
        return self._inner.recent_for_user(user_id, limit)


class GuardedRescueRepository(RescueRepository):
    def __init__(self, inner: RescueRepository, guard: TestAccountGuard):
        self._inner = inner
        self._guard = guard

    def append_rescue(self, *, user_id: int, timestamp: datetime, draft: RescueDraft) -> RescueRecord:
        if self._guard.is_test_account(user_id):
            logger.info("Discarding rescue record of test account %s", user_id)
            return RescueRecord.from_draft(rescue_id=SYNTHETIC_ID, user_id=user_id, timestamp=timestamp, draft=draft)
        return self._inner.append_rescue(user_id=user_id, timestamp=timestamp, draft=draft)

    def query_rescues(self, *, user_id: Optional[int], start: datetime, end: datetime) -> Sequence[RescueRecord]:
        if user_id is not None:
            if self._guard.is_test_account(user_id):
                return []
            return self._inner.query_rescues(user_id=user_id, start=start, end=end)

        hidden = self._guard.test_account_ids()
        return [r for r in self._inner.query_rescues(user_id=None, start=start, end=end) if r.user_id not in hidden]

    def recent_for_user(self, user_id: int, limit: int) -> Sequence[RescueRecord]:
        if self._guard.is_test_account(user_id):
            return []
        return self._inner.recent_for_user(user_id, limit)
