from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

import pytest
from werkzeug.security import generate_password_hash

from src.volunteer_duty.volunteer_duty.activities.model import Activity
from src.volunteer_duty.volunteer_duty.container import wire_services
from src.volunteer_duty.volunteer_duty.core.enums import ActivityType, Role
from src.volunteer_duty.volunteer_duty.core.exceptions import StoreError
from src.volunteer_duty.volunteer_duty.rescues.model import RescueDraft, RescueRecord
from src.volunteer_duty.volunteer_duty.timezone.normalizer import CivilClock
from src.volunteer_duty.volunteer_duty.users.model import User
from src.volunteer_duty.volunteer_duty.users.service import VolunteerRoster

TAIPEI = ZoneInfo("Asia/Taipei")


def taipei(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    """Wall-clock time in Taipei as an aware UTC instant."""
    return datetime(year, month, day, hour, minute, second, tzinfo=TAIPEI).astimezone(timezone.utc)


class MutableNow:
    def __init__(self, value: datetime):
        self.value = value

    def __call__(self) -> datetime:
        return self.value

    def set(self, value: datetime) -> None:
        self.value = value


class InMemoryUsers:
    def __init__(self):
        self._by_id: dict[int, User] = {}
        self._id = 0

    def add(
        self,
        name: str,
        *,
        username: Optional[str] = None,
        password: str = "secret1",
        role: Role = Role.VOLUNTEER,
        is_test_account: bool = False,
    ) -> User:
        user_id = self.create_user(
            username=username or name.lower().replace(" ", "."),
            password_hash=generate_password_hash(password),
            name=name,
            role=role,
            is_test_account=is_test_account,
        )
        return self._by_id[user_id]

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def create_user(self, *, username, password_hash, name, role, is_test_account=False) -> int:
        self._id += 1
        self._by_id[self._id] = User(
            user_id=self._id,
            username=username,
            password_hash=password_hash,
            name=name,
            role=role,
            is_test_account=is_test_account,
        )
        return self._id

    def update_password(self, user_id: int, *, password_hash: str) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = User(
            user_id=user.user_id,
            username=user.username,
            password_hash=password_hash,
            name=user.name,
            role=user.role,
            is_test_account=user.is_test_account,
        )
        return True

    def is_test_account(self, user_id: int) -> bool:
        user = self._by_id.get(int(user_id))
        return bool(user and user.is_test_account)

    def list_roster(self):
        return [u for _, u in sorted(self._by_id.items()) if not u.is_test_account]

    def list_test_account_ids(self) -> set[int]:
        return {u.user_id for u in self._by_id.values() if u.is_test_account}


class InMemoryActivities:
    def __init__(self):
        self.events: list[Activity] = []
        self._id = 0
        self.fail_delete = False

    def add(self, user_id: int, type: ActivityType, timestamp: datetime, ip: Optional[str] = None) -> Activity:
        return self.append_event(user_id=user_id, type=type, timestamp=timestamp, ip=ip)

    def append_event(self, *, user_id, type, timestamp, ip=None) -> Activity:
        self._id += 1
        activity = Activity(activity_id=self._id, user_id=user_id, type=type, timestamp=timestamp, ip=ip)
        self.events.append(activity)
        return activity

    def delete_events(self, *, user_id, type, start, end) -> int:
        if self.fail_delete:
            raise StoreError("delete failed")
        keep = [e for e in self.events if not (e.user_id == user_id and e.type == type and start <= e.timestamp <= end)]
        removed = len(self.events) - len(keep)
        self.events = keep
        return removed

    def supersede_signin(self, *, user_id, timestamp, day_start, day_end, ip=None) -> Activity:
        try:
            self.delete_events(user_id=user_id, type=ActivityType.SIGNOUT, start=day_start, end=day_end)
        except StoreError:
            pass
        return self.append_event(user_id=user_id, type=ActivityType.SIGNIN, timestamp=timestamp, ip=ip)

    def query_events(self, *, user_id, start, end, types=None):
        rows = [
            e
            for e in self.events
            if (user_id is None or e.user_id == user_id)
            and start <= e.timestamp <= end
            and (not types or e.type in types)
        ]
        rows.sort(key=lambda e: (e.timestamp, e.activity_id), reverse=True)
        return rows

    def recent_for_user(self, user_id, limit):
        rows = [e for e in self.events if e.user_id == user_id]
        rows.sort(key=lambda e: (e.timestamp, e.activity_id), reverse=True)
        return rows[:limit]


class InMemoryRescues:
    def __init__(self):
        self.records: list[RescueRecord] = []
        self._id = 0

    def add(self, user_id: int, timestamp: datetime, case_type: str = "Medical") -> RescueRecord:
        return self.append_rescue(user_id=user_id, timestamp=timestamp, draft=RescueDraft(case_type=case_type))

    def append_rescue(self, *, user_id, timestamp, draft) -> RescueRecord:
        self._id += 1
        record = RescueRecord.from_draft(rescue_id=self._id, user_id=user_id, timestamp=timestamp, draft=draft)
        self.records.append(record)
        return record

    def query_rescues(self, *, user_id, start, end):
        rows = [r for r in self.records if (user_id is None or r.user_id == user_id) and start <= r.timestamp <= end]
        rows.sort(key=lambda r: (r.timestamp, r.rescue_id), reverse=True)
        return rows

    def recent_for_user(self, user_id, limit):
        rows = [r for r in self.records if r.user_id == user_id]
        rows.sort(key=lambda r: (r.timestamp, r.rescue_id), reverse=True)
        return rows[:limit]


@pytest.fixture
def now() -> MutableNow:
    # 2024-05-15 12:00 in Taipei
    return MutableNow(taipei(2024, 5, 15, 12, 0))


@pytest.fixture
def clock(now) -> CivilClock:
    return CivilClock("Asia/Taipei", now=now)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def activities() -> InMemoryActivities:
    return InMemoryActivities()


@pytest.fixture
def rescues() -> InMemoryRescues:
    return InMemoryRescues()


@pytest.fixture
def roster() -> VolunteerRoster:
    return VolunteerRoster.build(
        volunteer_names=["Volunteer One", "Volunteer Two"],
        admin_names=["Chief"],
        reserved_usernames=["test"],
    )


@pytest.fixture
def container(clock, users, activities, rescues, roster):
    return wire_services(
        clock=clock,
        users_repo=users,
        activities_repo=activities,
        rescues_repo=rescues,
        roster=roster,
    )


@pytest.fixture
def at():
    return taipei
