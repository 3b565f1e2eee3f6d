from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..common.validators import require_choice
from ..core.constants import RECENT_ACTIVITY_LIMIT, RECENT_RESCUE_LIMIT, RESCUE_FEED_ID_OFFSET
from ..core.enums import ActivityType
from ..rescues.repository import RescueRepository
from ..timezone.normalizer import CivilClock
from ..users.repository import UserRepository
from .daily import DailyAggregator
from .model import Activity, DailyActivity, MonthlyActivity, RecentEntry
from .monthly import MonthlyAggregator
from .repository import ActivityRepository

_PAIRABLE = (ActivityType.SIGNIN, ActivityType.SIGNOUT)


class ActivityService:
    """Use cases around the attendance event log.

    Reads always re-derive from stored events; nothing is cached between calls.
    """

    def __init__(
        self,
        activities: ActivityRepository,
        rescues: RescueRepository,
        users: UserRepository,
        clock: CivilClock,
        *,
        daily: Optional[DailyAggregator] = None,
        monthly: Optional[MonthlyAggregator] = None,
    ):
        self._activities = activities
        self._rescues = rescues
        self._users = users
        self._clock = clock
        self._daily = daily or DailyAggregator(clock)
        self._monthly = monthly or MonthlyAggregator(clock)

    def record_activity(self, user_id: int, activity_type: Optional[str], *, ip: Optional[str] = None) -> Activity:
        kind = require_choice(activity_type, ActivityType, "Activity type")
        now = self._clock.now_utc()

        if kind == ActivityType.SIGNIN:
            # A sign-in starts a fresh session: today's earlier sign-outs go away.
            day_start, day_end = self._clock.civil_day_bounds(now)
            return self._activities.supersede_signin(
                user_id=user_id,
                timestamp=now,
                day_start=day_start,
                day_end=day_end,
                ip=ip,
            )

        return self._activities.append_event(user_id=user_id, type=kind, timestamp=now, ip=ip)

    def get_daily_activity(self, user_id: int) -> DailyActivity:
        start, end = self._clock.civil_day_bounds()
        events = self._activities.query_events(user_id=user_id, start=start, end=end, types=_PAIRABLE)
        return self._daily.build(events)

    def get_recent_activities(self, user_id: int, *, limit: int = RECENT_ACTIVITY_LIMIT) -> list[RecentEntry]:
        entries = [
            RecentEntry(entry_id=a.activity_id, user_id=a.user_id, type=a.type.value, timestamp=a.timestamp, ip=a.ip)
            for a in self._activities.recent_for_user(user_id, limit)
        ]
        entries.extend(
            RecentEntry(entry_id=r.rescue_id + RESCUE_FEED_ID_OFFSET, user_id=r.user_id, type="rescue", timestamp=r.timestamp, ip="")
            for r in self._rescues.recent_for_user(user_id, RECENT_RESCUE_LIMIT)
        )
        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries[:limit]

    def get_monthly_activities(
        self,
        user_id: int,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> list[MonthlyActivity]:
        start, end = self._clock.civil_month_bounds(year, month)
        events = self._activities.query_events(user_id=user_id, start=start, end=end, types=_PAIRABLE)
        return self._monthly.build(events)

    def get_all_users_monthly_activities(
        self,
        *,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> list[MonthlyActivity]:
        out: list[MonthlyActivity] = []
        for user in self._users.list_roster():
            rows = self.get_monthly_activities(user.user_id, year=year, month=month)
            out.extend(replace(r, user_id=user.user_id, user_name=user.name) for r in rows)
        return out
