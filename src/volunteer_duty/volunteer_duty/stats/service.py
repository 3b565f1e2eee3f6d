from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from ..activities.daily import latest_of
from ..activities.model import Activity
from ..activities.repository import ActivityRepository
from ..common.datetime_utils import round_half_up
from ..core.enums import ActivityType
from ..rescues.repository import RescueRepository
from ..timezone.normalizer import CivilClock
from ..users.repository import UserRepository
from .calculator.base import WorkHoursCalculator
from .calculator.standard_calculator import StandardWorkHoursCalculator
from .model import Stats


class StatsService:
    """Monthly roll-up per volunteer: duty hours plus rescue/training/duty counts.

    Unlike the monthly breakdown this is a scalar summary: one pair per civil
    day (latest sign-in with latest sign-out), duplicates are ignored.
    """

    def __init__(
        self,
        activities: ActivityRepository,
        rescues: RescueRepository,
        users: UserRepository,
        clock: CivilClock,
        *,
        calculator: Optional[WorkHoursCalculator] = None,
    ):
        self._activities = activities
        self._rescues = rescues
        self._users = users
        self._clock = clock
        self._calculator = calculator or StandardWorkHoursCalculator()

    def get_stats(self, user_id: int, *, year: Optional[int] = None, month: Optional[int] = None) -> Stats:
        start, end = self._clock.civil_month_bounds(year, month)
        events = list(self._activities.query_events(user_id=user_id, start=start, end=end))
        rescues = self._rescues.query_rescues(user_id=user_id, start=start, end=end)

        return Stats(
            work_hours=self.work_hours(events),
            rescue_count=len(rescues),
            training_count=sum(1 for e in events if e.type == ActivityType.TRAINING),
            duty_count=sum(1 for e in events if e.type == ActivityType.DUTY),
        )

    def get_all_users_stats(self, *, year: Optional[int] = None, month: Optional[int] = None) -> list[Stats]:
        return [
            replace(self.get_stats(u.user_id, year=year, month=month), user_id=u.user_id, user_name=u.name)
            for u in self._users.list_roster()
        ]

    def work_hours(self, events: Iterable[Activity]) -> float:
        by_date: dict[str, list[Activity]] = {}
        for e in events:
            by_date.setdefault(self._clock.to_civil_date_string(e.timestamp), []).append(e)

        total = 0.0
        for day_events in by_date.values():
            sign_in = latest_of(day_events, ActivityType.SIGNIN)
            sign_out = latest_of(day_events, ActivityType.SIGNOUT)
            if sign_in and sign_out:
                total += self._calculator.session_hours(sign_in.timestamp, sign_out.timestamp)

        return max(round_half_up(total, 1), 0.0)
