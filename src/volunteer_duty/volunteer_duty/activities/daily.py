from __future__ import annotations

from typing import Iterable, Optional

from ..core.enums import ActivityType
from ..timezone.normalizer import CivilClock
from .model import Activity, DailyActivity


def newest_first(events: Iterable[Activity], *types: ActivityType) -> list[Activity]:
    """Events of the given types sorted by timestamp, newest first (ties: higher id first)."""
    wanted = set(types)
    selected = [e for e in events if not wanted or e.type in wanted]
    selected.sort(key=lambda e: (e.timestamp, e.activity_id), reverse=True)
    return selected


def latest_of(events: Iterable[Activity], activity_type: ActivityType) -> Optional[Activity]:
    ordered = newest_first(events, activity_type)
    return ordered[0] if ordered else None


class DailyAggregator:
    """Builds today's live status from one civil day of a user's events.

    "Most recent wins": a volunteer may sign in, sign out and sign in again;
    the status reflects the latest transition of each kind, not the first.
    """

    def __init__(self, clock: CivilClock):
        self._clock = clock

    def build(self, events: Iterable[Activity]) -> DailyActivity:
        events = list(events)
        sign_in = latest_of(events, ActivityType.SIGNIN)
        sign_out = latest_of(events, ActivityType.SIGNOUT)

        return DailyActivity(
            sign_in_time=self._clock.to_civil_time_of_day(sign_in.timestamp) if sign_in else None,
            sign_out_time=self._clock.to_civil_time_of_day(sign_out.timestamp) if sign_out else None,
            sign_out_ip=sign_out.ip if sign_out else None,
        )
