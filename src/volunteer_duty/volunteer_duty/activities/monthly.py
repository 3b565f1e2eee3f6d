from __future__ import annotations

from typing import Iterable, Optional

from ..common.datetime_utils import round_half_up
from ..core.enums import ActivityType, MonthlyRecordType
from ..stats.calculator.base import WorkHoursCalculator
from ..stats.calculator.standard_calculator import StandardWorkHoursCalculator
from ..timezone.normalizer import CivilClock
from .daily import newest_first
from .model import Activity, MonthlyActivity


class MonthlyAggregator:
    """Audit breakdown of a month of sign-in/sign-out events.

    Per civil date the latest sign-in is paired with the latest sign-out
    (same rule as the live daily status). Every other sign-in or sign-out of
    that date is emitted as its own orphan row so duplicates, missing
    counterparts and backwards ranges stay visible instead of being collapsed.

    Anomalies are reported inline and never raised:

    - ``is_time_error`` marks a pair whose sign-in instant is after its sign-out.
    - ``duration`` is the absolute difference in hours rounded to one decimal,
      or 0 when it falls outside ``(0, 24]``.

    Rows come out newest date first; within a date the pair precedes orphans.
    """

    def __init__(self, clock: CivilClock, *, calculator: Optional[WorkHoursCalculator] = None):
        self._clock = clock
        self._calculator = calculator or StandardWorkHoursCalculator()

    def build(self, events: Iterable[Activity]) -> list[MonthlyActivity]:
        by_date: dict[str, list[Activity]] = {}
        for event in newest_first(events, ActivityType.SIGNIN, ActivityType.SIGNOUT):
            by_date.setdefault(self._clock.to_civil_date_string(event.timestamp), []).append(event)

        records: list[MonthlyActivity] = []
        for day, day_events in by_date.items():
            sign_ins = [e for e in day_events if e.type == ActivityType.SIGNIN]
            sign_outs = [e for e in day_events if e.type == ActivityType.SIGNOUT]

            if sign_ins and sign_outs:
                records.append(self._pair(day, sign_ins[0], sign_outs[0]))
                records.extend(self._orphan(day, e) for e in sign_ins[1:])
                records.extend(self._orphan(day, e) for e in sign_outs[1:])
            else:
                records.extend(self._orphan(day, e) for e in sign_ins)
                records.extend(self._orphan(day, e) for e in sign_outs)

        # list.sort is stable, also with reverse=True
        records.sort(key=lambda r: (r.date, r.activity_type == MonthlyRecordType.PAIR), reverse=True)
        return records

    def _pair(self, day: str, sign_in: Activity, sign_out: Activity) -> MonthlyActivity:
        hours = self._calculator.session_hours(sign_in.timestamp, sign_out.timestamp)
        return MonthlyActivity(
            date=day,
            sign_in_time=self._clock.to_civil_time_of_day(sign_in.timestamp),
            sign_out_time=self._clock.to_civil_time_of_day(sign_out.timestamp),
            duration=round_half_up(hours, 1),
            is_time_error=sign_in.timestamp > sign_out.timestamp,
            activity_id=sign_in.activity_id,
            activity_type=MonthlyRecordType.PAIR,
        )

    def _orphan(self, day: str, event: Activity) -> MonthlyActivity:
        time_of_day = self._clock.to_civil_time_of_day(event.timestamp)
        is_sign_in = event.type == ActivityType.SIGNIN
        return MonthlyActivity(
            date=day,
            sign_in_time=time_of_day if is_sign_in else None,
            sign_out_time=None if is_sign_in else time_of_day,
            duration=0.0,
            is_time_error=False,
            activity_id=event.activity_id,
            activity_type=MonthlyRecordType.SIGNIN if is_sign_in else MonthlyRecordType.SIGNOUT,
        )
