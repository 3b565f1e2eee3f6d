from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..common.datetime_utils import as_utc, now_utc
from ..core.constants import DEFAULT_CIVIL_TIMEZONE
from ..core.exceptions import ValidationError

Bounds = tuple[datetime, datetime]


class CivilClock:
    """Maps UTC instants onto calendar days of one fixed civil timezone.

    All "today" and "this month" windows are computed here, never from the
    host's local timezone, so a server running in another region still cuts
    days at civil midnight. Bounds are returned as aware UTC datetimes and are
    inclusive on both ends (``start`` is 00:00:00, ``end`` is the last
    microsecond of the last day).

    ``now`` can be injected so tests run against a frozen instant.
    """

    def __init__(self, tz_name: str = DEFAULT_CIVIL_TIMEZONE, *, now: Optional[Callable[[], datetime]] = None):
        try:
            self._tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValidationError(f"Unknown timezone: {tz_name!r}")
        self._tz_name = tz_name
        self._now = now or now_utc

    @property
    def tz_name(self) -> str:
        return self._tz_name

    def now_utc(self) -> datetime:
        return as_utc(self._now())

    def to_civil(self, instant: datetime) -> datetime:
        return as_utc(instant).astimezone(self._tz)

    def civil_date(self, instant: datetime) -> date:
        return self.to_civil(instant).date()

    def today(self) -> date:
        return self.civil_date(self.now_utc())

    def civil_day_bounds(self, instant: Optional[datetime] = None) -> Bounds:
        day = self.civil_date(instant if instant is not None else self.now_utc())
        return self._bounds(day, day)

    def civil_month_bounds(self, year: Optional[int] = None, month: Optional[int] = None) -> Bounds:
        """First and last instant of a civil month; missing parts default to the current month."""
        today = self.today()
        year = today.year if year is None else int(year)
        month = today.month if month is None else int(month)
        if not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")
        if not 1 <= year <= 9999:
            raise ValidationError("year is out of range")

        last_day = monthrange(year, month)[1]
        return self._bounds(date(year, month, 1), date(year, month, last_day))

    def to_civil_time_of_day(self, instant: datetime) -> str:
        return self.to_civil(instant).strftime("%H:%M")

    def to_civil_date_string(self, instant: datetime) -> str:
        return self.to_civil(instant).strftime("%Y-%m-%d")

    def _bounds(self, first: date, last: date) -> Bounds:
        try:
            start = datetime.combine(first, time.min, tzinfo=self._tz)
            next_start = datetime.combine(last + timedelta(days=1), time.min, tzinfo=self._tz)
            start_utc = start.astimezone(timezone.utc)
            end_utc = next_start.astimezone(timezone.utc) - timedelta(microseconds=1)
        except OverflowError:
            # first/last day of the datetime range has no representable neighbour
            raise ValidationError("year is out of range")
        return start_utc, end_utc
