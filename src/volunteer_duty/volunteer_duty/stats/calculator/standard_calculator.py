from __future__ import annotations

from datetime import datetime

from ...common.datetime_utils import as_utc
from ...core.constants import MAX_SESSION_HOURS
from .base import WorkHoursCalculator


class StandardWorkHoursCalculator(WorkHoursCalculator):
    """Standard rule: |out - in| in hours, credited only when 0 < hours <= max_hours.

    Out-of-range values are zeroed, not clamped. The absolute difference keeps
    a reversed pair (sign-out before sign-in) from going negative.
    """

    def __init__(self, max_hours: float = MAX_SESSION_HOURS):
        self._max_hours = float(max_hours)

    def session_hours(self, sign_in: datetime, sign_out: datetime) -> float:
        hours = abs((as_utc(sign_out) - as_utc(sign_in)).total_seconds()) / 3600
        if 0 < hours <= self._max_hours:
            return hours
        return 0.0
