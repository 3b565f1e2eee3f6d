from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.validators import optional_clock_time, optional_text, require_choice, require_non_empty
from ..core.enums import RescueType
from ..timezone.normalizer import CivilClock
from ..users.repository import UserRepository
from .model import RescueDraft, RescueRecord
from .repository import RescueRepository


class RescueService:
    """Use case: submit and list ambulance rescue cases."""

    def __init__(self, rescues: RescueRepository, users: UserRepository, clock: CivilClock):
        self._rescues = rescues
        self._users = users
        self._clock = clock

    def create_rescue(self, user_id: int, fields: Mapping[str, Any]) -> RescueRecord:
        draft = self.parse_draft(fields)
        return self._rescues.append_rescue(user_id=user_id, timestamp=self._clock.now_utc(), draft=draft)

    @staticmethod
    def parse_draft(fields: Mapping[str, Any]) -> RescueDraft:
        """Validate a submission (camelCase keys, as posted by the client)."""

        case_type = require_non_empty(fields.get("caseType"), "Case type")

        rescue_type_raw = optional_text(fields.get("rescueType"))
        rescue_type = require_choice(rescue_type_raw, RescueType, "Rescue type") if rescue_type_raw else None

        # end may be earlier than start: the case ran past midnight
        start_time = optional_clock_time(fields.get("startTime"), "Start time")
        end_time = optional_clock_time(fields.get("endTime"), "End time")

        return RescueDraft(
            case_type=case_type,
            case_subtype=optional_text(fields.get("caseSubtype")),
            treatment=optional_text(fields.get("treatment")),
            hospital=optional_text(fields.get("hospital")),
            rescue_type=rescue_type,
            start_time=start_time,
            end_time=end_time,
            wound_dimensions=optional_text(fields.get("woundDimensions")),
            rescue_address=optional_text(fields.get("rescueAddress")),
        )

    def list_rescues(self, user_id: int, *, year: Optional[int] = None, month: Optional[int] = None) -> list[dict]:
        start, end = self._clock.civil_month_bounds(year, month)
        return [self._to_row(r) for r in self._rescues.query_rescues(user_id=user_id, start=start, end=end)]

    def list_all_rescues(self, *, year: Optional[int] = None, month: Optional[int] = None) -> list[dict]:
        start, end = self._clock.civil_month_bounds(year, month)
        names = {u.user_id: u.name for u in self._users.list_roster()}

        out: list[dict] = []
        for r in self._rescues.query_rescues(user_id=None, start=start, end=end):
            row = self._to_row(r)
            row["userId"] = r.user_id
            row["userName"] = names.get(r.user_id, "-")
            out.append(row)
        return out

    def _to_row(self, r: RescueRecord) -> dict:
        return {
            "id": r.rescue_id,
            "date": self._clock.to_civil_date_string(r.timestamp),
            "time": self._clock.to_civil_time_of_day(r.timestamp),
            "caseType": r.case_type,
            "caseSubtype": r.case_subtype,
            "treatment": r.treatment,
            "hospital": r.hospital,
            "rescueType": r.rescue_type.value if r.rescue_type else None,
            "startTime": r.start_time,
            "endTime": r.end_time,
            "woundDimensions": r.wound_dimensions,
            "rescueAddress": r.rescue_address,
        }
