from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RescueType


@dataclass(frozen=True)
class RescueDraft:
    """Validated input of a rescue submission (before the store assigns id/timestamp)."""

    case_type: str
    case_subtype: Optional[str] = None
    treatment: Optional[str] = None
    hospital: Optional[str] = None
    rescue_type: Optional[RescueType] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    wound_dimensions: Optional[str] = None
    rescue_address: Optional[str] = None


@dataclass(frozen=True)
class RescueRecord:
    """Domain entity: ambulance rescue case. Created once, never edited."""

    rescue_id: int
    user_id: int
    case_type: str
    timestamp: datetime
    case_subtype: Optional[str] = None
    treatment: Optional[str] = None
    hospital: Optional[str] = None
    rescue_type: Optional[RescueType] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    wound_dimensions: Optional[str] = None
    rescue_address: Optional[str] = None

    @classmethod
    def from_draft(cls, *, rescue_id: int, user_id: int, timestamp: datetime, draft: RescueDraft) -> "RescueRecord":
        return cls(
            rescue_id=rescue_id,
            user_id=user_id,
            case_type=draft.case_type,
            timestamp=timestamp,
            case_subtype=draft.case_subtype,
            treatment=draft.treatment,
            hospital=draft.hospital,
            rescue_type=draft.rescue_type,
            start_time=draft.start_time,
            end_time=draft.end_time,
            wound_dimensions=draft.wound_dimensions,
            rescue_address=draft.rescue_address,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.rescue_id,
            "userId": self.user_id,
            "caseType": self.case_type,
            "caseSubtype": self.case_subtype,
            "treatment": self.treatment,
            "hospital": self.hospital,
            "rescueType": self.rescue_type.value if self.rescue_type else None,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "woundDimensions": self.wound_dimensions,
            "rescueAddress": self.rescue_address,
            "timestamp": self.timestamp.isoformat(),
        }
