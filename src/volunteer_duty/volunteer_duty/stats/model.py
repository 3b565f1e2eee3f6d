from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Stats:
    """Monthly totals for one volunteer."""

    work_hours: float = 0.0
    rescue_count: int = 0
    training_count: int = 0
    duty_count: int = 0
    user_id: Optional[int] = None
    user_name: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "workHours": self.work_hours,
            "rescueCount": self.rescue_count,
            "trainingCount": self.training_count,
            "dutyCount": self.duty_count,
        }
        if self.user_id is not None:
            out["userId"] = self.user_id
            out["userName"] = self.user_name
        return out
