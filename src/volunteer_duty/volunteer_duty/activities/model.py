from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ActivityType, MonthlyRecordType


@dataclass(frozen=True)
class Activity:
    """Domain entity: one attendance event. Never mutated after creation."""

    activity_id: int
    user_id: int
    type: ActivityType
    timestamp: datetime
    ip: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.activity_id,
            "userId": self.user_id,
            "type": self.type.value,
            "timestamp": self.timestamp.isoformat(),
            "ip": self.ip,
        }


@dataclass(frozen=True)
class RecentEntry:
    """Row of the recent-activity feed (attendance events and rescue cases mixed)."""

    entry_id: int
    user_id: int
    type: str
    timestamp: datetime
    ip: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.entry_id,
            "userId": self.user_id,
            "type": self.type,
            "timestamp": self.timestamp.isoformat(),
            "ip": self.ip,
        }


@dataclass(frozen=True)
class DailyActivity:
    """Live status for today: latest sign-in and latest sign-out as ``HH:mm``."""

    sign_in_time: Optional[str] = None
    sign_out_time: Optional[str] = None
    sign_out_ip: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "signInTime": self.sign_in_time,
            "signOutTime": self.sign_out_time,
            "signOutIP": self.sign_out_ip,
        }


@dataclass(frozen=True)
class MonthlyActivity:
    """Read-model row of the monthly breakdown (one pair or one orphan event)."""

    date: str
    sign_in_time: Optional[str]
    sign_out_time: Optional[str]
    duration: float
    is_time_error: bool
    activity_id: int
    activity_type: MonthlyRecordType
    user_id: Optional[int] = None
    user_name: Optional[str] = None

    def to_dict(self) -> dict:
        out = {
            "date": self.date,
            "signInTime": self.sign_in_time,
            "signOutTime": self.sign_out_time,
            "duration": self.duration,
            "isTimeError": self.is_time_error,
            "activityId": self.activity_id,
            "activityType": self.activity_type.value,
        }
        if self.user_id is not None:
            out["userId"] = self.user_id
            out["userName"] = self.user_name
        return out
