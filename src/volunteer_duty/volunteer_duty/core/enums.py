from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for authorization."""

    ADMIN = "admin"
    VOLUNTEER = "volunteer"


class ActivityType(str, Enum):
    """Kinds of attendance events stored in the activity log."""

    SIGNIN = "signin"
    SIGNOUT = "signout"
    TRAINING = "training"
    DUTY = "duty"


class MonthlyRecordType(str, Enum):
    """Row kinds emitted by the monthly breakdown."""

    PAIR = "pair"
    SIGNIN = "signin"
    SIGNOUT = "signout"


class RescueType(str, Enum):
    """Ambulance service level of a rescue case."""

    ALS = "ALS"
    BLS = "BLS"
    PUA = "PUA"
