from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class WorkHoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for duty hours)."""

    @abstractmethod
    def session_hours(self, sign_in: datetime, sign_out: datetime) -> float:
        """Hours credited for one sign-in/sign-out pair; 0.0 when not creditable."""
        raise NotImplementedError
