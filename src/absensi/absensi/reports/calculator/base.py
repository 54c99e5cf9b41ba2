from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional


class WorkDurationCalculator(ABC):
    """Calculator interface (Strategy Pattern for counted work time)."""

    @abstractmethod
    def work_duration(self, *, check_in: Optional[datetime], check_out: Optional[datetime]) -> timedelta:
        raise NotImplementedError
