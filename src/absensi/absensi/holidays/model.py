from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import DayType


@dataclass(frozen=True)
class HolidayEntry:
    date: date
    name: str
    is_national_holiday: bool = True


@dataclass(frozen=True)
class DayStatus:
    """Calendar classification of a date, independent of any employee."""

    day_type: DayType
    name: Optional[str] = None

    @property
    def is_off_day(self) -> bool:
        return self.day_type != DayType.WORKDAY
