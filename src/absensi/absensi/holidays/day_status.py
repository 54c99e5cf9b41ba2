from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping

from ..core.enums import DayType
from ..core.labels import WEEKEND_DAY_NAMES
from .model import DayStatus, HolidayEntry


def build_holiday_map(entries: Iterable[HolidayEntry]) -> dict[date, HolidayEntry]:
    """Index holidays by date. The first entry for a date wins."""
    out: dict[date, HolidayEntry] = {}
    for e in entries:
        out.setdefault(e.date, e)
    return out


def classify_day(day: date, holidays: Mapping[date, HolidayEntry]) -> DayStatus:
    """Holiday outranks weekend, weekend outranks workday."""
    holiday = holidays.get(day)
    if holiday:
        return DayStatus(day_type=DayType.HOLIDAY, name=holiday.name)

    weekend_name = WEEKEND_DAY_NAMES.get(day.weekday())
    if weekend_name:
        return DayStatus(day_type=DayType.WEEKEND, name=weekend_name)

    return DayStatus(day_type=DayType.WORKDAY)
