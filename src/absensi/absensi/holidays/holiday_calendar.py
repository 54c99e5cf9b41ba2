from __future__ import annotations

import logging
import time
from datetime import date
from typing import Callable, Optional

from ..core.constants import HOLIDAY_MAX_YEAR_SPAN
from ..core.exceptions import HolidayProviderError, InvalidRangeError
from .model import HolidayEntry
from .provider import HolidayProvider

logger = logging.getLogger(__name__)


class HolidayCalendar:
    """Per-year holiday cache in front of a ``HolidayProvider``.

    Entries expire after ``ttl_seconds`` (``0`` keeps them for the life of the
    object). A failing provider yields no holidays for that year; the failure
    is not cached so the next call asks again.
    """

    def __init__(
        self,
        provider: HolidayProvider,
        *,
        ttl_seconds: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._provider = provider
        self._ttl = float(ttl_seconds)
        self._clock = clock
        self._years: dict[int, tuple[float, list[HolidayEntry]]] = {}

    def _fresh(self, loaded_at: float) -> bool:
        return self._ttl <= 0 or (self._clock() - loaded_at) < self._ttl

    def entries_for_year(self, year: int) -> list[HolidayEntry]:
        cached = self._years.get(year)
        if cached and self._fresh(cached[0]):
            return list(cached[1])

        try:
            entries = list(self._provider.fetch_holidays(year))
        except HolidayProviderError as e:
            logger.warning("holiday calendar unavailable for %s, using weekends only: %s", year, e)
            return []

        self._years[year] = (self._clock(), entries)
        return list(entries)

    def entries_for_range(self, start: date, end: date) -> list[HolidayEntry]:
        if end.year - start.year + 1 > HOLIDAY_MAX_YEAR_SPAN:
            raise InvalidRangeError(f"Rentang tanggal maksimal {HOLIDAY_MAX_YEAR_SPAN} tahun kalender")
        out: list[HolidayEntry] = []
        for year in range(start.year, end.year + 1):
            out.extend(e for e in self.entries_for_year(year) if start <= e.date <= end)
        return out

    def invalidate(self, year: Optional[int] = None) -> None:
        if year is None:
            self._years.clear()
        else:
            self._years.pop(year, None)

    @property
    def loaded_years(self) -> list[int]:
        return sorted(self._years)
