from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Protocol, Sequence

import requests

from ..core.constants import DEFAULT_HOLIDAY_API_TIMEOUT, DEFAULT_HOLIDAY_API_URL, HOLIDAY_FALLBACK_NAME
from ..core.exceptions import HolidayProviderError
from .model import HolidayEntry

logger = logging.getLogger(__name__)


class HolidayProvider(Protocol):
    def fetch_holidays(self, year: int) -> Sequence[HolidayEntry]:
        raise NotImplementedError


class LiburDenoHolidayProvider(HolidayProvider):
    """Indonesian public holidays from the libur.deno.dev API.

    ``GET {base_url}?year=YYYY`` returns a JSON array of
    ``{"date": "YYYY-MM-DD", "name": ..., "is_national_holiday": ...}``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_HOLIDAY_API_URL,
        *,
        timeout: float = DEFAULT_HOLIDAY_API_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url
        self._timeout = timeout
        self._session = session or requests.Session()

    def fetch_holidays(self, year: int) -> Sequence[HolidayEntry]:
        try:
            resp = self._session.get(self._base_url, params={"year": int(year)}, timeout=self._timeout)
            resp.raise_for_status()
            payload = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise HolidayProviderError(f"Failed to fetch holidays for {year}: {e}") from e

        if not isinstance(payload, list):
            raise HolidayProviderError(f"Unexpected holiday payload for {year}: {type(payload).__name__}")

        entries = []
        for item in payload:
            entry = self._parse_item(item)
            if entry is not None:
                entries.append(entry)
        return entries

    @staticmethod
    def _parse_item(item: Any) -> Optional[HolidayEntry]:
        if not isinstance(item, dict) or not item.get("date"):
            logger.warning("skipping malformed holiday item: %r", item)
            return None
        try:
            day = date.fromisoformat(str(item["date"])[:10])
        except ValueError:
            logger.warning("skipping holiday with bad date: %r", item)
            return None
        return HolidayEntry(
            date=day,
            name=item.get("name") or item.get("holiday_name") or HOLIDAY_FALLBACK_NAME,
            is_national_holiday=bool(item.get("is_national_holiday", True)),
        )
