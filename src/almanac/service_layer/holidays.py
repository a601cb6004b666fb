"""Registry of holiday authorities.

The engine itself knows nothing about holidays: it only offers the calendar
fields and weekday navigation that authorities use, and this registry, which
merges the answers of every registered authority. A day is a holiday as soon
as one authority says so.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from almanac.domain.value_objects import LOCAL, Instant, TimeZoneSpec

if TYPE_CHECKING:
    from almanac.interfaces.holiday_authority import HolidayAuthority
    from almanac.service_layer.converter import CalendarConverter

logger = logging.getLogger(__name__)


class HolidayRegistry:
    """Named holiday authorities consulted together.

    Args:
        converter: Converter used to turn instants into dates and back.
    """

    def __init__(self, converter: CalendarConverter) -> None:
        self.converter = converter
        self._authorities: dict[str, HolidayAuthority] = {}

    @property
    def names(self) -> list[str]:
        """Names of the registered authorities, in registration order."""
        return list(self._authorities)

    def register(self, name: str, authority: HolidayAuthority) -> None:
        """Register ``authority`` under ``name``, replacing any previous one."""
        if name in self._authorities:
            logger.info("Replacing holiday authority %r", name)
        self._authorities[name] = authority

    def deregister(self, name: str) -> HolidayAuthority:
        """Remove and return the authority registered under ``name``.

        Raises:
            KeyError: If no authority has that name.
        """
        try:
            return self._authorities.pop(name)
        except KeyError:
            raise KeyError(f"No holiday authority named {name!r}") from None

    def clear(self) -> None:
        """Remove every authority."""
        self._authorities.clear()

    def is_holiday(self, instant: Instant, tz: TimeZoneSpec = LOCAL) -> bool:
        """True if any authority considers the day of ``instant`` a holiday."""
        date = self.converter.to_fields(instant, tz)
        return any(authority.is_holiday(date) for authority in self._authorities.values())

    def is_work_day(self, instant: Instant, tz: TimeZoneSpec = LOCAL) -> bool:
        """True if no authority considers the day of ``instant`` a holiday."""
        return not self.is_holiday(instant, tz)

    def holidays_in_range(
        self, start: Instant, end: Instant, tz: TimeZoneSpec = LOCAL
    ) -> list[Instant]:
        """Midnight of every holiday between ``start`` and ``end`` inclusive.

        The answers of all authorities are merged, sorted and freed of
        duplicates.
        """
        first = self.converter.to_fields(start, tz)
        last = self.converter.to_fields(end, tz)

        days: set[Instant] = set()
        for authority in self._authorities.values():
            for date in authority.holidays_in_range(first, last):
                days.add(self.converter.from_fields(date.with_time()))
        return sorted(days)
