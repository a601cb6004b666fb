"""Time zone offsets and daylight-saving time resolution."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from almanac.domain.value_objects import (
    INVALID_YEAR,
    UTC,
    Country,
    Instant,
    TimeSpan,
    TimeZoneSpec,
)
from almanac.service_layer.country import resolve_country

if TYPE_CHECKING:
    from almanac.config import EngineSettings
    from almanac.interfaces.dst_rule import DstRule
    from almanac.service_layer.converter import CalendarConverter

logger = logging.getLogger(__name__)

#: DST is assumed to always shift the clock by one hour.
DST_SHIFT = TimeSpan.hours(1)


class DstResolver:
    """Per-country, per-year DST windows and time zone shifts.

    Args:
        converter: Converter used to build transition instants.
        settings: Engine settings holding the default country.
        rules: Rule of each concrete country.
        fallback: Rule for countries missing from ``rules``.
    """

    def __init__(
        self,
        converter: CalendarConverter,
        settings: EngineSettings,
        rules: Mapping[Country, DstRule],
        fallback: DstRule,
    ) -> None:
        self.converter = converter
        self.settings = settings
        self.rules = dict(rules)
        self.fallback = fallback

    def country(self, country: Country = Country.DEFAULT) -> Country:
        """Resolve ``DEFAULT``/``UNKNOWN`` to a concrete country."""
        return resolve_country(country, self.settings, self.converter.clock)

    def rule(self, country: Country = Country.DEFAULT) -> DstRule:
        """The DST rule of ``country``."""
        return self.rules.get(self.country(country), self.fallback)

    def get_offset(self, tz: TimeZoneSpec) -> int:
        """Offset of ``tz`` in seconds east of UTC."""
        return self.converter.get_offset(tz)

    def _year(self, year: int) -> int:
        return self.converter.current_year() if year == INVALID_YEAR else year

    def is_dst_applicable(
        self, year: int = INVALID_YEAR, country: Country = Country.DEFAULT
    ) -> bool:
        """True if DST was observed in ``year`` (default: current) in ``country``."""
        return self.rule(country).is_applicable(self._year(year))

    def begin_dst(
        self, year: int = INVALID_YEAR, country: Country = Country.DEFAULT
    ) -> Instant | None:
        """The instant DST starts, or None if it is not observed that year."""
        fields = self.rule(country).begin(self._year(year))
        return None if fields is None else self.converter.from_fields(fields)

    def end_dst(
        self, year: int = INVALID_YEAR, country: Country = Country.DEFAULT
    ) -> Instant | None:
        """The instant DST ends, or None if it is not observed that year."""
        fields = self.rule(country).end(self._year(year))
        return None if fields is None else self.converter.from_fields(fields)

    def is_dst(
        self, instant: Instant, country: Country = Country.DEFAULT
    ) -> bool | None:
        """Whether DST is in effect at ``instant``.

        For the default country the operating system's flag is used wherever
        it is known; otherwise the instant is compared with the rule's window.

        Returns:
            bool | None: None when DST is not observed in that year at all.
        """
        instant.require_valid("check DST of")

        if country in (Country.DEFAULT, Country.UNKNOWN):
            flag = self.converter.native_dst_flag(instant)
            if flag is not None:
                return flag

        year = self.converter.to_fields(instant).year
        begin = self.begin_dst(year, country)
        end = self.end_dst(year, country)
        if begin is None or end is None:
            return None
        return begin <= instant <= end

    def make_timezone(
        self, instant: Instant, tz: TimeZoneSpec, suppress_dst: bool = False
    ) -> Instant:
        """Reinterpret the local wall-clock reading of ``instant`` as a reading in ``tz``.

        The shift is the offset of ``tz`` minus the local offset; one more hour
        is taken off when DST is in effect locally, unless ``suppress_dst``.
        """
        shift = TimeSpan.seconds(self.get_offset(tz) - self.converter.clock.local_offset())
        if not suppress_dst and self.is_dst(instant):
            shift = shift - DST_SHIFT

        logger.debug("Shifting %s by %d ms into %s", instant, -shift.ms, tz)
        return instant - shift

    to_timezone = make_timezone

    def make_gmt(self, instant: Instant, suppress_dst: bool = False) -> Instant:
        """Reinterpret the local wall-clock reading of ``instant`` as a UTC reading."""
        return self.make_timezone(instant, UTC, suppress_dst)
