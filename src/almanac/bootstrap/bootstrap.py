"""Wire the calendar engine together."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from almanac import config
from almanac.adapters.civil_time import JdnCivilTime, NativeCivilTime
from almanac.adapters.clocks import SystemClock
from almanac.adapters.dst_rules import ApproximateDstRule, default_rules
from almanac.adapters.holidays import WorkDaysAuthority
from almanac.adapters.locale import StrftimeLocale
from almanac.service_layer import dos
from almanac.service_layer.arithmetic import CalendarArithmetic
from almanac.service_layer.converter import CalendarConverter
from almanac.service_layer.dst import DstResolver
from almanac.service_layer.formatting import DateFormatter
from almanac.service_layer.holidays import HolidayRegistry
from almanac.service_layer.parsing import FormatParser, FreeTextParser, parse_rfc822

if TYPE_CHECKING:
    from almanac.domain.value_objects import Country, Instant
    from almanac.interfaces.clock import Clock
    from almanac.interfaces.dst_rule import DstRule
    from almanac.interfaces.locale import LocaleProvider
    from almanac.service_layer.parsing import ParseResult

WORK_DAYS = "work-days"  # pragma: no mutate


@dataclass(frozen=True)
class Engine:  # pylint: disable=too-many-instance-attributes
    """A class to hold the wired calendar services.

    Several engines with different settings (country, week start, clock,
    locale) can live side by side; nothing is shared between them.
    """

    settings: config.EngineSettings
    clock: Clock
    locale: LocaleProvider
    converter: CalendarConverter
    arithmetic: CalendarArithmetic
    dst: DstResolver
    formatter: DateFormatter
    format_parser: FormatParser
    free_text_parser: FreeTextParser
    holidays: HolidayRegistry

    def parse_rfc822(self, text: str) -> ParseResult:
        """Parse an RFC 822 date with this engine's settings."""
        return parse_rfc822(self.converter, text, self.settings)

    def to_dos(self, instant: Instant) -> int:
        """Pack ``instant`` into a DOS date/time stamp."""
        return dos.to_dos(self.converter, instant)

    def from_dos(self, packed: int) -> Instant:
        """Unpack a DOS date/time stamp."""
        return dos.from_dos(self.converter, packed)


def build_dst_resolver(
    converter: CalendarConverter,
    settings: config.EngineSettings,
    overrides: Mapping[Country, DstRule] | None = None,
) -> DstResolver:
    """Build a DST resolver from the built-in rules and optional overrides."""
    rules = default_rules()
    rules.update(overrides or {})
    return DstResolver(converter, settings, rules, ApproximateDstRule())


def bootstrap(
    settings: config.EngineSettings | None = None,
    clock: Clock | None = None,
    locale: LocaleProvider | None = None,
    dst_rules: Mapping[Country, DstRule] | None = None,
) -> Engine:
    """Assemble an engine.

    Args:
        settings: Engine settings; read from the environment when omitted.
        clock: Source of the current time; the system clock when omitted.
        locale: Names and preferred representations; the C library's when
            omitted.
        dst_rules: Per-country DST rules replacing the built-in ones.

    Returns:
        Engine: The wired services. The work-days holiday authority is
        registered under ``"work-days"``.
    """
    settings = settings or config.load_settings()
    clock = clock or SystemClock()
    locale = locale or StrftimeLocale()

    converter = CalendarConverter(
        clock, NativeCivilTime(settings.native_years), JdnCivilTime()
    )
    arithmetic = CalendarArithmetic(converter, settings)

    holidays = HolidayRegistry(converter)
    holidays.register(WORK_DAYS, WorkDaysAuthority())

    return Engine(
        settings=settings,
        clock=clock,
        locale=locale,
        converter=converter,
        arithmetic=arithmetic,
        dst=build_dst_resolver(converter, settings, dst_rules),
        formatter=DateFormatter(converter, arithmetic, locale, settings),
        format_parser=FormatParser(converter, locale, settings),
        free_text_parser=FreeTextParser(converter, arithmetic, locale, settings),
        holidays=holidays,
    )
