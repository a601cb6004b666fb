"""strftime-like rendering of instants and time spans.

The template is scanned one character at a time: everything but ``%``
specifiers is copied verbatim. Numeric specifiers are zero-padded to a fixed
width (year 4, day of year and milliseconds 3, weekday 1, everything else 2)
unless a printf-style flags/width prefix such as ``%-d`` or ``%5Y`` is given.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import IntEnum
from typing import TYPE_CHECKING

from almanac.domain import gregorian
from almanac.domain.errors import OutOfRangeError, UnsupportedFormatSpecifierError
from almanac.domain.value_objects import (
    LOCAL,
    CalendarFields,
    Instant,
    Month,
    NameFlags,
    TimeSpan,
    TimeZoneSpec,
    WeekFlags,
)

if TYPE_CHECKING:
    from almanac.config import EngineSettings
    from almanac.interfaces.locale import LocaleProvider
    from almanac.service_layer.arithmetic import CalendarArithmetic
    from almanac.service_layer.converter import CalendarConverter

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "%c"

#: default printf formats of the numeric specifiers.
DEFAULT_WIDTHS = {"Y": "%04d", "j": "%03d", "l": "%03d", "w": "%d"}

#: characters allowed in a flags/width prefix.
WIDTH_CHARS = "-+ 0123456789"


class DateFormatter:
    """Render instants as text.

    Args:
        converter: Converter producing the calendar fields.
        arithmetic: Used for week numbers.
        locale: Source of names and locale-preferred representations.
        settings: Engine settings (native year range for ``%c``/``%x``).
    """

    def __init__(
        self,
        converter: CalendarConverter,
        arithmetic: CalendarArithmetic,
        locale: LocaleProvider,
        settings: EngineSettings,
    ) -> None:
        self.converter = converter
        self.arithmetic = arithmetic
        self.locale = locale
        self.settings = settings

    def format(
        self,
        instant: Instant,
        template: str = DEFAULT_TEMPLATE,
        tz: TimeZoneSpec = LOCAL,
        strict: bool = False,
    ) -> str:
        """Render ``instant`` on the wall clock ``tz`` according to ``template``.

        Args:
            instant: The instant to render.
            template: strftime-like template (``%l`` adds milliseconds).
            tz: Wall clock to render the instant in.
            strict: Raise on unknown specifiers instead of copying them through.

        Returns:
            str: The rendered text.

        Raises:
            InvalidInstantError: If ``instant`` is the invalid sentinel.
            UnsupportedFormatSpecifierError: On an unknown specifier in strict mode.
            OutOfRangeError: If ``%c``/``%x`` finds no surrogate year.
        """
        fields = self.converter.to_fields(instant, tz)

        out: list[str] = []
        pos = 0
        end = len(template)
        while pos < end:
            ch = template[pos]
            pos += 1
            if ch != "%":
                out.append(ch)
                continue

            if pos == end:
                # a lone trailing '%'
                out.append("%")
                break

            width_start = pos
            while pos < end and template[pos] in WIDTH_CHARS:
                pos += 1
            width = template[width_start:pos]

            if pos == end:
                out.append("%" + width)
                break

            spec = template[pos]
            pos += 1
            numeric = "%" + width + "d" if width else DEFAULT_WIDTHS.get(spec, "%02d")
            out.append(
                self._render(spec, numeric, fields, instant, tz, template, strict)
            )

        return "".join(out)

    def _render(  # pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-return-statements,too-many-branches
        self,
        spec: str,
        numeric: str,
        fields: CalendarFields,
        instant: Instant,
        tz: TimeZoneSpec,
        template: str,
        strict: bool,
    ) -> str:
        match spec:
            case "a":
                return self.locale.weekday_name(fields.weekday, NameFlags.ABBR)
            case "A":
                return self.locale.weekday_name(fields.weekday, NameFlags.FULL)
            case "b":
                return self.locale.month_name(fields.month, NameFlags.ABBR)
            case "B":
                return self.locale.month_name(fields.month, NameFlags.FULL)
            case "c" | "x":
                return self._locale_date("%" + spec, fields)
            case "d":
                return numeric % fields.day
            case "H":
                return numeric % fields.hour
            case "I":
                hour12 = fields.hour - 12 if fields.hour > 12 else fields.hour or 12
                return numeric % hour12
            case "j":
                return numeric % fields.day_of_year
            case "l":
                return numeric % fields.millisecond
            case "m":
                return numeric % fields.month.number
            case "M":
                return numeric % fields.minute
            case "p":
                am, pm = self.locale.am_pm()
                return pm if fields.hour >= 12 else am
            case "S":
                return numeric % fields.second
            case "U":
                return numeric % self.arithmetic.week_of_year(
                    instant, WeekFlags.SUNDAY_FIRST, tz
                )
            case "W":
                return numeric % self.arithmetic.week_of_year(
                    instant, WeekFlags.MONDAY_FIRST, tz
                )
            case "w":
                return numeric % fields.weekday
            case "X":
                # any date will do
                return self.locale.strftime(
                    "%X", replace(fields, year=1976, month=Month.JAN, day=1)
                )
            case "y":
                return numeric % (fields.year % 100)
            case "Y":
                return numeric % fields.year
            case "Z":
                return self._zone_name(instant, tz)
            case "%":
                return "%"

        if strict:
            raise UnsupportedFormatSpecifierError(spec, template)
        logger.warning(
            "Unknown format specifier '%%%s' in %r, copied through", spec, template
        )
        return spec

    def _zone_name(self, instant: Instant, tz: TimeZoneSpec) -> str:
        if tz.is_local:
            dst = self.converter.native_dst_flag(instant)
            return self.converter.clock.zone_name(bool(dst))
        if tz.offset == 0:
            return "GMT"
        return str(tz)

    def _locale_date(self, template: str, fields: CalendarFields) -> str:
        first, last = self.settings.native_years
        if first <= fields.year <= last:
            return self.locale.strftime(template, fields)

        surrogate = self.surrogate_year(fields.year)
        text = self.locale.strftime(template, replace(fields, year=surrogate))

        long_form = str(surrogate)
        if long_form in text:
            return text.replace(long_form, f"{fields.year:04d}")

        # only the two-digit form: replace its last occurrence
        short_form = f"{surrogate % 100:02d}"
        head, sep, tail = text.rpartition(short_form)
        if not sep:
            return text
        return f"{head}{fields.year % 100:02d}{tail}"

    def surrogate_year(self, year: int) -> int:
        """Find a native-range year with the same leap-ness and January 1 weekday.

        The search walks one 28-year cycle starting from the year congruent to
        ``year`` modulo 28.

        Raises:
            OutOfRangeError: If no such year lies in the native range.
        """
        first, last = self.settings.native_years
        leap = gregorian.is_leap_year(year)
        weekday = gregorian.weekday_of(1, Month.JAN, year)

        start = first + (year - first) % 28
        for step in range(28):
            candidate = start + step
            if candidate > last:
                candidate -= 28
            if candidate < first:
                continue
            if (
                gregorian.is_leap_year(candidate) == leap
                and gregorian.weekday_of(1, Month.JAN, candidate) == weekday
            ):
                logger.debug("Using surrogate year %d for %d", candidate, year)
                return candidate

        raise OutOfRangeError("year without a native surrogate", year)

    # --- Convenience wrappers ---

    def format_iso_date(self, instant: Instant, tz: TimeZoneSpec = LOCAL) -> str:
        """``YYYY-MM-DD``."""
        return self.format(instant, "%Y-%m-%d", tz)

    def format_iso_time(self, instant: Instant, tz: TimeZoneSpec = LOCAL) -> str:
        """``HH:MM:SS``."""
        return self.format(instant, "%H:%M:%S", tz)

    def format_date(self, instant: Instant, tz: TimeZoneSpec = LOCAL) -> str:
        """The locale's preferred date representation."""
        return self.format(instant, "%x", tz)

    def format_time(self, instant: Instant, tz: TimeZoneSpec = LOCAL) -> str:
        """The locale's preferred time representation."""
        return self.format(instant, "%X", tz)


# ----------------------------------------------------------------------------
# Time spans
# ----------------------------------------------------------------------------


class _SpanPart(IntEnum):
    WEEK = 0
    DAY = 1
    HOUR = 2
    MINUTE = 3
    SECOND = 4
    MILLISECOND = 5


def format_timespan(span: TimeSpan, template: str = "%H:%M:%S") -> str:
    """Render a duration.

    The largest unit present in the template is reported in full (``%S``
    alone gives the total number of seconds); smaller units are reduced modulo
    the next larger one. Supported: ``%E`` weeks, ``%D`` days, ``%H`` hours,
    ``%M`` minutes, ``%S`` seconds, ``%l`` milliseconds and ``%%``. Negative
    spans are rendered as their absolute value with a leading ``-``.
    """
    ms = abs(span.ms)
    biggest = _SpanPart.MILLISECOND

    def part(kind: _SpanPart, total: int, modulo: int) -> int:
        nonlocal biggest
        if biggest < kind:
            return total % modulo
        biggest = kind
        return total

    out: list[str] = ["-"] if span.is_negative() else []
    chars = iter(template)
    for ch in chars:
        if ch != "%":
            out.append(ch)
            continue

        spec = next(chars, "%")
        match spec:
            case "E":
                biggest = _SpanPart.WEEK
                out.append(str(ms // (7 * gregorian.MILLISECONDS_PER_DAY)))
            case "D":
                days = part(_SpanPart.DAY, ms // gregorian.MILLISECONDS_PER_DAY, 7)
                out.append(str(days))
            case "H":
                out.append(f"{part(_SpanPart.HOUR, ms // 3_600_000, 24):02d}")
            case "M":
                out.append(f"{part(_SpanPart.MINUTE, ms // 60_000, 60):02d}")
            case "S":
                out.append(f"{part(_SpanPart.SECOND, ms // 1000, 60):02d}")
            case "l":
                total = ms if biggest == _SpanPart.MILLISECOND else ms % 1000
                out.append(f"{total:03d}")
            case "%":
                out.append("%")
            case _:
                logger.warning(
                    "Unknown time span specifier '%%%s' in %r, copied through",
                    spec,
                    template,
                )
                out.append(spec)
    return "".join(out)
