"""Template-driven parsing, the inverse of `DateFormatter.format`.

The template is walked in lockstep with the input. A whitespace character in
the template matches any run (possibly empty) of whitespace in the input, any
other literal must match itself, and ``%`` specifiers consume a run of at most
``width`` digits or a run of letters. Composite specifiers (``%c``, ``%x``,
``%X``, ``%r``, ``%R``, ``%T``) are parsed by recursive calls with canned
templates; a failed attempt leaves nothing behind, so the next alternative
starts from a clean slate.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from almanac.domain import gregorian
from almanac.domain.errors import ParseNoMatchError, UnsupportedFormatSpecifierError
from almanac.domain.value_objects import (
    NAMED_ZONES,
    CalendarFields,
    Country,
    Instant,
    Month,
    NameFlags,
    TimeZoneSpec,
    WeekDay,
)
from almanac.service_layer.country import resolve_country

from .common import ParseResult, no_match, read_alpha, read_number, skip_spaces

if TYPE_CHECKING:
    from almanac.config import EngineSettings
    from almanac.interfaces.locale import LocaleProvider
    from almanac.service_layer.converter import CalendarConverter

# pylint: disable=too-many-instance-attributes

DEFAULT_TEMPLATE = "%c"

#: default widths of the numeric specifiers (2 for the others).
DEFAULT_WIDTHS = {"Y": 4, "j": 3, "l": 3, "w": 1}

# canned templates of the composite specifiers
CTIME_TEMPLATE = "%a %b %d %H:%M:%S %Y"
DATE_TIME_TEMPLATES = (CTIME_TEMPLATE, "%x %X", "%X %x")
DAY_FIRST_DATE = "%d/%m/%y"
MONTH_FIRST_DATE = "%m/%d/%y"
TIME_TEMPLATES = ("%T", "%r")
TIME_12H_TEMPLATE = "%I:%M:%S %p"
TIME_24H_TEMPLATE = "%H:%M:%S"
HOUR_MINUTE_TEMPLATE = "%H:%M"


@dataclass
class _Scanned:
    """Fields found so far; None means "not in the input"."""

    year: int | None = None
    month: Month | None = None
    day: int | None = None
    year_day: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    millisecond: int | None = None
    weekday: WeekDay | None = None
    offset: int | None = None
    hour_is_12h: bool = False
    is_pm: bool = False

    def merge(self, other: _Scanned, *names: str) -> None:
        """Copy the named fields found by a nested scan."""
        for name in names:
            value = getattr(other, name)
            if value is not None:
                setattr(self, name, value)


_DATE_NAMES = ("year", "month", "day")
_TIME_NAMES = ("hour", "minute", "second")


class FormatParser:
    """Parse text according to a strftime-like template.

    Args:
        converter: Converter used to build the instant (and to find today).
        locale: Source of month/weekday names and of the AM/PM markers.
        settings: Engine settings (default country for ``%x``, year pivot).
    """

    def __init__(
        self,
        converter: CalendarConverter,
        locale: LocaleProvider,
        settings: EngineSettings,
    ) -> None:
        self.converter = converter
        self.locale = locale
        self.settings = settings

    def parse(
        self,
        text: str,
        template: str = DEFAULT_TEMPLATE,
        default: Instant | None = None,
        current: Instant | None = None,
    ) -> ParseResult:
        """Parse the beginning of ``text`` according to ``template``.

        Fields absent from the template are taken from ``default`` if given
        and valid, else from ``current`` if given and valid, else from today.
        Month and day take precedence over the day of the year; a parsed
        weekday is only checked against the resulting date.

        Args:
            text: The text to parse.
            template: strftime-like template.
            default: Explicit source of the missing fields.
            current: Fallback source of the missing fields (typically the
                value being replaced).

        Returns:
            ParseResult: The parsed instant, its fields and the end of the
            consumed text.

        Raises:
            ParseNoMatchError: If the text does not match the template or the
                resulting date does not exist.
            UnsupportedFormatSpecifierError: If the template holds an unknown
                specifier.
        """
        scanned = _Scanned()
        end = self._scan(text, 0, template, scanned)
        fields = self._build(text, end, scanned, self._base_fields(default, current))
        return ParseResult(self.converter.from_fields(fields), fields, end)

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _scan(  # pylint: disable=too-many-branches,too-many-statements
        self, text: str, pos: int, template: str, out: _Scanned
    ) -> int:
        i = 0
        while i < len(template):
            ch = template[i]
            i += 1

            if ch != "%":
                if ch.isspace():
                    pos = skip_spaces(text, pos)
                elif pos < len(text) and text[pos] == ch:
                    pos += 1
                else:
                    raise no_match(text, pos, f"expected {ch!r}")
                continue

            width = 0
            while i < len(template) and template[i] in "0123456789":
                width = width * 10 + int(template[i])
                i += 1
            if i == len(template):
                raise no_match(text, pos, "template ends with a lone '%'")

            spec = template[i]
            i += 1
            width = width or DEFAULT_WIDTHS.get(spec, 2)

            match spec:
                case "a" | "A":
                    flags = NameFlags.ABBR if spec == "a" else NameFlags.FULL
                    name, end = read_alpha(text, pos)
                    if (weekday := self.locale.find_weekday(name, flags)) is None:
                        raise no_match(text, pos, f"{name!r} is not a weekday name")
                    out.weekday, pos = weekday, end
                case "b" | "B":
                    flags = NameFlags.ABBR if spec == "b" else NameFlags.FULL
                    name, end = read_alpha(text, pos)
                    if (month := self.locale.find_month(name, flags)) is None:
                        raise no_match(text, pos, f"{name!r} is not a month name")
                    out.month, pos = month, end
                case "c":
                    pos = self._scan_first(
                        text, pos, DATE_TIME_TEMPLATES, out, _DATE_NAMES + _TIME_NAMES
                    )
                case "d":
                    out.day, pos = self._number(text, pos, width, 1, 31)
                case "H":
                    out.hour, pos = self._number(text, pos, width, 0, 23)
                case "I":
                    hour, pos = self._number(text, pos, width, 1, 12)
                    out.hour, out.hour_is_12h = hour % 12, True
                case "j":
                    out.year_day, pos = self._number(text, pos, width, 1, 366)
                case "l":
                    out.millisecond, pos = self._number(text, pos, width, 0, 999)
                case "m":
                    month_number, pos = self._number(text, pos, width, 1, 12)
                    out.month = Month.from_number(month_number)
                case "M":
                    out.minute, pos = self._number(text, pos, width, 0, 59)
                case "p":
                    pos = self._scan_am_pm(text, pos, out)
                case "r":
                    pos = self._scan_first(
                        text, pos, (TIME_12H_TEMPLATE,), out, _TIME_NAMES
                    )
                case "R":
                    pos = self._scan_first(
                        text, pos, (HOUR_MINUTE_TEMPLATE,), out, ("hour", "minute")
                    )
                case "S":
                    out.second, pos = self._number(text, pos, width, 0, 61)
                case "T":
                    pos = self._scan_first(
                        text, pos, (TIME_24H_TEMPLATE,), out, _TIME_NAMES
                    )
                case "w":
                    weekday, pos = self._number(text, pos, width, 0, 6)
                    out.weekday = WeekDay(weekday)
                case "x":
                    pos = self._scan_first(
                        text, pos, self._date_templates(), out, _DATE_NAMES
                    )
                case "X":
                    pos = self._scan_first(text, pos, TIME_TEMPLATES, out, _TIME_NAMES)
                case "y":
                    year, pos = self._number(text, pos, width, 0, 99)
                    out.year = self.settings.expand_year(year)
                case "Y":
                    out.year, pos = self._number(text, pos, width, 0, None)
                case "Z":
                    out.offset, pos = self._scan_zone(text, pos)
                case "%":
                    if pos >= len(text) or text[pos] != "%":
                        raise no_match(text, pos, "expected '%'")
                    pos += 1
                case _:
                    raise UnsupportedFormatSpecifierError(spec, template)
        return pos

    def _scan_first(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        text: str,
        pos: int,
        templates: tuple[str, ...],
        out: _Scanned,
        names: tuple[str, ...],
    ) -> int:
        """Scan with the first matching template and keep the named fields."""
        for template in templates:
            nested = _Scanned()
            try:
                end = self._scan(text, pos, template, nested)
            except ParseNoMatchError:
                continue
            if nested.hour is not None and nested.hour_is_12h and nested.is_pm:
                nested.hour += 12
            out.merge(nested, *names)
            return end
        raise no_match(text, pos, f"none of {', '.join(templates)} matches")

    def _date_templates(self) -> tuple[str, str]:
        country = resolve_country(Country.DEFAULT, self.settings, self.converter.clock)
        if country.is_west_european or country is Country.RUSSIA:
            return DAY_FIRST_DATE, MONTH_FIRST_DATE
        return MONTH_FIRST_DATE, DAY_FIRST_DATE

    @staticmethod
    def _number(
        text: str, pos: int, width: int, low: int, high: int | None
    ) -> tuple[int, int]:
        token = read_number(text, pos, width)
        if token is None:
            raise no_match(text, pos, "expected a number")
        value, end = token
        if value < low or (high is not None and value > high):
            raise no_match(text, pos, f"{value} out of range")
        return value, end

    def _scan_am_pm(self, text: str, pos: int, out: _Scanned) -> int:
        token, end = read_alpha(text, pos)
        am, pm = self.locale.am_pm()
        if token.casefold() == pm.casefold():
            out.is_pm = True
        elif token.casefold() != am.casefold():
            raise no_match(text, pos, f"{token!r} is neither {am!r} nor {pm!r}")
        return end

    @staticmethod
    def _scan_zone(text: str, pos: int) -> tuple[int, int]:
        if pos < len(text) and text[pos] in "+-":
            token = read_number(text, pos + 1, 4)
            if token is None or token[1] - pos != 5:
                raise no_match(text, pos, "expected a +hhmm offset")
            hhmm, end = token
            minutes = (hhmm // 100) * 60 + hhmm % 100
            return (-minutes if text[pos] == "-" else minutes) * 60, end

        name, end = read_alpha(text, pos)
        if name.upper() not in NAMED_ZONES:
            raise no_match(text, pos, f"unknown time zone {name!r}")
        return NAMED_ZONES[name.upper()] * 60, end

    # ------------------------------------------------------------------
    # Building the result
    # ------------------------------------------------------------------

    def _base_fields(
        self, default: Instant | None, current: Instant | None
    ) -> CalendarFields:
        for candidate in (default, current):
            if candidate is not None and candidate.is_valid:
                return self.converter.to_fields(candidate)
        return self.converter.to_fields(self.converter.today())

    @staticmethod
    def _build(  # pylint: disable=too-many-branches
        text: str, end: int, scanned: _Scanned, base: CalendarFields
    ) -> CalendarFields:
        fields = base
        if scanned.offset is not None:
            fields = replace(fields, tz=TimeZoneSpec.fixed(scanned.offset))
        if scanned.year is not None:
            fields = replace(fields, year=scanned.year)

        year = fields.year
        if scanned.month is not None and scanned.day is not None:
            if scanned.day > gregorian.days_in_month(year, scanned.month):
                raise no_match(text, end, "bad day of the month")
            fields = replace(fields, month=scanned.month, day=scanned.day)
        elif scanned.year_day is not None:
            if scanned.year_day > gregorian.days_in_year(year):
                raise no_match(text, end, "bad day of the year")
            month, day = gregorian.month_day_from_year_day(year, scanned.year_day)
            fields = replace(fields, month=Month(month), day=day)
        elif scanned.month is not None:
            fields = replace(fields, month=scanned.month)
        elif scanned.day is not None:
            fields = replace(fields, day=scanned.day)

        if fields.day > gregorian.days_in_month(fields.year, fields.month):
            raise no_match(text, end, "bad day of the month")

        hour = scanned.hour
        if hour is not None and scanned.hour_is_12h and scanned.is_pm:
            hour += 12
        for name, value in (
            ("hour", hour),
            ("minute", scanned.minute),
            ("second", scanned.second),
            ("millisecond", scanned.millisecond),
        ):
            if value is not None:
                fields = replace(fields, **{name: value})

        date_given = scanned.day is not None or scanned.year_day is not None
        if date_given and scanned.weekday is not None:
            if fields.weekday != scanned.weekday:
                raise no_match(text, end, "weekday does not match the date")

        return fields


__all__ = ["FormatParser"]
