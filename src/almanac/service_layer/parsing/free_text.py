"""Heuristic parsing of loosely written dates and times.

`FreeTextParser.parse_date` understands input such as ``15 Jan``,
``03/04/2024``, ``Sunday``, ``fifth May`` or ``tomorrow``. Numbers are
classified by trial into day, month and year slots; a number that cannot be a
day is taken for a year, and the day/month pair may be swapped once when the
input only makes sense that way. Parsing stops silently at the first token
that does not fit, and the result reports how much of the text was used.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from almanac.domain import gregorian
from almanac.domain.errors import ParseNoMatchError
from almanac.domain.value_objects import CalendarFields, DateSpan, Month, WeekDay

from .common import ParseResult, no_match, skip_spaces
from .format_parser import FormatParser

if TYPE_CHECKING:
    from collections.abc import Iterator

    from almanac.config import EngineSettings
    from almanac.domain.value_objects import Instant
    from almanac.interfaces.locale import LocaleProvider
    from almanac.service_layer.arithmetic import CalendarArithmetic
    from almanac.service_layer.converter import CalendarConverter

DELIMITERS = ".,/-\t\r\n "

#: keyword -> days from today
LITERAL_DATES = (("today", 0), ("yesterday", -1), ("tomorrow", 1))

ORDINALS = (
    "first",
    "second",
    "third",
    "fourth",
    "fifth",
    "sixth",
    "seventh",
    "eighth",
    "ninth",
    "tenth",
    "eleventh",
    "twelfth",
    "thirteenth",
    "fourteenth",
    "fifteenth",
    "sixteenth",
    "seventeenth",
    "eighteenth",
    "nineteenth",
    "twentieth",
)

#: keyword -> hour
LITERAL_TIMES = (("noon", 12), ("midnight", 0))

TIME_TEMPLATES = (
    "%I:%M:%S %p",
    "%H:%M:%S",
    "%I:%M %p",
    "%H:%M",
    "%I %p",
    "%H",
    "%X",
)


@dataclass
class _Slots:
    """Date parts recognised so far; None means the slot is empty."""

    day: int | None = None
    month: Month | None = None
    year: int | None = None
    weekday: WeekDay | None = None


class _Stop(Exception):
    """The current token cannot be used: parsing ends before it."""


class FreeTextParser:
    """Parse dates and times written by humans.

    Args:
        converter: Converter used to build the instant and to find today.
        arithmetic: Used for relative literals and weekday navigation.
        locale: Source of names and of the translated keywords.
        settings: Engine settings, shared with the nested format parser.
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
        self.format_parser = FormatParser(converter, locale, settings)

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------

    def parse_date(self, text: str) -> ParseResult:
        """Parse a date at the beginning of ``text``.

        Returns:
            ParseResult: Midnight of the parsed date and the end of the
            consumed text.

        Raises:
            ParseNoMatchError: If neither a day of the month nor a weekday was
                found, if a weekday comes with an incomplete date, or if the
                date does not exist.
        """
        start = skip_spaces(text, 0)

        if (literal := self._literal_date(text, start)) is not None:
            return literal

        slots = _Slots()
        end = start
        for token, token_end in _tokens(text, start):
            try:
                self._classify(token, slots)
            except _Stop:
                break
            end = token_end

        return self._resolve(text, end, slots)

    def _literal_date(self, text: str, pos: int) -> ParseResult | None:
        for word, days in LITERAL_DATES:
            keyword = self.locale.translate(word)
            if text[pos : pos + len(keyword)].casefold() == keyword.casefold():
                instant = self.converter.today()
                if days:
                    instant = self.arithmetic.add_span(instant, DateSpan.of_days(days))
                fields = self.converter.to_fields(instant)
                return ParseResult(instant, fields, pos + len(keyword))
        return None

    def _classify(self, token: str, slots: _Slots) -> None:  # pylint: disable=too-many-branches
        if token.isascii() and token.isdigit():
            self._classify_number(int(token), slots)
            return

        if (month := self.locale.find_month(token)) is not None:
            if slots.month is not None:
                # the earlier number was the day after all
                if slots.day is not None:
                    raise _Stop
                slots.day = slots.month.number
            slots.month = month
            return

        if (weekday := self.locale.find_weekday(token)) is not None:
            if slots.weekday is not None:
                raise _Stop
            slots.weekday = weekday
            return

        ordinals = [self.locale.translate(word).casefold() for word in ORDINALS]
        if token.casefold() not in ordinals or slots.day is not None:
            raise _Stop
        slots.day = ordinals.index(token.casefold()) + 1

    def _classify_number(self, value: int, slots: _Slots) -> None:
        if slots.month is None and 1 <= value <= 12:
            slots.month = Month.from_number(value)
            return

        if slots.month is not None:
            year = slots.year if slots.year is not None else self.converter.current_year()
            max_days = gregorian.days_in_month(year, slots.month)
        else:
            max_days = 31

        if value == 0 or value > max_days:
            if slots.year is not None:
                raise _Stop
            slots.year = value
        else:
            if slots.day is not None:
                raise _Stop
            slots.day = value

    def _resolve(self, text: str, end: int, slots: _Slots) -> ParseResult:  # pylint: disable=too-many-branches
        if slots.day is None and slots.weekday is None:
            raise no_match(text, end, "no day and no weekday hence no date")

        complete = None not in (slots.day, slots.month, slots.year)
        partial = any(v is not None for v in (slots.day, slots.month, slots.year))
        if slots.weekday is not None and partial and not complete:
            raise no_match(text, end, "a weekday only goes with a full date")

        if slots.weekday is None and slots.year is not None and not (
            slots.day is not None and slots.month is not None
        ):
            self._swap(slots)
            if slots.month is None:
                raise no_match(text, end, "day and month are needed with a year")

        if slots.day is None:
            instant = self.arithmetic.weekday_in_same_week(
                self.converter.today(), slots.weekday
            )
            return ParseResult(instant, self.converter.to_fields(instant), end)

        month = slots.month if slots.month is not None else self.converter.current_month()
        year = slots.year if slots.year is not None else self.converter.current_year()
        if slots.day > gregorian.days_in_month(year, month):
            raise no_match(text, end, "bad day of the month")

        fields = CalendarFields(year, month, slots.day)
        if slots.weekday is not None and fields.weekday != slots.weekday:
            raise no_match(text, end, "inconsistent day and weekday")

        return ParseResult(self.converter.from_fields(fields), fields, end)

    def _swap(self, slots: _Slots) -> None:
        """Reread ``day year`` as ``month day`` of the current year."""
        if slots.day is None or slots.month is not None or slots.day > 12:
            return
        month = Month.from_number(slots.day)
        if 0 < slots.year <= gregorian.days_in_month(self.converter.current_year(), month):
            slots.month, slots.day, slots.year = month, slots.year, None

    # ------------------------------------------------------------------
    # Times
    # ------------------------------------------------------------------

    def parse_time(self, text: str, current: Instant | None = None) -> ParseResult:
        """Parse a time of day at the beginning of ``text``.

        ``noon`` and ``midnight`` are understood, then a series of templates
        is tried from the longest to the shortest. The date comes from
        ``current`` when it is valid and from today otherwise.

        Raises:
            ParseNoMatchError: If no template matches.
        """
        for word, hour in LITERAL_TIMES:
            keyword = self.locale.translate(word)
            if text[: len(keyword)].casefold() == keyword.casefold():
                fields = self.converter.to_fields(self.converter.today()).with_time(hour)
                return ParseResult(self.converter.from_fields(fields), fields, len(keyword))

        for template in TIME_TEMPLATES:
            try:
                return self.format_parser.parse(text, template, current=current)
            except ParseNoMatchError:
                continue
        raise no_match(text, 0, "not a time")


def _tokens(text: str, pos: int) -> Iterator[tuple[str, int]]:
    """Yield the non-empty tokens of ``text`` with the position after each."""
    while pos < len(text):
        while pos < len(text) and text[pos] in DELIMITERS:
            pos += 1
        start = pos
        while pos < len(text) and text[pos] not in DELIMITERS:
            pos += 1
        if pos > start:
            yield text[start:pos], pos
