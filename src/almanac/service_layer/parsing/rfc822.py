"""Strict parser for RFC 822 dates, e.g. ``Sat, 18 Dec 1999 00:48:30 +0100``.

Anything that is not a true RFC 822 date is rejected; nothing is guessed.
The seconds are optional and the weekday, when present, must lead.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from almanac.config import EngineSettings
from almanac.domain import gregorian
from almanac.domain.value_objects import CalendarFields, Month, TimeZoneSpec

from .common import ParseResult, no_match

if TYPE_CHECKING:
    from almanac.service_layer.converter import CalendarConverter

MONTHS = {
    "Jan": Month.JAN,
    "Feb": Month.FEB,
    "Mar": Month.MAR,
    "Apr": Month.APR,
    "May": Month.MAY,
    "Jun": Month.JUN,
    "Jul": Month.JUL,
    "Aug": Month.AUG,
    "Sep": Month.SEP,
    "Oct": Month.OCT,
    "Nov": Month.NOV,
    "Dec": Month.DEC,
}

#: offsets in hours of the zone abbreviations allowed by RFC 822.
ZONES = {
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
    "AST": -4,
    "ADT": -3,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}

# military zones: A..I = -1..-9, K..M = -10..-12, N..Y = +1..+12, Z = 0; J unused
MILITARY_ZONES = {
    **{letter: -(i + 1) for i, letter in enumerate("ABCDEFGHI")},
    **{letter: -(i + 10) for i, letter in enumerate("KLM")},
    **{letter: i + 1 for i, letter in enumerate("NOPQRSTUVWXY")},
    "Z": 0,
}

_DATE_TIME = re.compile(
    r"(?:(?P<wday>[A-Za-z]+), )?"
    r"(?P<day>\d{1,2}) (?P<mon>[A-Za-z]{3}) (?P<year>\d{4}|\d{2}(?!\d)) "
    r"(?P<hour>\d{2}):(?P<min>\d{2})(?::(?P<sec>\d{2}))? ",
    re.ASCII,
)
_OFFSET = re.compile(r"(?P<sign>[+-])(?P<hh>\d{2})(?P<mm>\d{2})", re.ASCII)


def _zone_offset(text: str, pos: int) -> tuple[int, int]:
    """Parse the zone at ``pos``, returning (offset in seconds, end position)."""
    if match := _OFFSET.match(text, pos):
        minutes = int(match["hh"]) * 60 + int(match["mm"])
        sign = -1 if match["sign"] == "-" else 1
        return sign * minutes * 60, match.end()

    rest = text[pos:]
    if len(rest) == 1:
        if rest not in MILITARY_ZONES:
            raise no_match(text, pos, f"invalid military time zone {rest!r}")
        return MILITARY_ZONES[rest] * 3600, len(text)

    if rest not in ZONES:
        raise no_match(text, pos, f"unknown RFC 822 time zone {rest!r}")
    return ZONES[rest] * 3600, len(text)


def parse_rfc822(
    converter: CalendarConverter, text: str, settings: EngineSettings | None = None
) -> ParseResult:
    """Parse an RFC 822 date: ``[Wdy, ]D Mon YY[YY] HH:MM[:SS] zone``.

    The zone is ``+hhmm``/``-hhmm``, a single military letter ending the text,
    or one of the abbreviations UT, UTC, GMT, AST, ADT, EST, EDT, CST, CDT,
    MST, MDT, PST, PDT making up the rest of the text. The weekday, if
    present, is skipped. Two-digit years are expanded with the year pivot.

    Args:
        converter: Converter used to build the instant.
        text: The text to parse.
        settings: Source of the two-digit year pivot (default pivot if None).

    Returns:
        ParseResult: The instant, its fields (in the parsed fixed offset) and
        the end of the consumed text.

    Raises:
        ParseNoMatchError: On any deviation from the grammar, or if the day
            does not exist in the month.
    """
    match = _DATE_TIME.match(text)
    if match is None:
        raise no_match(text, 0, "not an RFC 822 date and time")

    if (month := MONTHS.get(match["mon"])) is None:
        raise no_match(text, match.start("mon"), f"invalid month name {match['mon']!r}")

    year = int(match["year"])
    if len(match["year"]) == 2:
        year = (settings or EngineSettings()).expand_year(year)

    day = int(match["day"])
    hour, minute = int(match["hour"]), int(match["min"])
    second = int(match["sec"] or 0)
    if not 0 < day <= gregorian.days_in_month(year, month):
        raise no_match(text, match.start("day"), f"day {day} not in {match['mon']}")
    if hour > 23 or minute > 59 or second > 61:
        raise no_match(text, match.start("hour"), "time of day out of range")

    offset, end = _zone_offset(text, match.end())
    fields = CalendarFields(
        year, month, day, hour, minute, second, tz=TimeZoneSpec.fixed(offset)
    )
    return ParseResult(converter.from_fields(fields), fields, end)
