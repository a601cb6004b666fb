"""Daylight-saving time rules for ALMANAC.

The rules model three regimes: the European Union dates (shared by Russia),
the historical USA calendar, and a rough approximation for every other
country. None of them tracks the post-2007 USA rules or the abolition of DST
in Russia.
"""

from almanac.domain import gregorian
from almanac.domain.value_objects import (
    LOCAL,
    UTC,
    CalendarFields,
    Country,
    Month,
    TimeZoneSpec,
    WeekDay,
)
from almanac.interfaces.dst_rule import DstRule


def observed_in_usa_and_uk(year: int) -> bool:
    """DST was observed during both World Wars and continuously since 1966."""
    return year >= 1966 or 1942 <= year <= 1945 or year in (1918, 1919)


def observed_after_ww2(year: int) -> bool:
    """Assume DST started everywhere else after WWII."""
    return year > 1950


def _last_sunday(
    year: int, month: Month, hour: int, tz: TimeZoneSpec = LOCAL
) -> CalendarFields:
    day = gregorian.last_weekday_day(WeekDay.SUN, month, year)
    return CalendarFields(year, month, day, hour, tz=tz)


class WesternEuropeDstRule(DstRule):
    """DST from 01:00 UTC on the last Sunday of March to 01:00 UTC on the last Sunday of October."""

    def is_applicable(self, year: int) -> bool:
        return observed_after_ww2(year)

    def begin(self, year: int) -> CalendarFields | None:
        if not self.is_applicable(year):
            return None
        return _last_sunday(year, Month.MAR, 1, UTC)

    def end(self, year: int) -> CalendarFields | None:
        if not self.is_applicable(year):
            return None
        return _last_sunday(year, Month.OCT, 1, UTC)


class UkDstRule(WesternEuropeDstRule):
    """European dates, observed in the same years as in the USA."""

    def is_applicable(self, year: int) -> bool:
        return observed_in_usa_and_uk(year)


class UsaDstRule(DstRule):
    """Historical USA calendar, in local time.

    During the wars DST is assumed to have lasted all year; the 1974-1975
    oil embargo moved the start to January and February. From 1986 DST starts
    on the first Sunday of April instead of the last one.
    """

    # years whose start is a fixed local midnight
    BEGIN_EXCEPTIONS = {
        1918: (Month.JAN, 1),
        1919: (Month.JAN, 1),
        1942: (Month.FEB, 2),
        1943: (Month.JAN, 1),
        1944: (Month.JAN, 1),
        1945: (Month.JAN, 1),
        1974: (Month.JAN, 6),
        1975: (Month.FEB, 23),
    }

    # years whose end is a fixed local midnight
    END_EXCEPTIONS = {
        1918: (Month.DEC, 31),
        1919: (Month.DEC, 31),
        1943: (Month.DEC, 31),
        1944: (Month.DEC, 31),
        1945: (Month.SEP, 30),
    }

    def is_applicable(self, year: int) -> bool:
        return observed_in_usa_and_uk(year)

    def begin(self, year: int) -> CalendarFields | None:
        if not self.is_applicable(year):
            return None
        if year in self.BEGIN_EXCEPTIONS:
            month, day = self.BEGIN_EXCEPTIONS[year]
            return CalendarFields(year, month, day)
        if year < 1986:
            return _last_sunday(year, Month.APR, 2)
        day = gregorian.nth_weekday_day(WeekDay.SUN, 1, Month.APR, year)
        return CalendarFields(year, Month.APR, day, 2)

    def end(self, year: int) -> CalendarFields | None:
        if not self.is_applicable(year):
            return None
        if year in self.END_EXCEPTIONS:
            month, day = self.END_EXCEPTIONS[year]
            return CalendarFields(year, month, day)
        return _last_sunday(year, Month.OCT, 2)


class ApproximateDstRule(DstRule):
    """Rough guess for the rest of the world: March 30 to October 26, local midnight."""

    def is_applicable(self, year: int) -> bool:
        return observed_after_ww2(year)

    def begin(self, year: int) -> CalendarFields | None:
        if not self.is_applicable(year):
            return None
        return CalendarFields(year, Month.MAR, 30)

    def end(self, year: int) -> CalendarFields | None:
        if not self.is_applicable(year):
            return None
        return CalendarFields(year, Month.OCT, 26)


def default_rules() -> dict[Country, DstRule]:
    """Return the rule used for each concrete country."""
    western_europe = WesternEuropeDstRule()
    return {
        Country.EEC: western_europe,
        Country.FRANCE: western_europe,
        Country.GERMANY: western_europe,
        Country.UK: UkDstRule(),
        Country.RUSSIA: western_europe,
        Country.USA: UsaDstRule(),
    }
