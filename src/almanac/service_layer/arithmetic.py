"""Calendar-aware arithmetic and navigation.

Two kinds of addition are offered: ``add_span`` advances calendar fields
(years, then months with month-end clamping, then weeks and days) and keeps
the wall-clock time, while ``add_duration`` adds a fixed number of
milliseconds and may change the wall-clock time across a DST transition.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from almanac.domain import gregorian
from almanac.domain.value_objects import (
    INVALID_YEAR,
    LOCAL,
    CalendarFields,
    DateSpan,
    Instant,
    Month,
    TimeSpan,
    TimeZoneSpec,
    WeekDay,
    WeekFlags,
)
from almanac.service_layer.country import resolve_week_start

if TYPE_CHECKING:
    from almanac.config import EngineSettings
    from almanac.service_layer.converter import CalendarConverter

# pylint: disable=too-many-public-methods


class CalendarArithmetic:
    """Arithmetic on instants through their calendar fields.

    Args:
        converter: Converter used to move between instants and fields.
        settings: Engine settings (default week start and country).
    """

    def __init__(self, converter: CalendarConverter, settings: EngineSettings) -> None:
        self.converter = converter
        self.settings = settings

    # ------------------------------------------------------------------
    # Spans and durations
    # ------------------------------------------------------------------

    def add_span(
        self, instant: Instant, span: DateSpan, tz: TimeZoneSpec = LOCAL
    ) -> Instant:
        """Add a calendar span, keeping the wall-clock time of day.

        Years and months are applied first; a day that no longer exists in the
        target month is clamped to its last day (Jan 31 + 1 month is Feb 28 or
        29). Weeks and days are applied afterwards.
        """
        fields = self.converter.to_fields(instant, tz)
        return self.converter.from_fields(self._add_span_to_fields(fields, span))

    def subtract_span(
        self, instant: Instant, span: DateSpan, tz: TimeZoneSpec = LOCAL
    ) -> Instant:
        """Subtract a calendar span (see `add_span`)."""
        return self.add_span(instant, -span, tz)

    @staticmethod
    def add_duration(instant: Instant, span: TimeSpan) -> Instant:
        """Add a fixed duration: plain millisecond addition."""
        return instant + span

    @staticmethod
    def subtract_duration(instant: Instant, span: TimeSpan) -> Instant:
        """Subtract a fixed duration."""
        return instant + (-span)

    @staticmethod
    def _add_span_to_fields(fields: CalendarFields, span: DateSpan) -> CalendarFields:
        fields = replace(fields, year=fields.year + span.years).add_months(span.months)

        last_day = gregorian.days_in_month(fields.year, fields.month)
        if fields.day > last_day:
            fields = replace(fields, day=last_day)

        return fields.add_days(span.total_days)

    # ------------------------------------------------------------------
    # Weekday navigation
    # ------------------------------------------------------------------

    def week_flags(self, flags: WeekFlags = WeekFlags.DEFAULT_FIRST) -> WeekFlags:
        """Resolve ``DEFAULT_FIRST`` to the concrete first day of the week."""
        return resolve_week_start(flags, self.settings, self.converter.clock)

    def next_weekday(
        self, instant: Instant, weekday: WeekDay, tz: TimeZoneSpec = LOCAL
    ) -> Instant:
        """Move forward to the next ``weekday`` (a full week if already on it)."""
        fields = self.converter.to_fields(instant, tz)
        delta = (weekday - fields.weekday) % gregorian.DAYS_PER_WEEK or 7
        return self.converter.from_fields(fields.add_days(delta))

    def prev_weekday(
        self, instant: Instant, weekday: WeekDay, tz: TimeZoneSpec = LOCAL
    ) -> Instant:
        """Move back to the previous ``weekday`` (a full week if already on it)."""
        fields = self.converter.to_fields(instant, tz)
        delta = (fields.weekday - weekday) % gregorian.DAYS_PER_WEEK or 7
        return self.converter.from_fields(fields.add_days(-delta))

    def weekday_in_same_week(
        self,
        instant: Instant,
        weekday: WeekDay,
        flags: WeekFlags = WeekFlags.DEFAULT_FIRST,
        tz: TimeZoneSpec = LOCAL,
    ) -> Instant:
        """Move to ``weekday`` within the week containing ``instant``.

        With Monday-first weeks, Sunday is the last day of the week.
        """
        fields = self.converter.to_fields(instant, tz)
        return self.converter.from_fields(
            self._weekday_in_same_week(fields, weekday, self.week_flags(flags))
        )

    @staticmethod
    def _weekday_in_same_week(
        fields: CalendarFields, weekday: WeekDay, flags: WeekFlags
    ) -> CalendarFields:
        this_day = int(fields.weekday)
        target = int(weekday)
        if flags is WeekFlags.MONDAY_FIRST:
            if this_day == WeekDay.SUN:
                this_day += gregorian.DAYS_PER_WEEK
            if target == WeekDay.SUN:
                target += gregorian.DAYS_PER_WEEK
        return fields.add_days(target - this_day)

    def nth_weekday_of_month(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        weekday: WeekDay,
        n: int = 1,
        month: Month = Month.INVALID,
        year: int = INVALID_YEAR,
        tz: TimeZoneSpec = LOCAL,
    ) -> Instant | None:
        """Midnight of the ``n``-th ``weekday`` of a month.

        Negative ``n`` counts from the end of the month. An unspecified month
        or year means the current one.

        Returns:
            Instant | None: None when the month has no such day (e.g. a fifth
            Monday in a month with only four).
        """
        month, year = self._month_and_year(month, year, tz)
        day = gregorian.nth_weekday_day(weekday, n, month, year)
        if day is None:
            return None
        return self.converter.from_date(day, month, year, tz=tz)

    def last_weekday_of_month(
        self,
        weekday: WeekDay,
        month: Month = Month.INVALID,
        year: int = INVALID_YEAR,
        tz: TimeZoneSpec = LOCAL,
    ) -> Instant | None:
        """Midnight of the last ``weekday`` of a month."""
        return self.nth_weekday_of_month(weekday, -1, month, year, tz)

    def last_month_day(
        self,
        month: Month = Month.INVALID,
        year: int = INVALID_YEAR,
        tz: TimeZoneSpec = LOCAL,
    ) -> Instant:
        """Midnight of the last day of a month."""
        month, year = self._month_and_year(month, year, tz)
        return self.converter.from_date(
            gregorian.days_in_month(year, month), month, year, tz=tz
        )

    def set_to_the_week(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        year: int,
        week: int,
        weekday: WeekDay = WeekDay.MON,
        flags: WeekFlags = WeekFlags.MONDAY_FIRST,
        tz: TimeZoneSpec = LOCAL,
    ) -> Instant | None:
        """Midnight of ``weekday`` in week number ``week`` of ``year``.

        January 4 always lies in the first week of the year.

        Returns:
            Instant | None: None when ``week`` is beyond the end of the year.

        Raises:
            ValueError: If ``week`` is not positive.
        """
        if week < 1:
            raise ValueError(f"Weeks are counted from 1, got {week}")

        jan4 = CalendarFields(year, Month.JAN, 4, tz=tz)
        fields = self._weekday_in_same_week(jan4, weekday, self.week_flags(flags))
        fields = fields.add_days((week - 1) * gregorian.DAYS_PER_WEEK)
        if fields.year != year:
            return None
        return self.converter.from_fields(fields)

    def set_to_year_day(
        self, instant: Instant, year_day: int, tz: TimeZoneSpec = LOCAL
    ) -> Instant:
        """Midnight of day ``year_day`` (1-based) of the year containing ``instant``.

        Raises:
            OutOfRangeError: If the year has no such day.
        """
        year = self.converter.to_fields(instant, tz).year
        month, day = gregorian.month_day_from_year_day(year, year_day)
        return self.converter.from_date(day, Month(month), year, tz=tz)

    def reset_time(self, instant: Instant, tz: TimeZoneSpec = LOCAL) -> Instant:
        """Midnight of the day containing ``instant``."""
        return self.converter.from_fields(
            self.converter.to_fields(instant, tz).with_time()
        )

    def _month_and_year(
        self, month: Month, year: int, tz: TimeZoneSpec
    ) -> tuple[Month, int]:
        if month == Month.INVALID or year == INVALID_YEAR:
            current = self.converter.to_fields(self.converter.now(), tz)
            if month == Month.INVALID:
                month = current.month
            if year == INVALID_YEAR:
                year = current.year
        return month, year

    # ------------------------------------------------------------------
    # Day and week numbers
    # ------------------------------------------------------------------

    def day_of_year(self, instant: Instant, tz: TimeZoneSpec = LOCAL) -> int:
        """1-based day of the year."""
        return self.converter.to_fields(instant, tz).day_of_year

    def week_of_year(
        self,
        instant: Instant,
        flags: WeekFlags = WeekFlags.DEFAULT_FIRST,
        tz: TimeZoneSpec = LOCAL,
    ) -> int:
        """Week number within the year.

        Counted from day of year and weekday; one is added when January 1
        falls on a Wednesday or a Thursday.
        """
        return self._week_of_year(
            self.converter.to_fields(instant, tz), self.week_flags(flags)
        )

    @staticmethod
    def _week_of_year(fields: CalendarFields, flags: WeekFlags) -> int:
        weekday = fields.weekday
        if flags is WeekFlags.SUNDAY_FIRST:
            week = (fields.day_of_year - weekday + 7) // 7
        else:
            week = (fields.day_of_year - (weekday - 1 + 7) % 7 + 7) // 7

        if gregorian.weekday_of(1, Month.JAN, fields.year) in (WeekDay.WED, WeekDay.THU):
            week += 1
        return week

    def week_of_month(
        self,
        instant: Instant,
        flags: WeekFlags = WeekFlags.DEFAULT_FIRST,
        tz: TimeZoneSpec = LOCAL,
    ) -> int:
        """Week number within the month, the first (partial) week being 1."""
        flags = self.week_flags(flags)
        fields = self.converter.to_fields(instant, tz)
        month_start = replace(fields, day=1)

        week = (
            self._week_of_year(fields, flags)
            - self._week_of_year(month_start, flags)
            + 1
        )
        if week < 0:
            # January 1 may belong to the last week of the previous year
            week += 53 if gregorian.is_leap_year(fields.year - 1) else 52
        return week

    # ------------------------------------------------------------------
    # Day counts and comparisons
    # ------------------------------------------------------------------

    @staticmethod
    def julian_day_number(instant: Instant) -> float:
        """Fractional Julian Day Number of ``instant``."""
        instant.require_valid("convert")
        return gregorian.julian_day_number(instant.ms)

    @staticmethod
    def rata_die(instant: Instant) -> float:
        """Rata Die day number of ``instant``."""
        instant.require_valid("convert")
        return gregorian.rata_die(instant.ms)

    def is_same_date(
        self, first: Instant, second: Instant, tz: TimeZoneSpec = LOCAL
    ) -> bool:
        """True if both instants fall on the same calendar day of ``tz``."""
        a = self.converter.to_fields(first, tz)
        b = self.converter.to_fields(second, tz)
        return (a.year, a.month, a.day) == (b.year, b.month, b.day)

    def is_same_time(
        self, first: Instant, second: Instant, tz: TimeZoneSpec = LOCAL
    ) -> bool:
        """True if both instants share the time of day on the wall clock ``tz``."""
        return self.converter.to_fields(first, tz).same_time_of_day(
            self.converter.to_fields(second, tz)
        )

    @staticmethod
    def is_between(instant: Instant, start: Instant, end: Instant) -> bool:
        """True if ``start <= instant <= end``."""
        for value in (instant, start, end):
            value.require_valid("compare")
        return start <= instant <= end

    @staticmethod
    def is_strictly_between(instant: Instant, start: Instant, end: Instant) -> bool:
        """True if ``start < instant < end``."""
        for value in (instant, start, end):
            value.require_valid("compare")
        return start < instant < end
