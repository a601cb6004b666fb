"""Unit tests for the calendar value objects."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from almanac.domain.errors import InvalidInstantError, OutOfRangeError
from almanac.domain.value_objects import (
    INVALID_YEAR,
    LOCAL,
    UTC,
    CalendarFields,
    Country,
    DateSpan,
    Instant,
    Month,
    TimeSpan,
    TimeZoneSpec,
    WeekDay,
)


class TestEnumerations:
    """Month, WeekDay and Country helpers."""

    @staticmethod
    def test_month_numbers() -> None:
        """Months are stored zero-based but numbered from 1."""
        assert Month.JAN.number == 1
        assert Month.from_number(12) is Month.DEC

    @staticmethod
    @pytest.mark.parametrize("number", [0, 13])
    def test_bad_month_number(number: int) -> None:
        """Only 1..12 denote months."""
        with pytest.raises(ValueError):
            Month.from_number(number)

    @staticmethod
    def test_country_parse() -> None:
        """Country names are looked up case-insensitively."""
        assert Country.parse(" france ") is Country.FRANCE
        with pytest.raises(ValueError, match="Unknown country"):
            Country.parse("atlantis")

    @staticmethod
    @pytest.mark.parametrize(
        ("country", "expected"),
        [
            (Country.EEC, True),
            (Country.GERMANY, True),
            (Country.UK, True),
            (Country.RUSSIA, False),
            (Country.USA, False),
        ],
    )
    def test_west_european_range(country: Country, expected: bool) -> None:
        """EEC through UK form the Western Europe range."""
        assert country.is_west_european is expected


class TestTimeZoneSpec:
    """Tests for time zone specifications."""

    @staticmethod
    def test_local_and_utc() -> None:
        """The local zone has no fixed offset; UTC has a zero one."""
        assert LOCAL.is_local
        assert UTC.offset == 0
        assert not UTC.is_local

    @staticmethod
    def test_named_zones() -> None:
        """Abbreviations map to offsets in seconds; unknown names are refused."""
        assert TimeZoneSpec.named("cet").offset == 3600
        assert TimeZoneSpec.named("PST").offset == -8 * 3600
        assert TimeZoneSpec.named("local") == LOCAL
        with pytest.raises(ValueError):
            TimeZoneSpec.named("XYZ")

    @staticmethod
    def test_gmt_zones() -> None:
        """GMT zones are whole hours within -12..+13."""
        assert TimeZoneSpec.gmt(-5).offset == -18_000
        with pytest.raises(ValueError):
            TimeZoneSpec.gmt(14)

    @staticmethod
    @pytest.mark.parametrize(
        ("tz", "text"),
        [
            (LOCAL, "local"),
            (UTC, "GMT+00:00"),
            (TimeZoneSpec.fixed(-(5 * 3600 + 1800)), "GMT-05:30"),
        ],
    )
    def test_str(tz: TimeZoneSpec, text: str) -> None:
        """Fixed offsets render as GMT+hh:mm."""
        assert str(tz) == text


class TestTimeSpan:
    """Tests for fixed durations."""

    @staticmethod
    def test_constructors() -> None:
        """Every constructor agrees on the number of milliseconds."""
        assert TimeSpan.of(1, 2, 3, 4).ms == 3_723_004
        assert TimeSpan.weeks(1) == TimeSpan.days(7)
        assert TimeSpan.hours(1) == TimeSpan.minutes(60) == TimeSpan.seconds(3600)

    @staticmethod
    def test_totals_round_towards_zero() -> None:
        """Totals drop the remainder whatever the sign."""
        span = TimeSpan.of(hours=25, minutes=30)
        assert span.total_days == 1
        assert (-span).total_days == -1
        assert (-span).total_hours == -25
        assert TimeSpan(-1500).total_seconds == -1

    @staticmethod
    def test_arithmetic_and_signs() -> None:
        """Spans add, subtract, scale and negate."""
        span = TimeSpan.hours(2) - TimeSpan.hours(3)
        assert span.is_negative()
        assert span.abs() == TimeSpan.hours(1)
        assert 3 * TimeSpan.minutes(2) == TimeSpan.minutes(6)
        assert TimeSpan().is_null()
        assert TimeSpan(1).is_positive()


class TestDateSpan:
    """Tests for calendar spans."""

    @staticmethod
    def test_total_days() -> None:
        """Weeks and days combine into days; months and years do not."""
        span = DateSpan(years=1, months=2, weeks=3, days=4)
        assert span.total_days == 25

    @staticmethod
    def test_arithmetic() -> None:
        """Spans combine field by field."""
        span = DateSpan.month() + DateSpan.of_days(3) - DateSpan.year()
        assert span == DateSpan(years=-1, months=1, days=3)
        assert 2 * DateSpan.week() == DateSpan.of_weeks(2)
        assert -DateSpan.day() == DateSpan.of_days(-1)


class TestInstant:
    """Tests for the Instant value object."""

    @staticmethod
    def test_invalid_sentinel() -> None:
        """The invalid instant is recognised and refuses arithmetic."""
        invalid = Instant.invalid()
        assert not invalid.is_valid
        assert str(invalid) == "Instant(invalid)"
        with pytest.raises(InvalidInstantError):
            _ = invalid + TimeSpan.hours(1)
        with pytest.raises(InvalidInstantError):
            _ = invalid.seconds

    @staticmethod
    def test_out_of_range() -> None:
        """Instants must fit in 64 bits."""
        with pytest.raises(OutOfRangeError):
            Instant(2**63)

    @staticmethod
    def test_seconds_round_down() -> None:
        """Before the epoch, seconds round towards minus infinity."""
        assert Instant(-1).seconds == -1
        assert Instant(-1).millisecond == 999
        assert Instant.from_seconds(2).ms == 2000

    @staticmethod
    def test_arithmetic() -> None:
        """Instants shift by spans; their difference is a span."""
        start = Instant(1000)
        end = start + TimeSpan.seconds(5)
        assert end == Instant(6000)
        assert end - start == TimeSpan.seconds(5)
        assert end - TimeSpan.seconds(6) == Instant(0)
        assert start < end

    @staticmethod
    @pytest.mark.property
    @given(
        st.integers(min_value=-(2**50), max_value=2**50),
        st.integers(min_value=-(2**40), max_value=2**40),
    )
    def test_shift_and_difference(ms: int, delta: int) -> None:
        """Shifting by a span and taking the difference give the span back."""
        start = Instant(ms)
        assert (start + TimeSpan(delta)) - start == TimeSpan(delta)


class TestCalendarFields:
    """Tests for broken-down calendar fields."""

    @staticmethod
    @pytest.mark.parametrize(
        "fields",
        [
            CalendarFields(2023, Month.FEB, 29),
            CalendarFields(2024, Month.JAN, 0),
            CalendarFields(2024, Month.JAN, 1, hour=24),
            CalendarFields(2024, Month.JAN, 1, millisecond=1000),
            CalendarFields(INVALID_YEAR, Month.JAN, 1),
            CalendarFields(2024, Month.INVALID, 1),
        ],
    )
    def test_invalid(fields: CalendarFields) -> None:
        """Impossible dates and times are invalid."""
        assert not fields.is_valid()

    @staticmethod
    def test_leap_second_tolerated() -> None:
        """Seconds up to 61 are accepted."""
        assert CalendarFields(2016, Month.DEC, 31, 23, 59, 60).is_valid()

    @staticmethod
    def test_month_is_coerced() -> None:
        """Plain integers become months."""
        assert CalendarFields(2024, 2, 5).month is Month.MAR

    @staticmethod
    def test_derived_values() -> None:
        """Weekday and day of year derive from the date."""
        fields = CalendarFields(2024, Month.MAR, 1, 1, 2, 3, 4)
        assert fields.weekday is WeekDay.FRI
        assert fields.day_of_year == 61
        assert fields.time_of_day_ms == 3_723_004

    @staticmethod
    def test_with_unspecified_replaced() -> None:
        """Only the sentinels are replaced."""
        fields = CalendarFields(INVALID_YEAR, Month.MAY, 3)
        assert fields.with_unspecified_replaced(2020, Month.JAN) == CalendarFields(
            2020, Month.MAY, 3
        )

    @staticmethod
    def test_add_months_wraps_years() -> None:
        """Months wrap around the year in both directions."""
        fields = CalendarFields(2024, Month.NOV, 15)
        assert fields.add_months(3) == CalendarFields(2025, Month.FEB, 15)
        assert fields.add_months(-11) == CalendarFields(2023, Month.DEC, 15)

    @staticmethod
    def test_add_days_carries_and_borrows() -> None:
        """Days carry into the next months and borrow from previous ones."""
        fields = CalendarFields(2024, Month.FEB, 28)
        assert fields.add_days(2) == CalendarFields(2024, Month.MAR, 1)
        assert fields.add_days(-59) == CalendarFields(2023, Month.DEC, 31)
        assert fields.add_days(366) == CalendarFields(2025, Month.FEB, 28)

    @staticmethod
    def test_str() -> None:
        """Fields render as an ISO-like string with the zone."""
        fields = CalendarFields(2024, Month.MAR, 5, 8, 9, 10, 11, UTC)
        assert str(fields) == "2024-03-05 08:09:10.011 (GMT+00:00)"
