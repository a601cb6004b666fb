"""Gregorian calendar functions and data.

Pure functions over plain integers: months are zero-based (January is 0) and
weekdays count from Sunday (0). The Julian Day Number helpers implement the
integer algorithm by Scott E. Lee; the forward and inverse directions must
agree exactly because weekday and day-of-year computations are derived from
them.
"""

from enum import Enum

from almanac.domain.errors import OutOfRangeError

#: number of months in a year.
MONTHS_IN_YEAR = 12

#: number of days in a week.
DAYS_PER_WEEK = 7

SECONDS_PER_DAY = 86_400
MILLISECONDS_PER_DAY = 86_400_000

#: integral part of the JDN of the midnight of Jan 1, 1970 (JDN 2440587.5).
EPOCH_JDN = 2_440_587

# JDN -0.5 falls on Nov 24, 4714 BC: the earliest convertible date.
JDN_0_YEAR = -4713
JDN_0_MONTH = 10
JDN_0_DAY = 24

JDN_OFFSET = 32_046
DAYS_PER_5_MONTHS = 153
DAYS_PER_4_YEARS = 1_461
DAYS_PER_400_YEARS = 146_097

#: days in each month for normal and leap years.
DAYS_IN_MONTH = (
    (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
    (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31),
)

#: cumulated number of days in all previous months for normal and leap years.
CUMULATED_DAYS = (
    (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334),
    (0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335),
)


class Calendar(Enum):
    """Calendars whose leap-year rule is supported."""

    GREGORIAN = "gregorian"
    JULIAN = "julian"


def is_leap_year(year: int, calendar: Calendar = Calendar.GREGORIAN) -> bool:
    """Return True if ``year`` is a leap year in the given calendar.

    In the Gregorian calendar leap years are those divisible by 4 except
    those divisible by 100 unless they are also divisible by 400.
    """
    if calendar is Calendar.JULIAN:
        return year % 4 == 0
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Number of days in the zero-based ``month`` of ``year``."""
    return DAYS_IN_MONTH[is_leap_year(year)][month]


def days_in_year(year: int) -> int:
    """Number of days in ``year``."""
    return 366 if is_leap_year(year) else 365


def cumulated_days(year: int, month: int) -> int:
    """Number of days in ``year`` before the first day of ``month``."""
    return CUMULATED_DAYS[is_leap_year(year)][month]


def century(year: int) -> int:
    """Return the century of ``year`` (years before 1 AD belong to negative ones)."""
    return year // 100 if year > 0 else int(year / 100) - 1


def year_to_bc(year: int) -> int:
    """Convert an astronomical year to the historical numbering (year 0 is 1 BC)."""
    return year if year > 0 else year - 1


def truncated_jdn(day: int, month: int, year: int) -> int:
    """Return the integral part of the JDN for the midnight of the given date.

    The real JDN of that midnight is the returned value plus 0.5.

    Args:
        day: Day of the month (1-based).
        month: Zero-based month.
        year: Astronomical year (0 is 1 BC).

    Returns:
        int: The truncated Julian Day Number.

    Raises:
        OutOfRangeError: If the date precedes Nov 24, 4714 BC.
    """
    if (year, month, day) < (JDN_0_YEAR, JDN_0_MONTH, JDN_0_DAY):
        raise OutOfRangeError("date before JDN 0", (year, month + 1, day))

    # make the year positive to avoid problems with negative divisions
    year += 4800

    # months are counted from March here
    if month >= 2:
        month -= 2
    else:
        month += 10
        year -= 1

    return (
        ((year // 100) * DAYS_PER_400_YEARS) // 4
        + ((year % 100) * DAYS_PER_4_YEARS) // 4
        + (month * DAYS_PER_5_MONTHS + 2) // 5
        + day
        - JDN_OFFSET
    )


def date_from_jdn(jdn: int) -> tuple[int, int, int]:
    """Convert a truncated JDN back into ``(year, zero-based month, day)``.

    Raises:
        OutOfRangeError: If ``jdn`` is negative.
    """
    if jdn < 0:
        raise OutOfRangeError("Julian Day Number", jdn)

    # the century first
    temp = (jdn + JDN_OFFSET) * 4 - 1
    cent = temp // DAYS_PER_400_YEARS

    # then the year and day of year (1 <= day_of_year <= 366)
    temp = ((temp % DAYS_PER_400_YEARS) // 4) * 4 + 3
    year = cent * 100 + temp // DAYS_PER_4_YEARS
    day_of_year = (temp % DAYS_PER_4_YEARS) // 4 + 1

    # and finally the month and the day of the month
    temp = day_of_year * 5 - 3
    month = temp // DAYS_PER_5_MONTHS
    day = (temp % DAYS_PER_5_MONTHS) // 5 + 1

    # month is counted from March: convert to normal
    if month < 10:
        month += 3
    else:
        year += 1
        month -= 9

    # year is offset by 4800
    return year - 4800, month - 1, day


def weekday_from_jdn(jdn: int) -> int:
    """Weekday of a truncated JDN, Sunday being 0."""
    return (jdn + 2) % DAYS_PER_WEEK


def weekday_of(day: int, month: int, year: int) -> int:
    """Weekday of the given date, Sunday being 0."""
    return weekday_from_jdn(truncated_jdn(day, month, year))


def nth_weekday_day(weekday: int, n: int, month: int, year: int) -> int | None:
    """Day of the month of the ``n``-th ``weekday`` of ``month``.

    Positive ``n`` counts from the start of the month, negative ``n`` from
    its end (-1 is the last occurrence).

    Returns:
        int | None: The day of the month, or None when the month has no such
        day (e.g. a fifth Monday in a month with only four).
    """
    if n == 0:
        return None

    last = days_in_month(year, month)
    if n > 0:
        diff = (weekday - weekday_of(1, month, year)) % DAYS_PER_WEEK
        day = 1 + diff + DAYS_PER_WEEK * (n - 1)
    else:
        diff = (weekday_of(last, month, year) - weekday) % DAYS_PER_WEEK
        day = last - diff - DAYS_PER_WEEK * (-n - 1)

    if 1 <= day <= last:
        return day
    return None


def last_weekday_day(weekday: int, month: int, year: int) -> int:
    """Day of the month of the last ``weekday`` in ``month``."""
    day = nth_weekday_day(weekday, -1, month, year)
    assert day is not None  # every month has at least four of each weekday
    return day


def month_day_from_year_day(year: int, year_day: int) -> tuple[int, int]:
    """Convert a 1-based day of the year into ``(zero-based month, day)``.

    Raises:
        OutOfRangeError: If ``year_day`` does not exist in ``year``.
    """
    if not 0 < year_day <= days_in_year(year):
        raise OutOfRangeError("day of year", year_day)

    table = CUMULATED_DAYS[is_leap_year(year)]
    for month in range(MONTHS_IN_YEAR - 1, -1, -1):
        if year_day > table[month]:
            return month, year_day - table[month]
    raise AssertionError("unreachable")  # pragma: no cover


def julian_day_number(ms: int) -> float:
    """Return the (fractional) JDN of a UTC millisecond timestamp.

    Only whole seconds contribute to the fraction.
    """
    days, time_of_day = divmod(ms, MILLISECONDS_PER_DAY)
    return days + EPOCH_JDN + 0.5 + (time_of_day // 1000) / SECONDS_PER_DAY


def rata_die(ms: int) -> float:
    """Return the Rata Die day of a UTC millisecond timestamp."""
    # March 1 of the year 0 is Rata Die day -306 and JDN 1721119.5
    return julian_day_number(ms) - 1_721_119.5 - 306
