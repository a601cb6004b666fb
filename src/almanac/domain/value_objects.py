"""Module including value objects used across the calendar engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, Flag, IntEnum
from typing import ClassVar

from almanac.domain import gregorian
from almanac.domain.errors import InvalidInstantError, OutOfRangeError

# pylint: disable=too-many-instance-attributes

#: sentinel for an unspecified year (replaced by the current one when converting).
INVALID_YEAR = -32768

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding towards zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


# ============================================================================
#                               Enumerations
# ============================================================================


class Month(IntEnum):
    """Months of the year, zero-based, plus an invalid sentinel."""

    JAN = 0
    FEB = 1
    MAR = 2
    APR = 3
    MAY = 4
    JUN = 5
    JUL = 6
    AUG = 7
    SEP = 8
    OCT = 9
    NOV = 10
    DEC = 11
    INVALID = 12

    @property
    def number(self) -> int:
        """Conventional 1-based month number."""
        return self.value + 1

    @classmethod
    def from_number(cls, number: int) -> Month:
        """Build a month from its conventional 1-based number."""
        if not 1 <= number <= 12:
            raise ValueError(f"Month number must be in 1..12, got {number}")
        return cls(number - 1)


class WeekDay(IntEnum):
    """Days of the week, Sunday first, plus an invalid sentinel."""

    SUN = 0
    MON = 1
    TUE = 2
    WED = 3
    THU = 4
    FRI = 5
    SAT = 6
    INVALID = 7


class Country(IntEnum):
    """Countries whose DST rules and conventions are modelled.

    ``EEC`` through ``UK`` form the Western Europe range.
    """

    UNKNOWN = 0
    DEFAULT = 1
    EEC = 2
    FRANCE = 3
    GERMANY = 4
    UK = 5
    RUSSIA = 6
    USA = 7

    @property
    def is_west_european(self) -> bool:
        """True if the country belongs to the Western Europe range."""
        return Country.EEC <= self <= Country.UK

    @classmethod
    def parse(cls, name: str) -> Country:
        """Look a country up by its (case-insensitive) member name.

        Raises:
            ValueError: If the name does not denote a country.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError as e:
            raise ValueError(f"Unknown country: {name!r}") from e


class WeekFlags(Enum):
    """Which day starts the week."""

    DEFAULT_FIRST = "default"
    MONDAY_FIRST = "monday"
    SUNDAY_FIRST = "sunday"


class NameFlags(Flag):
    """Which form(s) of month and weekday names to use or accept."""

    FULL = 1
    ABBR = 2


# ============================================================================
#                               Time zones
# ============================================================================

#: offsets (in minutes east of UTC) of the named time zones.
NAMED_ZONES: dict[str, int] = {
    "UTC": 0,
    "UT": 0,
    "GMT": 0,
    "WET": 0,
    "WEST": 60,
    "CET": 60,
    "CEST": 120,
    "EET": 120,
    "EEST": 180,
    "MSK": 180,
    "MSD": 240,
    "AST": -240,
    "ADT": -180,
    "EST": -300,
    "EDT": -240,
    "CST": -360,
    "CDT": -300,
    "MST": -420,
    "MDT": -360,
    "PST": -480,
    "PDT": -420,
    "HST": -600,
    "AKST": -540,
    "AKDT": -480,
    "A_WST": 480,
    "A_CST": 570,
    "A_EST": 600,
    "A_ESST": 660,
    "NZST": 720,
    "NZDT": 780,
}


@dataclass(frozen=True)
class TimeZoneSpec:
    """Which wall clock a calendar representation refers to.

    Attributes:
        offset: Seconds east of UTC, or None for the local time zone (resolved
            through the engine's clock).
    """

    offset: int | None = None

    @classmethod
    def local(cls) -> TimeZoneSpec:
        """The local time zone of the process."""
        return cls(None)

    @classmethod
    def utc(cls) -> TimeZoneSpec:
        """Coordinated Universal Time."""
        return cls(0)

    @classmethod
    def fixed(cls, seconds: int) -> TimeZoneSpec:
        """A fixed offset of ``seconds`` east of UTC."""
        return cls(seconds)

    @classmethod
    def gmt(cls, hours: int) -> TimeZoneSpec:
        """One of the GMT-12 .. GMT+13 zones."""
        if not -12 <= hours <= 13:
            raise ValueError(f"GMT offset out of range: {hours}")
        return cls(hours * 3600)

    @classmethod
    def named(cls, name: str) -> TimeZoneSpec:
        """A zone given by its abbreviation (e.g. ``CET``, ``PST``).

        Raises:
            ValueError: If the abbreviation is unknown.
        """
        key = name.strip().upper()
        if key == "LOCAL":
            return cls.local()
        if key not in NAMED_ZONES:
            raise ValueError(f"Unknown time zone: {name!r}")
        return cls(NAMED_ZONES[key] * 60)

    @property
    def is_local(self) -> bool:
        """True for the local time zone."""
        return self.offset is None

    def __str__(self) -> str:
        if self.offset is None:
            return "local"
        sign = "-" if self.offset < 0 else "+"
        hours, minutes = divmod(abs(self.offset) // 60, 60)
        return f"GMT{sign}{hours:02d}:{minutes:02d}"


LOCAL = TimeZoneSpec.local()
UTC = TimeZoneSpec.utc()


# ============================================================================
#                               Durations
# ============================================================================


@dataclass(frozen=True, order=True)
class TimeSpan:
    """A fixed duration, in milliseconds."""

    ms: int = 0

    @classmethod
    def milliseconds(cls, ms: int) -> TimeSpan:
        """Span of ``ms`` milliseconds."""
        return cls(ms)

    @classmethod
    def seconds(cls, seconds: int) -> TimeSpan:
        """Span of ``seconds`` seconds."""
        return cls(seconds * 1000)

    @classmethod
    def minutes(cls, minutes: int) -> TimeSpan:
        """Span of ``minutes`` minutes."""
        return cls(minutes * 60_000)

    @classmethod
    def hours(cls, hours: int) -> TimeSpan:
        """Span of ``hours`` hours."""
        return cls(hours * 3_600_000)

    @classmethod
    def days(cls, days: int) -> TimeSpan:
        """Span of ``days`` days of exactly 24 hours."""
        return cls(days * gregorian.MILLISECONDS_PER_DAY)

    @classmethod
    def weeks(cls, weeks: int) -> TimeSpan:
        """Span of ``weeks`` weeks of exactly 7 days."""
        return cls(weeks * 7 * gregorian.MILLISECONDS_PER_DAY)

    @classmethod
    def of(
        cls, hours: int = 0, minutes: int = 0, seconds: int = 0, milliseconds: int = 0
    ) -> TimeSpan:
        """Span built from its components."""
        return cls(((hours * 60 + minutes) * 60 + seconds) * 1000 + milliseconds)

    # --- Accessors (rounding towards zero) ---

    @property
    def total_seconds(self) -> int:
        """Whole seconds in the span."""
        return _trunc_div(self.ms, 1000)

    @property
    def total_minutes(self) -> int:
        """Whole minutes in the span."""
        return _trunc_div(self.ms, 60_000)

    @property
    def total_hours(self) -> int:
        """Whole hours in the span."""
        return _trunc_div(self.ms, 3_600_000)

    @property
    def total_days(self) -> int:
        """Whole days in the span."""
        return _trunc_div(self.ms, gregorian.MILLISECONDS_PER_DAY)

    @property
    def total_weeks(self) -> int:
        """Whole weeks in the span."""
        return _trunc_div(self.ms, 7 * gregorian.MILLISECONDS_PER_DAY)

    def is_null(self) -> bool:
        """True for the empty span."""
        return self.ms == 0

    def is_positive(self) -> bool:
        """True for spans going forward in time."""
        return self.ms > 0

    def is_negative(self) -> bool:
        """True for spans going backwards in time."""
        return self.ms < 0

    def abs(self) -> TimeSpan:
        """The span with its sign dropped."""
        return TimeSpan(abs(self.ms))

    # --- Arithmetic ---

    def __add__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(self.ms + other.ms)

    def __sub__(self, other: TimeSpan) -> TimeSpan:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return TimeSpan(self.ms - other.ms)

    def __mul__(self, factor: int) -> TimeSpan:
        if not isinstance(factor, int):
            return NotImplemented
        return TimeSpan(self.ms * factor)

    __rmul__ = __mul__

    def __neg__(self) -> TimeSpan:
        return TimeSpan(-self.ms)


@dataclass(frozen=True)
class DateSpan:
    """A calendar-relative span.

    Adding one month advances the month field (clamping the day to the end
    of the target month) instead of adding a fixed number of days.
    """

    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0

    @classmethod
    def of_days(cls, days: int) -> DateSpan:
        """Span of ``days`` calendar days."""
        return cls(days=days)

    @classmethod
    def of_weeks(cls, weeks: int) -> DateSpan:
        """Span of ``weeks`` calendar weeks."""
        return cls(weeks=weeks)

    @classmethod
    def of_months(cls, months: int) -> DateSpan:
        """Span of ``months`` calendar months."""
        return cls(months=months)

    @classmethod
    def of_years(cls, years: int) -> DateSpan:
        """Span of ``years`` calendar years."""
        return cls(years=years)

    @classmethod
    def day(cls) -> DateSpan:
        """One day."""
        return cls(days=1)

    @classmethod
    def week(cls) -> DateSpan:
        """One week."""
        return cls(weeks=1)

    @classmethod
    def month(cls) -> DateSpan:
        """One month."""
        return cls(months=1)

    @classmethod
    def year(cls) -> DateSpan:
        """One year."""
        return cls(years=1)

    @property
    def total_days(self) -> int:
        """Weeks and days expressed in days."""
        return self.weeks * gregorian.DAYS_PER_WEEK + self.days

    def __add__(self, other: DateSpan) -> DateSpan:
        if not isinstance(other, DateSpan):
            return NotImplemented
        return DateSpan(
            self.years + other.years,
            self.months + other.months,
            self.weeks + other.weeks,
            self.days + other.days,
        )

    def __sub__(self, other: DateSpan) -> DateSpan:
        if not isinstance(other, DateSpan):
            return NotImplemented
        return self + (-other)

    def __neg__(self) -> DateSpan:
        return DateSpan(-self.years, -self.months, -self.weeks, -self.days)

    def __mul__(self, factor: int) -> DateSpan:
        if not isinstance(factor, int):
            return NotImplemented
        return DateSpan(
            self.years * factor,
            self.months * factor,
            self.weeks * factor,
            self.days * factor,
        )

    __rmul__ = __mul__


# ============================================================================
#                               Instant
# ============================================================================


@dataclass(frozen=True, order=True)
class Instant:
    """An absolute point in time: signed milliseconds since the Unix epoch.

    One reserved value (``INVALID_MS``) denotes an invalid or unset instant;
    every other 64-bit value is valid.
    """

    ms: int

    INVALID_MS: ClassVar[int] = _INT64_MIN

    def __post_init__(self) -> None:
        if not _INT64_MIN <= self.ms <= _INT64_MAX:
            raise OutOfRangeError("instant", self.ms)

    @classmethod
    def invalid(cls) -> Instant:
        """The invalid (unset) instant."""
        return cls(cls.INVALID_MS)

    @classmethod
    def from_seconds(cls, seconds: int) -> Instant:
        """Instant ``seconds`` after the epoch."""
        return cls(seconds * 1000)

    @property
    def is_valid(self) -> bool:
        """False only for the invalid sentinel."""
        return self.ms != self.INVALID_MS

    @property
    def seconds(self) -> int:
        """Whole seconds since the epoch (rounded down)."""
        self.require_valid("read")
        return self.ms // 1000

    @property
    def millisecond(self) -> int:
        """Millisecond within the second."""
        self.require_valid("read")
        return self.ms % 1000

    def require_valid(self, operation: str) -> None:
        """Raise `InvalidInstantError` if this is the invalid sentinel."""
        if not self.is_valid:
            raise InvalidInstantError(operation)

    def __add__(self, other: TimeSpan) -> Instant:
        if not isinstance(other, TimeSpan):
            return NotImplemented
        self.require_valid("shift")
        return Instant(self.ms + other.ms)

    def __sub__(self, other: TimeSpan | Instant) -> Instant | TimeSpan:
        if isinstance(other, TimeSpan):
            self.require_valid("shift")
            return Instant(self.ms - other.ms)
        if isinstance(other, Instant):
            self.require_valid("subtract")
            other.require_valid("subtract")
            return TimeSpan(self.ms - other.ms)
        return NotImplemented

    def __str__(self) -> str:
        return f"Instant({self.ms})" if self.is_valid else "Instant(invalid)"


# ============================================================================
#                           Broken-down time
# ============================================================================


@dataclass(frozen=True)
class CalendarFields:
    """Broken-down calendar representation tied to a wall clock.

    Weekday and day of year are derived from the date, never stored.

    ``dst`` records whether DST was in effect when the fields were read from
    an instant on the local wall clock. It tells apart the two readings of a
    wall-clock time repeated when DST ends, is ignored by comparisons, and is
    dropped by every copy that moves the date or the time of day.
    """

    year: int
    month: Month
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    tz: TimeZoneSpec = LOCAL
    dst: bool | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.month, Month):
            object.__setattr__(self, "month", Month(self.month))

    def is_valid(self) -> bool:
        """Check that the fields denote a real moment (leap seconds tolerated)."""
        return (
            self.year != INVALID_YEAR
            and self.month != Month.INVALID
            and 0 < self.day <= gregorian.days_in_month(self.year, self.month)
            and 0 <= self.hour < 24
            and 0 <= self.minute < 60
            and 0 <= self.second < 62
            and 0 <= self.millisecond < 1000
        )

    # --- Derived values ---

    @property
    def jdn(self) -> int:
        """Truncated Julian Day Number of the date."""
        return gregorian.truncated_jdn(self.day, self.month, self.year)

    @property
    def weekday(self) -> WeekDay:
        """Day of the week, computed from the JDN."""
        return WeekDay(gregorian.weekday_from_jdn(self.jdn))

    @property
    def day_of_year(self) -> int:
        """1-based day of the year."""
        return gregorian.cumulated_days(self.year, self.month) + self.day

    @property
    def time_of_day_ms(self) -> int:
        """Milliseconds elapsed since midnight."""
        return (
            (self.hour * 60 + self.minute) * 60 + self.second
        ) * 1000 + self.millisecond

    # --- Copies ---

    def with_unspecified_replaced(self, year: int, month: Month) -> CalendarFields:
        """Substitute ``year``/``month`` for the unspecified sentinels only."""
        changes: dict[str, object] = {}
        if self.year == INVALID_YEAR:
            changes["year"] = year
        if self.month == Month.INVALID:
            changes["month"] = month
        return replace(self, dst=None, **changes) if changes else self

    def with_time(
        self, hour: int = 0, minute: int = 0, second: int = 0, millisecond: int = 0
    ) -> CalendarFields:
        """Same date at another time of day."""
        return replace(
            self,
            hour=hour,
            minute=minute,
            second=second,
            millisecond=millisecond,
            dst=None,
        )

    def add_months(self, months: int) -> CalendarFields:
        """Advance the month field, normalising the year.

        The day is left untouched, so the result may be invalid; callers
        clamp it as needed.
        """
        year, month = divmod(self.month + months, gregorian.MONTHS_IN_YEAR)
        return replace(self, year=self.year + year, month=Month(month), dst=None)

    def add_days(self, days: int) -> CalendarFields:
        """Advance the day field by borrowing or carrying whole months."""
        fields = self
        while days + fields.day < 1:
            fields = fields.add_months(-1)
            days += gregorian.days_in_month(fields.year, fields.month)

        day = fields.day + days
        while day > gregorian.days_in_month(fields.year, fields.month):
            day -= gregorian.days_in_month(fields.year, fields.month)
            fields = fields.add_months(1)

        return replace(fields, day=day, dst=None)

    def same_time_of_day(self, other: CalendarFields) -> bool:
        """True if both fields share hour, minute, second and millisecond."""
        return self.time_of_day_ms == other.time_of_day_ms

    def __str__(self) -> str:
        month = "??" if self.month == Month.INVALID else f"{self.month.number:02d}"
        year = "????" if self.year == INVALID_YEAR else f"{self.year:04d}"
        return (
            f"{year}-{month}-{self.day:02d} "
            f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}."
            f"{self.millisecond:03d} ({self.tz})"
        )
