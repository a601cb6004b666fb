"""Conversion between instants and broken-down calendar fields.

Two civil-time strategies are combined: the native one (the operating
system's routines) is used whenever its pure range predicate accepts the
input, because it reproduces the platform's DST transitions exactly; the
fallback (Julian Day Number arithmetic) covers every other representable date.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from almanac.domain.errors import InvalidFieldsError, InvalidInstantError
from almanac.domain.value_objects import (
    INVALID_YEAR,
    LOCAL,
    CalendarFields,
    Instant,
    Month,
    TimeZoneSpec,
)

if TYPE_CHECKING:
    from almanac.interfaces.civil_time import CivilTimeStrategy
    from almanac.interfaces.clock import Clock

logger = logging.getLogger(__name__)


class CalendarConverter:
    """Bidirectional mapping between `Instant` and `CalendarFields`.

    Args:
        clock: Source of the current time and of the local offset.
        native: Strategy preferred within its supported range.
        fallback: Strategy used for everything else.
    """

    def __init__(
        self, clock: Clock, native: CivilTimeStrategy, fallback: CivilTimeStrategy
    ) -> None:
        self.clock = clock
        self.native = native
        self.fallback = fallback

    def get_offset(self, tz: TimeZoneSpec) -> int:
        """Offset of ``tz`` in seconds east of UTC (standard time for local)."""
        if tz.offset is None:
            return self.clock.local_offset()
        return tz.offset

    # --- Instant -> fields ---

    def to_fields(self, instant: Instant, tz: TimeZoneSpec = LOCAL) -> CalendarFields:
        """Break ``instant`` down into calendar fields of the wall clock ``tz``.

        Raises:
            InvalidInstantError: If ``instant`` is the invalid sentinel.
            OutOfRangeError: If the date precedes Julian Day Number 0.
        """
        if not instant.is_valid:
            raise InvalidInstantError("convert")

        offset = self.get_offset(tz)
        # outside the native range local time is read at the standard offset,
        # so no DST correction applies there
        if self.native.supports_instant(instant, offset):
            strategy = self.native
        else:
            strategy = self.fallback
        return strategy.to_fields(instant, tz, offset)

    # --- fields -> Instant ---

    def from_fields(self, fields: CalendarFields) -> Instant:
        """Convert ``fields`` to an instant.

        An unspecified year or month (``INVALID_YEAR``/``Month.INVALID``) is
        replaced by the current one; nothing else is ever substituted.

        Raises:
            InvalidFieldsError: If the (substituted) fields are not valid.
            OutOfRangeError: If the date precedes Julian Day Number 0.
        """
        if fields.year == INVALID_YEAR or fields.month == Month.INVALID:
            current = self.to_fields(self.clock.now(), fields.tz)
            fields = fields.with_unspecified_replaced(current.year, current.month)

        if not fields.is_valid():
            raise InvalidFieldsError(fields, "not a valid date and time")

        # same as to_fields: standard offset only past the native years
        if self.native.supports_year(fields.year):
            strategy = self.native
        else:
            strategy = self.fallback
        return strategy.from_fields(fields, self.get_offset(fields.tz))

    def from_date(  # pylint: disable=too-many-arguments,too-many-positional-arguments
        self,
        day: int,
        month: Month,
        year: int = INVALID_YEAR,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
        tz: TimeZoneSpec = LOCAL,
    ) -> Instant:
        """Build an instant from a date and an optional time of day."""
        return self.from_fields(
            CalendarFields(year, month, day, hour, minute, second, millisecond, tz)
        )

    # --- Current time ---

    def now(self) -> Instant:
        """The current instant."""
        return self.clock.now()

    def today(self, tz: TimeZoneSpec = LOCAL) -> Instant:
        """Midnight of the current day on the wall clock ``tz``."""
        return self.from_fields(self.to_fields(self.clock.now(), tz).with_time())

    def current_year(self, tz: TimeZoneSpec = LOCAL) -> int:
        """The current year on the wall clock ``tz``."""
        return self.to_fields(self.clock.now(), tz).year

    def current_month(self, tz: TimeZoneSpec = LOCAL) -> Month:
        """The current month on the wall clock ``tz``."""
        return self.to_fields(self.clock.now(), tz).month

    def native_dst_flag(self, instant: Instant) -> bool | None:
        """DST flag of the local zone at ``instant`` as known to the native strategy."""
        return self.native.is_dst(instant)
