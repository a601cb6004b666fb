"""Interface for civil-time strategies.

A civil-time strategy converts between absolute instants and broken-down
calendar fields for one wall clock. The converter picks a strategy per call:
the operating system's routines where they are reliable, pure Julian Day
Number arithmetic everywhere else.
"""

import abc

from almanac.domain.value_objects import CalendarFields, Instant, TimeZoneSpec


class CivilTimeStrategy(abc.ABC):
    """Contract for converting instants to and from calendar fields."""

    #: short identifier, used in log messages.
    name: str = "abstract"

    @abc.abstractmethod
    def supports_year(self, year: int) -> bool:
        """Return True if fields of ``year`` can be converted to an instant."""

    @abc.abstractmethod
    def supports_instant(self, instant: Instant, offset: int) -> bool:
        """Return True if ``instant`` shifted by ``offset`` seconds can be broken down."""

    @abc.abstractmethod
    def to_fields(self, instant: Instant, tz: TimeZoneSpec, offset: int) -> CalendarFields:
        """Break ``instant`` down into fields of the wall clock ``tz``.

        Args:
            instant: A valid instant.
            tz: The wall clock the fields refer to.
            offset: The offset of ``tz`` in seconds east of UTC (the standard
                local offset when ``tz`` is local).

        Returns:
            CalendarFields: The broken-down representation, with ``tz`` attached.
        """

    @abc.abstractmethod
    def from_fields(self, fields: CalendarFields, offset: int) -> Instant:
        """Convert valid ``fields`` back to an instant.

        Args:
            fields: Valid calendar fields.
            offset: The offset of ``fields.tz`` in seconds east of UTC.

        Returns:
            Instant: The instant the fields denote.
        """

    def is_dst(self, instant: Instant) -> bool | None:  # pylint: disable=unused-argument
        """Return the DST flag the strategy knows for ``instant``, or None."""
        return None
