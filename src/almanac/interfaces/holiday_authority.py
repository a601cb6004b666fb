"""Interface for holiday authorities."""

import abc

from almanac.domain.value_objects import CalendarFields

# pylint: disable=too-few-public-methods


class HolidayAuthority(abc.ABC):
    """Contract for a source of non-working days.

    Authorities work on dates: only the year, month and day of the fields
    they are given are meaningful.
    """

    @abc.abstractmethod
    def is_holiday(self, date: CalendarFields) -> bool:
        """Return True if ``date`` is a holiday for this authority."""

    @abc.abstractmethod
    def holidays_in_range(
        self, start: CalendarFields, end: CalendarFields
    ) -> list[CalendarFields]:
        """Return the holidays between ``start`` and ``end`` inclusive, in order."""
