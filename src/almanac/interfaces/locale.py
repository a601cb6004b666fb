"""Interface for locale providers.

The engine never reads names or preferred representations from global state:
every formatter and parser receives a locale provider explicitly.
"""

from __future__ import annotations

import abc

from almanac.domain.value_objects import CalendarFields, Month, NameFlags, WeekDay


class LocaleProvider(abc.ABC):
    """Contract for month/weekday names and locale-preferred representations."""

    @abc.abstractmethod
    def month_name(self, month: Month, flags: NameFlags = NameFlags.FULL) -> str:
        """Return the full or abbreviated name of ``month``."""

    @abc.abstractmethod
    def weekday_name(self, weekday: WeekDay, flags: NameFlags = NameFlags.FULL) -> str:
        """Return the full or abbreviated name of ``weekday``."""

    @abc.abstractmethod
    def am_pm(self) -> tuple[str, str]:
        """Return the ante meridiem and post meridiem markers."""

    @abc.abstractmethod
    def strftime(self, template: str, fields: CalendarFields) -> str:
        """Render a locale-dependent template (``%c``, ``%x``, ``%X``) for ``fields``."""

    def translate(self, word: str) -> str:
        """Return the localized form of a keyword such as ``today`` or ``noon``."""
        return word

    def find_month(
        self, name: str, flags: NameFlags = NameFlags.FULL | NameFlags.ABBR
    ) -> Month | None:
        """Look a month up by name, ignoring case.

        Returns:
            Month | None: The month, or None if no name matches.
        """
        wanted = name.casefold()
        for month in list(Month)[:-1]:
            for flag in (NameFlags.FULL, NameFlags.ABBR):
                if flag in flags and self.month_name(month, flag).casefold() == wanted:
                    return month
        return None

    def find_weekday(
        self, name: str, flags: NameFlags = NameFlags.FULL | NameFlags.ABBR
    ) -> WeekDay | None:
        """Look a weekday up by name, ignoring case.

        Returns:
            WeekDay | None: The weekday, or None if no name matches.
        """
        wanted = name.casefold()
        for weekday in list(WeekDay)[:-1]:
            for flag in (NameFlags.FULL, NameFlags.ABBR):
                if flag in flags and self.weekday_name(weekday, flag).casefold() == wanted:
                    return weekday
        return None
