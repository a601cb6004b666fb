"""Locale providers for ALMANAC."""

import time

from almanac.domain import gregorian
from almanac.domain.value_objects import CalendarFields, Month, NameFlags, WeekDay
from almanac.interfaces.locale import LocaleProvider

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# preferred representations of the C ("POSIX") locale
C_DATE_TIME = "%a %b %e %H:%M:%S %Y"
C_DATE = "%m/%d/%y"
C_TIME = "%H:%M:%S"


class EnglishLocale(LocaleProvider):
    """English names and the C locale's preferred representations.

    Independent of the process locale, which makes its output reproducible.
    """

    def month_name(self, month: Month, flags: NameFlags = NameFlags.FULL) -> str:
        name = MONTH_NAMES[month]
        return name[:3] if flags == NameFlags.ABBR else name

    def weekday_name(self, weekday: WeekDay, flags: NameFlags = NameFlags.FULL) -> str:
        name = WEEKDAY_NAMES[weekday]
        return name[:3] if flags == NameFlags.ABBR else name

    def am_pm(self) -> tuple[str, str]:
        return "AM", "PM"

    def strftime(self, template: str, fields: CalendarFields) -> str:
        expanded = template.replace("%c", C_DATE_TIME)
        expanded = expanded.replace("%x", C_DATE).replace("%X", C_TIME)

        substitutions = {
            "a": self.weekday_name(fields.weekday, NameFlags.ABBR),
            "b": self.month_name(fields.month, NameFlags.ABBR),
            "d": f"{fields.day:02d}",
            "e": f"{fields.day:2d}",
            "m": f"{fields.month.number:02d}",
            "y": f"{fields.year % 100:02d}",
            "Y": f"{fields.year:04d}",
            "H": f"{fields.hour:02d}",
            "M": f"{fields.minute:02d}",
            "S": f"{fields.second:02d}",
            "%": "%",
        }

        out: list[str] = []
        chars = iter(expanded)
        for ch in chars:
            if ch != "%":
                out.append(ch)
                continue
            spec = next(chars, "%")
            out.append(substitutions.get(spec, "%" + spec))
        return "".join(out)


class StrftimeLocale(LocaleProvider):
    """Names and representations taken from the process locale via ``time.strftime``.

    ``time.strftime`` only accepts years within the platform's ``struct tm``
    limits: callers are expected to pass fields of the native range.
    """

    def month_name(self, month: Month, flags: NameFlags = NameFlags.FULL) -> str:
        tm = (2000, month + 1, 1, 0, 0, 0, 0, 1, -1)
        return time.strftime("%b" if flags == NameFlags.ABBR else "%B", tm)

    def weekday_name(self, weekday: WeekDay, flags: NameFlags = NameFlags.FULL) -> str:
        # struct_time counts weekdays from Monday
        tm = (2000, 1, 1, 0, 0, 0, (weekday - 1) % gregorian.DAYS_PER_WEEK, 1, -1)
        return time.strftime("%a" if flags == NameFlags.ABBR else "%A", tm)

    def am_pm(self) -> tuple[str, str]:
        am = time.strftime("%p", (2000, 1, 1, 1, 0, 0, 5, 1, -1))
        pm = time.strftime("%p", (2000, 1, 1, 13, 0, 0, 5, 1, -1))
        return am or "AM", pm or "PM"

    def strftime(self, template: str, fields: CalendarFields) -> str:
        tm = (
            fields.year,
            fields.month + 1,
            fields.day,
            fields.hour,
            fields.minute,
            min(fields.second, 61),
            (fields.weekday - 1) % gregorian.DAYS_PER_WEEK,
            fields.day_of_year,
            -1,
        )
        return time.strftime(template, tm)
