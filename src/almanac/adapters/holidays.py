"""Holiday authorities for ALMANAC."""

from almanac.domain import gregorian
from almanac.domain.value_objects import CalendarFields, WeekDay
from almanac.interfaces.holiday_authority import HolidayAuthority


def _date_key(date: CalendarFields) -> tuple[int, int, int]:
    return date.year, date.month, date.day


class WorkDaysAuthority(HolidayAuthority):
    """Treat every Saturday and Sunday as a holiday."""

    WEEKEND = (WeekDay.SAT, WeekDay.SUN)

    def is_holiday(self, date: CalendarFields) -> bool:
        return date.weekday in self.WEEKEND

    def holidays_in_range(
        self, start: CalendarFields, end: CalendarFields
    ) -> list[CalendarFields]:
        start = start.with_time()
        holidays: list[CalendarFields] = []
        for weekday in self.WEEKEND:
            # first occurrence on or after the start, then one per week
            date = start.add_days((weekday - start.weekday) % gregorian.DAYS_PER_WEEK)
            while _date_key(date) <= _date_key(end):
                holidays.append(date)
                date = date.add_days(gregorian.DAYS_PER_WEEK)
        return sorted(holidays, key=_date_key)
