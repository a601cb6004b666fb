"""Unit tests for the holiday registry."""

import logging

import pytest

from almanac.adapters.holidays import WorkDaysAuthority
from almanac.bootstrap import Engine
from almanac.domain.value_objects import CalendarFields, Month
from almanac.interfaces.holiday_authority import HolidayAuthority

from tests.helpers.time_asserts import FROZEN_NOW, assert_date


class NewYearAuthority(HolidayAuthority):
    """January 1 and December 31 of every year."""

    DAYS = ((Month.JAN, 1), (Month.DEC, 31))

    def is_holiday(self, date: CalendarFields) -> bool:
        return (date.month, date.day) in self.DAYS

    def holidays_in_range(
        self, start: CalendarFields, end: CalendarFields
    ) -> list[CalendarFields]:
        found = []
        for year in range(start.year, end.year + 1):
            for month, day in self.DAYS:
                date = CalendarFields(year, month, day, tz=start.tz)
                if (start.year, start.month, start.day) <= (year, month, day) <= (
                    end.year,
                    end.month,
                    end.day,
                ):
                    found.append(date)
        return found


def test_work_days_registered(engine: Engine) -> None:
    """Engines come with the weekend authority."""
    assert engine.holidays.names == ["work-days"]
    saturday = engine.converter.from_date(13, Month.JAN, 2024, 15)
    assert engine.holidays.is_holiday(saturday)
    assert engine.holidays.is_work_day(FROZEN_NOW)


def test_answers_are_merged(engine: Engine) -> None:
    """A day is a holiday as soon as one authority says so."""
    new_year = engine.converter.from_date(1, Month.JAN, 2024)  # a Monday
    assert engine.holidays.is_work_day(new_year)
    engine.holidays.register("new-year", NewYearAuthority())
    assert engine.holidays.names == ["work-days", "new-year"]
    assert engine.holidays.is_holiday(new_year)


def test_holidays_in_range(engine: Engine) -> None:
    """Merged, sorted, deduplicated, at midnight."""
    engine.holidays.register("new-year", NewYearAuthority())
    start = engine.converter.from_date(30, Month.DEC, 2023, 18)
    end = engine.converter.from_date(7, Month.JAN, 2024, 9)

    holidays = engine.holidays.holidays_in_range(start, end)
    dates = [engine.converter.to_fields(day) for day in holidays]

    # December 31, 2023 is both a Sunday and New Year's Eve
    assert len(dates) == 5
    for fields, (year, month, day) in zip(
        dates,
        [(2023, 12, 30), (2023, 12, 31), (2024, 1, 1), (2024, 1, 6), (2024, 1, 7)],
    ):
        assert_date(fields, year, month, day)
        assert fields.hour == 0


def test_register_replaces(engine: Engine, caplog: pytest.LogCaptureFixture) -> None:
    """Registering a name twice replaces the first authority."""
    replacement = WorkDaysAuthority()
    with caplog.at_level(logging.INFO, logger="almanac.service_layer.holidays"):
        engine.holidays.register("work-days", replacement)
    assert "Replacing holiday authority 'work-days'" in caplog.text
    assert engine.holidays.deregister("work-days") is replacement


def test_deregister_unknown(engine: Engine) -> None:
    """Removing an unknown name is an error."""
    with pytest.raises(KeyError, match="easter"):
        engine.holidays.deregister("easter")


def test_clear(engine: Engine) -> None:
    """Without authorities every day is a work day."""
    engine.holidays.clear()
    saturday = engine.converter.from_date(13, Month.JAN, 2024)
    assert engine.holidays.is_work_day(saturday)
    assert not engine.holidays.holidays_in_range(FROZEN_NOW, saturday)
