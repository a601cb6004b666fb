"""Configuration utilities for ALMANAC.

This module centralizes the engine settings and the small helpers that read
them from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from almanac.domain.value_objects import Country, WeekFlags

COUNTRY_ENV = "ALMANAC_COUNTRY"  # pragma: no mutate
WEEK_START_ENV = "ALMANAC_WEEK_START"  # pragma: no mutate
YEAR_PIVOT_ENV = "ALMANAC_YEAR_PIVOT"  # pragma: no mutate

DEFAULT_YEAR_PIVOT = 30
DEFAULT_NATIVE_YEARS = (1970, 2037)


class InvalidSettingError(Exception):
    """Raised when a configuration value cannot be interpreted."""

    def __init__(self, name: str, value: str, expected: str) -> None:
        super().__init__(f"Invalid value {value!r} for {name}: expected {expected}.")
        self.name = name
        self.value = value
        self.expected = expected


class InvalidCountryError(InvalidSettingError):
    """Raised when the ALMANAC_COUNTRY environment variable names no known country."""

    def __init__(self, value: str) -> None:
        super().__init__(
            COUNTRY_ENV, value, "one of " + ", ".join(c.name for c in Country)
        )


@dataclass(frozen=True)
class EngineSettings:
    """Process-independent engine settings.

    Attributes:
        country: Default country for DST rules, week start and date-order
            heuristics. ``UNKNOWN`` means "guess from the local zone name".
        week_start: Which day starts the week when callers ask for the default.
        native_years: Inclusive range of years converted by the operating
            system's routines.
        year_pivot: Two-digit years above the pivot belong to the 1900s, the
            others to the 2000s.
    """

    country: Country = Country.UNKNOWN
    week_start: WeekFlags = WeekFlags.DEFAULT_FIRST
    native_years: tuple[int, int] = DEFAULT_NATIVE_YEARS
    year_pivot: int = DEFAULT_YEAR_PIVOT

    def with_country(self, country: Country) -> EngineSettings:
        """Return a copy of the settings with another default country."""
        return replace(self, country=country)

    def expand_year(self, two_digit_year: int) -> int:
        """Map a two-digit year onto a full one using the pivot."""
        century = 1900 if two_digit_year > self.year_pivot else 2000
        return century + two_digit_year


def get_country() -> Country:
    """Get the default country from the environment.

    Returns:
        The country named by `ALMANAC_COUNTRY`, or `Country.UNKNOWN` if unset.

    Raises:
        InvalidCountryError: If `ALMANAC_COUNTRY` names no known country.
    """
    if not (value := os.environ.get(COUNTRY_ENV)):
        return Country.UNKNOWN
    try:
        return Country.parse(value)
    except ValueError as e:
        raise InvalidCountryError(value) from e


def get_week_start() -> WeekFlags:
    """Get the week start from the environment (`sunday`, `monday` or `default`).

    Raises:
        InvalidSettingError: If `ALMANAC_WEEK_START` is not one of the accepted values.
    """
    if not (value := os.environ.get(WEEK_START_ENV)):
        return WeekFlags.DEFAULT_FIRST
    try:
        return WeekFlags(value.strip().lower())
    except ValueError as e:
        raise InvalidSettingError(
            WEEK_START_ENV, value, "sunday, monday or default"
        ) from e


def get_year_pivot() -> int:
    """Get the two-digit year pivot from the environment.

    Raises:
        InvalidSettingError: If `ALMANAC_YEAR_PIVOT` is not an integer in 0..99.
    """
    if not (value := os.environ.get(YEAR_PIVOT_ENV)):
        return DEFAULT_YEAR_PIVOT
    try:
        pivot = int(value)
    except ValueError as e:
        raise InvalidSettingError(YEAR_PIVOT_ENV, value, "an integer in 0..99") from e
    if not 0 <= pivot <= 99:
        raise InvalidSettingError(YEAR_PIVOT_ENV, value, "an integer in 0..99")
    return pivot


def load_settings() -> EngineSettings:
    """Build the engine settings from the environment."""
    return EngineSettings(
        country=get_country(),
        week_start=get_week_start(),
        year_pivot=get_year_pivot(),
    )
