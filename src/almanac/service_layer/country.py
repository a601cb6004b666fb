"""Resolution of the default country."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from almanac.domain.value_objects import Country, WeekFlags

if TYPE_CHECKING:
    from almanac.config import EngineSettings
    from almanac.interfaces.clock import Clock

logger = logging.getLogger(__name__)

#: local zone abbreviations identifying a country.
ZONE_COUNTRIES = {
    "WET": Country.UK,
    "WEST": Country.UK,
    "CET": Country.EEC,
    "CEST": Country.EEC,
    "MSK": Country.RUSSIA,
    "MSD": Country.RUSSIA,
    "AST": Country.USA,
    "ADT": Country.USA,
    "EST": Country.USA,
    "EDT": Country.USA,
    "CST": Country.USA,
    "CDT": Country.USA,
    "MST": Country.USA,
    "MDT": Country.USA,
    "PST": Country.USA,
    "PDT": Country.USA,
}


def guess_country(zone_name: str) -> Country:
    """Guess the country from a local zone abbreviation, defaulting to the USA."""
    return ZONE_COUNTRIES.get(zone_name.strip().upper(), Country.USA)


def resolve_country(country: Country, settings: EngineSettings, clock: Clock) -> Country:
    """Replace ``DEFAULT``/``UNKNOWN`` by the configured or guessed country.

    Args:
        country: The requested country.
        settings: Engine settings holding the configured default.
        clock: Clock reporting the local zone name, used when nothing is configured.

    Returns:
        Country: A concrete country.
    """
    if country not in (Country.DEFAULT, Country.UNKNOWN):
        return country
    if settings.country not in (Country.DEFAULT, Country.UNKNOWN):
        return settings.country

    guessed = guess_country(clock.zone_name())
    logger.debug("Guessed country %s from zone %r", guessed.name, clock.zone_name())
    return guessed


def resolve_week_start(
    flags: WeekFlags, settings: EngineSettings, clock: Clock
) -> WeekFlags:
    """Replace ``DEFAULT_FIRST`` by Sunday for the USA and Monday elsewhere."""
    if flags is not WeekFlags.DEFAULT_FIRST:
        return flags
    if settings.week_start is not WeekFlags.DEFAULT_FIRST:
        return settings.week_start
    if resolve_country(Country.DEFAULT, settings, clock) is Country.USA:
        return WeekFlags.SUNDAY_FIRST
    return WeekFlags.MONDAY_FIRST
