"""Global pytest fixtures for ALMANAC.

Every test runs with the process time zone set to UTC and without any
``ALMANAC_*`` environment variable, so results do not depend on the machine
running the suite. Tests needing another zone use `process_zone`.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator

import pytest

from almanac.adapters.clocks import FixedClock
from almanac.adapters.locale import EnglishLocale
from almanac.bootstrap import Engine, bootstrap
from almanac.config import COUNTRY_ENV, WEEK_START_ENV, YEAR_PIVOT_ENV, EngineSettings

from tests.helpers.time_asserts import FROZEN_NOW

# pylint: disable=redefined-outer-name


def _set_zone(monkeypatch: pytest.MonkeyPatch, zone: str) -> None:
    monkeypatch.setenv("TZ", zone)
    time.tzset()


@pytest.fixture(autouse=True)
def utc_process(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run the test in UTC with a clean ALMANAC environment."""
    for name in (COUNTRY_ENV, WEEK_START_ENV, YEAR_PIVOT_ENV):
        monkeypatch.delenv(name, raising=False)
    _set_zone(monkeypatch, "UTC")
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def process_zone(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Switch the process time zone (a POSIX ``TZ`` string) for the test."""
    if not hasattr(time, "tzset"):  # pragma: no cover
        pytest.skip("time.tzset is not available on this platform")
    return lambda zone: _set_zone(monkeypatch, zone)


@pytest.fixture
def clock() -> FixedClock:
    """A clock frozen at `FROZEN_NOW`."""
    return FixedClock(FROZEN_NOW)


@pytest.fixture
def make_engine(clock: FixedClock) -> Callable[..., Engine]:
    """Factory of engines on the frozen clock with English names.

    Keyword arguments are `EngineSettings` fields.
    """

    def factory(**settings) -> Engine:
        return bootstrap(EngineSettings(**settings), clock=clock, locale=EnglishLocale())

    return factory


@pytest.fixture
def engine(make_engine: Callable[..., Engine]) -> Engine:
    """An engine with default settings (the country is guessed as USA in UTC)."""
    return make_engine()
