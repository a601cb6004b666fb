"""Unit tests for the DOS date/time stamp conversions."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from almanac.adapters.clocks import FixedClock
from almanac.bootstrap import Engine, bootstrap
from almanac.config import EngineSettings
from almanac.domain.errors import InvalidFieldsError, OutOfRangeError
from almanac.domain.value_objects import Instant, Month, TimeSpan
from almanac.service_layer import dos

from tests.helpers.time_asserts import FROZEN_NOW


def _packed(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0
) -> int:
    date = (year - 1980) << 9 | month << 5 | day
    return date << 16 | hour << 11 | minute << 5 | second // 2


def test_layout(engine: Engine) -> None:
    """2024-01-10 12:00:00 packs to 0x582A6000."""
    assert engine.to_dos(FROZEN_NOW) == 0x582A6000
    assert engine.from_dos(0x582A6000) == FROZEN_NOW


def test_dos_epoch(engine: Engine) -> None:
    """Midnight, January 1, 1980 is the smallest date."""
    epoch = engine.converter.from_date(1, Month.JAN, 1980)
    assert engine.to_dos(epoch) == 0x00210000
    assert engine.from_dos(0x00210000) == epoch


def test_odd_seconds_round_down(engine: Engine) -> None:
    """Seconds are stored halved; milliseconds are lost."""
    instant = FROZEN_NOW + TimeSpan.of(seconds=1, milliseconds=500)
    assert engine.to_dos(instant) == engine.to_dos(FROZEN_NOW)


def test_local_wall_clock(engine: Engine, process_zone) -> None:
    """Stamps are read on the local wall clock."""
    process_zone("EST5EDT,M3.2.0,M11.1.0")
    assert dos.to_dos(engine.converter, FROZEN_NOW) == _packed(2024, 1, 10, 7)


@pytest.mark.parametrize("year", [1979, 2108])
def test_year_out_of_range(engine: Engine, year: int) -> None:
    """Only 1980..2107 fit in seven bits."""
    with pytest.raises(OutOfRangeError):
        engine.to_dos(engine.converter.from_date(1, Month.JUN, year))


@pytest.mark.parametrize("packed", [-1, 2**32])
def test_not_32_bits(engine: Engine, packed: int) -> None:
    """Stamps are unsigned 32-bit integers."""
    with pytest.raises(OutOfRangeError):
        engine.from_dos(packed)


@pytest.mark.parametrize(
    "packed",
    [
        _packed(2024, 0, 10),
        _packed(2024, 13, 10),
        _packed(2023, 2, 29),
        _packed(2024, 1, 0),
        _packed(2024, 1, 10, 24),
        _packed(2024, 1, 10, 12, 60),
    ],
    ids=["month-0", "month-13", "feb-29", "day-0", "hour-24", "minute-60"],
)
def test_invalid_fields(engine: Engine, packed: int) -> None:
    """Fields that do not form a valid date and time are refused."""
    with pytest.raises(InvalidFieldsError):
        engine.from_dos(packed)


@pytest.mark.property
@given(seconds=st.integers(min_value=315_532_800 // 2, max_value=4_354_819_199 // 2))
def test_round_trip_of_even_seconds(seconds: int) -> None:
    """Every even second of the DOS range survives packing."""
    engine = bootstrap(EngineSettings(), clock=FixedClock(FROZEN_NOW))
    instant = Instant.from_seconds(seconds * 2)
    assert engine.from_dos(engine.to_dos(instant)) == instant
