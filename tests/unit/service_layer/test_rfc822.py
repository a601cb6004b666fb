"""Unit tests for the RFC 822 parser."""

import pytest

from almanac.bootstrap import Engine
from almanac.config import EngineSettings
from almanac.domain.errors import ParseNoMatchError
from almanac.domain.value_objects import UTC, Instant, Month, TimeZoneSpec
from almanac.service_layer.parsing import parse_rfc822

from tests.helpers.time_asserts import assert_date, assert_time

EXAMPLE = "Sat, 18 Dec 1999 00:48:30 +0100"


def test_example(engine: Engine) -> None:
    """The canonical example from the RFC-style documentation."""
    result = engine.parse_rfc822(EXAMPLE)
    assert result.instant == Instant(945_474_510_000)
    assert result.fields.tz == TimeZoneSpec.fixed(3600)
    assert_date(result.fields, 1999, 12, 18)
    assert_time(result.fields, 0, 48, 30)
    assert result.end == len(EXAMPLE)


def test_trailing_text(engine: Engine) -> None:
    """Only the date is consumed after a numeric offset."""
    result = engine.parse_rfc822(EXAMPLE + " (CET)")
    assert result.end == len(EXAMPLE)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("18 Dec 1999 00:48 GMT", Instant(945_478_080_000)),
        ("18 Dec 1999 00:48:30 UT", Instant(945_478_110_000)),
        ("18 Dec 1999 01:48:30 N", Instant(945_478_110_000)),
        ("17 Dec 1999 19:48:30 EST", Instant(945_478_110_000)),
        ("17 Dec 1999 19:48:30 -0500", Instant(945_478_110_000)),
        ("18 Dec 99 00:48:30 Z", Instant(945_478_110_000)),
    ],
)
def test_variants(engine: Engine, text: str, expected: Instant) -> None:
    """Optional weekday and seconds, named, military and numeric zones."""
    assert engine.parse_rfc822(text).instant == expected


def test_two_digit_year_pivot(engine: Engine) -> None:
    """Two-digit years follow the configured pivot."""
    text = "1 Jan 45 10:00 UTC"
    assert engine.parse_rfc822(text).fields.year == 1945
    result = parse_rfc822(engine.converter, text, EngineSettings(year_pivot=50))
    assert result.fields.year == 2045
    assert result.instant == engine.converter.from_date(1, Month.JAN, 2045, 10, tz=UTC)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Sat 18 Dec 1999 00:48:30 +0100",
        "18 December 1999 00:48:30 +0100",
        "18 Foo 1999 00:48:30 +0100",
        "18 dec 1999 00:48:30 +0100",
        "31 Feb 2024 00:48:30 +0100",
        "18 Dec 1999 24:48:30 +0100",
        "18 Dec 1999 00:48:30 +01",
        "18 Dec 1999 00:48:30 J",
        "18 Dec 1999 00:48:30 CET",
        "18 Dec 199 00:48:30 +0100",
    ],
    ids=[
        "empty",
        "weekday-without-comma",
        "long-month",
        "unknown-month",
        "lowercase-month",
        "bad-day",
        "bad-hour",
        "short-offset",
        "military-j",
        "non-rfc-zone",
        "three-digit-year",
    ],
)
def test_rejected(engine: Engine, text: str) -> None:
    """Anything that is not a true RFC 822 date is refused."""
    with pytest.raises(ParseNoMatchError):
        engine.parse_rfc822(text)
