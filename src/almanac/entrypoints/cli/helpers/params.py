"""Click parameter types for ALMANAC values."""

from __future__ import annotations

import re

import click

from almanac.domain.value_objects import Country, TimeZoneSpec

_OFFSET = re.compile(r"^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})$")


class TimeZoneType(click.ParamType):
    """A zone abbreviation (``UTC``, ``CET``...), ``local`` or ``+hh:mm``."""

    name = "zone"

    def convert(self, value, param, ctx) -> TimeZoneSpec:
        if isinstance(value, TimeZoneSpec):
            return value
        if match := _OFFSET.match(value.strip()):
            seconds = int(match["hours"]) * 3600 + int(match["minutes"]) * 60
            return TimeZoneSpec.fixed(-seconds if match["sign"] == "-" else seconds)
        try:
            return TimeZoneSpec.named(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


class CountryType(click.ParamType):
    """A country name such as ``usa`` or ``france``."""

    name = "country"

    def convert(self, value, param, ctx) -> Country:
        if isinstance(value, Country):
            return value
        try:
            return Country.parse(value)
        except ValueError:
            self.fail(
                f"{value!r} is not one of "
                + ", ".join(c.name.lower() for c in Country),
                param,
                ctx,
            )


class PackedIntType(click.ParamType):
    """An integer in decimal, hexadecimal (``0x``), octal or binary notation."""

    name = "integer"

    def convert(self, value, param, ctx) -> int:
        if isinstance(value, int):
            return value
        try:
            return int(value, 0)
        except ValueError:
            self.fail(f"{value!r} is not an integer", param, ctx)


TIME_ZONE = TimeZoneType()
COUNTRY = CountryType()
PACKED_INT = PackedIntType()
