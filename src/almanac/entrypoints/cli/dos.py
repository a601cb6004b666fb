"""ALMANAC DOS commands: packed 32-bit MS-DOS date/time stamps.

Stamps are read and written on the local wall clock, as file systems using
them do. Stamps are printed in hexadecimal and accepted in any base Python
understands (``0x``, ``0o``, ``0b`` or decimal).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import click_extra as clickx

from almanac.domain.errors import CalendarError
from almanac.domain.value_objects import Instant

from .commands import ISO_TEMPLATE, abort
from .helpers.params import PACKED_INT

if TYPE_CHECKING:
    from almanac.bootstrap import Engine


@click.group(cls=clickx.ExtraGroup)
def dos() -> None:
    """Packed DOS date/time stamps."""


@dos.command()
@click.argument("millis", type=int)
@click.pass_obj
def encode(engine: Engine, millis: int) -> None:
    """Pack MILLIS (milliseconds since the epoch) into a DOS stamp."""
    try:
        packed = engine.to_dos(Instant(millis))
    except CalendarError as e:
        abort(e)
    click.echo(f"0x{packed:08X}")


@dos.command()
@click.argument("packed", type=PACKED_INT)
@click.option(
    "--output",
    "-o",
    "output_template",
    default=ISO_TEMPLATE,
    show_default=True,
    help="Template used to print the result.",
)
@click.pass_obj
def decode(engine: Engine, packed: int, output_template: str) -> None:
    """Unpack the DOS stamp PACKED."""
    try:
        instant = engine.from_dos(packed)
    except CalendarError as e:
        abort(e)
    click.echo(engine.formatter.format(instant, output_template))
