"""ALMANAC calendar commands.

Results go to **stdout**, one per line; notices and errors go to **stderr**
through the message helpers. Engine errors (unparsable text, invalid dates,
out-of-range values) end the command with exit code 1.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

from almanac.domain.errors import CalendarError
from almanac.domain.value_objects import Instant
from almanac.service_layer.formatting import format_timespan

from .helpers import error, warn
from .helpers.params import COUNTRY, TIME_ZONE

if TYPE_CHECKING:
    from almanac.bootstrap import Engine
    from almanac.domain.value_objects import Country, TimeZoneSpec
    from almanac.service_layer.parsing import ParseResult

ISO_TEMPLATE = "%Y-%m-%d %H:%M:%S"

template_option = click.option(
    "--template",
    "-t",
    default="%c",
    show_default=True,
    help="strftime-like template (%l adds milliseconds).",
)
tz_option = click.option(
    "--tz",
    type=TIME_ZONE,
    default="local",
    show_default=True,
    help="Wall clock to use: local, a zone abbreviation or +hh:mm.",
)


def abort(exc: Exception) -> NoReturn:
    """Report ``exc`` as an error line and exit with status 1."""
    error(str(exc))
    raise click.exceptions.Exit(1)


@click.command()
@template_option
@tz_option
@click.pass_obj
def now(engine: Engine, template: str, tz: TimeZoneSpec) -> None:
    """Show the current time."""
    click.echo(engine.formatter.format(engine.converter.now(), template, tz))


@click.command("format")
@click.argument("millis", type=int)
@template_option
@tz_option
@click.option(
    "--strict/--no-strict",
    default=False,
    help="Fail on unknown specifiers instead of copying them through.",
)
@click.pass_obj
def format_instant(
    engine: Engine, millis: int, template: str, tz: TimeZoneSpec, strict: bool
) -> None:
    """Format MILLIS, milliseconds since 1970-01-01 00:00:00 UTC."""
    try:
        click.echo(engine.formatter.format(Instant(millis), template, tz, strict))
    except CalendarError as e:
        abort(e)


@click.command()
@click.argument("text")
@click.option(
    "--mode",
    type=click.Choice(["rfc822", "format", "free", "time"], case_sensitive=False),
    default="free",
    show_default=True,
    help="Parser to use: RFC 822, template-driven, free-text date or time of day.",
)
@click.option(
    "--template",
    "-t",
    default="%c",
    show_default=True,
    help="Template for --mode format.",
)
@click.option(
    "--output",
    "-o",
    "output_template",
    default=ISO_TEMPLATE,
    show_default=True,
    help="Template used to print the result.",
)
@click.option("--millis", is_flag=True, help="Print milliseconds since the epoch.")
@click.pass_obj
def parse(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    engine: Engine,
    text: str,
    mode: str,
    template: str,
    output_template: str,
    millis: bool,
) -> None:
    """Parse TEXT and print the instant it denotes.

    RFC 822 results are printed on the wall clock of the parsed offset, the
    others on the local one.
    """
    try:
        result: ParseResult
        match mode.lower():
            case "rfc822":
                result = engine.parse_rfc822(text)
            case "format":
                result = engine.format_parser.parse(text, template)
            case "time":
                result = engine.free_text_parser.parse_time(text)
            case _:
                result = engine.free_text_parser.parse_date(text)
    except CalendarError as e:
        abort(e)

    if result.end < len(text):
        warn(f"Ignored trailing text: {text[result.end:]!r}")

    if millis:
        click.echo(result.instant.ms)
    else:
        click.echo(
            engine.formatter.format(result.instant, output_template, result.fields.tz)
        )


@click.command()
@click.argument("year", type=int)
@click.option(
    "--country",
    type=COUNTRY,
    default="default",
    show_default=True,
    help="Country whose rules apply.",
)
@tz_option
@click.pass_obj
def dst(engine: Engine, year: int, country: Country, tz: TimeZoneSpec) -> None:
    """Show when daylight-saving time begins and ends in YEAR."""
    resolved = engine.dst.country(country)
    try:
        begin = engine.dst.begin_dst(year, country)
        end = engine.dst.end_dst(year, country)
    except CalendarError as e:
        abort(e)

    if begin is None or end is None:
        warn(f"DST is not observed in {year} in {resolved.name}.")
        return

    fmt = engine.formatter.format
    click.echo(f"country : {resolved.name}")
    click.echo(f"begin   : {fmt(begin, ISO_TEMPLATE, tz)}")
    click.echo(f"end     : {fmt(end, ISO_TEMPLATE, tz)}")
    click.echo(f"length  : {format_timespan(end - begin, '%D days %H:%M')}")


__all__ = ["dst", "format_instant", "now", "parse"]
