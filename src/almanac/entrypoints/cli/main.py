"""ALMANAC CLI entry point.

Defines the top-level ``almanac`` command (via Click-Extra), which configures
logging and bootstraps a calendar engine, and registers its subcommands.

Currently available commands
- ``almanac now``: format the current time.
- ``almanac format``: format an instant given in milliseconds since the epoch.
- ``almanac parse``: parse text with the RFC 822, template or free-text parser.
- ``almanac dst``: show the DST window of a year.
- ``almanac dos``: convert to and from packed DOS date/time stamps.

Examples
    $ almanac --version
    $ almanac --country usa dst 2024
    $ almanac parse --mode rfc822 "Sat, 18 Dec 1999 00:48:30 +0100"
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from almanac import __version__, config
from almanac.bootstrap import bootstrap
from almanac.logging import config_console_handler, config_flight_recorder, log_startup

from .commands import dst, format_instant, now, parse
from .dos import dos as dos_group
from .helpers import parse_log_level
from .helpers.params import COUNTRY

if TYPE_CHECKING:
    from logging import Handler

    from almanac.domain.value_objects import Country

logger = logging.getLogger(__name__)


HELP = """ALMANAC command-line interface.

    ALMANAC is a calendar and time engine: it converts instants to and from
    calendar fields over the whole Gregorian range, knows the historical
    daylight-saving rules of several countries, and formats and parses dates
    in strftime-like, RFC 822 and free-text forms.
    """

EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('Environment:', fg='blue', bold=True, underline=True)}",
        f"  {config.COUNTRY_ENV}     default country (e.g. usa, france)",
        f"  {config.WEEK_START_ENV}  sunday, monday or default",
        f"  {config.YEAR_PIVOT_ENV}  two-digit year pivot (default 30)",
    ]
)


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (timestamps, logger names and source locations).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=Path(user_log_dir("almanac", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="ALMANAC_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="ALMANAC_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records "
        "at DEBUG granularity (unaffected by -v/-q) and writes them to "
        "--log-path when a WARNING/ERROR occurs, or on clean exit if "
        "--force-flush is set. Console verbosity is unchanged."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help=(
        "Force-flush the flight recorder buffer to --log-path on program exit. "
        "Normally the buffer only dumps on WARNING/ERROR."
    ),
    default=False,
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to BOTH "
        "console and flight-recorder. Repeatable (e.g. -L almanac.service_layer=DEBUG) "
        "or via ALMANAC_LOGGER_LEVEL (comma/space list)."
    ),
    default=("markdown_it=WARNING", "cloup=WARNING"),
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--country",
    type=COUNTRY,
    default=None,
    help=(
        "Country whose DST rules, week start and date order are used. "
        f"Overrides {config.COUNTRY_ENV}."
    ),
)
@clickx.pass_context
def almanac(  # pylint: disable=too-many-arguments, too-many-locals, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
    country: "Country | None",
) -> None:
    """ALMANAC command-line interface."""

    # 0) compute effective verbosity
    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    # 1) console handler, then the flight recorder
    handlers: list[Handler] = [
        config_console_handler(
            level=level, debug_mode=debug, color=ctx.color is not False
        )
    ]
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    # 2) root logger captures everything; handlers filter
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    # 3) the engine
    try:
        settings = config.load_settings()
    except config.InvalidSettingError as e:
        raise click.ClickException(str(e)) from e
    if country is not None:
        settings = settings.with_country(country)
    engine = bootstrap(settings)
    ctx.obj = engine

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
        zone=engine.clock.zone_name(),
        local_offset=engine.clock.local_offset(),
        country=engine.dst.country().name,
    )

    ctx.call_on_close(logging.shutdown)


almanac.add_command(now)
almanac.add_command(format_instant)
almanac.add_command(parse)
almanac.add_command(dst)
almanac.add_command(dos_group)
