"""Logging helpers used by the ALMANAC CLI.

Console output goes through Rich; an optional in-memory "flight recorder"
keeps the most recent records (DEBUG included) and writes them to a file when
something goes wrong. Records of other libraries are tagged with a short
prefix so they stand out from the engine's own messages.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from importlib import metadata
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "almanac"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

CONSOLE_FORMAT = "%(prefix)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(asctime)s %(name)s: %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records of foreign loggers with their top-level package.

    ``click_extra.commands`` becomes ``[click_extra]``; records of the
    engine's own loggers get an empty prefix. Nothing is filtered out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown (DEBUG in debug mode).
        debug_mode: Show timestamps, logger names and source locations.
        color: Use colors; mirrors click-extra's ``--color/--no-color``.

    Returns:
        RichHandler: Handler to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    handler.setFormatter(
        logging.Formatter(DEBUG_CONSOLE_FORMAT if debug_mode else CONSOLE_FORMAT)
    )
    if not debug_mode:
        handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the in-memory flight recorder.

    Up to ``capacity`` records are buffered and written to ``path`` once a
    record at ``flush_level`` or above arrives (or on close when
    ``flush_on_close`` is set).
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(RECORDER_FORMAT))

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def _distribution_version(name: str) -> str:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return "<not installed>"


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    flight_capacity: int | None,
    force_flush_fr: bool,
    logger_levels: dict[str, int],
    zone: str,
    local_offset: int,
    country: str,
) -> None:
    """Log a one-line summary and, at DEBUG, the environment of the run.

    Besides interpreter, platform and handler details, the diagnostics record
    what the engine's results depend on: the local zone name and standard
    offset as reported by the operating system and the default country.

    Args:
        logger: Logger used to emit the messages.
        app_version: Version of almanac.
        level: Effective console level.
        handlers: Handlers attached to the root logger.
        log_path: Flight recorder file, or None.
        flight_recorder: Whether the flight recorder is on.
        flight_capacity: Flight recorder capacity, or None.
        force_flush_fr: Whether the flight recorder flushes on close.
        logger_levels: Per-logger level overrides.
        zone: Local time zone name.
        local_offset: Local standard offset in seconds east of UTC.
        country: Default country used for DST rules.
    """
    logger.info(
        "ALMANAC %s, console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("click-extra: %s", _distribution_version("click-extra"))
    logger.debug("Rich: %s", _distribution_version("rich"))
    logger.debug("Local zone: %s (UTC%+.2f h)", zone, local_offset / 3600)
    logger.debug("Default country: %s", country)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            str(log_path) if log_path else "<none>",
            flight_capacity,
            force_flush_fr,
        )
    if logger_levels:
        logger.debug(
            "Per-logger overrides: %s",
            {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()},
        )
    else:
        logger.debug("Per-logger overrides: <none>")  # pragma: no cover
