"""Fixtures and test helpers for end-to-end CLI tests.

Provides a test-only `log-demo` Click command that emits structured log
messages, fixtures to register that command, obtain a CliRunner and run tests
within an isolated filesystem, and a fixture freezing the engine the CLI
bootstraps so that command output is reproducible.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from almanac.adapters.clocks import FixedClock
from almanac.adapters.locale import EnglishLocale
from almanac.bootstrap import bootstrap
from almanac.entrypoints.cli import main
from almanac.entrypoints.cli.main import almanac

from tests.helpers.time_asserts import FROZEN_NOW

# pylint: disable=redefined-outer-name


@click.command()
def log_demo():
    """Emit representative log messages for CLI/flight-recorder tests.

    Emits DEBUG/INFO/WARNING/ERROR/CRITICAL messages on the 'almanac.demo'
    logger and additional messages on a 'some.thirdparty' logger to exercise
    logger-level filtering and flight-recorder behavior.
    """
    logger = logging.getLogger("almanac.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and its internal sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register the 'log-demo' command on `almanac` for the duration of a test."""
    almanac.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(almanac, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Provide an isolated filesystem context for tests using CliRunner."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture
def frozen_engine(monkeypatch):
    """Make the CLI bootstrap engines on a clock frozen at `FROZEN_NOW`.

    The settings the CLI computes (environment, ``--country``) are honored;
    only the clock and the locale are replaced, the latter by English names so
    that ``%c`` and month names do not depend on the machine's C library.
    """

    def frozen_bootstrap(settings=None):
        return bootstrap(settings, clock=FixedClock(FROZEN_NOW), locale=EnglishLocale())

    monkeypatch.setattr(main, "bootstrap", frozen_bootstrap)


@pytest.fixture
def invoke(runner, fs, frozen_engine):  # pylint: disable=unused-argument
    """Invoke `almanac` with the flight recorder off and a frozen engine.

    Returns:
        Callable taking the command-line arguments (and optional ``env``) and
        returning the `click.testing.Result`.
    """

    def _invoke(args, env=None):
        return runner.invoke(almanac, ["--no-flight-recorder", *args], env=env)

    return _invoke
