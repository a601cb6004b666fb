"""Scanning helpers shared by the parsers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from almanac.domain.errors import ParseNoMatchError
from almanac.domain.value_objects import CalendarFields, Instant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a successful parse.

    Attributes:
        instant: The instant denoted by the text.
        fields: The calendar fields the instant was built from.
        end: Index of the first character of the text that was not consumed.
    """

    instant: Instant
    fields: CalendarFields
    end: int


def no_match(text: str, position: int, reason: str) -> ParseNoMatchError:
    """Log a parse failure at DEBUG and build the matching error."""
    logger.debug("No match for %r at %d: %s", text, position, reason)
    return ParseNoMatchError(text, position, reason)


def read_number(text: str, pos: int, width: int) -> tuple[int, int] | None:
    """Read at most ``width`` ASCII digits starting at ``pos``.

    Returns:
        tuple[int, int] | None: The value and the position after it, or None
        if no digit is found at ``pos``.
    """
    end = pos
    while end < len(text) and end - pos < width and text[end] in "0123456789":
        end += 1
    if end == pos:
        return None
    return int(text[pos:end]), end


def read_alpha(text: str, pos: int) -> tuple[str, int]:
    """Read the run of letters starting at ``pos`` (possibly empty)."""
    end = pos
    while end < len(text) and text[end].isalpha():
        end += 1
    return text[pos:end], end


def skip_spaces(text: str, pos: int) -> int:
    """Return the position of the first non-whitespace character at or after ``pos``."""
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos
