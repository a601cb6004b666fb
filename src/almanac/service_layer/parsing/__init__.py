"""Parsers turning text into instants.

Three independent entry points share one result type:

- `parse_rfc822`: the strict wire format of RFC 822 dates.
- `FormatParser`: strptime-like parsing driven by a template.
- `FreeTextParser`: heuristic parsing of dates and times written by people.

Every parser either returns a `ParseResult` or raises `ParseNoMatchError`;
nothing is ever partially updated.
"""

from .common import ParseResult
from .format_parser import FormatParser
from .free_text import FreeTextParser
from .rfc822 import parse_rfc822

__all__ = ["FormatParser", "FreeTextParser", "ParseResult", "parse_rfc822"]
