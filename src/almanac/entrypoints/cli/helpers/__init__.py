"""CLI helpers for ALMANAC.

Message emitters writing to stderr with emoji to ASCII fallbacks, and the
parser of the per-logger level option.
"""

from .log_level_parser import parse_log_level
from .messages import error, warn

__all__ = ["error", "parse_log_level", "warn"]
