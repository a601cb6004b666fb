"""ALMANAC

A calendar and time engine: absolute instants, broken-down Gregorian fields,
calendar arithmetic, daylight-saving rules, and strftime-style formatting and
parsing.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
