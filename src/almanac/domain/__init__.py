"""Domain layer for ALMANAC.

Contains the calendar rules: value objects (instants, broken-down fields,
spans, time zones), pure Gregorian/Julian Day Number math, and the error
taxonomy. This package is deliberately technology-agnostic.

Dependency rule: do not import from `almanac.adapters` or `almanac.entrypoints`.
"""
