"""Adapters (infrastructure) for ALMANAC.

Provide concrete implementations of the ports in `almanac.interfaces`: the
operating-system and pure-arithmetic civil-time strategies, system and fixed
clocks, English and strftime-backed locales, DST rule tables, and the
work-days holiday authority.

Dependency rule: may import `almanac.domain` and `almanac.interfaces`; the
domain must not import this package.
"""
