"""Interfaces (application boundary) for ALMANAC.

Defines framework-free contracts as ABCs: civil-time strategies, clocks,
locale providers, DST rules, and holiday authorities. Calendar rules stay out
of this package.

Dependency rule: this package may only import `almanac.domain`. It may be
imported by `almanac.service_layer`, `almanac.adapters`, and `almanac.bootstrap`.
"""
