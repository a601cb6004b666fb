"""Bootstrap (composition root) for ALMANAC.

Assembles the engine at runtime: wires the concrete adapters (clock, civil-time
strategies, locale, DST rules) into the service-layer objects and exposes them
through a single `Engine` container.

Import rules:
- Entry points import *this* package (not adapters/interfaces).
- This package may import: `almanac.adapters`, `almanac.service_layer`,
  `almanac.interfaces`, `almanac.domain`, and `almanac.config`.
- Inner layers must not import `almanac.bootstrap`.
"""

from .bootstrap import Engine, bootstrap

__all__ = ["Engine", "bootstrap"]
