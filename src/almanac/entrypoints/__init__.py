"""Entrypoints (inbound adapters) for ALMANAC.

Expose the engine to the outside world through the ``almanac`` command-line
interface. Parse and validate inputs, call the bootstrapped engine, and
present results.

Dependency rule: may import `almanac.bootstrap` and `almanac.service_layer`;
avoid importing `almanac.adapters` directly.
"""
