"""Service layer for ALMANAC.

Implements the engine's use-cases: conversion between instants and calendar
fields, calendar arithmetic, DST resolution, formatting, parsing, packed DOS
timestamps, and the holiday registry. Collaborators are injected as port
instances.

Dependency rule: may import `almanac.domain` and `almanac.interfaces`, but not
`almanac.adapters` or `almanac.entrypoints`.
"""
