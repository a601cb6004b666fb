"""Command-line interface of ALMANAC."""
