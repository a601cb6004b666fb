"""Terminal message helpers for the ALMANAC CLI.

Status lines go to stderr, with emoji markers that fall back to ASCII on
terminals that cannot encode them, so that stdout only carries results.
"""

import click


def _supports_character(character: str) -> bool:
    """Return True if ``character`` can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(emoji: str, fallback: str) -> str:
    return emoji if _supports_character(emoji) else fallback


def caution_glyph() -> str:
    """``⚠️`` or ``[!]``."""
    return _glyph("⚠️", "[!]")  # pragma: no mutate


def error_glyph() -> str:
    """``❌`` or ``[X]``."""
    return _glyph("❌", "[X]")  # pragma: no mutate


def warn(msg: str) -> None:
    """Print a yellow warning line to stderr.

    Example:
        ``⚠️  DST is not observed in 1950 in USA.``
    """
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def error(msg: str) -> None:
    """Print a red error line to stderr.

    Example:
        ``❌  No match for 'Sat, 31 Feb 1999' at 0: bad day of the month.``
    """
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)
