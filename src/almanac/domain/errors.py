"""Domain-layer error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from almanac.domain.value_objects import CalendarFields

# ============================================================================
#                           General calendar errors
# ============================================================================


class CalendarError(Exception):
    """Base class for all calendar engine errors."""


class InvalidFieldsError(CalendarError, ValueError):
    """Raised when broken-down calendar fields do not describe a real moment."""

    def __init__(self, fields: CalendarFields, reason: str) -> None:
        super().__init__(f"Invalid calendar fields {fields}: {reason}.")
        self.fields = fields
        self.reason = reason


class InvalidInstantError(CalendarError, ValueError):
    """Raised when an operation is given the invalid (unset) instant."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation} an invalid instant.")
        self.operation = operation


class OutOfRangeError(CalendarError, ValueError):
    """Raised when a value falls outside the range an operation can handle."""

    def __init__(self, what: str, value: object) -> None:
        super().__init__(f"{what} out of supported range: {value!r}.")
        self.what = what
        self.value = value


# ============================================================================
#                           Text conversion errors
# ============================================================================


class ParseNoMatchError(CalendarError, ValueError):
    """Raised when a parser fails to match its grammar against the input."""

    def __init__(self, text: str, position: int, reason: str) -> None:
        super().__init__(f"No match for {text!r} at position {position}: {reason}.")
        self.text = text
        self.position = position
        self.reason = reason


class UnsupportedFormatSpecifierError(CalendarError, ValueError):
    """Raised when a format template contains an unknown ``%`` specifier."""

    def __init__(self, specifier: str, template: str) -> None:
        super().__init__(
            f"Unsupported format specifier '%{specifier}' in template {template!r}."
        )
        self.specifier = specifier
        self.template = template
