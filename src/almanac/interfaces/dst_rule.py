"""Interface for daylight-saving time rules."""

import abc

from almanac.domain.value_objects import CalendarFields


class DstRule(abc.ABC):
    """Contract for the DST calendar of one country.

    Transition moments are returned as calendar fields carrying the wall clock
    they are defined in (UTC or local time), so that computing them never
    depends on whether DST is in effect.
    """

    @abc.abstractmethod
    def is_applicable(self, year: int) -> bool:
        """Return True if DST was (or is assumed to be) observed in ``year``."""

    @abc.abstractmethod
    def begin(self, year: int) -> CalendarFields | None:
        """Return the moment DST starts in ``year``, or None if not applicable."""

    @abc.abstractmethod
    def end(self, year: int) -> CalendarFields | None:
        """Return the moment DST ends in ``year``, or None if not applicable."""
