"""Interface for clocks."""

import abc

from almanac.domain.value_objects import Instant


class Clock(abc.ABC):
    """Contract for a source of the current time and the local zone."""

    @abc.abstractmethod
    def now(self) -> Instant:
        """Return the current instant, with millisecond precision."""

    @abc.abstractmethod
    def local_offset(self) -> int:
        """Return the standard (non-DST) local offset, in seconds east of UTC."""

    @abc.abstractmethod
    def zone_name(self, dst: bool = False) -> str:
        """Return the abbreviation of the local zone (e.g. ``CET`` or ``CEST``)."""
