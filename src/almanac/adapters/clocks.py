"""Clocks for ALMANAC."""

import logging
import threading
import time

from almanac.domain.value_objects import Instant
from almanac.interfaces.clock import Clock

logger = logging.getLogger(__name__)


class SystemClock(Clock):
    """Clock backed by the operating system.

    The standard local offset is read from the C runtime the first time it is
    needed and cached for the lifetime of the clock (serialized across
    threads). Create a new clock after changing the process time zone.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._offset: int | None = None

    def now(self) -> Instant:
        """Return the current instant, truncated to milliseconds."""
        return Instant(time.time_ns() // 1_000_000)

    def local_offset(self) -> int:
        """Return the standard local offset in seconds east of UTC (cached)."""
        with self._lock:
            if self._offset is None:
                self._offset = -time.timezone
                logger.debug(
                    "Resolved local offset: %+d s (zone %s)",
                    self._offset,
                    time.tzname[0],
                )
            return self._offset

    def zone_name(self, dst: bool = False) -> str:
        """Return the local zone abbreviation for standard or summer time."""
        return time.tzname[1 if dst and time.daylight else 0]


class FixedClock(SystemClock):
    """A clock frozen at one instant.

    Only ``now`` is frozen: the local zone is still the process's.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, instant: Instant) -> None:
        super().__init__()
        self._instant = instant

    def now(self) -> Instant:
        """Return the frozen instant."""
        return self._instant

    def set(self, instant: Instant) -> None:
        """Move the clock to another instant."""
        self._instant = instant
