"""Civil-time strategies for ALMANAC.

Two strategies are provided: the operating system's broken-down time
routines, which know the local DST history but only for a limited range, and
pure Julian Day Number arithmetic, which covers every date since Nov 24,
4714 BC but applies a fixed offset.
"""

import calendar
import time

from almanac.domain import gregorian
from almanac.domain.value_objects import CalendarFields, Instant, Month, TimeZoneSpec
from almanac.interfaces.civil_time import CivilTimeStrategy

#: last second representable by a signed 32-bit ``time_t``, plus one.
TIME_T_LIMIT = 2**31


class NativeCivilTime(CivilTimeStrategy):
    """Strategy delegating to the ``time`` and ``calendar`` modules.

    Local time goes through ``time.localtime``/``time.mktime``: the C runtime
    decides whether DST is in effect, unless the fields carry the DST flag
    they were read with. Fixed offsets go through
    ``time.gmtime``/``calendar.timegm``.

    Args:
        years: Inclusive range of years the strategy accepts when converting
            fields to instants.
    """

    name = "native"

    def __init__(self, years: tuple[int, int] = (1970, 2037)) -> None:
        self._first_year, self._last_year = years

    def supports_year(self, year: int) -> bool:
        return self._first_year <= year <= self._last_year

    def supports_instant(self, instant: Instant, offset: int) -> bool:
        return 0 <= instant.seconds + offset < TIME_T_LIMIT

    def to_fields(self, instant: Instant, tz: TimeZoneSpec, offset: int) -> CalendarFields:
        dst = None
        if tz.is_local:
            tm = time.localtime(instant.seconds)
            dst = tm.tm_isdst > 0
        else:
            tm = time.gmtime(instant.seconds + offset)
        return CalendarFields(
            year=tm.tm_year,
            month=Month(tm.tm_mon - 1),
            day=tm.tm_mday,
            hour=tm.tm_hour,
            minute=tm.tm_min,
            second=tm.tm_sec,
            millisecond=instant.millisecond,
            tz=tz,
            dst=dst,
        )

    def from_fields(self, fields: CalendarFields, offset: int) -> Instant:
        parts = (
            fields.year,
            fields.month + 1,
            fields.day,
            fields.hour,
            fields.minute,
            fields.second,
        )
        if fields.tz.is_local:
            seconds = self._local_seconds(parts, fields.dst)
        else:
            seconds = calendar.timegm(parts) - offset
        return Instant(seconds * 1000 + fields.millisecond)

    @staticmethod
    def _local_seconds(parts: tuple[int, ...], dst: bool | None) -> int:
        # -1: let the C runtime decide whether DST is in effect
        seconds = int(time.mktime((*parts, 0, 0, -1)))
        if dst is None:
            return seconds

        hinted = int(time.mktime((*parts, 0, 0, int(dst))))
        tm = time.localtime(hinted)
        # the hint only picks between two genuine readings of the same wall clock
        if tuple(tm)[:6] == parts and (tm.tm_isdst > 0) == dst:
            return hinted
        return seconds

    def is_dst(self, instant: Instant) -> bool | None:
        if not 0 <= instant.seconds < TIME_T_LIMIT:
            return None
        return time.localtime(instant.seconds).tm_isdst > 0


class JdnCivilTime(CivilTimeStrategy):
    """Strategy using Julian Day Number arithmetic for every representable date.

    The offset is applied as given: no DST correction is made.
    """

    name = "jdn"

    def supports_year(self, year: int) -> bool:
        return year >= gregorian.JDN_0_YEAR

    def supports_instant(self, instant: Instant, offset: int) -> bool:
        return True

    def to_fields(self, instant: Instant, tz: TimeZoneSpec, offset: int) -> CalendarFields:
        days, time_of_day = divmod(
            instant.ms + offset * 1000, gregorian.MILLISECONDS_PER_DAY
        )
        year, month, day = gregorian.date_from_jdn(days + gregorian.EPOCH_JDN)

        seconds, millisecond = divmod(time_of_day, 1000)
        minutes, second = divmod(seconds, 60)
        hour, minute = divmod(minutes, 60)

        return CalendarFields(
            year=year,
            month=Month(month),
            day=day,
            hour=hour,
            minute=minute,
            second=second,
            millisecond=millisecond,
            tz=tz,
        )

    def from_fields(self, fields: CalendarFields, offset: int) -> Instant:
        days = fields.jdn - gregorian.EPOCH_JDN
        return Instant(
            days * gregorian.MILLISECONDS_PER_DAY + fields.time_of_day_ms - offset * 1000
        )
