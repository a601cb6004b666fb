"""Packed 32-bit MS-DOS date and time stamps.

Layout, from the most significant bit::

    YYYYYYY MMMM DDDDD hhhhh mmmmmm sssss
    7 bits  4    5     5     6      5

The year counts from 1980 and seconds are stored halved, so odd seconds are
rounded down. Stamps are read and written on the local wall clock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from almanac.domain.errors import InvalidFieldsError, OutOfRangeError
from almanac.domain.value_objects import CalendarFields, Instant, Month

if TYPE_CHECKING:
    from almanac.service_layer.converter import CalendarConverter

DOS_EPOCH_YEAR = 1980
DOS_LAST_YEAR = DOS_EPOCH_YEAR + 0x7F


def to_dos(converter: CalendarConverter, instant: Instant) -> int:
    """Pack ``instant`` into a DOS date/time stamp.

    Raises:
        InvalidInstantError: If ``instant`` is the invalid sentinel.
        OutOfRangeError: If the local year is outside 1980..2107.
    """
    fields = converter.to_fields(instant)
    if not DOS_EPOCH_YEAR <= fields.year <= DOS_LAST_YEAR:
        raise OutOfRangeError("year of a DOS date", fields.year)

    date = (
        (fields.year - DOS_EPOCH_YEAR) << 9 | fields.month.number << 5 | fields.day
    )
    time = fields.hour << 11 | fields.minute << 5 | fields.second // 2
    return date << 16 | time


def from_dos(converter: CalendarConverter, packed: int) -> Instant:
    """Unpack a DOS date/time stamp.

    Raises:
        OutOfRangeError: If ``packed`` does not fit in 32 bits.
        InvalidFieldsError: If the packed fields do not form a valid date and time.
    """
    if not 0 <= packed <= 0xFFFFFFFF:
        raise OutOfRangeError("DOS date/time stamp", packed)

    date, time = packed >> 16, packed & 0xFFFF
    month_number = date >> 5 & 0x0F
    if not 1 <= month_number <= 12:
        raise InvalidFieldsError(
            CalendarFields(DOS_EPOCH_YEAR + (date >> 9), Month.INVALID, date & 0x1F),
            f"month {month_number} in a DOS date",
        )

    fields = CalendarFields(
        DOS_EPOCH_YEAR + (date >> 9),
        Month.from_number(month_number),
        date & 0x1F,
        time >> 11,
        time >> 5 & 0x3F,
        (time & 0x1F) * 2,
    )
    return converter.from_fields(fields)
