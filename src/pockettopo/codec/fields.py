"""Decoders for the two non-obvious scalar encodings: station ids and tick datetimes.

Station id (one u32)::

    0x80000000        undefined ("no station")
    top bit set       plain number, stored as (n + 1) | 0x80000000
    top bit clear     major << 16 | minor

Datetime (one i64): 100 ns ticks since 0001-01-01T00:00:00, proleptic
Gregorian, the .NET ``DateTime.Ticks`` epoch.
"""

from __future__ import annotations

import datetime

from pockettopo.codec.errors import InvalidTimestamp
from pockettopo.codec.reader import ByteReader
from pockettopo.domain.models import MajorMinorStation, PlainStation, StationId

UNDEFINED_STATION = 0x8000_0000

TICKS_PER_SECOND = 10_000_000
NANOSECONDS_PER_TICK = 100
SECONDS_FROM_DOTNET_EPOCH_TO_UNIX_EPOCH = 62_135_596_800
UNIX_EPOCH = datetime.datetime(1970, 1, 1)


def decode_station_id(value: int) -> StationId | None:
    """Decode a raw u32 station id; None for the undefined sentinel."""
    if value == UNDEFINED_STATION:
        return None
    if value & UNDEFINED_STATION:
        return PlainStation(number=(value ^ UNDEFINED_STATION) - 1)
    return MajorMinorStation(major=value >> 16, minor=value & 0xFFFF)


def read_station_id(reader: ByteReader) -> StationId | None:
    return decode_station_id(reader.u32())


def ticks_to_datetime(ticks: int, *, offset: int | None = None) -> datetime.datetime:
    """Convert .NET ticks to a naive datetime.

    Floor division keeps negative remainders on the right side of the
    second. The datetime holds microseconds; callers needing the last
    100 ns digit keep the raw tick count.

    Raises:
        InvalidTimestamp: the instant lies outside years 1..9999.
    """
    seconds, remainder = divmod(ticks, TICKS_PER_SECOND)
    unix_seconds = seconds - SECONDS_FROM_DOTNET_EPOCH_TO_UNIX_EPOCH
    nanoseconds = remainder * NANOSECONDS_PER_TICK
    try:
        return UNIX_EPOCH + datetime.timedelta(
            seconds=unix_seconds, microseconds=nanoseconds // 1000
        )
    except OverflowError as exc:
        raise InvalidTimestamp(ticks, offset=offset) from exc


def read_datetime(reader: ByteReader) -> tuple[datetime.datetime, int]:
    """Read an i64 tick count; returns ``(datetime, ticks)``."""
    start = reader.offset
    ticks = reader.i64()
    return ticks_to_datetime(ticks, offset=start), ticks
