"""Trip, shot and reference record decoders.

Each top-level sequence is a u32 count followed by fixed-layout records::

    Trip      = i64 ticks, String comment, i16 declination
    Shot      = Id from, Id to, i32 distance, i16 azimuth, i16 inclination,
                u8 flags, u8 roll, i16 tripIndex, [String comment if flags & 2]
    Reference = Id station, i64 east, i64 north, i32 altitude, String comment
"""

from __future__ import annotations

from pockettopo.codec.fields import read_datetime, read_station_id
from pockettopo.codec.reader import ByteReader
from pockettopo.domain.models import Reference, Shot, Trip
from pockettopo.domain.types import ShotFlags


def read_trip(reader: ByteReader) -> Trip:
    time, ticks = read_datetime(reader)
    comment = reader.string()
    declination = reader.i16()
    return Trip(time=time, ticks=ticks, comment=comment, declination=declination)


def read_shot(reader: ByteReader) -> Shot:
    from_station = read_station_id(reader)
    to_station = read_station_id(reader)
    distance = reader.i32()
    azimuth = reader.i16()
    inclination = reader.i16()
    flags = ShotFlags(reader.u8())
    roll = reader.u8()
    trip_index = reader.i16()

    # The only field whose presence depends on earlier data.
    comment = reader.string() if ShotFlags.HAS_COMMENT in flags else None

    return Shot(
        from_station=from_station,
        to_station=to_station,
        distance=distance,
        azimuth=azimuth,
        inclination=inclination,
        flags=flags,
        roll=roll,
        trip_index=trip_index,
        comment=comment,
    )


def read_reference(reader: ByteReader) -> Reference:
    station = read_station_id(reader)
    east = reader.i64()
    north = reader.i64()
    altitude = reader.i32()
    comment = reader.string()
    return Reference(station=station, east=east, north=north, altitude=altitude, comment=comment)


def read_trips(reader: ByteReader) -> tuple[Trip, ...]:
    return reader.counted(read_trip)


def read_shots(reader: ByteReader) -> tuple[Shot, ...]:
    return reader.counted(read_shot)


def read_references(reader: ByteReader) -> tuple[Reference, ...]:
    return reader.counted(read_reference)
