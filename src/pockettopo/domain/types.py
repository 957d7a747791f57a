"""Fixed-width integer aliases, enums and flag sets used by the survey model.

Integer widths mirror the on-disk field sizes of the ``.top`` format, so a
model built by hand is held to the same ranges the decoder can produce.
"""

from __future__ import annotations

from enum import IntEnum, IntFlag
from typing import Annotated

from pydantic import Field, PlainSerializer, PlainValidator

UInt8 = Annotated[int, Field(ge=0, le=0xFF)]
UInt16 = Annotated[int, Field(ge=0, le=0xFFFF)]
UInt32 = Annotated[int, Field(ge=0, le=0xFFFF_FFFF)]
Int16 = Annotated[int, Field(ge=-(2**15), le=2**15 - 1)]
Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]


class Color(IntEnum):
    """Polygon stroke colors, keyed by their on-disk byte value."""

    BLACK = 1
    GRAY = 2
    BROWN = 3
    BLUE = 4
    RED = 5
    GREEN = 6
    ORANGE = 7


class ShotFlags(IntFlag):
    """Per-shot flag byte."""

    FLIPPED = 1 << 0
    HAS_COMMENT = 1 << 1


def _to_shot_flags(value: object) -> ShotFlags:
    if isinstance(value, ShotFlags):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 0xFF:
        return ShotFlags(value)
    msg = f"shot flags must be an 8-bit integer, got {value!r}"
    raise ValueError(msg)


# IntFlag composites bypass pydantic's member-list enum check.
ShotFlagsField = Annotated[
    ShotFlags,
    PlainValidator(_to_shot_flags),
    PlainSerializer(int, return_type=int),
]
