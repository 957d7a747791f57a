"""Geometry and drawing decoders.

::

    Point        = i32 x, i32 y                       (mm)
    Mapping      = Point origin, i32 scale            (10..50000)
    Polygon      = 0x01, u32 n, Point[n], u8 color    (open polyline)
    CrossSection = 0x03, Point pos, Id station, i32 direction
    Drawing      = Mapping, Element*, 0x00

Elements are a tagged union selected by their leading byte. Any byte that
is not a known tag ends the element list and must be the 0x00 terminator.
"""

from __future__ import annotations

from collections.abc import Callable

from pockettopo.codec.errors import InvalidColor, InvalidElement, UndefinedStation, UnknownError
from pockettopo.codec.fields import read_station_id
from pockettopo.codec.reader import ByteReader
from pockettopo.domain.models import (
    CrossSection,
    Drawing,
    Element,
    Mapping,
    Point,
    Polygon,
)
from pockettopo.domain.types import Color

POLYGON_TAG = 0x01
CROSS_SECTION_TAG = 0x03
END_OF_ELEMENTS = 0x00


def read_point(reader: ByteReader) -> Point:
    x = reader.i32()
    y = reader.i32()
    return Point(x=x, y=y)


def read_mapping(reader: ByteReader) -> Mapping:
    origin = read_point(reader)
    scale = reader.i32()
    return Mapping(origin=origin, scale=scale)


def decode_color(value: int, *, offset: int | None = None) -> Color:
    try:
        return Color(value)
    except ValueError:
        raise InvalidColor(value, offset=offset) from None


def _expect_tag(reader: ByteReader, tag: int) -> None:
    """Consume the element tag byte.

    :func:`read_element` dispatches on the peeked tag, so a mismatch only
    happens when :func:`read_polygon` or :func:`read_cross_section` are
    called directly on the wrong bytes.
    """
    start = reader.offset
    found = reader.u8()
    if found != tag:
        raise UnknownError(f"expected element tag 0x{tag:02X}, found 0x{found:02X}", offset=start)


def read_polygon(reader: ByteReader) -> Polygon:
    _expect_tag(reader, POLYGON_TAG)
    points = reader.counted(read_point)
    color_offset = reader.offset
    color = decode_color(reader.u8(), offset=color_offset)
    return Polygon(points=points, color=color)


def read_cross_section(reader: ByteReader) -> CrossSection:
    _expect_tag(reader, CROSS_SECTION_TAG)
    position = read_point(reader)
    station_offset = reader.offset
    station = read_station_id(reader)
    direction = reader.i32()
    if station is None:
        raise UndefinedStation(offset=station_offset)
    return CrossSection(position=position, station=station, direction=direction)


# Polygon is tried before CrossSection.
ELEMENT_DECODERS: dict[int, Callable[[ByteReader], Element]] = {
    POLYGON_TAG: read_polygon,
    CROSS_SECTION_TAG: read_cross_section,
}


def read_element(reader: ByteReader) -> Element | None:
    """Decode one element, or return None at the end of the element list."""
    decoder = ELEMENT_DECODERS.get(reader.peek_u8())
    if decoder is None:
        return None
    return decoder(reader)


def read_elements(reader: ByteReader) -> tuple[Element, ...]:
    """Decode elements up to and including the 0x00 terminator."""
    elements: list[Element] = []
    while (element := read_element(reader)) is not None:
        elements.append(element)

    start = reader.offset
    terminator = reader.u8()
    if terminator != END_OF_ELEMENTS:
        raise InvalidElement(terminator, offset=start)
    return tuple(elements)


def read_drawing(reader: ByteReader) -> Drawing:
    mapping = read_mapping(reader)
    elements = read_elements(reader)
    return Drawing(mapping=mapping, elements=elements)
