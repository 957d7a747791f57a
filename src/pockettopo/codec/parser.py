"""Document assembler — the public entry point of the decoder.

File layout (all integers little-endian)::

    Byte[3]       'T' 'o' 'p'
    Byte          version (3)
    u32 + Trip[]      trips
    u32 + Shot[]      shots
    u32 + Reference[] references
    Mapping       overview
    Drawing       outline
    Drawing       sideview

The format carries no offsets or lengths beyond the per-sequence counts,
so the sections must be read in exactly this order.
"""

from __future__ import annotations

import logging

from pockettopo.codec.drawing import read_drawing, read_mapping
from pockettopo.codec.errors import InvalidHeader, UnsupportedVersion
from pockettopo.codec.reader import ByteReader
from pockettopo.codec.records import read_references, read_shots, read_trips
from pockettopo.domain.models import Document

logger = logging.getLogger(__name__)

HEADER = b"Top"
VERSION = 3


def read_header(reader: ByteReader) -> bytes:
    found = reader.peek(len(HEADER))
    if found != HEADER:
        raise InvalidHeader(found, offset=reader.offset)
    return reader.take(len(HEADER))


def read_version(reader: ByteReader) -> int:
    start = reader.offset
    version = reader.u8()
    if version != VERSION:
        raise UnsupportedVersion(version, offset=start)
    return version


def read_document(reader: ByteReader) -> Document:
    read_header(reader)
    read_version(reader)
    trips = read_trips(reader)
    shots = read_shots(reader)
    references = read_references(reader)
    mapping = read_mapping(reader)
    outline = read_drawing(reader)
    sideview = read_drawing(reader)

    return Document(
        trips=trips,
        shots=shots,
        references=references,
        mapping=mapping,
        outline=outline,
        sideview=sideview,
    )


def parse(data: bytes | bytearray | memoryview) -> Document:
    """Decode a complete ``.top`` file held in memory.

    Raises:
        ParseError: on the first structural error; no partial document
            is returned.
    """
    reader = ByteReader(data)
    document = read_document(reader)
    logger.debug(
        "Decoded %d trips, %d shots, %d references, %d outline / %d sideview elements",
        len(document.trips),
        len(document.shots),
        len(document.references),
        len(document.outline.elements),
        len(document.sideview.elements),
    )
    if not reader.at_end():
        logger.debug("Ignoring %d trailing bytes", reader.remaining)
    return document
