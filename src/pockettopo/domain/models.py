"""Survey document models.

Everything the decoder produces is a frozen pydantic model; sequences are
tuples. A :class:`Document` is built once by a single parse call and never
mutated afterwards.

Units are the logger's internal ones (see :mod:`pockettopo.domain.units`):
lengths in millimetres, angles in 1/65536 of a full circle.
"""

from __future__ import annotations

import datetime  # noqa: TC003
from collections.abc import Iterator
from typing import Literal

from pydantic import BaseModel

from pockettopo.domain.types import (
    Color,
    Int16,
    Int32,
    Int64,
    ShotFlags,
    ShotFlagsField,
    UInt8,
    UInt16,
    UInt32,
)

# --- Stations ---


class MajorMinorStation(BaseModel):
    """Station named ``major.minor`` (e.g. ``1.12``)."""

    model_config = {"frozen": True}

    kind: Literal["major_minor"] = "major_minor"
    major: UInt16
    minor: UInt16

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


class PlainStation(BaseModel):
    """Station named by a single number."""

    model_config = {"frozen": True}

    kind: Literal["plain"] = "plain"
    number: UInt32

    def __str__(self) -> str:
        return str(self.number)


StationId = MajorMinorStation | PlainStation


def station_label(station: StationId | None) -> str:
    """Display form of an optional station; ``-`` for no station."""
    return "-" if station is None else str(station)


# --- Survey records ---


class Trip(BaseModel):
    """A dated survey session."""

    model_config = {"frozen": True}

    time: datetime.datetime
    ticks: Int64
    comment: str = ""
    declination: Int16 = 0


class Shot(BaseModel):
    """One leg measurement between two stations.

    ``to_station`` is None for splay shots. ``trip_index`` is -1 when the
    shot belongs to no trip; otherwise it indexes ``Document.trips``.
    """

    model_config = {"frozen": True}

    from_station: StationId | None = None
    to_station: StationId | None = None
    distance: Int32 = 0
    azimuth: Int16 = 0
    inclination: Int16 = 0
    flags: ShotFlagsField = ShotFlags(0)
    roll: UInt8 = 0
    trip_index: Int16 = -1
    comment: str | None = None

    @property
    def flipped(self) -> bool:
        return ShotFlags.FLIPPED in self.flags

    @property
    def has_comment(self) -> bool:
        return ShotFlags.HAS_COMMENT in self.flags

    @property
    def is_splay(self) -> bool:
        return self.to_station is None


class Reference(BaseModel):
    """Fixed real-world coordinate tying the survey grid to absolute position."""

    model_config = {"frozen": True}

    station: StationId | None = None
    east: Int64 = 0
    north: Int64 = 0
    altitude: Int32 = 0
    comment: str = ""


# --- Geometry ---


class Point(BaseModel):
    """World coordinates in mm, relative to the first station in the file."""

    model_config = {"frozen": True}

    x: Int32
    y: Int32


class Mapping(BaseModel):
    """Last-used scroll position (screen centre) and scale."""

    model_config = {"frozen": True}

    origin: Point
    scale: Int32


class Polygon(BaseModel):
    """Open polyline; the last point is not joined back to the first."""

    model_config = {"frozen": True}

    kind: Literal["polygon"] = "polygon"
    points: tuple[Point, ...] = ()
    color: Color = Color.BLACK


class CrossSection(BaseModel):
    """Marker showing where a cross-section was taken.

    ``direction`` is -1 for a horizontal section, otherwise the projection
    azimuth in internal angle units.
    """

    model_config = {"frozen": True}

    kind: Literal["cross_section"] = "cross_section"
    position: Point
    station: StationId
    direction: Int32 = -1

    @property
    def is_horizontal(self) -> bool:
        return self.direction == -1


Element = Polygon | CrossSection


class Drawing(BaseModel):
    """A vector sketch: its mapping plus elements in file order."""

    model_config = {"frozen": True}

    mapping: Mapping
    elements: tuple[Element, ...] = ()

    def render_order(self) -> Iterator[Element]:
        """Elements newest-first, the order PocketTopo paints them."""
        return reversed(self.elements)

    @property
    def polygons(self) -> tuple[Polygon, ...]:
        return tuple(e for e in self.elements if isinstance(e, Polygon))

    @property
    def cross_sections(self) -> tuple[CrossSection, ...]:
        return tuple(e for e in self.elements if isinstance(e, CrossSection))


# --- Document ---


class Document(BaseModel):
    """A fully decoded ``.top`` file."""

    model_config = {"frozen": True}

    trips: tuple[Trip, ...] = ()
    shots: tuple[Shot, ...] = ()
    references: tuple[Reference, ...] = ()
    mapping: Mapping
    outline: Drawing
    sideview: Drawing

    def stations(self) -> list[StationId]:
        """Distinct stations named by shots, in first-seen order."""
        seen: dict[StationId, None] = {}
        for shot in self.shots:
            for station in (shot.from_station, shot.to_station):
                if station is not None:
                    seen.setdefault(station, None)
        return list(seen)

    def trip_for(self, shot: Shot) -> Trip | None:
        """The trip a shot belongs to, or None if unassigned or out of range."""
        if 0 <= shot.trip_index < len(self.trips):
            return self.trips[shot.trip_index]
        return None

    @property
    def total_length(self) -> int:
        """Summed distance of all non-splay shots, in mm."""
        return sum(shot.distance for shot in self.shots if not shot.is_splay)

    @property
    def is_empty(self) -> bool:
        return not (self.trips or self.shots or self.references)


__all__ = [
    "Color",
    "CrossSection",
    "Document",
    "Drawing",
    "Element",
    "MajorMinorStation",
    "Mapping",
    "PlainStation",
    "Point",
    "Polygon",
    "Reference",
    "Shot",
    "StationId",
    "Trip",
    "station_label",
]

