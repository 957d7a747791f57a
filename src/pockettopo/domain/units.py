"""Conversions from the logger's internal units.

Angles: a full circle is 2**16 units (north = 0, east = 0x4000; for
inclination up = 0x4000, down = -0x4000). Roll: a full circle is 256 units
(display up = 0, left = 64, down = 128). Lengths are millimetres.
"""

from __future__ import annotations

ANGLE_UNITS_PER_CIRCLE = 1 << 16
ROLL_UNITS_PER_CIRCLE = 1 << 8
HORIZONTAL_DIRECTION = -1


def angle_to_degrees(units: int) -> float:
    """Convert a 16-bit angle to degrees, preserving sign."""
    return units * 360.0 / ANGLE_UNITS_PER_CIRCLE


def azimuth_to_degrees(units: int) -> float:
    """Convert an azimuth to a bearing in ``[0, 360)``."""
    return (units % ANGLE_UNITS_PER_CIRCLE) * 360.0 / ANGLE_UNITS_PER_CIRCLE


def roll_to_degrees(units: int) -> float:
    return (units % ROLL_UNITS_PER_CIRCLE) * 360.0 / ROLL_UNITS_PER_CIRCLE


def direction_to_degrees(units: int) -> float | None:
    """Cross-section direction in degrees; None for a horizontal section."""
    if units == HORIZONTAL_DIRECTION:
        return None
    return azimuth_to_degrees(units)


def mm_to_m(millimetres: int) -> float:
    return millimetres / 1000.0
