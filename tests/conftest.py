"""Shared pytest fixtures and test helpers for pockettopo tests.

The ``build_*`` helpers assemble ``.top`` byte buffers field by field so
tests can state exactly which bytes the decoder sees.
"""

from __future__ import annotations

import logging
import struct
from collections.abc import Iterable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from pockettopo.config.settings import PocketTopoSettings

# Station argument: None (undefined), (major, minor), or a plain number.
StationArg = tuple[int, int] | int | None

# 2022-10-22T00:00:00 as .NET ticks.
TICKS_2022_10_22 = 638_019_936_000_000_000


def u8(value: int) -> bytes:
    return struct.pack("<B", value)


def i16(value: int) -> bytes:
    return struct.pack("<h", value)


def u32(value: int) -> bytes:
    return struct.pack("<I", value)


def i32(value: int) -> bytes:
    return struct.pack("<i", value)


def i64(value: int) -> bytes:
    return struct.pack("<q", value)


def varint(value: int) -> bytes:
    out = bytearray()
    while True:
        group = value & 0x7F
        value >>= 7
        if value:
            out.append(group | 0x80)
        else:
            out.append(group)
            return bytes(out)


def build_string(text: str) -> bytes:
    raw = text.encode("utf-8")
    return varint(len(raw)) + raw


def build_station(station: StationArg) -> bytes:
    if station is None:
        return u32(0x8000_0000)
    if isinstance(station, tuple):
        major, minor = station
        return u32(major << 16 | minor)
    return u32((station + 1) | 0x8000_0000)


def build_point(x: int, y: int) -> bytes:
    return i32(x) + i32(y)


def build_mapping(x: int = 0, y: int = 0, scale: int = 500) -> bytes:
    return build_point(x, y) + i32(scale)


def build_trip(ticks: int = TICKS_2022_10_22, comment: str = "", declination: int = 0) -> bytes:
    return i64(ticks) + build_string(comment) + i16(declination)


def build_shot(
    from_station: StationArg = (1, 0),
    to_station: StationArg = (1, 1),
    *,
    distance: int = 0,
    azimuth: int = 0,
    inclination: int = 0,
    flags: int = 0,
    roll: int = 0,
    trip_index: int = -1,
    comment: str | None = None,
) -> bytes:
    """Encode a shot; *comment* bytes are appended whenever given, whatever *flags* says."""
    data = (
        build_station(from_station)
        + build_station(to_station)
        + i32(distance)
        + i16(azimuth)
        + i16(inclination)
        + u8(flags)
        + u8(roll)
        + i16(trip_index)
    )
    if comment is not None:
        data += build_string(comment)
    return data


def build_reference(
    station: StationArg = None,
    *,
    east: int = 0,
    north: int = 0,
    altitude: int = 0,
    comment: str = "",
) -> bytes:
    return build_station(station) + i64(east) + i64(north) + i32(altitude) + build_string(comment)


def build_polygon(points: Iterable[tuple[int, int]], color: int = 1) -> bytes:
    pts = list(points)
    return u8(0x01) + u32(len(pts)) + b"".join(build_point(x, y) for x, y in pts) + u8(color)


def build_cross_section(
    x: int = 0, y: int = 0, station: StationArg = (1, 0), direction: int = -1
) -> bytes:
    return u8(0x03) + build_point(x, y) + build_station(station) + i32(direction)


def build_drawing(*elements: bytes, mapping: bytes | None = None, terminator: int = 0x00) -> bytes:
    head = mapping if mapping is not None else build_mapping()
    return head + b"".join(elements) + u8(terminator)


def build_sequence(records: Iterable[bytes]) -> bytes:
    items = list(records)
    return u32(len(items)) + b"".join(items)


def build_document(
    *,
    trips: Iterable[bytes] = (),
    shots: Iterable[bytes] = (),
    references: Iterable[bytes] = (),
    overview: bytes | None = None,
    outline: bytes | None = None,
    sideview: bytes | None = None,
    header: bytes = b"Top",
    version: int = 3,
) -> bytes:
    return (
        header
        + u8(version)
        + build_sequence(trips)
        + build_sequence(shots)
        + build_sequence(references)
        + (overview if overview is not None else build_mapping())
        + (outline if outline is not None else build_drawing())
        + (sideview if sideview is not None else build_drawing())
    )


def build_sample_document() -> bytes:
    """A small survey: two trips, three shots (one commented), references, drawings."""
    return build_document(
        trips=[
            build_trip(TICKS_2022_10_22, "test", 628),
            build_trip(TICKS_2022_10_22 - 7 * 864_000_000_000, "2022-10-15 2.34", 426),
        ],
        shots=[
            build_shot(
                (1, 0),
                (1, 1),
                distance=123_450,
                azimuth=1820,
                inclination=5461,
                flags=0b10,
                comment="Comment #1\r\n",
            ),
            build_shot((1, 1), 2, distance=26_340, azimuth=1220, inclination=7719, trip_index=0),
            build_shot(2, None, distance=1_500, azimuth=-16384, flags=0b01, trip_index=1),
        ],
        references=[
            build_reference(
                (1, 0), east=12_340, north=56_780, altitude=90_120, comment="Entrance"
            ),
        ],
        outline=build_drawing(
            build_polygon([(200, -9800), (600, -9800), (600, -9700)], color=1),
            build_cross_section(-5700, -15600, (1, 0), 0),
            build_polygon([(8200, -6400), (8200, -4900)], color=5),
        ),
        sideview=build_drawing(build_polygon([(0, 0), (100, 100)], color=4)),
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> PocketTopoSettings:
    """Default settings isolated from any pockettopo.toml on the host."""
    monkeypatch.delenv("POCKETTOPO_CONFIG", raising=False)
    return PocketTopoSettings.from_cli(start=tmp_path)


@pytest.fixture
def sample_top(tmp_path: Path) -> Path:
    """A sample .top file on disk."""
    path = tmp_path / "sample.top"
    path.write_bytes(build_sample_document())
    return path


@pytest.fixture
def empty_top(tmp_path: Path) -> Path:
    """A .top file with no trips, shots or references."""
    path = tmp_path / "empty.top"
    path.write_bytes(build_document())
    return path


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from a temp directory so no stray pockettopo.toml is discovered."""
    monkeypatch.delenv("POCKETTOPO_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """CLI invocations reconfigure the root logger; restore it after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    package = logging.getLogger("pockettopo")
    package_level = package.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    package.setLevel(package_level)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """Verbose CLI runs enable telemetry process-wide; switch it off after each test."""
    yield
    from pockettopo.services.telemetry import disable_telemetry

    disable_telemetry()
