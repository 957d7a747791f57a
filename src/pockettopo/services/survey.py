"""SurveyService — inspect, export and check ``.top`` files.

Extends BaseService (reads and decodes the file; the decoder stays pure).
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import Any

from pockettopo.codec import VERSION
from pockettopo.domain.models import Document, Drawing, Shot, Trip, station_label
from pockettopo.domain.units import angle_to_degrees, azimuth_to_degrees, mm_to_m
from pockettopo.services.base import BaseService, DecodeFailed
from pockettopo.services.result import ServiceResult
from pockettopo.services.telemetry import trace_span, traced

NO_TRIP = -1


def _mapping_dict(drawing_or_doc: Document | Drawing) -> dict[str, int]:
    mapping = drawing_or_doc.mapping
    return {"x": mapping.origin.x, "y": mapping.origin.y, "scale": mapping.scale}


def _trip_item(index: int, trip: Trip) -> dict[str, Any]:
    return {
        "index": index,
        "date": trip.time.isoformat(),
        "comment": trip.comment,
        "declination_deg": round(angle_to_degrees(trip.declination), 2),
    }


def _shot_item(index: int, shot: Shot) -> dict[str, Any]:
    return {
        "index": index,
        "from": station_label(shot.from_station),
        "to": station_label(shot.to_station),
        "distance_m": mm_to_m(shot.distance),
        "azimuth_deg": round(azimuth_to_degrees(shot.azimuth), 2),
        "inclination_deg": round(angle_to_degrees(shot.inclination), 2),
        "flipped": shot.flipped,
        "trip": shot.trip_index,
        "comment": shot.comment,
    }


def _drawing_summary(drawing: Drawing) -> dict[str, Any]:
    return {
        "elements": len(drawing.elements),
        "polygons": len(drawing.polygons),
        "cross_sections": len(drawing.cross_sections),
        "colors": dict(Counter(p.color.name.lower() for p in drawing.polygons)),
        "mapping": _mapping_dict(drawing),
    }


def _issue(category: str, severity: str, message: str, **extra: Any) -> dict[str, Any]:
    return {"category": category, "severity": severity, "message": message, **extra}


class SurveyService(BaseService):
    """File-level operations over decoded PocketTopo documents."""

    @traced
    def inspect(self, path: Path) -> ServiceResult:
        """Summarise a ``.top`` file: counts, mappings, trips and shots."""
        try:
            document = self._load(path, op="inspect")
        except DecodeFailed as failed:
            return failed.result

        return ServiceResult(
            ok=True,
            op="inspect",
            data={
                "path": str(path),
                "version": VERSION,
                "trip_count": len(document.trips),
                "shot_count": len(document.shots),
                "reference_count": len(document.references),
                "station_count": len(document.stations()),
                "total_length_m": mm_to_m(document.total_length),
                "mapping": _mapping_dict(document),
                "outline": _drawing_summary(document.outline),
                "sideview": _drawing_summary(document.sideview),
                "trips": [_trip_item(i, t) for i, t in enumerate(document.trips)],
                "shots": [_shot_item(i, s) for i, s in enumerate(document.shots)],
            },
        )

    @traced
    def export_json(self, path: Path, *, output: Path | None = None) -> ServiceResult:
        """Export the full decoded document as JSON.

        Writes to *output* when given; otherwise the document is returned
        in ``data["document"]``. ``[export] element_order = "render"``
        lists drawing elements newest-first.
        """
        try:
            document = self._load(path, op="export")
        except DecodeFailed as failed:
            return failed.result

        config = self._settings.export
        payload = document.model_dump(mode="json")
        if config.element_order == "render":
            for key in ("outline", "sideview"):
                payload[key]["elements"].reverse()

        if output is None:
            return ServiceResult(
                ok=True,
                op="export",
                data={"path": str(path), "document": payload},
            )

        text = json.dumps(payload, indent=config.indent or None, ensure_ascii=False)
        with trace_span("write") as span:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(text + "\n", encoding="utf-8")
            if span:
                span.annotate("bytes", len(text))

        return ServiceResult(
            ok=True,
            op="export",
            data={"path": str(path), "output": str(output), "shots": len(document.shots)},
        )

    @traced
    def check(self, path: Path, *, strict: bool = False) -> ServiceResult:
        """Report consistency issues the decoder does not enforce.

        * shots whose trip index points past the trip list
          (error when *strict* or ``[check] strict_trip_index`` is set)
        * references without a station, or tied to a station no shot names
        * cross-sections at stations no shot names
        """
        try:
            document = self._load(path, op="check")
        except DecodeFailed as failed:
            return failed.result

        with trace_span("analyze") as span:
            issues = self._collect_issues(
                document, strict_trip_index=strict or self._settings.check.strict_trip_index
            )
            if span:
                span.annotate("issues", len(issues))

        errors = sum(1 for i in issues if i["severity"] == "error")
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "path": str(path),
                "issues": issues,
                "count": len(issues),
                "error_count": errors,
                "warning_count": len(issues) - errors,
                "healthy": errors == 0,
            },
        )

    def _collect_issues(
        self, document: Document, *, strict_trip_index: bool
    ) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        trip_severity = "error" if strict_trip_index else "warning"
        known = set(document.stations())

        for index, shot in enumerate(document.shots):
            if shot.trip_index != NO_TRIP and document.trip_for(shot) is None:
                issues.append(
                    _issue(
                        "trip_index",
                        trip_severity,
                        f"shot #{index} ({station_label(shot.from_station)} -> "
                        f"{station_label(shot.to_station)}) references trip "
                        f"{shot.trip_index} but only {len(document.trips)} trips exist",
                        shot=index,
                    )
                )

        for index, reference in enumerate(document.references):
            if reference.station is None:
                issues.append(
                    _issue(
                        "reference",
                        "warning",
                        f"reference #{index} has no station",
                        reference=index,
                    )
                )
            elif reference.station not in known:
                issues.append(
                    _issue(
                        "reference",
                        "warning",
                        f"reference #{index} is tied to unknown station {reference.station}",
                        reference=index,
                    )
                )

        for name in ("outline", "sideview"):
            drawing: Drawing = getattr(document, name)
            for cross_section in drawing.cross_sections:
                if cross_section.station not in known:
                    issues.append(
                        _issue(
                            "cross_section",
                            "warning",
                            f"{name} cross-section at unknown station {cross_section.station}",
                        )
                    )
        return issues
