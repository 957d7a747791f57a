"""BaseService — shared foundation for pockettopo services.

Services own everything around the pure decoder: reading the file,
turning :class:`~pockettopo.codec.errors.ParseError` into a structured
:class:`ServiceResult`, and timing the work when telemetry is enabled.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from pockettopo.codec import ParseError, parse
from pockettopo.services.result import ServiceError, ServiceResult
from pockettopo.services.telemetry import trace_span

if TYPE_CHECKING:
    from pockettopo.config.settings import PocketTopoSettings
    from pockettopo.domain.models import Document

logger = logging.getLogger(__name__)


class DecodeFailed(Exception):
    """Carries a ready-made failure result out of :meth:`BaseService._load`."""

    def __init__(self, result: ServiceResult) -> None:
        super().__init__(result.error.message if result.error else result.op)
        self.result = result


class BaseService:
    """Base for service-layer classes.

    Usage::

        class SurveyService(BaseService):
            def inspect(self, path: Path) -> ServiceResult:
                try:
                    document = self._load(path, op="inspect")
                except DecodeFailed as failed:
                    return failed.result
                ...
    """

    def __init__(self, settings: PocketTopoSettings) -> None:
        self._settings = settings

    def _load(self, path: Path, *, op: str) -> Document:
        """Read and decode *path*.

        Raises:
            DecodeFailed: the file could not be read or decoded; the
                attached result has ``ok=False``.
        """
        with trace_span("read") as span:
            try:
                data = Path(path).read_bytes()
            except OSError as exc:
                logger.debug("Cannot read %s", path, exc_info=True)
                error = ServiceError.from_os_error(exc, path)
                raise DecodeFailed(ServiceResult.failure(op, error)) from exc
            if span:
                span.annotate("bytes", len(data))

        with trace_span("decode"):
            try:
                return parse(data)
            except ParseError as exc:
                logger.debug("Decoding %s failed at offset %s: %s", path, exc.offset, exc)
                error = ServiceError.from_parse_error(exc, path)
                raise DecodeFailed(ServiceResult.failure(op, error)) from exc
