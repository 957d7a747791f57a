"""ServiceResult and ServiceError, returned by every service method.

A failed decode is data here, not an exception: the CLI renders the
error code, the file it came from and the byte offset the decoder
stopped at.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from pockettopo.codec.errors import ParseError

FILE_ERROR = "FILE_ERROR"


class ServiceError(BaseModel):
    """Why an operation failed.

    Attributes:
        code: A decoder error code such as ``"INVALID_HEADER"``, or
            ``"FILE_ERROR"`` when the file could not be read.
        message: Human-readable description.
        path: The ``.top`` file involved.
        offset: Byte offset where decoding stopped, for decoder errors
            that know it.
        detail: Error-specific extras (``found``, ``version``, ``tag`` ...).
    """

    model_config = {"frozen": True}

    code: str
    message: str
    path: str | None = None
    offset: int | None = None
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_parse_error(cls, exc: ParseError, path: Path | str) -> ServiceError:
        detail = exc.to_detail()
        detail.pop("offset", None)
        return cls(
            code=exc.code,
            message=exc.message,
            path=str(path),
            offset=exc.offset,
            detail=detail,
        )

    @classmethod
    def from_os_error(cls, exc: OSError, path: Path | str) -> ServiceError:
        return cls(
            code=FILE_ERROR,
            message=f"cannot read {path}: {exc.strerror or exc}",
            path=str(path),
        )

    @property
    def location(self) -> str | None:
        """``path`` plus ``@offset`` when both are known."""
        if self.path is None:
            return None
        if self.offset is None:
            return self.path
        return f"{self.path}@{self.offset}"


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: ``"inspect"``, ``"export"`` or ``"check"``.
        data: Operation payload on success.
        error: Set when ``ok`` is False.
        meta: Span tree under ``"telemetry"`` when verbose.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, error: ServiceError) -> ServiceResult:
        return cls(ok=False, op=op, error=error)
