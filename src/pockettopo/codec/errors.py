"""Parse errors raised by the ``.top`` decoder.

Every error aborts the whole parse; there is no partial document. Offending
bytes are copied into owned ``bytes`` so an error outlives the input buffer.
Each error carries a stable ``code`` and a :meth:`ParseError.to_detail`
payload so the service layer can report it without string matching.
"""

from __future__ import annotations

from typing import Any


class ParseError(Exception):
    """Base class for all decoding failures.

    Attributes:
        code: Stable machine-readable error code.
        offset: Byte offset in the input where the failure was detected,
            or None when not known.
    """

    code = "PARSE_ERROR"

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset

    def to_detail(self) -> dict[str, Any]:
        detail: dict[str, Any] = {}
        if self.offset is not None:
            detail["offset"] = self.offset
        return detail

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError) or type(other) is not type(self):
            return NotImplemented
        return self.message == other.message and self.to_detail() == other.to_detail()

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.offset))


class InvalidHeader(ParseError):
    """The first three bytes are not the ``Top`` magic."""

    code = "INVALID_HEADER"

    def __init__(self, found: bytes, *, offset: int | None = 0) -> None:
        self.found = bytes(found)
        super().__init__(f"invalid header: {list(self.found)}", offset=offset)

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "found": self.found.hex(" ")}


class UnsupportedVersion(ParseError):
    code = "UNSUPPORTED_VERSION"

    def __init__(self, version: int, *, offset: int | None = 3) -> None:
        self.version = version
        super().__init__(f"unsupported version: {version}", offset=offset)

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "version": self.version}


class InvalidColor(ParseError):
    code = "INVALID_COLOR"

    def __init__(self, color: int, *, offset: int | None = None) -> None:
        self.color = color
        super().__init__(f"invalid color: 0x{color:02X}", offset=offset)

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "color": self.color}


class UndefinedStation(ParseError):
    """A cross-section references the undefined station id."""

    code = "UNDEFINED_STATION"

    def __init__(self, *, offset: int | None = None) -> None:
        super().__init__("undefined station", offset=offset)


class Utf8Error(ParseError):
    code = "UTF8_ERROR"

    def __init__(self, reason: str, data: bytes, *, offset: int | None = None) -> None:
        self.reason = reason
        self.data = bytes(data)
        super().__init__(f"invalid utf-8: {reason}", offset=offset)

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "reason": self.reason, "data": self.data.hex(" ")}


class TruncatedInput(ParseError):
    """A fixed-size or length-prefixed read ran past the end of the buffer."""

    code = "TRUNCATED_INPUT"

    def __init__(self, needed: int, available: int, *, offset: int | None = None) -> None:
        self.needed = needed
        self.available = available
        super().__init__(
            f"unexpected end of input: needed {needed} bytes, {available} available",
            offset=offset,
        )

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "needed": self.needed, "available": self.available}


class InvalidTimestamp(ParseError):
    """A trip tick count falls outside the representable calendar range."""

    code = "INVALID_TIMESTAMP"

    def __init__(self, ticks: int, *, offset: int | None = None) -> None:
        self.ticks = ticks
        super().__init__(f"timestamp out of range: {ticks} ticks", offset=offset)

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "ticks": self.ticks}


class InvalidElement(ParseError):
    """A drawing's element list ended on a byte other than the 0x00 terminator."""

    code = "INVALID_ELEMENT"

    def __init__(self, tag: int, *, offset: int | None = None) -> None:
        self.tag = tag
        super().__init__(f"invalid element tag: 0x{tag:02X}", offset=offset)

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "tag": self.tag}


class UnknownError(ParseError):
    """Grammar mismatch that fits no other error kind."""

    code = "UNKNOWN_ERROR"

    def __init__(self, reason: str = "unknown error", *, offset: int | None = None) -> None:
        self.reason = reason
        super().__init__(reason, offset=offset)

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "reason": self.reason}
