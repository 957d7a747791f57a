"""Cursor over an in-memory ``.top`` buffer with the format's primitive reads.

All multi-byte integers are little-endian, signed ones two's-complement, and
nothing is padded. Strings use the .NET ``BinaryWriter`` layout: a 7-bit
varint byte length followed by UTF-8 bytes, not null-terminated.
"""

from __future__ import annotations

import struct
from collections.abc import Callable
from typing import TypeVar

from pockettopo.codec.errors import TruncatedInput, Utf8Error

_T = TypeVar("_T")

_U8 = struct.Struct("<B")
_I16 = struct.Struct("<h")
_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")
_I64 = struct.Struct("<q")

CONTINUATION_BIT = 0x80
VARINT_PAYLOAD_MASK = 0x7F


class ByteReader:
    """Sequential reader that raises :class:`TruncatedInput` instead of short reads."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def at_end(self) -> bool:
        return self._offset >= len(self._data)

    def _require(self, size: int) -> None:
        if size > self.remaining:
            raise TruncatedInput(size, self.remaining, offset=self._offset)

    def _unpack(self, fmt: struct.Struct) -> int:
        self._require(fmt.size)
        (value,) = fmt.unpack_from(self._data, self._offset)
        self._offset += fmt.size
        return value

    # --- Fixed-width integers ---

    def u8(self) -> int:
        return self._unpack(_U8)

    def i16(self) -> int:
        return self._unpack(_I16)

    def u32(self) -> int:
        return self._unpack(_U32)

    def i32(self) -> int:
        return self._unpack(_I32)

    def i64(self) -> int:
        return self._unpack(_I64)

    def peek_u8(self) -> int:
        """Return the next byte without consuming it."""
        self._require(1)
        return self._data[self._offset]

    def take(self, size: int) -> bytes:
        """Consume exactly *size* bytes."""
        self._require(size)
        chunk = self._data[self._offset : self._offset + size]
        self._offset += size
        return chunk

    def peek(self, size: int) -> bytes:
        """Up to *size* upcoming bytes, fewer near the end of the buffer."""
        return self._data[self._offset : self._offset + size]

    # --- Variable-length values ---

    def varint(self) -> int:
        """Decode a 7-bit continuation unsigned integer, low group first."""
        start = self._offset
        result = 0
        shift = 0
        while True:
            if self.at_end():
                raise TruncatedInput(
                    self._offset - start + 1, self._offset - start, offset=start
                )
            byte = self._data[self._offset]
            self._offset += 1
            result |= (byte & VARINT_PAYLOAD_MASK) << shift
            if not byte & CONTINUATION_BIT:
                return result
            shift += 7

    def string(self) -> str:
        """Decode a varint-length-prefixed UTF-8 string; invalid bytes are an error."""
        length = self.varint()
        start = self._offset
        raw = self.take(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise Utf8Error(exc.reason, raw, offset=start + exc.start) from exc

    def counted(self, item: Callable[[ByteReader], _T]) -> tuple[_T, ...]:
        """Read a u32 count followed by that many items."""
        count = self.u32()
        return tuple(item(self) for _ in range(count))
