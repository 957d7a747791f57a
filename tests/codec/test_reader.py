"""Tests for ByteReader primitives: fixed-width integers, varints, strings."""

from __future__ import annotations

import pytest

from pockettopo.codec.errors import TruncatedInput, Utf8Error
from pockettopo.codec.reader import ByteReader
from tests.conftest import build_string, u32


class TestFixedWidth:
    def test_little_endian_signed(self) -> None:
        reader = ByteReader(b"\xff\xff\x34\x12")
        assert reader.i16() == -1
        assert reader.i16() == 0x1234
        assert reader.at_end()

    def test_u32_top_bit(self) -> None:
        assert ByteReader(b"\x00\x00\x00\x80").u32() == 0x8000_0000

    def test_i32_min(self) -> None:
        assert ByteReader(b"\x00\x00\x00\x80").i32() == -(2**31)

    def test_i64(self) -> None:
        assert ByteReader(b"\xfe\xff\xff\xff\xff\xff\xff\xff").i64() == -2

    def test_offset_advances(self) -> None:
        reader = ByteReader(b"\x01\x02\x00\x03\x00\x00\x00")
        reader.u8()
        assert reader.offset == 1
        reader.i16()
        assert reader.offset == 3
        reader.u32()
        assert reader.offset == 7
        assert reader.remaining == 0

    def test_truncated_fixed_read(self) -> None:
        reader = ByteReader(b"\x01\x02")
        with pytest.raises(TruncatedInput) as exc_info:
            reader.u32()
        assert exc_info.value.needed == 4
        assert exc_info.value.available == 2
        assert exc_info.value.offset == 0

    def test_peek_does_not_consume(self) -> None:
        reader = ByteReader(b"\x03\x00")
        assert reader.peek_u8() == 3
        assert reader.offset == 0
        assert reader.u8() == 3

    def test_peek_on_empty_input(self) -> None:
        with pytest.raises(TruncatedInput):
            ByteReader(b"").peek_u8()

    def test_accepts_bytearray_and_memoryview(self) -> None:
        assert ByteReader(bytearray(b"\x2a")).u8() == 42
        assert ByteReader(memoryview(b"\x2a")).u8() == 42


class TestVarint:
    @pytest.mark.parametrize(
        "data,expected,consumed",
        [
            (b"\x00", 0, 1),
            (b"\x01", 1, 1),
            (b"\x02", 2, 1),
            (b"\x2b", 43, 1),
            (b"\x7f", 127, 1),
            (b"\xff\x01", 255, 2),
            (b"\x80\x01", 128, 2),
            (b"\x80\x00", 0, 2),
            (b"\xac\x02", 300, 2),
        ],
    )
    def test_values(self, data: bytes, expected: int, consumed: int) -> None:
        reader = ByteReader(data)
        assert reader.varint() == expected
        assert reader.offset == consumed

    def test_stops_at_first_terminating_byte(self) -> None:
        reader = ByteReader(b"\x00\x00")
        assert reader.varint() == 0
        assert reader.remaining == 1

    @pytest.mark.parametrize("data", [b"", b"\x80", b"\xff\xff"])
    def test_missing_terminator(self, data: bytes) -> None:
        with pytest.raises(TruncatedInput):
            ByteReader(data).varint()


class TestString:
    def test_empty_string_is_not_none(self) -> None:
        assert ByteReader(b"\x00").string() == ""

    def test_ascii(self) -> None:
        reader = ByteReader(build_string("test") + b"\xaa")
        assert reader.string() == "test"
        assert reader.remaining == 1

    def test_multibyte_utf8(self) -> None:
        assert ByteReader(build_string("Höhle → 30,0°")).string() == "Höhle → 30,0°"

    def test_two_byte_length_prefix(self) -> None:
        text = "x" * 200
        data = build_string(text)
        assert data[:2] == b"\xc8\x01"
        assert ByteReader(data).string() == text

    def test_invalid_utf8_is_rejected(self) -> None:
        reader = ByteReader(b"\x02\xc3\x28")
        with pytest.raises(Utf8Error) as exc_info:
            reader.string()
        assert exc_info.value.data == b"\xc3\x28"
        assert exc_info.value.offset == 1
        assert exc_info.value.code == "UTF8_ERROR"

    def test_truncated_payload(self) -> None:
        with pytest.raises(TruncatedInput) as exc_info:
            ByteReader(b"\x05ab").string()
        assert exc_info.value.needed == 5
        assert exc_info.value.available == 2


class TestCounted:
    def test_zero_count(self) -> None:
        reader = ByteReader(u32(0))
        assert reader.counted(ByteReader.u8) == ()
        assert reader.at_end()

    def test_reads_exactly_count_items(self) -> None:
        reader = ByteReader(u32(2) + b"\x01\x02\x03")
        assert reader.counted(ByteReader.u8) == (1, 2)
        assert reader.remaining == 1

    def test_count_larger_than_input(self) -> None:
        with pytest.raises(TruncatedInput):
            ByteReader(u32(3) + b"\x01").counted(ByteReader.u8)
