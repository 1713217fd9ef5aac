"""Tests for the binary stream primitives."""

import io

import pytest

from geotrace.errors import DecodeError, InvalidArgumentError
from geotrace.streams import (
    read_bool,
    read_decimal,
    read_nullable_string,
    read_numeric,
    read_string,
    write_bool,
    write_decimal,
    write_nullable_string,
    write_numeric,
    write_string,
)


def _encode(writer, value) -> bytes:
    buf = io.BytesIO()
    writer(buf, value)
    return buf.getvalue()


class TestNumeric:
    """Test the signed 7-bit group integer encoding."""

    def test_small_values_take_one_byte(self):
        """Values in [-64, 63] fit a single byte."""
        assert _encode(write_numeric, 0) == b"\x00"
        assert _encode(write_numeric, 63) == b"\x3f"
        assert _encode(write_numeric, -1) == b"\x7f"
        assert _encode(write_numeric, -64) == b"\x40"

    def test_multi_byte_layout(self):
        """Continuation bit is set on every byte but the last."""
        assert _encode(write_numeric, 64) == b"\x80\x40"
        assert _encode(write_numeric, 300) == b"\x82\x2c"
        assert _encode(write_numeric, -65) == b"\xff\x3f"

    @pytest.mark.parametrize("value", [0, 1, 63, 64, 1000, -1000, 2**31 - 1, -(2**31), 2**62])
    def test_decodes_what_it_encodes(self, value):
        """Decoding reads back the encoded value and nothing more."""
        buf = io.BytesIO(_encode(write_numeric, value) + b"tail")
        assert read_numeric(buf) == value
        assert buf.read() == b"tail"

    def test_truncated(self):
        """A continuation byte with nothing after it is malformed."""
        with pytest.raises(DecodeError):
            read_numeric(io.BytesIO(b"\x82"))

    def test_overlong(self):
        """Endless continuation bytes are rejected."""
        with pytest.raises(DecodeError):
            read_numeric(io.BytesIO(b"\x80" * 20))


class TestScalars:
    """Test decimal and bool fields."""

    def test_decimal_is_big_endian_double(self):
        assert _encode(write_decimal, 1.0) == b"\x3f\xf0\x00\x00\x00\x00\x00\x00"
        assert read_decimal(io.BytesIO(b"\x3f\xf0\x00\x00\x00\x00\x00\x00")) == 1.0

    def test_short_decimal(self):
        with pytest.raises(DecodeError):
            read_decimal(io.BytesIO(b"\x3f\xf0\x00"))

    def test_bool(self):
        assert _encode(write_bool, True) == b"\x01"
        assert read_bool(io.BytesIO(b"\x00")) is False

    def test_invalid_bool_byte(self):
        with pytest.raises(DecodeError):
            read_bool(io.BytesIO(b"\x02"))


class TestStrings:
    """Test length-prefixed and nullable strings."""

    def test_layout(self):
        """Two-byte length prefix followed by UTF-8 bytes."""
        assert _encode(write_string, "ab") == b"\x00\x02ab"
        assert _encode(write_string, "é") == b"\x00\x02\xc3\xa9"

    def test_read_string(self):
        assert read_string(io.BytesIO(b"\x00\x03xyz")) == "xyz"
        assert read_string(io.BytesIO(b"\x00\x00")) == ""

    def test_truncated_body(self):
        with pytest.raises(DecodeError):
            read_string(io.BytesIO(b"\x00\x05ab"))

    def test_invalid_utf8(self):
        with pytest.raises(DecodeError):
            read_string(io.BytesIO(b"\x00\x01\xff"))

    def test_none_needs_nullable(self):
        with pytest.raises(InvalidArgumentError):
            write_string(io.BytesIO(), None)

    def test_too_long(self):
        with pytest.raises(InvalidArgumentError):
            write_string(io.BytesIO(), "x" * 70000)

    def test_unencodable(self):
        """Lone surrogates have no UTF-8 form."""
        with pytest.raises(InvalidArgumentError):
            write_string(io.BytesIO(), "\ud800")

    def test_nullable(self):
        """Absent strings encode as a single zero flag byte."""
        assert _encode(write_nullable_string, None) == b"\x00"
        assert _encode(write_nullable_string, "t") == b"\x01\x00\x01t"
        assert read_nullable_string(io.BytesIO(b"\x00")) is None
        assert read_nullable_string(io.BytesIO(b"\x01\x00\x01t")) == "t"
