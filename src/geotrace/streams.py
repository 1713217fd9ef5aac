"""Binary stream primitives for externalized answer values.

Records are written field by field to any binary file-like object
(`io.BytesIO`, an open file). Each field type has a fixed encoding:

- numeric: signed integer in big-endian 7-bit groups. The high bit of each
  byte marks "more bytes follow"; bit 6 of the first byte carries the sign.
  Values in [-64, 63] take one byte.
- decimal: IEEE-754 double, big-endian.
- string: 2-byte big-endian byte length followed by UTF-8 bytes.
- nullable string: presence flag byte, then the string when present.
- bool: one byte, 0 or 1.

Readers raise DecodeError on short reads and malformed bytes; nothing is
returned for a partially read field.
"""

import struct
from typing import BinaryIO, Optional

from .errors import DecodeError, InvalidArgumentError

_DOUBLE = struct.Struct(">d")
_USHORT = struct.Struct(">H")

MAX_STRING_BYTES = 0xFFFF
MAX_NUMERIC_BYTES = 10  # Enough for any 64-bit value


def read_exact(stream: BinaryIO, n: int) -> bytes:
    """Read exactly n bytes or raise DecodeError."""
    data = stream.read(n)
    if data is None or len(data) != n:
        got = 0 if data is None else len(data)
        raise DecodeError(f"Unexpected end of stream: wanted {n} bytes, got {got}")
    return data


def write_numeric(stream: BinaryIO, value: int):
    value = int(value)
    # Smallest group count whose top group still fits a signed 7-bit chunk
    sig = 0
    while not -64 <= (value >> (sig * 7)) <= 63:
        sig += 1

    out = bytearray()
    for i in range(sig, -1, -1):
        chunk = (value >> (i * 7)) & 0x7F
        out.append((0x80 if i > 0 else 0x00) | chunk)
    stream.write(bytes(out))


def read_numeric(stream: BinaryIO) -> int:
    value = 0
    first = True
    for _ in range(MAX_NUMERIC_BYTES):
        b = read_exact(stream, 1)[0]
        if first:
            value = -1 if b & 0x40 else 0
            first = False
        value = (value << 7) | (b & 0x7F)
        if not b & 0x80:
            return value
    raise DecodeError(f"Numeric field longer than {MAX_NUMERIC_BYTES} bytes")


def write_decimal(stream: BinaryIO, value: float):
    stream.write(_DOUBLE.pack(float(value)))


def read_decimal(stream: BinaryIO) -> float:
    return _DOUBLE.unpack(read_exact(stream, _DOUBLE.size))[0]


def write_bool(stream: BinaryIO, value: bool):
    stream.write(b"\x01" if value else b"\x00")


def read_bool(stream: BinaryIO) -> bool:
    b = read_exact(stream, 1)[0]
    if b not in (0, 1):
        raise DecodeError(f"Invalid bool byte: {b:#04x}")
    return b == 1


def write_string(stream: BinaryIO, value: str):
    if value is None:
        raise InvalidArgumentError("Cannot write None as a string; use write_nullable_string")
    try:
        data = value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidArgumentError(f"String cannot be encoded as UTF-8: {e.reason}") from e
    if len(data) > MAX_STRING_BYTES:
        raise InvalidArgumentError(
            f"String too long to encode: {len(data)} bytes (max {MAX_STRING_BYTES})"
        )
    stream.write(_USHORT.pack(len(data)))
    stream.write(data)


def read_string(stream: BinaryIO) -> str:
    (length,) = _USHORT.unpack(read_exact(stream, _USHORT.size))
    data = read_exact(stream, length)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"String field is not valid UTF-8: {e.reason}") from e


def write_nullable_string(stream: BinaryIO, value: Optional[str]):
    write_bool(stream, value is not None)
    if value is not None:
        write_string(stream, value)


def read_nullable_string(stream: BinaryIO) -> Optional[str]:
    if not read_bool(stream):
        return None
    return read_string(stream)
