"""Primitive field decoders for SMF data.

All integers in a Standard MIDI File are big-endian.  Delta-times and
length prefixes use the variable-length quantity (VLQ) encoding: seven
payload bits per byte, most significant group first, with bit 7 set on
every byte except the last.

Pitch-wheel values are the exception to the big-endian rule: the 14-bit
value is split over two data bytes with the least significant seven bits
first.
"""

from __future__ import annotations

import struct
from typing import Tuple

from .cursor import ByteCursor
from .errors import VarLengthTooLong

VLQ_MAX_BYTES = 4
PITCH_WHEEL_CENTRE = 0x2000


def parse_uint8(cursor: ByteCursor) -> int:
    return cursor.read_byte()


def parse_int8(cursor: ByteCursor) -> int:
    """Read one byte as a two's-complement signed value."""

    return struct.unpack(">b", cursor.read_exact(1))[0]


def parse_uint16(cursor: ByteCursor) -> int:
    return struct.unpack(">H", cursor.read_exact(2))[0]


def parse_uint24(cursor: ByteCursor) -> int:
    return int.from_bytes(cursor.read_exact(3), "big", signed=False)


def parse_uint32(cursor: ByteCursor) -> int:
    return struct.unpack(">I", cursor.read_exact(4))[0]


def parse_uint7(cursor: ByteCursor) -> int:
    """Read a data byte, ignoring its high bit."""

    return cursor.read_byte() & 0x7F


def parse_two_uint7(cursor: ByteCursor) -> Tuple[int, int]:
    first, second = cursor.read_exact(2)
    return first & 0x7F, second & 0x7F


def parse_var_length(cursor: ByteCursor, *, max_bytes: int = VLQ_MAX_BYTES) -> int:
    """Decode a variable-length quantity.

    Raises ``UnexpectedEndOfFile`` if the stream ends while a continuation
    byte is still expected, and ``VarLengthTooLong`` if the quantity does not
    terminate within ``max_bytes`` bytes.
    """
    value = 0
    for _ in range(max_bytes):
        byte = cursor.read_byte()
        value = (value << 7) | (byte & 0x7F)
        if byte & 0x80 == 0:
            return value
    raise VarLengthTooLong(max_bytes)


def parse_pitch_wheel_value(cursor: ByteCursor) -> Tuple[int, int]:
    """Return ``(relative, absolute)`` for a 14-bit pitch-wheel pair.

    ``absolute`` is the raw 0..0x3FFF value; ``relative`` is centred on
    0x2000, giving -0x2000..0x1FFF.
    """
    lsb, msb = cursor.read_exact(2)
    absolute = ((msb & 0x7F) << 7) | (lsb & 0x7F)
    return absolute - PITCH_WHEEL_CENTRE, absolute


def split_status_byte(status: int) -> Tuple[int, int]:
    """Split a status byte into ``(message_type, channel)`` nibbles."""

    return (status & 0xF0) >> 4, status & 0x0F


def read_status_byte(cursor: ByteCursor) -> Tuple[int, int]:
    return split_status_byte(cursor.read_byte())


def parse_text(cursor: ByteCursor) -> bytes:
    """Read a VLQ length prefix followed by that many raw bytes.

    SMF text is nominally ASCII but is not guaranteed to be, so the payload
    is returned undecoded.
    """
    length = parse_var_length(cursor)
    return cursor.read_exact(length)


__all__ = [
    "PITCH_WHEEL_CENTRE",
    "VLQ_MAX_BYTES",
    "parse_int8",
    "parse_pitch_wheel_value",
    "parse_text",
    "parse_two_uint7",
    "parse_uint16",
    "parse_uint24",
    "parse_uint32",
    "parse_uint7",
    "parse_uint8",
    "parse_var_length",
    "read_status_byte",
    "split_status_byte",
]
