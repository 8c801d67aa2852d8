from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from .cursor import ByteCursor
from .errors import UnsupportedFormat
from .primitives import parse_uint16, parse_uint32


HEADER_CHUNK = b"MThd"
TRACK_CHUNK = b"MTrk"
CHUNK_HEADER_SIZE = 8
HEADER_DATA_SIZE = 6

# SMF formats
SINGLE_MULTI_CHANNEL_TRACK = 0
SIMULTANEOUS_TRACKS = 1
SEQUENTIAL_TRACKS = 2


class TimeFormat(IntEnum):
    METRICAL = 0
    TIMECODE = 1


@dataclass(frozen=True)
class ChunkHeader:
    chunk_type: bytes  # 4 raw bytes, not validated
    length: int  # body length in bytes, u32

    @property
    def tag(self) -> str:
        """The chunk type as text, for display."""

        return self.chunk_type.decode("latin-1")


@dataclass(frozen=True)
class MetricalDivision:
    ticks_per_quarter_note: int


@dataclass(frozen=True)
class TimecodeDivision:
    # Bits 14-0 of the division word; SMPTE frames/ticks are not unpacked.
    raw_data: int


Division = Union[MetricalDivision, TimecodeDivision]


@dataclass(frozen=True)
class HeaderData:
    format: int
    num_tracks: int
    division: Division

    @property
    def time_format(self) -> TimeFormat:
        if isinstance(self.division, TimecodeDivision):
            return TimeFormat.TIMECODE
        return TimeFormat.METRICAL

    @property
    def ticks_per_quarter_note(self) -> int | None:
        if isinstance(self.division, MetricalDivision):
            return self.division.ticks_per_quarter_note
        return None


def parse_chunk_header(cursor: ByteCursor) -> ChunkHeader:
    """Read a 4-byte chunk tag followed by its u32 big-endian length."""

    chunk_type = cursor.read_exact(4)
    length = parse_uint32(cursor)
    return ChunkHeader(chunk_type=chunk_type, length=length)


def parse_division(word: int) -> Division:
    # "If bit 15 of <division> is zero, the bits 14 thru 0 represent the
    # number of delta time ticks which make up a quarter-note."
    if word & 0x8000 == 0:
        return MetricalDivision(ticks_per_quarter_note=word & 0x7FFF)
    return TimecodeDivision(raw_data=word & 0x7FFF)


def parse_header_data(cursor: ByteCursor) -> HeaderData:
    """Read the six bytes of MThd chunk data."""

    smf_format = parse_uint16(cursor)
    if smf_format > SEQUENTIAL_TRACKS:
        raise UnsupportedFormat(smf_format)
    num_tracks = parse_uint16(cursor)
    division = parse_division(parse_uint16(cursor))
    return HeaderData(format=smf_format, num_tracks=num_tracks, division=division)


__all__ = [
    "CHUNK_HEADER_SIZE",
    "HEADER_CHUNK",
    "HEADER_DATA_SIZE",
    "SEQUENTIAL_TRACKS",
    "SIMULTANEOUS_TRACKS",
    "SINGLE_MULTI_CHANNEL_TRACK",
    "TRACK_CHUNK",
    "ChunkHeader",
    "Division",
    "HeaderData",
    "MetricalDivision",
    "TimeFormat",
    "TimecodeDivision",
    "parse_chunk_header",
    "parse_division",
    "parse_header_data",
]
