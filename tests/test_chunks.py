from __future__ import annotations

from pathlib import Path
import sys

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from smflex.chunks import (  # noqa: E402
    ChunkHeader,
    MetricalDivision,
    TimeFormat,
    TimecodeDivision,
    parse_chunk_header,
    parse_header_data,
)
from smflex.cursor import ByteCursor  # noqa: E402
from smflex.errors import UnexpectedEndOfFile, UnsupportedFormat  # noqa: E402


def cursor(hex_bytes: str) -> ByteCursor:
    return ByteCursor.from_bytes(bytes.fromhex(hex_bytes))


def test_header_chunk_header() -> None:
    header = parse_chunk_header(cursor("4D 54 68 64 00 00 00 06"))
    assert header == ChunkHeader(chunk_type=b"MThd", length=6)
    assert header.tag == "MThd"


def test_track_chunk_header() -> None:
    header = parse_chunk_header(cursor("4D 54 72 6B 00 41 89 37"))
    assert header.chunk_type == b"MTrk"
    assert header.length == 4294967


def test_any_four_bytes_are_a_tag() -> None:
    header = parse_chunk_header(cursor("DE AD BE EF 00 00 00 02"))
    assert header.chunk_type == b"\xde\xad\xbe\xef"
    assert header.length == 2


@pytest.mark.parametrize("data", ["4D 54 68", "4D 54 68 64 00 00 00", ""])
def test_short_chunk_header(data: str) -> None:
    with pytest.raises(UnexpectedEndOfFile):
        parse_chunk_header(cursor(data))


def test_metrical_header_data() -> None:
    data = parse_header_data(cursor("00 01 00 02 00 05"))
    assert data.format == 1
    assert data.num_tracks == 2
    assert data.division == MetricalDivision(ticks_per_quarter_note=5)
    assert data.time_format is TimeFormat.METRICAL
    assert data.ticks_per_quarter_note == 5


def test_timecode_header_data() -> None:
    # -25 fps, 40 ticks per frame: 0xE728
    data = parse_header_data(cursor("00 00 00 01 E7 28"))
    assert data.format == 0
    assert data.division == TimecodeDivision(raw_data=0x6728)
    assert data.time_format is TimeFormat.TIMECODE
    assert data.ticks_per_quarter_note is None


@pytest.mark.parametrize("smf_format", [0, 1, 2])
def test_supported_formats(smf_format: int) -> None:
    data = parse_header_data(cursor(f"00 0{smf_format} 00 01 00 60"))
    assert data.format == smf_format


def test_unsupported_format() -> None:
    with pytest.raises(UnsupportedFormat) as excinfo:
        parse_header_data(cursor("00 03 00 02 00 05"))
    assert excinfo.value.smf_format == 3


def test_truncated_header_data() -> None:
    with pytest.raises(UnexpectedEndOfFile):
        parse_header_data(cursor("00 01 00 02 00"))
