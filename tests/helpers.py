"""Shared builders and a recording callback for the lexer tests."""

from __future__ import annotations

import io
from pathlib import Path
import sys
from typing import Any, List, Tuple

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from smflex.events import MidiLexerCallback  # noqa: E402
from smflex.lexer import LexerState, MidiLexer  # noqa: E402

CALLBACK_METHODS = sorted(name for name in vars(MidiLexerCallback) if not name.startswith("_"))

# "MThd", length 6, format 1, 2 tracks, 200 ticks per quarter note.
HEADER_BYTES = bytes.fromhex("4D546864 00000006 0001 0002 00C8")


def vlq(value: int) -> bytes:
    out = [value & 0x7F]
    value >>= 7
    while value:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(out))


def chunk(chunk_type: bytes, body: bytes) -> bytes:
    return chunk_type + len(body).to_bytes(4, "big") + body


def header_chunk(smf_format: int = 1, num_tracks: int = 1, division: int = 96) -> bytes:
    body = smf_format.to_bytes(2, "big") + num_tracks.to_bytes(2, "big") + division.to_bytes(2, "big")
    return chunk(b"MThd", body)


def track_chunk(*events: bytes, end_of_track: bool = True) -> bytes:
    body = b"".join(events)
    if end_of_track:
        body += b"\x00\xFF\x2F\x00"
    return chunk(b"MTrk", body)


def smf(*tracks: bytes, smf_format: int = 1, division: int = 96) -> bytes:
    return header_chunk(smf_format, len(tracks), division) + b"".join(tracks)


def _recorder(name: str):
    def method(self, *args: Any) -> None:
        self.calls.append((name, args))

    method.__name__ = name
    return method


class RecordingCallback(MidiLexerCallback):
    """Records every callback invocation as ``(method_name, args)``."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def count(self, name: str) -> int:
        return sum(1 for called, _ in self.calls if called == name)

    def last(self, name: str) -> Tuple[Any, ...]:
        for called, args in reversed(self.calls):
            if called == name:
                return args
        raise AssertionError(f"{name} was never called")


for _name in CALLBACK_METHODS:
    setattr(RecordingCallback, _name, _recorder(_name))


def lexer_for(
    data: bytes,
    state: LexerState = LexerState.EXPECT_HEADER,
) -> Tuple[MidiLexer, RecordingCallback]:
    callback = RecordingCallback()
    lexer = MidiLexer(io.BytesIO(data), callback)
    lexer.state = state
    return lexer, callback
