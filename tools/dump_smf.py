#!/usr/bin/env python3
"""Log every event decoded from one or more Standard MIDI Files.

Usage examples:

    python tools/dump_smf.py song.mid
    python tools/dump_smf.py 'corpus/**/*.mid' --log-level DEBUG
"""

from __future__ import annotations

import argparse
import glob
import logging
import sys
from pathlib import Path
from typing import Iterable, List

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from smflex.chunks import ChunkHeader, HeaderData, TimeFormat  # noqa: E402
from smflex.errors import MidiError  # noqa: E402
from smflex.events import MidiLexerCallback  # noqa: E402
from smflex.lexer import lex_file  # noqa: E402
from smflex.music import KeySignatureMode, ScaleDegree  # noqa: E402

logger = logging.getLogger("dump_smf")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Enum aliases collapse to the sharp spelling; flat keys print with flats.
FLAT_NAMES = {
    ScaleDegree.D_FLAT: "D_FLAT",
    ScaleDegree.E_FLAT: "E_FLAT",
    ScaleDegree.G_FLAT: "G_FLAT",
    ScaleDegree.A_FLAT: "A_FLAT",
    ScaleDegree.B_FLAT: "B_FLAT",
    ScaleDegree.C_FLAT: "C_FLAT",
}


def key_name(degree: ScaleDegree, sharps_or_flats: int) -> str:
    if sharps_or_flats < 0:
        return FLAT_NAMES.get(degree, degree.name)
    return degree.name


def collect_paths(patterns: Iterable[str]) -> List[Path]:
    paths: List[Path] = []
    for pattern in patterns:
        matches = sorted(Path(p) for p in glob.glob(pattern, recursive=True))
        if matches:
            paths.extend(matches)
        else:
            # Keep literal paths so missing files are reported, not dropped.
            paths.append(Path(pattern))
    seen: set[Path] = set()
    unique_paths: List[Path] = []
    for path in paths:
        resolved = path.resolve()
        if resolved not in seen:
            seen.add(resolved)
            unique_paths.append(path)
    return unique_paths


class LoggingCallback(MidiLexerCallback):
    """Write one log line per decoded event."""

    def __init__(self, name: str, log: logging.Logger = logger):
        self.name = name
        self.log = log

    def _emit(self, kind: str, fmt: str = "", *args: object) -> None:
        self.log.info("%s: %-22s " + fmt, self.name, kind, *args)

    def began(self) -> None:
        self._emit("Began")

    def finished(self) -> None:
        self._emit("Finished")

    def error_reading(self) -> None:
        self.log.error("%s: error while reading", self.name)

    def error_opening_file(self) -> None:
        self.log.error("%s: could not open file", self.name)

    def header(self, data: HeaderData) -> None:
        if data.time_format is TimeFormat.METRICAL:
            division = f"{data.ticks_per_quarter_note} ticks/quarter"
        else:
            division = f"timecode 0x{data.division.raw_data:04X}"
        self._emit("Header", "format=%d tracks=%d %s", data.format, data.num_tracks, division)

    def track(self, header: ChunkHeader) -> None:
        self._emit("Track", "%s length=%d", header.tag, header.length)

    def note_off(self, channel: int, pitch: int, velocity: int, time: int) -> None:
        self._emit("NoteOff", "t=%d ch=%d pitch=%d vel=%d", time, channel, pitch, velocity)

    def note_on(self, channel: int, pitch: int, velocity: int, time: int) -> None:
        self._emit("NoteOn", "t=%d ch=%d pitch=%d vel=%d", time, channel, pitch, velocity)

    def polyphonic_aftertouch(self, channel: int, pitch: int, pressure: int, time: int) -> None:
        self._emit("PolyphonicAftertouch", "t=%d ch=%d pitch=%d pressure=%d", time, channel, pitch, pressure)

    def control_change(self, channel: int, controller: int, value: int, time: int) -> None:
        self._emit("ControlChange", "t=%d ch=%d cc=%d value=%d", time, channel, controller, value)

    def program_change(self, channel: int, program: int, time: int) -> None:
        self._emit("ProgramChange", "t=%d ch=%d program=%d", time, channel, program)

    def channel_aftertouch(self, channel: int, value: int, time: int) -> None:
        self._emit("ChannelAftertouch", "t=%d ch=%d value=%d", time, channel, value)

    def pitch_wheel(self, channel: int, relative: int, absolute: int, time: int) -> None:
        self._emit("PitchWheel", "t=%d ch=%d relative=%d absolute=0x%04X", time, channel, relative, absolute)

    def sequence_number(self, channel: int, number: int, number_given: bool, time: int) -> None:
        shown = str(number) if number_given else "(implied)"
        self._emit("SequenceNumber", "t=%d %s", time, shown)

    def _text(self, kind: str, text: bytes, time: int) -> None:
        self._emit(kind, "t=%d %r", time, text.decode("latin-1"))

    def text(self, channel: int, text: bytes, time: int) -> None:
        self._text("Text", text, time)

    def copyright_text(self, channel: int, text: bytes, time: int) -> None:
        self._text("CopyrightText", text, time)

    def sequence_name(self, channel: int, text: bytes, time: int) -> None:
        self._text("SequenceName", text, time)

    def track_instrument_name(self, channel: int, text: bytes, time: int) -> None:
        self._text("TrackInstrumentName", text, time)

    def lyric_text(self, channel: int, text: bytes, time: int) -> None:
        self._text("LyricText", text, time)

    def marker_text(self, channel: int, text: bytes, time: int) -> None:
        self._text("MarkerText", text, time)

    def cue_point_text(self, channel: int, text: bytes, time: int) -> None:
        self._text("CuePointText", text, time)

    def end_of_track(self, channel: int, time: int) -> None:
        self._emit("EndOfTrack", "t=%d", time)

    def tempo(self, bpm: int, microseconds_per_quarter_note: int, time: int) -> None:
        self._emit("Tempo", "t=%d %d bpm (%d us/quarter)", time, bpm, microseconds_per_quarter_note)

    def time_signature(
        self,
        numerator: int,
        denominator_exp: int,
        clocks_per_click: int,
        thirty_seconds_per_quarter: int,
        time: int,
    ) -> None:
        self._emit(
            "TimeSignature",
            "t=%d %d/%d clocks/click=%d 32nds/quarter=%d",
            time,
            numerator,
            2 ** denominator_exp,
            clocks_per_click,
            thirty_seconds_per_quarter,
        )

    def key_signature(
        self, degree: ScaleDegree, mode: KeySignatureMode, sharps_or_flats: int
    ) -> None:
        self._emit(
            "KeySignature",
            "%s %s (%+d)",
            key_name(degree, sharps_or_flats),
            mode.name.lower(),
            sharps_or_flats,
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "paths",
        nargs="+",
        help="File paths or glob patterns (quotes recommended for wildcards).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=LOG_LEVELS,
        help="DEBUG also shows lexer state transitions and skipped chunks.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    failures = 0
    for path in collect_paths(args.paths):
        try:
            lex_file(path, LoggingCallback(path.name))
        except (MidiError, OSError) as err:
            logger.error("%s: %s", path, err)
            failures += 1

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
