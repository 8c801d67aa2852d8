"""Decoded SMF events and the callback interface that receives them.

Each event kind is a frozen dataclass.  The lexer can hand them out one by
one (``MidiLexer.events()``) or push them into a :class:`MidiLexerCallback`
through ``event.deliver(callback)``, which invokes the method of the same
name on the callback.

``time`` on every in-track event is the absolute tick position since the
start of the current track.
"""

from __future__ import annotations

from dataclasses import dataclass

from .chunks import ChunkHeader, HeaderData
from .music import KeySignatureMode, ScaleDegree


class MidiLexerCallback:
    """Receives lexer events.  Every method is a no-op; override what you need."""

    # Stream lifecycle

    def began(self) -> None:
        pass

    def finished(self) -> None:
        pass

    def error_reading(self) -> None:
        pass

    def error_opening_file(self) -> None:
        pass

    def header(self, data: HeaderData) -> None:
        pass

    def track(self, header: ChunkHeader) -> None:
        """A chunk header was read (usually MTrk; unknown chunks are reported too)."""

    # Channel voice messages

    def note_off(self, channel: int, pitch: int, velocity: int, time: int) -> None:
        pass

    def note_on(self, channel: int, pitch: int, velocity: int, time: int) -> None:
        pass

    def polyphonic_aftertouch(self, channel: int, pitch: int, pressure: int, time: int) -> None:
        pass

    def control_change(self, channel: int, controller: int, value: int, time: int) -> None:
        pass

    def program_change(self, channel: int, program: int, time: int) -> None:
        pass

    def channel_aftertouch(self, channel: int, value: int, time: int) -> None:
        pass

    def pitch_wheel(self, channel: int, relative: int, absolute: int, time: int) -> None:
        pass

    # Meta events

    def sequence_number(self, channel: int, number: int, number_given: bool, time: int) -> None:
        pass

    def text(self, channel: int, text: bytes, time: int) -> None:
        pass

    def copyright_text(self, channel: int, text: bytes, time: int) -> None:
        pass

    def sequence_name(self, channel: int, text: bytes, time: int) -> None:
        pass

    def track_instrument_name(self, channel: int, text: bytes, time: int) -> None:
        pass

    def lyric_text(self, channel: int, text: bytes, time: int) -> None:
        pass

    def marker_text(self, channel: int, text: bytes, time: int) -> None:
        pass

    def cue_point_text(self, channel: int, text: bytes, time: int) -> None:
        pass

    def end_of_track(self, channel: int, time: int) -> None:
        pass

    def tempo(self, bpm: int, microseconds_per_quarter_note: int, time: int) -> None:
        pass

    def time_signature(
        self,
        numerator: int,
        denominator_exp: int,
        clocks_per_click: int,
        thirty_seconds_per_quarter: int,
        time: int,
    ) -> None:
        pass

    def key_signature(
        self, degree: ScaleDegree, mode: KeySignatureMode, sharps_or_flats: int
    ) -> None:
        pass


class MidiEvent:
    def deliver(self, callback: MidiLexerCallback) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class Began(MidiEvent):
    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.began()


@dataclass(frozen=True)
class Finished(MidiEvent):
    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.finished()


@dataclass(frozen=True)
class Header(MidiEvent):
    data: HeaderData

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.header(self.data)


@dataclass(frozen=True)
class Track(MidiEvent):
    header: ChunkHeader

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.track(self.header)


@dataclass(frozen=True)
class NoteOff(MidiEvent):
    channel: int
    pitch: int
    velocity: int
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.note_off(self.channel, self.pitch, self.velocity, self.time)


@dataclass(frozen=True)
class NoteOn(MidiEvent):
    channel: int
    pitch: int
    velocity: int
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.note_on(self.channel, self.pitch, self.velocity, self.time)


@dataclass(frozen=True)
class PolyphonicAftertouch(MidiEvent):
    channel: int
    pitch: int
    pressure: int
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.polyphonic_aftertouch(self.channel, self.pitch, self.pressure, self.time)


@dataclass(frozen=True)
class ControlChange(MidiEvent):
    channel: int
    controller: int
    value: int
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.control_change(self.channel, self.controller, self.value, self.time)


@dataclass(frozen=True)
class ProgramChange(MidiEvent):
    channel: int
    program: int
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.program_change(self.channel, self.program, self.time)


@dataclass(frozen=True)
class ChannelAftertouch(MidiEvent):
    channel: int
    value: int
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.channel_aftertouch(self.channel, self.value, self.time)


@dataclass(frozen=True)
class PitchWheel(MidiEvent):
    channel: int
    relative: int  # -0x2000..0x1FFF, 0 is centre
    absolute: int  # raw 14-bit value
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.pitch_wheel(self.channel, self.relative, self.absolute, self.time)


@dataclass(frozen=True)
class SequenceNumber(MidiEvent):
    channel: int
    number: int
    number_given: bool
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.sequence_number(self.channel, self.number, self.number_given, self.time)


@dataclass(frozen=True)
class TextEvent(MidiEvent):
    """Shared shape of the text-family meta events (0x01-0x07)."""

    channel: int
    text: bytes
    time: int

    def decoded(self, encoding: str = "latin-1") -> str:
        return self.text.decode(encoding)


@dataclass(frozen=True)
class Text(TextEvent):
    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.text(self.channel, self.text, self.time)


@dataclass(frozen=True)
class CopyrightText(TextEvent):
    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.copyright_text(self.channel, self.text, self.time)


@dataclass(frozen=True)
class SequenceName(TextEvent):
    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.sequence_name(self.channel, self.text, self.time)


@dataclass(frozen=True)
class TrackInstrumentName(TextEvent):
    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.track_instrument_name(self.channel, self.text, self.time)


@dataclass(frozen=True)
class LyricText(TextEvent):
    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.lyric_text(self.channel, self.text, self.time)


@dataclass(frozen=True)
class MarkerText(TextEvent):
    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.marker_text(self.channel, self.text, self.time)


@dataclass(frozen=True)
class CuePointText(TextEvent):
    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.cue_point_text(self.channel, self.text, self.time)


@dataclass(frozen=True)
class EndOfTrack(MidiEvent):
    channel: int
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.end_of_track(self.channel, self.time)


@dataclass(frozen=True)
class Tempo(MidiEvent):
    bpm: int
    microseconds_per_quarter_note: int
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.tempo(self.bpm, self.microseconds_per_quarter_note, self.time)


@dataclass(frozen=True)
class TimeSignature(MidiEvent):
    numerator: int
    denominator_exp: int  # denominator is 2 ** denominator_exp
    clocks_per_click: int
    thirty_seconds_per_quarter: int
    time: int

    @property
    def denominator(self) -> int:
        return 2 ** self.denominator_exp

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.time_signature(
            self.numerator,
            self.denominator_exp,
            self.clocks_per_click,
            self.thirty_seconds_per_quarter,
            self.time,
        )


@dataclass(frozen=True)
class KeySignature(MidiEvent):
    degree: ScaleDegree
    mode: KeySignatureMode
    sharps_or_flats: int
    time: int

    def deliver(self, callback: MidiLexerCallback) -> None:
        callback.key_signature(self.degree, self.mode, self.sharps_or_flats)


__all__ = [
    "Began",
    "ChannelAftertouch",
    "ControlChange",
    "CopyrightText",
    "CuePointText",
    "EndOfTrack",
    "Finished",
    "Header",
    "KeySignature",
    "LyricText",
    "MarkerText",
    "MidiEvent",
    "MidiLexerCallback",
    "NoteOff",
    "NoteOn",
    "PitchWheel",
    "PolyphonicAftertouch",
    "ProgramChange",
    "SequenceName",
    "SequenceNumber",
    "Tempo",
    "Text",
    "TextEvent",
    "TimeSignature",
    "Track",
    "TrackInstrumentName",
]
