"""Decode MTrk events one at a time.

Every track event is a VLQ delta-time followed by a status byte and the
data that status byte calls for:

  0x8n / 0x9n / 0xAn  note off / note on / polyphonic aftertouch, 2 data bytes
  0xBn                control change, 2 data bytes
  0xCn / 0xDn         program change / channel aftertouch, 1 data byte
  0xEn                pitch wheel, 2 data bytes (LSB first)
  0xFF                meta event: command byte, VLQ length, payload
  0xF0 / 0xF7 / ...   system exclusive and other system bytes: VLQ length, payload

A data byte (high bit clear) in the status position reuses the previous
channel-voice status ("running status").  Meta and system events cancel
running status.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from .cursor import ByteCursor
from .errors import MissingStatusByte, UnexpectedEventLength
from .events import (
    ChannelAftertouch,
    ControlChange,
    CopyrightText,
    CuePointText,
    EndOfTrack,
    KeySignature,
    LyricText,
    MarkerText,
    MidiEvent,
    NoteOff,
    NoteOn,
    PitchWheel,
    PolyphonicAftertouch,
    ProgramChange,
    SequenceName,
    SequenceNumber,
    Tempo,
    Text,
    TextEvent,
    TimeSignature,
    TrackInstrumentName,
)
from .music import key_signature_from_sharps_or_flats
from .primitives import (
    parse_int8,
    parse_pitch_wheel_value,
    parse_text,
    parse_two_uint7,
    parse_uint16,
    parse_uint24,
    parse_uint7,
    parse_uint8,
    parse_var_length,
    split_status_byte,
)

logger = logging.getLogger(__name__)

MICROSECONDS_PER_MINUTE = 60_000_000

# Channel voice message types (high nibble of the status byte)
NOTE_OFF = 0x8
NOTE_ON = 0x9
POLYPHONIC_AFTERTOUCH = 0xA
CONTROL_CHANGE = 0xB
PROGRAM_CHANGE = 0xC
CHANNEL_AFTERTOUCH = 0xD
PITCH_WHEEL = 0xE
SYSTEM = 0xF

META_CHANNEL = 0xF

# Meta commands
SEQUENCE_NUMBER = 0x00
MIDI_CHANNEL_PREFIX = 0x20
MIDI_PORT = 0x21
END_OF_TRACK = 0x2F
SET_TEMPO = 0x51
TIME_SIGNATURE = 0x58
KEY_SIGNATURE = 0x59
SEQUENCER_SPECIFIC = 0x7F

# Recognised but carry nothing worth reporting.
IGNORED_META_COMMANDS = frozenset({SEQUENCER_SPECIFIC, 0xF8, 0xFA, 0xFB, 0xFC})

TEXT_EVENTS: Dict[int, Type[TextEvent]] = {
    0x01: Text,
    0x02: CopyrightText,
    0x03: SequenceName,
    0x04: TrackInstrumentName,
    0x05: LyricText,
    0x06: MarkerText,
    0x07: CuePointText,
}

_TWO_BYTE_NOTE_EVENTS = {
    NOTE_OFF: NoteOff,
    NOTE_ON: NoteOn,
    POLYPHONIC_AFTERTOUCH: PolyphonicAftertouch,
}


class TrackEventDecoder:
    """Stateful decoder for the events of one MTrk chunk.

    ``tick`` is the running absolute time, the sum of every delta-time read
    since the last :meth:`reset`.
    """

    def __init__(self, cursor: ByteCursor):
        self.cursor = cursor
        self.tick = 0
        self.running_status: int | None = None

    def reset(self) -> None:
        """Prepare for a new track."""

        self.tick = 0
        self.running_status = None

    def decode(self) -> Optional[MidiEvent]:
        """Decode exactly one event.

        Returns the decoded event, or None when the bytes consumed carry
        nothing to report (SysEx, channel prefix, sequencer data, unknown
        meta commands).
        """
        cursor = self.cursor
        self.tick += parse_var_length(cursor)

        status = cursor.read_byte()
        if status & 0x80 == 0:
            if self.running_status is None:
                raise MissingStatusByte(status)
            # The byte just read is the first data byte of this event.
            cursor.skip(-1)
            status = self.running_status

        message_type, channel = split_status_byte(status)
        if message_type == SYSTEM:
            self.running_status = None
            if channel == META_CHANNEL:
                return self._decode_meta(channel)
            self._skip_system(status)
            return None

        self.running_status = status
        return self._decode_channel_message(message_type, channel)

    def _decode_channel_message(self, message_type: int, channel: int) -> MidiEvent:
        cursor = self.cursor
        time = self.tick

        note_event = _TWO_BYTE_NOTE_EVENTS.get(message_type)
        if note_event is not None:
            pitch, value = parse_two_uint7(cursor)
            return note_event(channel, pitch, value, time)

        if message_type == CONTROL_CHANGE:
            controller, value = parse_two_uint7(cursor)
            return ControlChange(channel, controller, value, time)

        if message_type == PROGRAM_CHANGE:
            return ProgramChange(channel, parse_uint7(cursor), time)

        if message_type == CHANNEL_AFTERTOUCH:
            return ChannelAftertouch(channel, parse_uint7(cursor), time)

        relative, absolute = parse_pitch_wheel_value(cursor)
        return PitchWheel(channel, relative, absolute, time)

    def _decode_meta(self, channel: int) -> Optional[MidiEvent]:
        cursor = self.cursor
        time = self.tick
        command = parse_uint8(cursor)

        if command == SEQUENCE_NUMBER:
            # Zero-length sequence numbers are allowed: the number is implied.
            length = parse_uint8(cursor)
            if length == 0:
                return SequenceNumber(channel, 0, False, time)
            if length != 2:
                raise UnexpectedEventLength(
                    f"sequence number meta event must have length 0 or 2, got {length}"
                )
            return SequenceNumber(channel, parse_uint16(cursor), True, time)

        text_event = TEXT_EVENTS.get(command)
        if text_event is not None:
            return text_event(channel, parse_text(cursor), time)

        if command in (MIDI_CHANNEL_PREFIX, MIDI_PORT):
            self._expect_length("MIDI channel/port", 1)
            cursor.read_exact(1)
            return None

        if command == END_OF_TRACK:
            self._expect_length("end of track", 0)
            return EndOfTrack(channel, time)

        if command == SET_TEMPO:
            self._expect_length("set tempo", 3)
            microseconds = parse_uint24(cursor)
            bpm = MICROSECONDS_PER_MINUTE // microseconds if microseconds else 0
            return Tempo(bpm, microseconds, time)

        if command == TIME_SIGNATURE:
            self._expect_length("time signature", 4)
            numerator, denominator_exp, clocks, thirty_seconds = cursor.read_exact(4)
            return TimeSignature(numerator, denominator_exp, clocks, thirty_seconds, time)

        if command == KEY_SIGNATURE:
            self._expect_length("key signature", 2)
            sharps_or_flats = parse_int8(cursor)
            degree, mode = key_signature_from_sharps_or_flats(sharps_or_flats, parse_uint8(cursor))
            return KeySignature(degree, mode, sharps_or_flats, time)

        length = parse_var_length(cursor)
        if command not in IGNORED_META_COMMANDS:
            logger.debug("Skipping unknown meta command 0x%02X (%d bytes)", command, length)
        cursor.read_exact(length)
        return None

    def _skip_system(self, status: int) -> None:
        length = parse_var_length(self.cursor)
        logger.debug("Skipping system event 0x%02X (%d bytes)", status, length)
        self.cursor.read_exact(length)

    def _expect_length(self, name: str, expected: int) -> None:
        length = parse_var_length(self.cursor)
        if length != expected:
            raise UnexpectedEventLength(
                f"{name} meta event must have length {expected}, got {length}"
            )


__all__ = ["TEXT_EVENTS", "TrackEventDecoder"]
