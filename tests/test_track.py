"""Tests for single-event track decoding."""

from __future__ import annotations

import pytest

from helpers import vlq
from smflex.cursor import ByteCursor
from smflex.errors import (
    InvalidKeySignature,
    MissingStatusByte,
    UnexpectedEndOfFile,
    UnexpectedEventLength,
)
from smflex.events import (
    ChannelAftertouch,
    ControlChange,
    CopyrightText,
    CuePointText,
    EndOfTrack,
    KeySignature,
    LyricText,
    MarkerText,
    NoteOff,
    NoteOn,
    PitchWheel,
    PolyphonicAftertouch,
    ProgramChange,
    SequenceName,
    SequenceNumber,
    Tempo,
    Text,
    TimeSignature,
    TrackInstrumentName,
)
from smflex.music import KeySignatureMode, ScaleDegree
from smflex.track import TrackEventDecoder


def decoder(data: bytes) -> TrackEventDecoder:
    return TrackEventDecoder(ByteCursor.from_bytes(data))


def decode_all(data: bytes) -> list:
    dec = decoder(data)
    events = []
    while dec.cursor.tell() < len(data):
        events.append(dec.decode())
    return events


# ── channel voice messages ─────────────────────────────────────────


class TestChannelMessages:
    def test_note_off(self):
        assert decoder(bytes.fromhex("40 85 04 03")).decode() == NoteOff(5, 4, 3, 0x40)

    def test_note_on(self):
        assert decoder(bytes.fromhex("40 95 04 03")).decode() == NoteOn(5, 4, 3, 0x40)

    def test_polyphonic_aftertouch(self):
        event = decoder(bytes.fromhex("40 A5 04 03")).decode()
        assert event == PolyphonicAftertouch(channel=5, pitch=4, pressure=3, time=0x40)

    def test_control_change(self):
        event = decoder(bytes.fromhex("10 B2 07 64")).decode()
        assert event == ControlChange(channel=2, controller=7, value=100, time=0x10)

    def test_program_change(self):
        assert decoder(bytes.fromhex("00 CA 18")).decode() == ProgramChange(10, 0x18, 0)

    def test_channel_aftertouch(self):
        event = decoder(bytes.fromhex("40 D8 56")).decode()
        assert event == ChannelAftertouch(channel=8, value=0x56, time=0x40)

    def test_data_bytes_are_masked_to_seven_bits(self):
        assert decoder(bytes.fromhex("00 90 BC C0")).decode() == NoteOn(0, 0x3C, 0x40, 0)

    def test_pitch_wheel_sequence_accumulates_time(self):
        data = bytes.fromhex(
            "10 E9 00 40"  # centre
            "20 E8 34 24"  # 0x1234
            "50 E7 00 40"
        )
        assert decode_all(data) == [
            PitchWheel(channel=9, relative=0, absolute=0x2000, time=0x10),
            PitchWheel(channel=8, relative=-0xDCC, absolute=0x1234, time=0x30),
            PitchWheel(channel=7, relative=0, absolute=0x2000, time=0x80),
        ]

    def test_truncated_data_bytes(self):
        with pytest.raises(UnexpectedEndOfFile):
            decoder(bytes.fromhex("00 90 3C")).decode()

    def test_truncated_delta_time(self):
        with pytest.raises(UnexpectedEndOfFile):
            decoder(bytes.fromhex("81")).decode()


class TestRunningStatus:
    def test_status_byte_is_reused(self):
        events = decode_all(bytes.fromhex("00 90 3C 40 10 3E 40 10 3C 00"))
        assert events == [
            NoteOn(0, 0x3C, 0x40, 0),
            NoteOn(0, 0x3E, 0x40, 0x10),
            NoteOn(0, 0x3C, 0x00, 0x20),
        ]

    def test_single_data_byte_messages(self):
        events = decode_all(bytes.fromhex("00 C3 01 05 02"))
        assert events == [ProgramChange(3, 1, 0), ProgramChange(3, 2, 5)]

    def test_without_prior_status(self):
        with pytest.raises(MissingStatusByte) as excinfo:
            decoder(bytes.fromhex("00 3C 40")).decode()
        assert excinfo.value.data_byte == 0x3C

    def test_meta_event_cancels_running_status(self):
        dec = decoder(bytes.fromhex("00 90 3C 40 00 FF 01 00 00 3C 40"))
        dec.decode()
        dec.decode()
        with pytest.raises(MissingStatusByte):
            dec.decode()

    def test_sysex_cancels_running_status(self):
        dec = decoder(bytes.fromhex("00 90 3C 40 00 F0 02 7E F7 00 3C 40"))
        dec.decode()
        assert dec.decode() is None
        with pytest.raises(MissingStatusByte):
            dec.decode()

    def test_reset_clears_running_status_and_time(self):
        dec = decoder(bytes.fromhex("20 90 3C 40 00 3C 40"))
        dec.decode()
        dec.reset()
        assert dec.tick == 0
        with pytest.raises(MissingStatusByte):
            dec.decode()


# ── meta events ────────────────────────────────────────────────────


class TestMetaEvents:
    def test_sequence_number_not_given(self):
        event = decoder(bytes.fromhex("09 FF 00 00")).decode()
        assert event == SequenceNumber(channel=0xF, number=0, number_given=False, time=9)

    def test_sequence_number_given(self):
        event = decoder(bytes.fromhex("09 FF 00 02 A7 C5")).decode()
        assert event == SequenceNumber(channel=0xF, number=42949, number_given=True, time=9)

    def test_sequence_number_bad_length(self):
        with pytest.raises(UnexpectedEventLength):
            decoder(bytes.fromhex("00 FF 00 01 05")).decode()

    @pytest.mark.parametrize(
        ("command", "event_type"),
        [
            (0x01, Text),
            (0x02, CopyrightText),
            (0x03, SequenceName),
            (0x04, TrackInstrumentName),
            (0x05, LyricText),
            (0x06, MarkerText),
            (0x07, CuePointText),
        ],
    )
    def test_text_family(self, command, event_type):
        payload = b"joe@afandian.com"
        data = bytes([0x09, 0xFF, command]) + vlq(len(payload)) + payload
        event = decoder(data).decode()
        assert type(event) is event_type
        assert event.text == payload
        assert event.time == 9
        assert event.channel == 0xF
        assert event.decoded() == "joe@afandian.com"

    def test_long_text_uses_multi_byte_length(self):
        payload = bytes(range(32, 127)) * 2
        data = b"\x00\xFF\x01" + vlq(len(payload)) + payload
        assert decoder(data).decode().text == payload

    def test_end_of_track(self):
        assert decoder(bytes.fromhex("09 FF 2F 00")).decode() == EndOfTrack(channel=0xF, time=9)

    def test_end_of_track_with_payload(self):
        with pytest.raises(UnexpectedEventLength):
            decoder(bytes.fromhex("09 FF 2F 01 00")).decode()

    def test_tempo(self):
        # 500000 us per quarter note
        event = decoder(bytes.fromhex("00 FF 51 03 07 A1 20")).decode()
        assert event == Tempo(bpm=120, microseconds_per_quarter_note=500000, time=0)

    def test_tempo_rounds_down(self):
        event = decoder(bytes.fromhex("00 FF 51 03 09 27 C0")).decode()  # 600000
        assert event.bpm == 100
        event = decoder(bytes.fromhex("00 FF 51 03 07 0B 0E")).decode()  # 461582
        assert event.bpm == 129

    def test_zero_tempo(self):
        assert decoder(bytes.fromhex("00 FF 51 03 00 00 00")).decode().bpm == 0

    def test_tempo_bad_length(self):
        with pytest.raises(UnexpectedEventLength) as excinfo:
            decoder(bytes.fromhex("00 FF 51 04 00 07 A1 20")).decode()
        assert "set tempo" in excinfo.value.message

    def test_time_signature(self):
        event = decoder(bytes.fromhex("60 FF 58 04 06 03 24 08")).decode()
        assert event == TimeSignature(
            numerator=6,
            denominator_exp=3,
            clocks_per_click=36,
            thirty_seconds_per_quarter=8,
            time=0x60,
        )
        assert event.denominator == 8

    def test_time_signature_bad_length(self):
        with pytest.raises(UnexpectedEventLength):
            decoder(bytes.fromhex("00 FF 58 03 04 02 18")).decode()

    def test_key_signature_flats(self):
        event = decoder(bytes.fromhex("00 FF 59 02 FD 00")).decode()
        assert event == KeySignature(ScaleDegree.E_FLAT, KeySignatureMode.MAJOR, -3, 0)

    def test_key_signature_sharps_minor(self):
        event = decoder(bytes.fromhex("00 FF 59 02 03 01")).decode()
        assert event.degree is ScaleDegree.F_SHARP
        assert event.mode is KeySignatureMode.MINOR
        assert event.sharps_or_flats == 3

    def test_key_signature_bad_length(self):
        with pytest.raises(UnexpectedEventLength):
            decoder(bytes.fromhex("00 FF 59 03 00 00 00")).decode()

    def test_key_signature_out_of_range(self):
        with pytest.raises(InvalidKeySignature):
            decoder(bytes.fromhex("00 FF 59 02 09 00")).decode()

    @pytest.mark.parametrize("command", [0x20, 0x21])
    def test_channel_and_port_prefix_are_consumed(self, command):
        data = bytes([0x00, 0xFF, command, 0x01, 0x03]) + bytes.fromhex("05 90 3C 40")
        dec = decoder(data)
        assert dec.decode() is None
        assert dec.decode() == NoteOn(0, 0x3C, 0x40, 5)

    def test_channel_prefix_bad_length(self):
        with pytest.raises(UnexpectedEventLength):
            decoder(bytes.fromhex("00 FF 20 02 00 00")).decode()

    @pytest.mark.parametrize("command", [0x7F, 0xF8, 0xFA, 0xFB, 0xFC, 0x0A, 0x54, 0x60])
    def test_other_meta_commands_are_skipped(self, command):
        data = bytes([0x00, 0xFF, command, 0x03, 0x01, 0x02, 0x03]) + bytes.fromhex("07 80 3C 00")
        dec = decoder(data)
        assert dec.decode() is None
        assert dec.decode() == NoteOff(0, 0x3C, 0, 7)

    def test_truncated_meta_payload(self):
        with pytest.raises(UnexpectedEndOfFile):
            decoder(bytes.fromhex("00 FF 7F 05 01 02")).decode()


class TestSystemEvents:
    @pytest.mark.parametrize("status", [0xF0, 0xF7])
    def test_sysex_is_skipped(self, status):
        data = bytes([0x00, status, 0x03, 0x01, 0x02, 0xF7]) + bytes.fromhex("00 B0 07 7F")
        dec = decoder(data)
        assert dec.decode() is None
        assert dec.decode() == ControlChange(0, 7, 127, 0)

    def test_skipped_events_still_advance_time(self):
        data = bytes.fromhex("10 F0 01 F7 20 90 3C 40")
        assert decode_all(data) == [None, NoteOn(0, 0x3C, 0x40, 0x30)]
