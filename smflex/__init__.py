"""Lexer for Standard MIDI Files."""

from .chunks import (  # noqa: F401
    HEADER_CHUNK,
    SEQUENTIAL_TRACKS,
    SIMULTANEOUS_TRACKS,
    SINGLE_MULTI_CHANNEL_TRACK,
    TRACK_CHUNK,
    ChunkHeader,
    HeaderData,
    MetricalDivision,
    TimeFormat,
    TimecodeDivision,
    parse_chunk_header,
    parse_header_data,
)
from .cursor import ByteCursor  # noqa: F401
from .errors import (  # noqa: F401
    ConfigurationError,
    ExpectedMThd,
    InvalidKeySignature,
    MidiError,
    MissingStatusByte,
    NoCallback,
    NoInput,
    NotSeekable,
    UnexpectedEndOfFile,
    UnexpectedEventLength,
    UnsupportedFormat,
    VarLengthTooLong,
)
from .events import (  # noqa: F401
    Began,
    ChannelAftertouch,
    ControlChange,
    CopyrightText,
    CuePointText,
    EndOfTrack,
    Finished,
    Header,
    KeySignature,
    LyricText,
    MarkerText,
    MidiEvent,
    MidiLexerCallback,
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
    Track,
    TrackInstrumentName,
)
from .lexer import LexerState, MidiLexer, lex_file, read_events  # noqa: F401
from .music import KeySignatureMode, ScaleDegree, key_signature_from_sharps_or_flats  # noqa: F401
from .track import TrackEventDecoder  # noqa: F401
