"""Errors raised while lexing a Standard MIDI File.

Everything the decoder raises for malformed input derives from
:class:`MidiError`, which is a ``ValueError`` so callers that already guard
parsing with ``except ValueError`` keep working.  Missing or unsuitable
collaborators are reported separately through :class:`ConfigurationError`
before any byte is read.
"""

from __future__ import annotations


class MidiError(ValueError):
    """Base class for malformed or truncated SMF data."""


class UnexpectedEndOfFile(MidiError):
    """The stream ended before a field could be read in full."""

    def __init__(self, requested: int, received: int = 0) -> None:
        self.requested = requested
        self.received = received
        super().__init__(
            f"Unexpected end of file: needed {requested} byte(s), got {received}."
        )


class ExpectedMThd(MidiError):
    def __init__(self, chunk_type: bytes) -> None:
        self.chunk_type = chunk_type
        super().__init__(f"Expected SMF header chunk 'MThd', found {chunk_type!r}.")


class UnsupportedFormat(MidiError):
    def __init__(self, smf_format: int) -> None:
        self.smf_format = smf_format
        super().__init__(f"Unsupported SMF format {smf_format} (expected 0, 1 or 2).")


class UnexpectedEventLength(MidiError):
    """A fixed-size event or chunk declared a length it cannot have."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidKeySignature(MidiError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class VarLengthTooLong(MidiError):
    def __init__(self, max_bytes: int) -> None:
        self.max_bytes = max_bytes
        super().__init__(
            f"Variable-length quantity continues past {max_bytes} bytes."
        )


class MissingStatusByte(MidiError):
    def __init__(self, data_byte: int) -> None:
        self.data_byte = data_byte
        super().__init__(
            f"Data byte 0x{data_byte:02X} found where a status byte was expected "
            "and no running status is in effect."
        )


class ConfigurationError(Exception):
    """The lexer was set up without a usable input or callback."""


class NoCallback(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("No callback supplied.")


class NoInput(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("No seekable input supplied.")


class NotSeekable(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Input must support seeking; wrap it in io.BytesIO first.")
