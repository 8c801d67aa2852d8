"""Standard MIDI File lexer.

The lexer walks a seekable stream chunk by chunk.  Each call to
:meth:`MidiLexer.step` performs one structural parse (the MThd header, one
chunk header, or one track event) and returns the events it produced:

  EXPECT_HEADER       -> EXPECT_CHUNK        after a valid MThd chunk
  EXPECT_CHUNK        -> EXPECT_TRACK_EVENT  on an MTrk chunk header
  EXPECT_CHUNK        -> EXPECT_CHUNK        on any other chunk (body skipped)
  EXPECT_CHUNK        -> DONE                when the stream ends cleanly
  EXPECT_TRACK_EVENT  -> EXPECT_CHUNK        on the end-of-track meta event

The stream may only end between chunks.  Running out of bytes anywhere else
raises ``UnexpectedEndOfFile``.
"""

from __future__ import annotations

import logging
import os
from enum import IntEnum
from typing import BinaryIO, Iterator, List, Union

from .chunks import HEADER_CHUNK, HEADER_DATA_SIZE, TRACK_CHUNK, parse_chunk_header, parse_header_data
from .cursor import ByteCursor
from .errors import (
    ExpectedMThd,
    MidiError,
    NoCallback,
    NoInput,
    UnexpectedEndOfFile,
    UnexpectedEventLength,
)
from .events import Began, EndOfTrack, Finished, Header, MidiEvent, MidiLexerCallback, Track
from .track import TrackEventDecoder

logger = logging.getLogger(__name__)


class LexerState(IntEnum):
    EXPECT_HEADER = 0
    EXPECT_CHUNK = 1
    EXPECT_TRACK_EVENT = 2
    DONE = 3


class MidiLexer:
    """Lex a Standard MIDI File from a seekable binary stream.

    Parameters
    ----------
    source : binary file object or ByteCursor
        Must support ``seek``; unknown chunks are skipped by seeking past
        them.  The lexer never closes it.
    callback : MidiLexerCallback, optional
        Receives events from :meth:`next` and :meth:`lex`.  Not needed
        when consuming :meth:`events` directly.
    """

    def __init__(
        self,
        source: Union[BinaryIO, ByteCursor, None],
        callback: MidiLexerCallback | None = None,
    ):
        self.callback = callback
        if source is None or isinstance(source, ByteCursor):
            self.cursor = source
        else:
            self.cursor = ByteCursor(source)
        self.state = LexerState.EXPECT_HEADER
        # Absolute offset just past the current chunk's body.
        self.next_chunk_boundary = 0
        self._decoder = TrackEventDecoder(self.cursor) if self.cursor is not None else None

    @property
    def tick(self) -> int:
        """Absolute tick position within the current track."""

        return self._decoder.tick if self._decoder is not None else 0

    def step(self) -> List[MidiEvent]:
        """Perform one unit of work and return the events it produced."""

        if self.cursor is None:
            raise NoInput()

        previous = self.state
        if previous is LexerState.EXPECT_HEADER:
            events = self._lex_header()
        elif previous is LexerState.EXPECT_CHUNK:
            events = self._lex_chunk()
        elif previous is LexerState.EXPECT_TRACK_EVENT:
            events = self._lex_track_event()
        else:
            events = []

        if self.state is not previous:
            logger.debug("Lexer state %s -> %s", previous.name, self.state.name)
        return events

    def next(self) -> bool:
        """Step once, delivering events to the callback.

        Returns True once the end of the file has been reached cleanly.
        """
        if self.callback is None:
            raise NoCallback()
        for event in self.step():
            event.deliver(self.callback)
        return self.state is LexerState.DONE

    def lex(self) -> None:
        """Run to the end of the file, delivering every event to the callback.

        The first error aborts lexing: ``callback.error_reading()`` is called
        and the error is re-raised unchanged.
        """
        if self.callback is None:
            raise NoCallback()
        if self.cursor is None:
            raise NoInput()

        try:
            while not self.next():
                pass
        except (MidiError, OSError):
            self.callback.error_reading()
            raise

    def events(self) -> Iterator[MidiEvent]:
        """Yield every event until the end of the file."""

        while self.state is not LexerState.DONE:
            yield from self.step()

    def _lex_header(self) -> List[MidiEvent]:
        cursor = self.cursor
        chunk = parse_chunk_header(cursor)
        if chunk.chunk_type != HEADER_CHUNK:
            raise ExpectedMThd(chunk.chunk_type)
        if chunk.length < HEADER_DATA_SIZE:
            raise UnexpectedEventLength(
                f"MThd chunk must be at least {HEADER_DATA_SIZE} bytes, got {chunk.length}"
            )

        data = parse_header_data(cursor)
        # Later revisions of the format may append fields to MThd.
        if chunk.length > HEADER_DATA_SIZE:
            cursor.skip(chunk.length - HEADER_DATA_SIZE)

        self.state = LexerState.EXPECT_CHUNK
        return [Began(), Header(data)]

    def _lex_chunk(self) -> List[MidiEvent]:
        cursor = self.cursor
        start = cursor.tell()
        try:
            chunk = parse_chunk_header(cursor)
        except UnexpectedEndOfFile:
            # Only a stream that ends exactly on a chunk boundary is complete.
            if cursor.tell() != start:
                raise
            self.state = LexerState.DONE
            return [Finished()]

        self.next_chunk_boundary = cursor.tell() + chunk.length
        if chunk.chunk_type == TRACK_CHUNK:
            self._decoder.reset()
            self.state = LexerState.EXPECT_TRACK_EVENT
        else:
            logger.debug("Skipping %r chunk of %d bytes", chunk.tag, chunk.length)
            cursor.skip(chunk.length)
        return [Track(chunk)]

    def _lex_track_event(self) -> List[MidiEvent]:
        event = self._decoder.decode()
        if event is None:
            return []
        if isinstance(event, EndOfTrack):
            self.state = LexerState.EXPECT_CHUNK
        return [event]


def lex_file(path: Union[str, os.PathLike], callback: MidiLexerCallback) -> None:
    """Open ``path`` and lex it into ``callback``.

    A file that cannot be opened is reported through
    ``callback.error_opening_file()`` before the ``OSError`` propagates.
    """
    if callback is None:
        raise NoCallback()
    try:
        handle = open(path, "rb")
    except OSError:
        callback.error_opening_file()
        raise
    with handle:
        MidiLexer(handle, callback).lex()


def read_events(path: Union[str, os.PathLike]) -> List[MidiEvent]:
    """Decode every event of the file at ``path``."""

    with open(path, "rb") as handle:
        return list(MidiLexer(handle).events())


__all__ = ["LexerState", "MidiLexer", "lex_file", "read_events"]
