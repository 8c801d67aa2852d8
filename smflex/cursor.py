"""Seekable byte source used by every decoder."""

from __future__ import annotations

import io
from typing import BinaryIO

from .errors import NoInput, NotSeekable, UnexpectedEndOfFile


class ByteCursor:
    """Read exact byte counts from a seekable binary stream.

    The cursor does not own the stream and never closes it.  Reads are not
    retried: a short read means the stream is exhausted.
    """

    __slots__ = ("_source",)

    def __init__(self, source: BinaryIO):
        if source is None:
            raise NoInput()
        seekable = getattr(source, "seekable", None)
        if seekable is None or not seekable():
            raise NotSeekable()
        self._source = source

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteCursor":
        return cls(io.BytesIO(data))

    def tell(self) -> int:
        return self._source.tell()

    def read_exact(self, size: int) -> bytes:
        if size < 0:
            raise ValueError("Size must be non-negative.")
        data = self._source.read(size)
        if len(data) < size:
            raise UnexpectedEndOfFile(size, len(data))
        return data

    def read_byte(self) -> int:
        return self.read_exact(1)[0]

    def skip(self, offset: int) -> int:
        """Move ``offset`` bytes from the current position; return the new position.

        Skipping forward past the end of the stream raises
        ``UnexpectedEndOfFile`` and leaves the position unchanged.
        """
        if offset > 0:
            position = self._source.tell()
            end = self._source.seek(0, io.SEEK_END)
            self._source.seek(position)
            if position + offset > end:
                raise UnexpectedEndOfFile(offset, end - position)
        return self._source.seek(offset, io.SEEK_CUR)


__all__ = ["ByteCursor"]
