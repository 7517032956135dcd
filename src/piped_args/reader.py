"""Rewindable reader over a piped byte stream.

The extractor needs to look at text it has not committed to yet: a JSON
decode attempt may fail halfway through, and the bytes it looked at must
still be there for the plain-text tokenizer. ``PendingReader`` keeps
everything read but not yet consumed in one buffer, so the pending text
and the unread rest of the stream always behave as one continuous input.
"""

from __future__ import annotations

import codecs
import re
from typing import IO, AnyStr

from piped_args.errors import ScanError

_WHITESPACE = re.compile(r"\s*")
_WORD = re.compile(r"\S+")


class PendingReader:
    """Buffered view of a stream with an explicit consume position."""

    def __init__(self, stream: IO[AnyStr], chunk_size: int = 65536) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._pos = 0
        self.eof = False

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def pending(self) -> str:
        """Text read from the stream but not consumed yet."""
        return self._buffer[self._pos :]

    def at_end_of_buffer(self, index: int) -> bool:
        return index >= len(self._buffer)

    def peek(self) -> str:
        if self._pos < len(self._buffer):
            return self._buffer[self._pos]
        return ""

    def advance_to(self, index: int) -> None:
        self._pos = min(index, len(self._buffer))

    def fill(self) -> bool:
        """Read one more chunk into the buffer.

        A chunk is at least as large as the text already pending, so a
        value that keeps failing to decode is retried over a buffer that
        doubles each time rather than growing by a fixed step.

        Returns:
            False once the stream is exhausted, True otherwise.

        Raises:
            ScanError: If the underlying stream fails to read.
        """
        if self.eof:
            return False
        size = max(self._chunk_size, len(self._buffer) - self._pos)
        try:
            chunk = self._stream.read(size)
        except (OSError, ValueError) as e:
            raise ScanError(str(e), cause=e) from e

        if not chunk:
            self.eof = True
            tail = self._decoder.decode(b"", final=True)
            self._append(tail)
            return bool(tail)

        if isinstance(chunk, str):
            self._append(chunk)
        else:
            self._append(self._decoder.decode(chunk))
        return True

    def skip_whitespace(self) -> bool:
        """Consume whitespace, reading more as needed.

        Returns:
            True if non-whitespace text is pending, False at end of input.
        """
        while True:
            match = _WHITESPACE.match(self._buffer, self._pos)
            self._pos = match.end()
            if self._pos < len(self._buffer):
                return True
            if not self.fill():
                return False

    def take_word(self) -> str | None:
        """Consume and return the next whitespace-delimited word.

        A word that reaches the end of the buffer may continue in the
        next chunk, so the buffer is refilled before the word is cut.
        """
        if not self.skip_whitespace():
            return None
        while True:
            match = _WORD.match(self._buffer, self._pos)
            if match.end() == len(self._buffer) and self.fill():
                continue
            self._pos = match.end()
            return match.group()

    def _append(self, text: str) -> None:
        if not text:
            return
        # Drop consumed text so the buffer only holds what is pending.
        self._buffer = self._buffer[self._pos :] + text
        self._pos = 0
