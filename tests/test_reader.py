"""Tests for the pending-text reader."""

from __future__ import annotations

import io

import pytest

from piped_args.errors import ScanError
from piped_args.reader import PendingReader


class BrokenStream:
    def read(self, size: int = -1) -> bytes:
        raise OSError("device not ready")


def test_skip_whitespace_reports_pending_text():
    reader = PendingReader(io.BytesIO(b"   \n\t abc"))
    assert reader.skip_whitespace() is True
    assert reader.peek() == "a"


def test_skip_whitespace_at_end_of_input():
    reader = PendingReader(io.BytesIO(b"  \n "))
    assert reader.skip_whitespace() is False
    assert reader.peek() == ""


def test_take_word_across_chunks():
    reader = PendingReader(io.BytesIO(b"hello world"), chunk_size=2)
    assert reader.take_word() == "hello"
    assert reader.take_word() == "world"
    assert reader.take_word() is None


def test_multibyte_characters_split_across_chunks():
    reader = PendingReader(io.BytesIO("héllo wörld".encode()), chunk_size=1)
    assert reader.take_word() == "héllo"
    assert reader.take_word() == "wörld"


def test_invalid_utf8_is_replaced():
    reader = PendingReader(io.BytesIO(b"ab\xffcd"))
    assert reader.take_word() == "ab�cd"


def test_text_streams_are_accepted():
    reader = PendingReader(io.StringIO("one two"))
    assert reader.take_word() == "one"
    assert reader.pending == " two"


def test_pending_keeps_unconsumed_text():
    reader = PendingReader(io.BytesIO(b"abc def"))
    reader.fill()
    reader.advance_to(4)
    assert reader.pending == "def"


def test_read_failure_raises_scan_error():
    reader = PendingReader(BrokenStream())
    with pytest.raises(ScanError, match="device not ready") as exc_info:
        reader.fill()
    assert isinstance(exc_info.value.cause, OSError)


def test_closed_stream_raises_scan_error():
    stream = io.BytesIO(b"abc")
    stream.close()
    with pytest.raises(ScanError):
        PendingReader(stream).take_word()


class CountingStream:
    def __init__(self, data: bytes) -> None:
        self._inner = io.BytesIO(data)
        self.sizes: list[int] = []

    def read(self, size: int = -1) -> bytes:
        self.sizes.append(size)
        return self._inner.read(size)


def test_reads_grow_with_pending_text():
    stream = CountingStream(b"x" * 100)
    reader = PendingReader(stream, chunk_size=4)
    assert reader.take_word() == "x" * 100
    assert stream.sizes[:5] == [4, 4, 8, 16, 32]


def test_reads_stay_at_chunk_size_once_text_is_consumed():
    stream = CountingStream(b"ab cd ef gh")
    reader = PendingReader(stream, chunk_size=3)
    while reader.take_word() is not None:
        pass
    assert max(stream.sizes) <= 4
