"""Tests for the JSON-lines engine logger."""

from __future__ import annotations

import io
import json
import logging

import pytest

from piped_args import engine_logger
from piped_args.errors import InvalidPipedDataError
from piped_args.matrix import build_matrix


@pytest.fixture
def log_dir(tmp_path):
    logger = logging.getLogger("piped_args")
    before = list(logger.handlers)
    level = logger.level
    engine_logger.configure_logging(tmp_path)
    yield tmp_path
    for handler in logger.handlers[len(before):]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(level)


def _events(log_dir) -> list[dict]:
    lines = (log_dir / "piped_args.log").read_text().splitlines()
    return [json.loads(line) for line in lines]


def test_configure_creates_log_file(log_dir):
    engine_logger.log_extract_start(False)
    assert (log_dir / "piped_args.log").is_file()


def test_successful_build_logs_events(log_dir):
    build_matrix(io.BytesIO(b'c {"a":1}'), ["$1"])
    names = [e["event"] for e in _events(log_dir)]
    assert names == [
        "extract_start",
        "fallback_tokens",
        "extract_complete",
        "matrix_complete",
    ]
    complete = _events(log_dir)[-1]
    assert complete["rows"] == 2
    assert complete["templates"] == 1


def test_fallback_event_previews_tokens(log_dir):
    build_matrix(io.BytesIO(b"alpha beta"), ["$1"])
    fallback = next(e for e in _events(log_dir) if e["event"] == "fallback_tokens")
    assert fallback["count"] == 2
    assert fallback["preview"] == "alpha beta"


def test_failure_logs_error(log_dir):
    with pytest.raises(InvalidPipedDataError):
        build_matrix(io.BytesIO(b"[1]"), ["$1"], explode_arrays=True)
    last = _events(log_dir)[-1]
    assert last == {"event": "error", "error": "invalid piped data"}
