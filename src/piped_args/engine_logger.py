"""Structured JSON logging for transform runs.

Writes JSON-lines to disk so the shape of piped input (how many records,
where plain-text recovery kicked in) can be debugged after the fact.
Each log entry is a single JSON object on one line. Nothing is emitted
until ``configure_logging`` attaches a handler.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

_logger = logging.getLogger("piped_args")

_PREVIEW_CHARS = 200


def configure_logging(
    log_dir: str | Path, level: int = logging.DEBUG
) -> None:
    """Set up engine logging to write JSON-lines to a file.

    Args:
        log_dir: Directory to write ``piped_args.log`` into.
        level: Logging level (default: DEBUG).
    """
    log_path = Path(log_dir) / "piped_args.log"
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(str(log_path))
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    _logger.addHandler(handler)
    _logger.setLevel(level)


def _log(event: dict[str, Any], level: int = logging.INFO) -> None:
    _logger.log(level, json.dumps(event, default=str))


def log_extract_start(explode_arrays: bool) -> None:
    _log({"event": "extract_start", "explode_arrays": explode_arrays})


def log_fallback(tokens: list[str]) -> None:
    _log(
        {
            "event": "fallback_tokens",
            "count": len(tokens),
            "preview": " ".join(tokens)[:_PREVIEW_CHARS],
        },
        level=logging.DEBUG,
    )


def log_extract_complete(record_count: int) -> None:
    _log({"event": "extract_complete", "records": record_count})


def log_matrix_complete(
    row_count: int, template_count: int, duration_ms: float
) -> None:
    _log({
        "event": "matrix_complete",
        "rows": row_count,
        "templates": template_count,
        "duration_ms": round(duration_ms, 2),
    })


def log_error(error: str) -> None:
    _log({"event": "error", "error": error[:_PREVIEW_CHARS]}, level=logging.ERROR)
