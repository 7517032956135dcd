"""Matrix builder: the main orchestrator.

Extracts records from the piped stream and expands every argument
template against each record, producing one row of arguments per
record. The caller runs one command per row, in row order.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import IO, AnyStr

from piped_args import engine_logger
from piped_args.errors import PipedArgsError
from piped_args.expander import expand
from piped_args.extractor import extract
from piped_args.models import EngineConfig


def build_matrix(
    stream: IO[AnyStr],
    templates: Sequence[str],
    explode_arrays: bool = False,
    *,
    config: EngineConfig | None = None,
) -> list[list[str]]:
    """Turn piped input plus argument templates into argument rows.

    1. Extracts records from *stream* (JSON values or plain words).
    2. With no records at all, returns the templates untouched as the
       only row, so a command run without piped input behaves normally.
    3. Otherwise expands each template against each record.

    Args:
        stream: File-like object holding the piped data (e.g. stdin).
        templates: Argument templates containing ``$N`` markers.
        explode_arrays: Give each object of a top-level JSON array its
            own row.
        config: Engine settings; defaults apply when omitted.

    Returns:
        Rows in record order; each row has one entry per template, in
        template order.

    Raises:
        ExtractError: If the piped data cannot be split into records.
            No partial matrix is returned.
    """
    start = time.monotonic()

    try:
        records = extract(stream, explode_arrays, config=config)
    except PipedArgsError as e:
        engine_logger.log_error(str(e))
        raise

    if not records:
        rows = [list(templates)]
    else:
        rows = [
            [expand(record, template) for template in templates]
            for record in records
        ]

    duration_ms = (time.monotonic() - start) * 1000
    engine_logger.log_matrix_complete(len(rows), len(templates), duration_ms)
    return rows


def input_to_commands(
    stream: IO[AnyStr],
    templates: Sequence[str],
    explode_arrays: bool = False,
    *,
    config: EngineConfig | None = None,
) -> list[list[str]]:
    """Alias of ``build_matrix`` under the name request executors use."""
    return build_matrix(stream, templates, explode_arrays, config=config)
