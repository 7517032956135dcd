"""piped-args: expand command-argument templates from piped JSON or text."""

from piped_args.engine_logger import configure_logging
from piped_args.errors import (
    ExtractError,
    InvalidPipedDataError,
    PipedArgsError,
    ScanError,
    SerializationError,
    UnexpectedTypeError,
)
from piped_args.expander import expand, find_markers, lookup_marker
from piped_args.extractor import extract
from piped_args.matrix import build_matrix, input_to_commands
from piped_args.models import NIL, EngineConfig, Lookup, LookupKind, Reference
from piped_args.paths import lookup_path, resolve
from piped_args.references import parse_reference
from piped_args.rendering import render_value, truncate_value

__all__ = [
    "build_matrix",
    "configure_logging",
    "expand",
    "extract",
    "find_markers",
    "input_to_commands",
    "lookup_marker",
    "lookup_path",
    "parse_reference",
    "render_value",
    "resolve",
    "truncate_value",
    "EngineConfig",
    "ExtractError",
    "InvalidPipedDataError",
    "Lookup",
    "LookupKind",
    "NIL",
    "PipedArgsError",
    "Reference",
    "ScanError",
    "SerializationError",
    "UnexpectedTypeError",
]
