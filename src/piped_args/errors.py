"""Custom exception hierarchy for piped-args.

All exceptions inherit from PipedArgsError so callers can catch broadly
or narrowly as needed. Per-marker lookup failures are never raised; they
render as ``<nil>`` instead.
"""

from __future__ import annotations

from typing import Any


class PipedArgsError(Exception):
    """Base for all piped-args errors."""


class ExtractError(PipedArgsError):
    """Reading piped data into records failed. Aborts the whole stream."""


class InvalidPipedDataError(ExtractError):
    """An exploded array held an element that is not a JSON object."""

    def __init__(self, element: Any = None) -> None:
        self.element = element
        super().__init__("invalid piped data")


class UnexpectedTypeError(ExtractError):
    """A top-level JSON value of an unsupported type was decoded."""

    def __init__(self, type_name: str, rendered: str) -> None:
        self.type_name = type_name
        self.rendered = rendered
        super().__init__(f"unexpected type ({type_name}): {rendered}")


class ScanError(ExtractError):
    """The underlying stream could not be read."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(f"reading piped input: {message}")


class SerializationError(ExtractError):
    """A decoded value could not be re-encoded as JSON text."""
