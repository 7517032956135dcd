"""Pydantic models for references, lookup results and engine settings.

All data structures live here. No business logic, just shapes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

NIL = "<nil>"


# ── Substitution references ──────────────────────────────────────


class Reference(BaseModel):
    """Parsed meaning of a marker name: which field, and where inside it."""

    model_config = ConfigDict(frozen=True)

    position: int
    path: str = ""


class LookupKind(str, Enum):
    OK = "ok"
    OUT_OF_RANGE = "out_of_range"
    PARSE_FAILED = "parse_failed"
    PATH_MISSING = "path_missing"


class Lookup(BaseModel):
    """Tagged result of resolving one marker.

    Every failure kind renders as the same ``<nil>`` text, so callers that
    only care about output use ``text`` and tests can still tell the
    causes apart through ``kind``.
    """

    model_config = ConfigDict(frozen=True)

    kind: LookupKind
    value: str | None = None

    @classmethod
    def ok(cls, value: str) -> Lookup:
        return cls(kind=LookupKind.OK, value=value)

    @classmethod
    def failed(cls, kind: LookupKind) -> Lookup:
        return cls(kind=kind)

    @property
    def text(self) -> str:
        if self.kind is LookupKind.OK and self.value is not None:
            return self.value
        return NIL


# ── Engine settings ──────────────────────────────────────────────


class EngineConfig(BaseModel):
    """Fixed per-engine settings. Never mutated while a stream is read."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    truncation_length: int = Field(default=512, gt=0)
    chunk_size: int = Field(default=65536, gt=0)
