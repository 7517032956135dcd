"""JSON path resolver for ``$1.user.id`` style markers.

A path is a dot-separated list of segments walked over decoded JSON:

    user.id      field ``id`` of field ``user``
    items.0.sku  field ``sku`` of the first element of ``items``
    200          field ``"200"`` when the value is an object

On an object every segment is a key, digits included. On an array an
integer segment indexes it (negative from the end); any other segment
applies the rest of the path to each element and collects the non-null
results into a list, so the result over an array is always a list:

    [{"a":"c"},{"a":"d"}]  a  ->  [c d]
    [{"a":"c"}]            a  ->  [c]
    {"a":[{"b":[1,2]},{"b":[3]}]}  a.b  ->  [[1 2] [3]]
"""

from __future__ import annotations

import json
import re
from typing import Any

from piped_args.models import Lookup, LookupKind
from piped_args.rendering import render_value

_INTEGER = re.compile(r"-?[0-9]+")

_MISSING = object()


def _walk(value: Any, segments: list[str]) -> Any:
    for i, segment in enumerate(segments):
        if isinstance(value, dict):
            if segment not in value:
                return _MISSING
            value = value[segment]
        elif isinstance(value, list):
            if _INTEGER.fullmatch(segment):
                index = int(segment)
                if not -len(value) <= index < len(value):
                    return _MISSING
                value = value[index]
                continue
            collected = []
            for item in value:
                found = _walk(item, segments[i:])
                if found is not _MISSING and found is not None:
                    collected.append(found)
            return collected if collected else _MISSING
        else:
            return _MISSING
    return value


def lookup_path(serialized: str, path: str) -> Lookup:
    """Resolve *path* inside a record field holding JSON text.

    Never raises; every failure comes back as a tagged ``Lookup``.
    A path ending on JSON null counts as missing.
    """
    try:
        data = json.loads(serialized)
    except ValueError:
        return Lookup.failed(LookupKind.PARSE_FAILED)

    result = _walk(data, path.split("."))
    if result is _MISSING or result is None:
        return Lookup.failed(LookupKind.PATH_MISSING)
    return Lookup.ok(render_value(result))


def resolve(serialized: str, path: str) -> str:
    """Resolve *path* inside JSON text and render it, or ``<nil>``."""
    return lookup_path(serialized, path).text
