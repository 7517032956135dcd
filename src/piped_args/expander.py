"""Template expander: substitute ``$N`` markers from one record.

Templates use shell-style markers:

    $1          whole first field
    ${1}        same, braced
    $1.user.id  path into the JSON held by the first field
    ${2.items.0.sku}
    ${user.id}  no numeric prefix: path into the first field

Braces are needed when the marker is followed by text that would
otherwise be read as part of it (``${1}.json``). A ``$`` that does not
start a valid marker is left as-is.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from piped_args.models import Lookup, LookupKind
from piped_args.paths import lookup_path
from piped_args.references import parse_reference

_MARKER = re.compile(
    r"\$(?:\{(?P<braced>[^}]+)\}"
    r"|(?P<bare>[A-Za-z0-9_]+(?:\.[A-Za-z0-9_]+)*))"
)


def find_markers(template: str) -> list[str]:
    """Return the marker names in *template*, in order of appearance."""
    return [
        match.group("braced") or match.group("bare")
        for match in _MARKER.finditer(template)
    ]


def lookup_marker(record: Sequence[str], name: str) -> Lookup:
    """Resolve one marker name against a record (fields are 1-indexed)."""
    ref = parse_reference(name)
    if ref.position < 1 or ref.position > len(record):
        return Lookup.failed(LookupKind.OUT_OF_RANGE)

    field = record[ref.position - 1]
    if not ref.path:
        return Lookup.ok(field)
    return lookup_path(field, ref.path)


def expand(record: Sequence[str], template: str) -> str:
    """Expand every marker in *template* using *record*.

    Unresolvable markers (position out of range, field not JSON, path
    missing) become ``<nil>``; expansion itself never fails.
    """

    def _substitute(match: re.Match[str]) -> str:
        name = match.group("braced") or match.group("bare")
        return lookup_marker(record, name).text

    return _MARKER.sub(_substitute, template)
