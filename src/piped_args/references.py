"""Parse marker names like ``1``, ``2.user.id`` or ``user.id``."""

from __future__ import annotations

import re

from piped_args.models import Reference

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _as_int(text: str) -> int | None:
    if _INTEGER.fullmatch(text):
        return int(text)
    return None


def parse_reference(token: str) -> Reference:
    """Split a marker name into its record position and JSON path.

    A name without a numeric prefix is a path into the first field, and
    in that case the whole name is the path even when it contains dots:
    ``user.id`` means position 1, path ``user.id``. Never fails.
    """
    head, dot, rest = token.partition(".")

    position = _as_int(head)
    if position is None:
        return Reference(position=1, path=token)
    if not dot:
        return Reference(position=position)
    return Reference(position=position, path=rest)
