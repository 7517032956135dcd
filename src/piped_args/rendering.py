"""Text rendering of decoded JSON values.

Resolved path values and diagnostic dumps share one rendering so that
the same value always prints the same way: strings unquoted, lists as
``[a b]``, objects as ``map[k:v]`` and null as ``<nil>``.
"""

from __future__ import annotations

import json
import math
from typing import Any

from piped_args.models import NIL

TRUNCATION_SUFFIX = "...\n[Value truncated]"


def render_value(value: Any) -> str:
    """Render a decoded JSON value as argument text."""
    if value is None:
        return NIL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        items = " ".join(
            f"{key}:{render_value(value[key])}" for key in sorted(value, key=str)
        )
        return f"map[{items}]"
    if isinstance(value, (list, tuple)):
        return "[" + " ".join(render_value(item) for item in value) + "]"
    return str(value)


def truncate_value(value: Any, limit: int = 512) -> str:
    """Render *value* for an error message, capped at *limit* characters.

    Long renderings are usually a whole web page or binary blob piped in
    by mistake, so only the head is kept, quoted, with a marker suffix.

    Args:
        value: Any decoded value.
        limit: Maximum number of rendered characters kept verbatim.

    Returns:
        The full rendering when it fits, otherwise the quoted head
        followed by ``...\\n[Value truncated]``.
    """
    text = render_value(value)
    if len(text) > limit:
        return json.dumps(text[:limit], ensure_ascii=False) + TRUNCATION_SUFFIX
    return text
