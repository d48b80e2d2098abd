"""pretty.py - Short, bounded renderings of arbitrary values for log lines."""

import json
from typing import Any

MAX_WIDTH = 15
TRUNCATE_AT = 12
ELLIPSIS = "..."


def _render(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False)
    except Exception:
        # Not JSON-serialisable: callables, arbitrary objects, circular refs.
        pass
    try:
        return str(value)
    except Exception:
        return f"<{type(value).__name__} object>"


def pretty_print(value: Any) -> str:
    """Render ``value`` as a diagnostic string of bounded width.

    JSON is preferred so that strings show their quotes and containers their
    structure; anything JSON cannot encode falls back to ``str()``. Renderings
    longer than 15 characters are cut to 12 characters plus ``...``. Values
    with a length get a ``(length N)`` suffix after truncation.

    Never raises.

    Example:
        >>> pretty_print(120)
        '120'
        >>> pretty_print("hello world, friend")
        '"hello world... (length 19)'
    """
    text = _render(value)
    if len(text) > MAX_WIDTH:
        text = text[:TRUNCATE_AT] + ELLIPSIS
    try:
        length = len(value)
    except Exception:
        # No length, or a __len__ that fails.
        return text
    return f"{text} (length {length})"
