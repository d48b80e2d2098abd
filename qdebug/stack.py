"""stack.py - Resolve the source location of a caller.

All frame inspection in qdebug goes through this module, so the rest of the
package only ever sees a ``CallerLocation`` (function, file, line) or a
globals mapping and never touches frame objects directly.
"""

import sys
from types import FrameType
from typing import Any, Dict, NamedTuple

ANONYMOUS = "anonymous function"


class CallerLocation(NamedTuple):
    function: str
    filename: str
    lineno: int


def interpret_frame(frame: FrameType) -> CallerLocation:
    """Turn a frame object into a ``CallerLocation``.

    Lambdas and code objects without a name are reported as
    ``"anonymous function"``.
    """
    code = frame.f_code
    name = code.co_name
    if not name or name == "<lambda>":
        name = ANONYMOUS
    return CallerLocation(name, code.co_filename, frame.f_lineno)


def _frame(depth: int) -> FrameType:
    # +2 skips _frame itself and the public helper that called it.
    return sys._getframe(depth + 2)


def caller_location(depth: int = 1) -> CallerLocation:
    """Return the location ``depth`` frames above the function calling this.

    ``depth=1`` (the default) is the caller of the function that invoked
    ``caller_location``; the resolver's own frame is never reported.

    If the stack is shallower than requested, a placeholder location with an
    ``<unknown>`` file and line 0 is returned.
    """
    try:
        return interpret_frame(_frame(depth))
    except ValueError:
        return CallerLocation(ANONYMOUS, "<unknown>", 0)


def caller_globals(depth: int = 1) -> Dict[str, Any]:
    """Return the module globals of the frame ``depth`` levels above the caller.

    Raises:
        ValueError: If the call stack is not deep enough.
    """
    return _frame(depth).f_globals
