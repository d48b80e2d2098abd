"""instrument.py - The trace, time and breakpoint decorators.

Each decorator takes ``(func, name=None)`` and returns either ``func`` itself
or a new ``Decorator`` layer on top of it. ``func`` is returned unchanged when:

    - the global debug switch is off at the moment of wrapping, or
    - ``func``'s chain already contains a layer with the same tag.

The switch is consulted only here, at wrap time. An installed shim keeps
logging after ``set_enabled(False)``, and nothing is installed while the
switch is off, so disabled instrumentation costs nothing per call.

Log lines produced (see ``sink.write``)::

    Entering factorial(3) [2]
    Leaving factorial(3) [2] -> 6
    Raising factorial(-1) !! ValueError: negative
    factorial executed in 41 microseconds
    Breakpoint 1 reached

Exceptions raised by the wrapped callable always propagate unchanged. The
trace layer logs a ``Raising`` line in place of ``Leaving`` and restores its
recursion depth on every exit path; the time layer logs its elapsed line on
both paths, marking failures with ``(raised ExcType)``.

Shims do their own formatting and writing under ``sink.quietly``. A shim
reached from inside that (a traced ``len`` or ``str`` called by
``pretty_print`` or by ``logging``) calls straight through and logs nothing.
"""

import itertools
import logging
import time
from typing import Callable, Optional

from . import config
from .chain import Decorator, has_tag, make_decorator
from .pretty import pretty_print
from .sink import is_writing, quietly, write
from .stack import ANONYMOUS

logger = logging.getLogger(__name__)

TRACE = "trace"
TIME = "time"
BREAKPOINT = "breakpoint"

# Shared by every breakpoint layer in the process; numbers start at 1.
_breakpoints = itertools.count(1)


def display_name(func: Callable, name: Optional[str] = None) -> str:
    """Return ``name`` if given, else ``func.__name__``, else a placeholder."""
    if name:
        return name
    name = getattr(func, "__name__", "")
    if not name or name == "<lambda>":
        return ANONYMOUS
    return name


def _should_wrap(func: Callable, tag: str) -> bool:
    if not config.is_enabled():
        return False
    if has_tag(func, tag):
        logger.debug("%s already applied to %r; not wrapping again", tag, func)
        return False
    return True


# ---------------------------------------------------------------------------
# trace
# ---------------------------------------------------------------------------


def _format_call(name: str, args: tuple, kwargs: dict) -> str:
    parts = [pretty_print(arg) for arg in args]
    parts.extend(f"{key}={pretty_print(value)}" for key, value in kwargs.items())
    return f"{name}({', '.join(parts)})"


def _log_entering(record: Decorator, args: tuple, kwargs: dict) -> str:
    trace_string = _format_call(record.display_name, args, kwargs)
    if record.recursion_depth > 1:
        trace_string += f" [{record.recursion_depth}]"
    write("Entering", trace_string)
    return trace_string


def _log_leaving(trace_string: str, result) -> None:
    write("Leaving", trace_string, "->", pretty_print(result))


def _log_raising(trace_string: str, exc: Exception) -> None:
    write("Raising", trace_string, "!!", f"{type(exc).__name__}: {exc}")


def _trace_shim(record: Decorator, *args, **kwargs):
    if is_writing():
        return record.wraps(*args, **kwargs)

    record.recursion_depth += 1
    try:
        trace_string = quietly(_log_entering, record, args, kwargs)
        try:
            result = record.wraps(*args, **kwargs)
        except Exception as exc:
            quietly(_log_raising, trace_string, exc)
            raise
        quietly(_log_leaving, trace_string, result)
        return result
    finally:
        record.recursion_depth -= 1


def trace_decorator(func: Callable, name: Optional[str] = None) -> Callable:
    """Log every entry to and exit from ``func``.

    The entry line shows the pretty-printed arguments; the exit line adds the
    pretty-printed return value. Calls made while an earlier call of the same
    layer is still running (recursion) carry a ``[depth]`` suffix.

    Args:
        func: The callable to trace. May already be decorated.
        name: Name shown in the log. Defaults to ``func.__name__``.

    Returns:
        The new trace layer, or ``func`` unchanged (see module docstring).

    Example:
        >>> fact = trace_decorator(lambda n: 1 if n < 1 else n * fact(n - 1), "fact")
        >>> fact(2)   # Entering fact(2) / Entering fact(1) [2] / ...
        2
    """
    if not _should_wrap(func, TRACE):
        return func
    return make_decorator(
        func,
        _trace_shim,
        tag=TRACE,
        display_name=display_name(func, name),
        recursion_depth=0,
    )


# ---------------------------------------------------------------------------
# time
# ---------------------------------------------------------------------------


def _log_timing(record: Decorator, elapsed: int, exc: Optional[Exception]) -> None:
    outcome = [f"(raised {type(exc).__name__})"] if exc is not None else []
    write(record.display_name, "executed in", elapsed, "microseconds", *outcome)


def _time_shim(record: Decorator, *args, **kwargs):
    if is_writing():
        return record.wraps(*args, **kwargs)

    failure = None
    start = time.perf_counter_ns()
    try:
        return record.wraps(*args, **kwargs)
    except Exception as exc:
        failure = exc
        raise
    finally:
        elapsed = (time.perf_counter_ns() - start) // 1000
        quietly(_log_timing, record, elapsed, failure)


def time_decorator(func: Callable, name: Optional[str] = None) -> Callable:
    """Log how many microseconds each call of ``func`` takes.

    Args:
        func: The callable to time. May already be decorated.
        name: Name shown in the log. Defaults to ``func.__name__``.

    Returns:
        The new time layer, or ``func`` unchanged (see module docstring).
    """
    if not _should_wrap(func, TIME):
        return func
    return make_decorator(
        func,
        _time_shim,
        tag=TIME,
        display_name=display_name(func, name),
    )


# ---------------------------------------------------------------------------
# breakpoint
# ---------------------------------------------------------------------------


def _break_before_shim(record: Decorator, *args, **kwargs):
    if not is_writing():
        quietly(write, "Breakpoint", record.breakpoint_num, "reached")
        breakpoint()
    return record.wraps(*args, **kwargs)


def break_before_decorator(func: Callable, name: Optional[str] = None) -> Callable:
    """Enter the debugger every time ``func`` is about to run.

    Each layer gets a process-unique breakpoint number when it is created.
    The trap is the builtin ``breakpoint()``, so ``PYTHONBREAKPOINT`` selects
    the debugger (``PYTHONBREAKPOINT=0`` turns the trap into a no-op).

    Args:
        func: The callable to break before.
        name: Name recorded on the layer. Defaults to ``func.__name__``.

    Returns:
        The new breakpoint layer, or ``func`` unchanged.
    """
    if not _should_wrap(func, BREAKPOINT):
        return func
    return make_decorator(
        func,
        _break_before_shim,
        tag=BREAKPOINT,
        display_name=display_name(func, name),
        breakpoint_num=next(_breakpoints),
    )
