"""qdebug/__init__.py - Public API for the qdebug package.

qdebug is a quick-and-dirty instrumentation kit for debugging sessions. It
writes everything to one file, ``$TMPDIR/q``, with each line stamped with the
seconds elapsed since the process started. Keep ``tail -f $TMPDIR/q`` running
in a second terminal while the program runs.

Quick start:
    from qdebug import Q

    # 1. Inspect a value in the middle of an expression
    total = Q(price * quantity) + shipping

    # 2. Trace calls: arguments, return values and recursion depth
    @Q.trace
    def factorial(n):
        return 1 if n < 1 else n * factorial(n - 1)

    Q.trace(my_object, "my_method")     # rebinds my_object.my_method
    Q.trace("print")                    # rebinds a global (or builtin) name

    # 3. Time calls, or drop into the debugger before them
    Q.time(my_object, "my_method")
    Q.breakpoint(MyClass, "suspicious")

    # 4. Switch everything off for a production run
    Q.DEBUG = False     # must happen before the wraps above to skip them

Exported names:
    Q:            Callable facade bundling the whole API (``Q(value)``,
                  ``Q.trace``, ``Q.time``, ``Q.breakpoint``, ``Q.DEBUG``).
    q:            Log a value with its source location; returns the value.
    trace:        Log entry into and exit from a function.
    time:         Log how long each call of a function takes.
    break_before: Enter the debugger before each call of a function.
"""

import logging
from typing import Any, Callable

from . import config
from .attach import decorate
from .inspector import _inspect, q
from .instrument import break_before_decorator, time_decorator, trace_decorator

logging.getLogger(__name__).addHandler(logging.NullHandler())


def trace(*args: Any) -> Callable:
    """Put a trace on a function.

    Every call then logs an ``Entering`` line with its arguments (and its
    recursion depth, when nested) and a ``Leaving`` line with the return value.

    Accepts ``trace(func)``, ``trace("global_name")`` or
    ``trace(obj, "member")``; see ``qdebug.attach``. Applying a trace to a
    function that already has one is a no-op.

    Returns:
        The traced function.

    Example:
        >>> class Cart:
        ...     def total(self, price, qty):
        ...         return price * qty
        >>> cart = Cart()
        >>> _ = trace(cart, "total")
        >>> cart.total(3, 4)    # logs "Entering total(3, 4)", "Leaving ... -> 12"
        12
    """
    return decorate("trace", trace_decorator, args)


def time(*args: Any) -> Callable:
    """Log how many microseconds each call of a function takes.

    Takes the same argument forms as ``trace``.

    Returns:
        The timed function.
    """
    return decorate("time", time_decorator, args)


def break_before(*args: Any) -> Callable:
    """Call ``breakpoint()`` before each call of a function.

    Without a debugger configured, this stops in ``pdb``; run with
    ``PYTHONBREAKPOINT=0`` to make the trap a no-op. Takes the same argument
    forms as ``trace``.

    Returns:
        The function with a breakpoint in front of it.
    """
    return decorate("breakpoint", break_before_decorator, args)


class _Q:
    """The ``Q`` object: ``Q(value)`` inspects, attributes hold the rest."""

    trace = staticmethod(trace)
    time = staticmethod(time)
    breakpoint = staticmethod(break_before)
    break_before = staticmethod(break_before)

    def __call__(self, value):
        return _inspect(value)

    @property
    def DEBUG(self) -> bool:
        return config.is_enabled()

    @DEBUG.setter
    def DEBUG(self, value: bool) -> None:
        config.set_enabled(value)

    def __repr__(self) -> str:
        return f"<qdebug Q DEBUG={self.DEBUG}>"


Q = _Q()

__all__ = [
    "Q",
    "q",
    "trace",
    "time",
    "break_before",
]
__version__ = "0.1.0"
