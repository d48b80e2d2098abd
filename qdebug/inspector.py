"""inspector.py - ``q(value)``: log a value with the location that produced it."""

from typing import Any, TypeVar

from . import config
from .pretty import pretty_print
from .sink import quietly, write
from .stack import CallerLocation, caller_location

T = TypeVar("T")


def _log_value(location: CallerLocation, value: Any) -> None:
    write(f"{location.filename}:{location.lineno}: {pretty_print(value)}")


def _inspect(value: T) -> T:
    # Two frames up: the public entry point (q or Q.__call__), then user code.
    if not config.is_enabled():
        return value
    quietly(_log_value, caller_location(depth=2), value)
    return value


def q(value: T) -> T:
    """Log ``value`` tagged with the caller's file and line, and return it.

    Because the value is returned unchanged, ``q()`` can be dropped into the
    middle of any expression::

        total = q(price * quantity) + shipping

    writes ``" 1.2s /app/cart.py:41: 84"`` to the log. Does nothing while the
    global debug switch is off.
    """
    return _inspect(value)
