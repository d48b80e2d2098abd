"""chain.py - Decorator records and the chains they form.

Wrapping a function with qdebug never replaces it with an anonymous closure.
Each layer is a ``Decorator`` record that remembers what it wraps, so several
instrumentation layers can be stacked and later inspected:

    ``wraps``       The callable this layer calls. May be another Decorator.
    ``innermost``   The original, undecorated callable at the bottom of the
                    chain. Resolved once when the layer is built.
    ``wrapper``     The next layer out, or None for the outermost layer. Set on
                    the inner record when a new layer is stacked on top of it.
    ``tag``         Which behavior this layer adds ("trace", "time", ...).

For example, after ``time(trace(f))``::

    outer.tag == "time"
    outer.wraps.tag == "trace"
    outer.wraps.wraps is f
    outer.innermost is f
    outer.wraps.wrapper is outer

Any additional keyword state given to ``make_decorator`` (a recursion counter,
a breakpoint number) lives on the record itself and belongs to that layer only.
"""

import functools
import types
from typing import Any, Callable, List


class Decorator:
    """One layer of instrumentation around a callable.

    Calling the record runs its shim, which receives the record as its first
    argument followed by the call's own arguments. The shim reaches the next
    layer through ``record.wraps`` and its private state through attributes on
    ``record``.

    Records implement the descriptor protocol like plain functions do, so a
    record stored on a class becomes a bound method on instances.

    Attributes:
        wraps (Callable): The callable this layer delegates to.
        innermost (Callable): The undecorated callable at the base of the chain.
        wrapper (Decorator | None): The layer stacked on top of this one.
        tag (str): Label of the behavior this layer provides.
    """

    def __init__(self, inner: Callable, shim: Callable, tag: str, **state: Any) -> None:
        # Copy __name__, __doc__ etc. but not __dict__: the inner record's
        # chain attributes must not leak into this one.
        functools.update_wrapper(self, inner, updated=())
        self.wraps = inner
        self.innermost = inner.innermost if is_decorator(inner) else inner
        self.wrapper = None
        self.tag = tag
        self._shim = shim
        self.__dict__.update(state)
        if is_decorator(inner):
            inner.wrapper = self

    def __call__(self, *args, **kwargs):
        return self._shim(self, *args, **kwargs)

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __repr__(self) -> str:
        return f"<Decorator {self.tag} of {self.innermost!r}>"


def make_decorator(inner: Callable, shim: Callable, **state: Any) -> Decorator:
    """Wrap ``inner`` in a new Decorator record running ``shim``.

    Args:
        inner: The callable to wrap. If it is itself a Decorator, the new
            record's ``innermost`` is copied from it and ``inner.wrapper`` is
            pointed at the new record.
        shim: ``shim(record, *args, **kwargs)``, invoked on every call.
        **state: Per-layer attributes, including the required ``tag``.

    Returns:
        The new outermost Decorator.
    """
    return Decorator(inner, shim, **state)


def is_decorator(func: Any) -> bool:
    return isinstance(func, Decorator)


def has_tag(func: Any, tag: str) -> bool:
    """Return True if any layer of ``func``'s chain carries ``tag``.

    Walks from the outermost layer inward through ``wraps`` links, visiting
    every record, and stops at the first non-Decorator.
    """
    while is_decorator(func):
        if func.tag == tag:
            return True
        func = func.wraps
    return False


def innermost(func: Any) -> Any:
    """Return the undecorated callable under ``func`` (``func`` itself if plain)."""
    return func.innermost if is_decorator(func) else func


def chain_tags(func: Any) -> List[str]:
    """List the tags of ``func``'s chain, outermost first."""
    tags = []
    while is_decorator(func):
        tags.append(func.tag)
        func = func.wraps
    return tags
