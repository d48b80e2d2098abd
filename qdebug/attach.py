"""attach.py - Apply a decorator to a function given in one of three forms.

``trace``, ``time`` and ``break_before`` all accept the same arguments:

    ``trace(func)``              Wrap ``func`` and return the result. Nothing is
                                 rebound; assign the result yourself (or use it
                                 as ``@trace``).
    ``trace("name")``            Wrap the function called ``name`` in the
                                 calling module's globals, or in ``builtins``
                                 when the module has no such name, and rebind
                                 it in the same place.
    ``trace(obj, "name")``       Wrap ``obj.name`` and rebind it on ``obj``.

Each form is first turned into a ``Target`` that knows how to read the
current function and store its replacement; ``decorate`` then does the same
get / wrap / set for all of them.
"""

import builtins
import inspect
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Sequence

from .sink import quietly
from .stack import caller_globals

logger = logging.getLogger(__name__)

# Captured at import: trace("str") replaces the builtin name with a layer.
_STR_TYPE = str


class Target(ABC):
    """Where a decorated function comes from and where its replacement goes.

    Attributes:
        name (str | None): Name to show in log lines, if the form supplies one.
    """

    name: Optional[str] = None

    @abstractmethod
    def get(self) -> Callable:
        """Return the function currently stored at this target."""

    @abstractmethod
    def set(self, func: Callable) -> None:
        """Store ``func`` at this target."""


class CallableTarget(Target):
    """A bare function value. ``set`` only remembers the new value."""

    def __init__(self, func: Callable) -> None:
        self._func = func

    def get(self) -> Callable:
        return self._func

    def set(self, func: Callable) -> None:
        self._func = func


class GlobalTarget(Target):
    """A name looked up in a module namespace, falling back to ``builtins``.

    The slot is fixed when the target is created: a name found in ``scope`` is
    rebound there, a name found only in ``builtins`` is rebound on the
    ``builtins`` module.

    Raises:
        NameError: If ``name`` is in neither namespace.
    """

    def __init__(self, scope: Dict[str, Any], name: str) -> None:
        self.name = name
        if name in scope:
            self._namespace = scope
        elif hasattr(builtins, name):
            self._namespace = vars(builtins)
        else:
            raise NameError(f"name {name!r} is not defined")

    def get(self) -> Callable:
        return self._namespace[self.name]

    def set(self, func: Callable) -> None:
        self._namespace[self.name] = func


class MemberTarget(Target):
    """An attribute of an object, a class or a module.

    Class members defined as ``staticmethod`` or ``classmethod`` are unwrapped
    for decoration and re-wrapped in the same descriptor type on ``set``.
    """

    def __init__(self, container: Any, name: str) -> None:
        self.container = container
        self.name = name
        self._descriptor = None
        if isinstance(container, type):
            raw = inspect.getattr_static(container, name)
            if isinstance(raw, (staticmethod, classmethod)):
                self._descriptor = type(raw)
                self._func = raw.__func__
                return
        self._func = getattr(container, name)

    def get(self) -> Callable:
        return self._func

    def set(self, func: Callable) -> None:
        self._func = func
        if self._descriptor is not None:
            func = self._descriptor(func)
        setattr(self.container, self.name, func)


def resolve_target(kind: str, args: Sequence[Any], scope: Optional[Dict[str, Any]] = None) -> Target:
    """Interpret the positional arguments given to an attacher.

    Args:
        kind: Attacher name, used in error messages ("trace", "time", ...).
        args: One or two arguments, in one of the three forms above.
        scope: Namespace for the ``("name",)`` form.

    Raises:
        TypeError: If ``args`` does not hold one or two items.
    """
    if len(args) == 2:
        return MemberTarget(args[0], args[1])
    if len(args) != 1:
        raise TypeError(f"{kind}() takes one or two arguments ({len(args)} given)")

    (target,) = args
    if callable(target):
        return CallableTarget(target)
    if isinstance(target, _STR_TYPE):
        return GlobalTarget(scope if scope is not None else {}, target)
    raise TypeError(
        f"{kind}() expects a callable or a name, not {type(target).__name__}"
    )


def decorate(kind: str, decorator: Callable, args: Sequence[Any], depth: int = 1) -> Callable:
    """Apply ``decorator`` to the function described by ``args``.

    Args:
        kind: Attacher name, for error messages.
        decorator: ``decorator(func, name)``, e.g. ``trace_decorator``.
        args: The attacher's positional arguments.
        depth: How many frames above ``decorate``'s caller the user code sits.
            The ``("name",)`` form resolves against that frame's globals.

    Returns:
        The decorated function (which may be the original one; see
        ``instrument``).

    Raises:
        TypeError: For a wrong argument count or a non-callable target.
        NameError: For the ``("name",)`` form when the name is not defined.
        AttributeError: For the ``(obj, "name")`` form when ``obj`` has no
            such member.
    """
    # Resolved quietly so a traced len or isinstance is not logged from here.
    scope = caller_globals(depth + 1)
    target = quietly(resolve_target, kind, args, scope)

    func = target.get()
    if not callable(func):
        raise TypeError(f"{kind}() target {target.name!r} is not callable")

    decorated = decorator(func, target.name)
    if decorated is not func and not isinstance(target, CallableTarget):
        logger.debug("rebinding %s with %s", target.name, kind)
        target.set(decorated)
    return decorated
