"""sink.py - The process-wide ``q`` log file.

Every line qdebug produces ends up in one file, ``$TMPDIR/q`` by default, so
that ``tail -f $TMPDIR/q`` in another terminal shows the instrumentation of
the running program. Each line is prefixed with the seconds elapsed since the
process started:

    ``" 0.3s Entering factorial(5)"``

The file is recreated (delete, then create) the first time anything is
written, so each run starts with a fresh log. Each line is a ``logging``
record handed straight to the sink's own ``FileHandler``, bypassing the logger
tree: host logging configuration neither sees nor filters it. The handler
flushes after each record, so the file is current even when the process is
about to stop at a breakpoint.

Typical usage::

    from qdebug import sink

    sink.write("Entering", "load(3)")     # " 0.0s Entering load(3)"
    sink.open_sink("/tmp/other/q")        # redirect for the rest of the run
"""

import logging
import os
import time
from contextvars import ContextVar
from typing import Any, Callable, Optional

from . import config

logger = logging.getLogger(__name__)

# Monotonic reference point for the elapsed-time prefix.
_START = time.monotonic()

OUTPUT_LOGGER = "qdebug.output"

# True while qdebug is formatting or writing its own output in this context.
# Shims seeing it set call straight through, so that tracing a builtin used by
# the output path (len, str, isinstance, ...) cannot recurse into itself.
_writing: ContextVar[bool] = ContextVar("qdebug_writing", default=False)


class ElapsedFormatter(logging.Formatter):
    """Formatter producing ``"<elapsed>s <message>"`` lines.

    ``elapsed`` is the time since ``start`` in seconds, modulo 100, printed
    with one decimal in a field of width 4 (``" 3.2s"``, ``"42.0s"``).

    Attributes:
        _start (float): ``time.monotonic()`` value that counts as zero.
    """

    def __init__(self, start: Optional[float] = None) -> None:
        super().__init__("%(elapsed)4.1fs %(message)s")
        self._start = _START if start is None else start

    def format(self, record: logging.LogRecord) -> str:
        record.elapsed = (time.monotonic() - self._start) % 100
        return super().format(record)


class Sink:
    """Append target backed by a fresh file at ``path``.

    Creating a Sink removes any file already at ``path`` (best effort), then
    creates a new one. Failure to create the file is fatal: the ``OSError``
    propagates to the caller.

    Attributes:
        path (str): The log file location.
        _handler (logging.FileHandler): Open handler writing to ``path``.

    Example:
        >>> s = Sink("/tmp/q")
        >>> s.write("answer", 42)   # appends " 0.0s answer 42"
        >>> s.close()
    """

    def __init__(self, path: str, start: Optional[float] = None) -> None:
        self.path = path
        self._ensure_dir()
        self._remove_stale()
        self._handler = logging.FileHandler(path, mode="w", encoding="utf-8")
        self._handler.setFormatter(ElapsedFormatter(start))

    def write(self, *tokens: Any) -> None:
        """Join ``tokens`` with single spaces and append them as one line."""
        record = logging.makeLogRecord(
            {
                "name": OUTPUT_LOGGER,
                "levelno": logging.DEBUG,
                "levelname": "DEBUG",
                "msg": " ".join(str(token) for token in tokens),
            }
        )
        self._handler.handle(record)

    def close(self) -> None:
        self._handler.close()

    # ---------------------------------------------------------------------- #
    # Private helpers
    # ---------------------------------------------------------------------- #

    def _ensure_dir(self) -> None:
        parent = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(parent, exist_ok=True)

    def _remove_stale(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.debug("could not remove stale log %s: %s", self.path, exc)


_sink: Optional[Sink] = None


def get_sink() -> Sink:
    """Return the process sink, creating it at ``config.log_path()`` on first use."""
    global _sink
    if _sink is None:
        _sink = Sink(config.log_path())
        logger.debug("writing qdebug output to %s", _sink.path)
    return _sink


def open_sink(path: Optional[str] = None) -> Sink:
    """Replace the process sink with a fresh one at ``path``.

    Args:
        path: Location of the new log file. Defaults to ``config.log_path()``.

    Returns:
        The newly created Sink.
    """
    global _sink
    close_sink()
    _sink = Sink(path or config.log_path())
    logger.debug("writing qdebug output to %s", _sink.path)
    return _sink


def close_sink() -> None:
    """Close the process sink, if open. The next ``write`` reopens it."""
    global _sink
    if _sink is not None:
        _sink.close()
        _sink = None


def write(*tokens: Any) -> None:
    """Append one timestamped line made of ``tokens`` to the process sink."""
    get_sink().write(*tokens)


def is_writing() -> bool:
    """Return True while ``quietly`` is running in the current context."""
    return _writing.get()


def quietly(func: Callable, *args: Any) -> Any:
    """Call ``func(*args)`` with every qdebug shim passing straight through.

    All formatting and writing done by shims runs under this, so a traced
    builtin called from inside qdebug's own output path is not logged.

    Example:
        >>> quietly(write, "Entering", "len([1, 2] (length 2))")
    """
    token = _writing.set(True)
    try:
        return func(*args)
    finally:
        _writing.reset(token)
