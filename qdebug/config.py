"""config.py - Process-wide settings for qdebug.

Two knobs control the whole package:

    debug:       The global enable switch. Every wrap operation (trace, time,
                 break_before) and every ``q()`` call reads it exactly once.
                 Decorators latch the value at *wrap time*: flipping the switch
                 afterwards neither installs nor removes an existing shim.

    output_dir:  Directory holding the ``q`` log file. Resolved from the
                 ``TMPDIR`` and ``TEMP`` environment variables, falling back to
                 the platform temp directory.

Both are read from the environment once, at import. Set ``QDEBUG=0`` to start
a process with instrumentation disabled.
"""

import os
import tempfile
from typing import Mapping, Optional

LOG_FILENAME = "q"

_FALSY = {"0", "false", "no", "off"}


class Settings:
    """Mutable holder for the global debug switch and the output directory.

    Attributes:
        debug (bool): True when instrumentation is active.
        output_dir (str): Directory in which the log file is created.

    Example:
        >>> s = Settings.from_env({"QDEBUG": "off", "TMPDIR": "/scratch"})
        >>> s.debug, s.log_path()
        (False, '/scratch/q')
    """

    def __init__(self, debug: bool = True, output_dir: Optional[str] = None) -> None:
        self.debug = debug
        self.output_dir = output_dir or tempfile.gettempdir()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables (default: ``os.environ``)."""
        if environ is None:
            environ = os.environ
        debug = environ.get("QDEBUG", "").strip().lower() not in _FALSY
        output_dir = environ.get("TMPDIR") or environ.get("TEMP") or None
        return cls(debug=debug, output_dir=output_dir)

    def log_path(self) -> str:
        return os.path.join(self.output_dir, LOG_FILENAME)


settings = Settings.from_env()


def is_enabled() -> bool:
    """Return the current value of the global debug switch."""
    return settings.debug


def set_enabled(flag: bool) -> None:
    """Turn instrumentation on or off for wraps performed from now on."""
    settings.debug = bool(flag)


def log_path() -> str:
    return settings.log_path()
