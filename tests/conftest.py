"""conftest.py - Shared fixtures: a throwaway log file and a clean debug switch."""

import pytest

from qdebug import config, sink


class LogReader:
    """Reads back what qdebug wrote to the test's log file."""

    def __init__(self, path):
        self.path = path

    def lines(self):
        """Return the logged lines without the elapsed-time prefix."""
        return [line.split("s ", 1)[1] for line in self.raw_lines()]

    def raw_lines(self):
        with open(self.path, encoding="utf-8") as f:
            return f.read().splitlines()


@pytest.fixture(autouse=True)
def log(tmp_path):
    """Point the sink at ``tmp_path/log/q`` and re-enable debugging for each test."""
    config.set_enabled(True)
    path = str(tmp_path / "log" / "q")
    sink.open_sink(path)
    yield LogReader(path)
    sink.close_sink()
    config.set_enabled(True)
