"""test_inspector.py - Tests for q() and Q(value).

Covers:
    - q() returns its argument unchanged
    - The log line names this test file and the calling line
    - Q(value) reports the same location format as q()
    - Nothing is logged while debugging is disabled
"""

import os

from qdebug import Q, config, q, sink


def _line_of(marker):
    with open(__file__, encoding="utf-8") as f:
        for number, line in enumerate(f, start=1):
            if marker in line and "_line_of" not in line:
                return number
    raise AssertionError(marker)


class TestInspect:
    def test_q_returns_value(self):
        """q() is an identity function."""
        value = {"a": 1}
        assert q(value) is value

    def test_q_logs_file_line_and_value(self, log):
        """The line is '<file>:<line>: <pretty value>'."""
        total = q(6 * 7) + 1  # marker-q-call
        assert total == 43
        expected = f"{__file__}:{_line_of('marker-q-call')}: 42"
        assert log.lines() == [expected]

    def test_q_inside_expression_logs_pretty_value(self, log):
        """Long values are pretty-printed, with their length."""
        q("a fairly long string")
        assert log.lines()[0].endswith(': "a fairly lo... (length 20)')

    def test_Q_call_reports_caller_location(self, log):
        """Q(value) resolves the same caller as q(value)."""
        Q("x")  # marker-Q-call
        expected = f"{__file__}:{_line_of('marker-Q-call')}: \"x\" (length 1)"
        assert log.lines() == [expected]

    def test_q_disabled_logs_nothing(self, log):
        """With debugging off, q() only returns its argument."""
        config.set_enabled(False)
        assert q(5) == 5
        assert os.path.getsize(log.path) == 0
        assert sink.get_sink().path == log.path
