"""test_config.py - Tests for Settings and the global debug switch.

Covers:
    - Environment parsing for QDEBUG, TMPDIR and TEMP
    - log_path() is <output_dir>/q
    - is_enabled / set_enabled and the Q.DEBUG property share one switch
"""

import os
import tempfile

import pytest

from qdebug import Q, config
from qdebug.config import Settings


class TestSettingsFromEnv:
    def test_settings_default_is_enabled_in_temp_dir(self):
        """With no variables set, debugging is on and output goes to the temp dir."""
        s = Settings.from_env({})
        assert s.debug is True
        assert s.output_dir == tempfile.gettempdir()

    @pytest.mark.parametrize("value", ["0", "false", "No", " OFF "])
    def test_settings_qdebug_falsy_disables(self, value):
        """QDEBUG=0/false/no/off starts with debugging disabled."""
        assert Settings.from_env({"QDEBUG": value}).debug is False

    def test_settings_qdebug_other_value_enables(self):
        """Any other QDEBUG value leaves debugging on."""
        assert Settings.from_env({"QDEBUG": "1"}).debug is True

    def test_settings_tmpdir_wins_over_temp(self):
        """TMPDIR is consulted before TEMP."""
        s = Settings.from_env({"TMPDIR": "/a", "TEMP": "/b"})
        assert s.output_dir == "/a"

    def test_settings_temp_used_without_tmpdir(self):
        """TEMP is the fallback when TMPDIR is unset or empty."""
        s = Settings.from_env({"TMPDIR": "", "TEMP": "/b"})
        assert s.output_dir == "/b"

    def test_settings_log_path_is_q_in_output_dir(self):
        """The log file is always named 'q'."""
        assert Settings(output_dir="/x").log_path() == os.path.join("/x", "q")


class TestDebugSwitch:
    def test_set_enabled_round_trip(self):
        """set_enabled changes what is_enabled reports."""
        config.set_enabled(False)
        assert config.is_enabled() is False
        config.set_enabled(True)
        assert config.is_enabled() is True

    def test_Q_DEBUG_property_reads_and_writes_switch(self):
        """Q.DEBUG is a view of the same process-wide switch."""
        Q.DEBUG = False
        assert config.is_enabled() is False
        config.set_enabled(True)
        assert Q.DEBUG is True
