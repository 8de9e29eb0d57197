"""
Tests for channel-aware logging configuration.
"""

import pytest

from nibrs.core.logging import (
    LogChannel,
    LogLevel,
    configure_logging,
    get_current_config,
    get_logger,
    get_pass_logger,
)


@pytest.fixture
def restore_silent():
    yield
    configure_logging(level="silent", force=True)


class TestParsing:
    @pytest.mark.parametrize("name,level", [
        ("silent", LogLevel.SILENT),
        ("VERBOSE", LogLevel.VERBOSE),
        ("debug", LogLevel.DEBUG),
        ("warning", LogLevel.INFO),
        ("nonsense", LogLevel.INFO),
    ])
    def test_level_names(self, name, level):
        assert LogLevel.from_string(name) == level

    def test_channel_names(self):
        assert LogChannel.from_string(" codec ") == LogChannel.CODEC
        assert LogChannel.from_string("nope") is None


class TestConfigure:
    def test_explicit_arguments(self, restore_silent):
        configure_logging(level="verbose", format="json", channels=["mapping", "codec", "bogus"], force=True)
        assert get_current_config() == {
            "level": "VERBOSE",
            "format": "json",
            "channels": ["CODEC", "MAPPING"],
        }

    def test_environment(self, monkeypatch, restore_silent):
        monkeypatch.setenv("NIBRS_LOG_LEVEL", "debug")
        monkeypatch.setenv("NIBRS_LOG_CHANNELS", "validation")
        configure_logging(force=True)
        config = get_current_config()
        assert config["level"] == "DEBUG"
        assert config["channels"] == ["VALIDATION"]

    def test_not_reconfigured_without_force(self, restore_silent):
        configure_logging(level="silent", force=True)
        configure_logging(level="debug")
        assert get_current_config()["level"] == "SILENT"

    def test_channel_filter(self, restore_silent):
        configure_logging(level="debug", channels=["codec"], force=True)
        assert get_logger(LogChannel.CODEC).enabled_for(LogLevel.DEBUG)
        assert not get_logger(LogChannel.MAPPING).enabled_for(LogLevel.INFO)


class TestLoggers:
    def test_pass_logger_channel(self):
        assert get_pass_logger("p50_map_properties").channel == LogChannel.EXTRACT
        assert get_pass_logger("p80_normalize").channel == LogChannel.PIPELINE
        assert get_pass_logger("p99_other").channel == LogChannel.PIPELINE

    def test_unknown_channel_name(self):
        assert get_logger("nope").channel == LogChannel.SYSTEM
