"""Tests for environment-driven settings and logger setup."""

import logging

import pytest
from pydantic import ValidationError

from econ_dispatch.config import DispatchSettings, LogLevel, get_settings
from econ_dispatch.logging_config import ROOT_LOGGER_NAME, configure_logging


class TestDispatchSettings:
    def test_defaults(self, settings):
        assert settings.max_generators == 8
        assert settings.max_load == 100_000
        assert settings.allow_shutdown is False
        assert settings.display_decimals == 2
        assert settings.log_level == LogLevel.WARNING

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DISPATCH_MAX_GENERATORS", "3")
        monkeypatch.setenv("DISPATCH_ALLOW_SHUTDOWN", "true")
        monkeypatch.setenv("DISPATCH_LOG_LEVEL", "DEBUG")
        settings = DispatchSettings(_env_file=None)
        assert settings.max_generators == 3
        assert settings.allow_shutdown is True
        assert settings.log_level == LogLevel.DEBUG

    def test_rejects_non_positive_limits(self):
        with pytest.raises(ValidationError):
            DispatchSettings(_env_file=None, max_load=0)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestConfigureLogging:
    def test_single_handler(self):
        logger = configure_logging("INFO")
        configure_logging(LogLevel.DEBUG)
        assert logger.name == ROOT_LOGGER_NAME
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_module_loggers_propagate(self, caplog):
        from econ_dispatch.validation import validate_dispatch_inputs

        with caplog.at_level(logging.INFO, logger=ROOT_LOGGER_NAME):
            validate_dispatch_inputs([], 10)
        assert "no generators supplied" in caplog.text
