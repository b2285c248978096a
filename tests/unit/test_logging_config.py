"""
Unit tests for config/logging_config.py
"""
import logging
import logging.handlers

from config.logging_config import get_logger, set_level


class TestLoggingConfig:
    """Test logger setup."""

    def test_logger_configured_once(self):
        """Test repeated lookups do not stack handlers."""
        first = get_logger("textbatch.tests.once")
        second = get_logger("textbatch.tests.once")
        assert first is second
        assert len(first.handlers) == 2

    def test_module_loggers_share_handlers(self):
        """Test every module logger writes to the same console and file handlers."""
        a = get_logger("textbatch.tests.a")
        b = get_logger("textbatch.tests.b")
        assert a.handlers == b.handlers
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in a.handlers)

    def test_child_loggers_do_not_propagate(self):
        """Test a record is handled once, not again by the 'textbatch' parent."""
        assert get_logger("textbatch.tests.child").propagate is False

    def test_set_level(self):
        """Test set_level reaches loggers outside the textbatch namespace."""
        cli_logger = get_logger("batch_translate_test")
        try:
            set_level("debug")
            assert cli_logger.level == logging.DEBUG
            set_level("nonsense")
            assert cli_logger.level == logging.INFO
        finally:
            set_level("INFO")
