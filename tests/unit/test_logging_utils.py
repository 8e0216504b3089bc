"""Unit tests for logging configuration."""

import logging

import pytest

from mailpost.logging_utils import PACKAGE_LOGGER, configure_logging, resolve_log_level


@pytest.mark.unit
class TestLoggingConfiguration:
    """Test logging configuration functions."""

    def test_resolve_level_names(self):
        assert resolve_log_level("debug") == logging.DEBUG
        assert resolve_log_level(logging.ERROR) == logging.ERROR
        assert resolve_log_level("bogus") == logging.INFO

    def test_configure_sets_level_and_handler(self):
        logger = configure_logging("INFO")
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_reconfigure_replaces_handlers(self):
        configure_logging(logging.DEBUG)
        logger = configure_logging(logging.WARNING)
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "mailpost.log"
        logger = configure_logging(logging.DEBUG, log_file=str(log_file))
        assert len(logger.handlers) == 2

        logging.getLogger("mailpost.test").warning("written to file")
        for handler in logger.handlers:
            handler.flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_trace_format(self):
        logger = configure_logging(logging.DEBUG, trace_mode=True)
        assert "%(asctime)s" in logger.handlers[0].formatter._fmt

    def test_unwritable_log_file(self, tmp_path):
        logger = configure_logging(logging.INFO, log_file=str(tmp_path / "missing" / "x.log"))
        assert len(logger.handlers) == 1
