"""Tests for logging setup."""

import logging

import pytest

from lightnet import LogLevel, setup_logging
from lightnet.logging_config import FALLBACK_HANDLER_NAME, add_fallback_handler, level_for


@pytest.fixture
def lightnet_logger():
    """Restore the lightnet logger after each test."""
    logger = logging.getLogger("lightnet")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestLevelFor:
    """Tests for level_for."""

    def test_mapping(self):
        """Test LogLevel maps onto stdlib levels."""
        assert level_for(LogLevel.INFO) == logging.INFO
        assert level_for(LogLevel.DEBUG) == logging.DEBUG
        assert level_for(LogLevel.OFF) > logging.CRITICAL


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_name(self, lightnet_logger):
        """Test configuring by level name."""
        logger = setup_logging("DEBUG", force=True)
        assert logger is lightnet_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_network_log_level(self, lightnet_logger):
        """Test configuring with a network LogLevel."""
        logger = setup_logging(LogLevel.INFO, force=True)
        assert logger.level == logging.INFO

    def test_log_file(self, lightnet_logger, tmp_path):
        """Test a file handler is added when log_file is given."""
        log_file = tmp_path / "lightnet.log"
        logger = setup_logging("INFO", log_file=str(log_file), force=True)
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()
            if isinstance(handler, logging.FileHandler):
                handler.close()

        assert len(logger.handlers) == 2
        assert "hello" in log_file.read_text()

    def test_replaces_fallback_handler(self, lightnet_logger):
        """Test setup_logging swaps the fallback handler for its own, so dumps print once."""
        lightnet_logger.handlers.clear()
        add_fallback_handler(lightnet_logger)

        logger = setup_logging("INFO")

        assert len(logger.handlers) == 1
        assert logger.handlers[0].get_name() != FALLBACK_HANDLER_NAME

    def test_keeps_application_handlers(self, lightnet_logger):
        """Test handlers the application attached are left alone without force."""
        lightnet_logger.handlers.clear()
        handler = logging.NullHandler()
        lightnet_logger.addHandler(handler)

        logger = setup_logging("INFO")

        assert logger.handlers == [handler]
