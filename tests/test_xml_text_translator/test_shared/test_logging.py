"""Tests for correlation-aware logging."""

import logging
from unittest.mock import patch

import pytest

from xml_text_translator.shared.logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)


class TestCorrelationLogger:
    """Test suite for CorrelationLogger."""

    def test_default_component(self):
        """Test that the component defaults to the last name segment."""
        logger = get_logger("xml_text_translator.translation.presets")
        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "presets"
        assert logger.correlation_id is None

    def test_extra_fields(self, caplog):
        """Test that records carry correlation and caller fields."""
        logger = get_logger("xml_text_translator.test", "corr-1", "cli")

        with caplog.at_level(logging.INFO, logger="xml_text_translator.test"):
            logger.info("translated", extra={"path": "in.xml"})

        record = caplog.records[-1]
        assert record.getMessage() == "translated"
        assert record.component == "cli"
        assert record.correlation_id == "corr-1"
        assert record.path == "in.xml"

    def test_level_methods(self, caplog):
        """Test each level method emits at its level."""
        logger = get_logger("xml_text_translator.levels")

        with caplog.at_level(logging.DEBUG, logger="xml_text_translator.levels"):
            logger.debug("d")
            logger.warning("w")
            logger.error("e", exc_info=False)

        assert [r.levelname for r in caplog.records] == ["DEBUG", "WARNING", "ERROR"]

    def test_exception_includes_traceback(self, caplog):
        """Test exception logging inside a handler."""
        logger = get_logger("xml_text_translator.errors")

        with caplog.at_level(logging.ERROR, logger="xml_text_translator.errors"):
            try:
                raise ValueError("bad")
            except ValueError:
                logger.exception("failed")

        assert caplog.records[-1].exc_info is not None


class TestConfigureLogging:
    """Test root logging configuration."""

    @patch("xml_text_translator.shared.logging.logging.basicConfig")
    def test_configure_level(self, mock_basic_config):
        """Test that the named level is passed through."""
        configure_logging("DEBUG")

        mock_basic_config.assert_called_once()
        assert mock_basic_config.call_args.kwargs["level"] == logging.DEBUG

    def test_unknown_level(self):
        """Test error for unknown level names."""
        with pytest.raises(ValueError, match="logging level must be one of"):
            configure_logging("VERBOSE")
