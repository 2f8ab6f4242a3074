"""Tests for the vista logger setup."""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from vista.logging import LOGGER_NAME, get_logger, setup_logging


class TestSetupLogging:
    """Test verbosity levels and handler replacement."""

    @pytest.mark.parametrize(
        "verbosity,level",
        [
            ("quiet", logging.ERROR),
            ("normal", logging.INFO),
            ("verbose", logging.DEBUG),
        ],
    )
    def test_levels(self, verbosity, level):
        """Test each verbosity maps to a log level."""
        assert setup_logging(verbosity).level == level

    def test_single_handler(self):
        """Test repeated setup keeps one rich handler."""
        setup_logging("normal")
        logger = setup_logging("verbose")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_get_logger(self):
        """Test modules share the configured logger."""
        assert get_logger() is logging.getLogger(LOGGER_NAME)
