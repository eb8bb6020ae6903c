"""Tests for logging configuration."""

import logging

from calorie_tracker.app_logging import configure_logging


def test_configure_logging_installs_one_handler() -> None:
    logger = logging.getLogger("calorie_tracker")
    logger.handlers.clear()

    configure_logging()
    configure_logging()

    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_sets_level() -> None:
    logger = logging.getLogger("calorie_tracker")

    configure_logging(logging.DEBUG)
    assert logger.level == logging.DEBUG

    configure_logging()
    assert logger.level == logging.INFO
