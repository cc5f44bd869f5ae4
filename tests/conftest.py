"""Shared fixtures for the Feature Sync test suite."""

import logging

import pytest

from featuresync.sync_logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_featuresync_logger():
    """Undo handler and propagation changes made by setup_logging()."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate
