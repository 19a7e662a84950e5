"""Pytest configuration and fixtures."""

import logging

import pytest

from expectify import sink
from expectify.sink import capture_failures


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up expectify loggers after each test so handlers do not leak."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("expectify")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture(autouse=True)
def no_active_reporter():
    """Every test starts and ends with nobody collecting failures."""
    assert sink.active() is None
    yield
    sink._active = None


@pytest.fixture
def captured():
    """Failures recorded by expectations inside the test, in order."""
    with capture_failures() as failures:
        yield failures
