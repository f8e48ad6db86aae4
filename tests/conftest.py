"""Pytest configuration and fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Reset checkchain loggers after each test so handlers do not leak between tests."""
    yield

    names = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("checkchain")
    ]

    # Module loggers hold references to their parents, so reset instead of deleting
    for name in names:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


class Probe:
    """Zero-argument condition that records how often it was evaluated."""

    def __init__(self, result: bool):
        self.result = result
        self.calls = 0

    def __call__(self) -> bool:
        self.calls += 1
        return self.result


@pytest.fixture
def probe():
    return Probe
