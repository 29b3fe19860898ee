"""Pytest configuration and shared fixtures for symopt tests.

This module provides:
- A deterministic numpy RNG fixture for sampling evaluation points
- Helpers for capturing log output of an optimization run
"""

import logging
import os
from typing import List

import numpy as np
import pytest


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


class ListHandler(logging.Handler):
    """Collects formatted log messages in memory."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@pytest.fixture(scope="function")
def capture_logger(request: pytest.FixtureRequest):
    """Return ``(logger, handler)`` with a private DEBUG logger for one test."""
    logger = logging.getLogger(f"symopt-test.{request.node.name}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = ListHandler()
    logger.addHandler(handler)
    yield logger, handler
    logger.removeHandler(handler)
