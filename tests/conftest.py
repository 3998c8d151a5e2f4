"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_svlmd_logger():
    """Drop handlers added by CLI invocations so tests do not leak them."""
    yield
    app_logger = logging.getLogger("svlmd")
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)
