"""Shared pytest fixtures."""

import pytest
from prompt_playground.utils.logger import setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore default logging after tests that reconfigure it."""
    yield
    setup_logging()
