"""Shared fixtures."""

import pytest

from autoshake.core.logging import LogBuffer, Logger


@pytest.fixture
def logger() -> Logger:
    """Isolated logger so tests do not share the global buffer."""
    return Logger(LogBuffer())


@pytest.fixture
def events() -> list:
    return []
