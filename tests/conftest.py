"""Shared fixtures for the fourplay test suite."""

import pytest

from fourplay.game.engine import GameEngine


@pytest.fixture
def engine():
    """A default 6x7 engine."""
    return GameEngine()
