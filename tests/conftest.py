"""
Pytest configuration and shared fixtures for gearratio tests.
"""

import pytest

from gearratio.calculator.core import GearState
from gearratio.gui.controller import GearCalculatorController


@pytest.fixture
def default_state():
    """Startup state: 10:15, given ratio 1.5, ratio locked."""
    return GearState()


@pytest.fixture
def controller():
    """Controller around a fresh default state."""
    return GearCalculatorController()


@pytest.fixture
def recorder():
    """Callable that records every value it is called with."""
    class Recorder:
        def __init__(self):
            self.calls = []

        def __call__(self, value):
            self.calls.append(value)

    return Recorder()
