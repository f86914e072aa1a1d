"""Pytest configuration for the budget-gap-calculator test suite."""

import os
import sys

import pytest

# Add src directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

from tax.GrowthDetails import GrowthDetails
from animate.frame_scheduler import ManualFrameScheduler


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an async test"
    )


@pytest.fixture
def details():
    """Built-in growth details (no reference file involved)."""
    return GrowthDetails()


@pytest.fixture
def scheduler():
    """Manual scheduler starting at t=1000ms so 'unset' start times are never 0."""
    return ManualFrameScheduler(start_ms=1000.0)
