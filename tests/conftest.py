"""Shared fixtures for the edolines tests."""

import matplotlib
import pytest

matplotlib.use("Agg")

from edolines.config import Frame
from edolines.intervals import Interval, IntervalGroup


@pytest.fixture
def frame():
    return Frame()


@pytest.fixture
def fifth_group():
    """Single 3-limit group holding only the perfect fifth."""
    return IntervalGroup(3, "red", 50, (Interval(3, 2, "perfect fifth"),))
