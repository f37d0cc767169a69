"""
Root conftest.py for the visualizer tests.

Puts the project root on sys.path and provides shared fixtures.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from arrays import elements_from_values  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: mark test as slow running (real-time playback)")


@pytest.fixture
def small_array():
    return elements_from_values([5, 3, 8, 1])


@pytest.fixture
def sorted_array():
    return elements_from_values([1, 2, 3])
