import os

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from helpers import make_processes


@pytest.fixture
def two_processes():
    """P1(도착 0, 실행 5), P2(도착 1, 실행 3)"""
    return make_processes(("P1", 0, 5, 2), ("P2", 1, 3, 1))


@pytest.fixture
def sample_processes():
    return make_processes(
        ("P1", 0, 5, 3),
        ("P2", 1, 3, 1),
        ("P3", 2, 8, 4),
        ("P4", 3, 6, 2),
        ("P5", 10, 2, 1),
    )
