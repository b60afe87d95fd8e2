"""Shared pytest fixtures."""

from collections.abc import Iterator

import pytest

from src.ranker.metrics import RankerMetrics
from tests.helpers.tree import FakeClock


@pytest.fixture(autouse=True)
def reset_ranker_metrics() -> Iterator[None]:
    """Give every test a fresh metrics singleton."""
    RankerMetrics.reset()
    yield
    RankerMetrics.reset()


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at 5000 ms."""
    return FakeClock(now=5_000)
