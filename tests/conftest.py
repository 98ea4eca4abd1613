# conftest.py
import logging
import pytest
from typing import Dict, List, Tuple

from unitdeps import DependencyGraph, DependencyGraphBuilder, UnitId


# Custom test markers
def pytest_configure(config):
    """Configure custom markers."""
    markers = [
        "slow: marks tests as slow",
        "concurrency: marks tests that exercise multiple threads",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


def u(id: int, version: int = 0) -> UnitId:
    return UnitId.of(id, version)


@pytest.fixture
def unit():
    """Shorthand factory for unit identifiers."""
    return u


@pytest.fixture
def example_edges() -> Dict[Tuple[int, int], List[Tuple[int, int]]]:
    """1 depends on 2 and 3, 2 depends on 3."""
    return {
        (1, 0): [(2, 0), (3, 0)],
        (2, 0): [(3, 0)],
        (3, 0): [],
    }


@pytest.fixture
def example_graph(example_edges) -> DependencyGraph:
    return DependencyGraphBuilder.from_edges(example_edges).build()


@pytest.fixture
def diamond_graph() -> DependencyGraph:
    """Top depends on left and right, both of which depend on bottom."""
    return (
        DependencyGraphBuilder()
        .with_dep((1, 0), [(2, 0), (3, 0)])
        .with_dep((2, 0), [(4, 0)])
        .with_dep((3, 0), [(4, 0)])
        .with_dep((4, 0), [])
        .build()
    )


@pytest.fixture
def unitdeps_logger():
    """Restore the package logger level after a test changes it."""
    logger = logging.getLogger("unitdeps")
    level = logger.level
    yield logger
    logger.setLevel(level)
