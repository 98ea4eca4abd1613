"""
unitdeps: validated dependency graphs for units of work.
"""
from unitdeps.config import GraphSettings, configure_logging
from unitdeps.dependency import (
    UnitId,
    DependencyGraph,
    DependencyGraphBuilder,
    DependencyGraphError,
    DependencyValidationError,
    SelfDependencyError,
    CircularDependencyError,
    BuilderError,
    BuilderConsumedError,
    BuilderBusyError,
)

__all__ = [
    "GraphSettings",
    "configure_logging",
    "UnitId",
    "DependencyGraph",
    "DependencyGraphBuilder",
    "DependencyGraphError",
    "DependencyValidationError",
    "SelfDependencyError",
    "CircularDependencyError",
    "BuilderError",
    "BuilderConsumedError",
    "BuilderBusyError",
]
