"""
Unit dependency graph implementation.

This module provides a builder that accumulates unit dependencies and rejects
self-dependencies and cycles, and an immutable graph answering traversal and
ranking queries.
"""
from .ids import UnitId, UnitLike
from .errors import (
    DependencyGraphError,
    DependencyValidationError,
    SelfDependencyError,
    CircularDependencyError,
    BuilderError,
    BuilderConsumedError,
    BuilderBusyError,
)
from .graph import DependencyGraph
from .builder import DependencyGraphBuilder

__all__ = [
    "UnitId",
    "UnitLike",
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
