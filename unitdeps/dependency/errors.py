"""
Errors raised while building a dependency graph.
"""
from typing import Sequence, Tuple

from unitdeps.dependency.ids import UnitId


class DependencyGraphError(Exception):
    """Root of all unitdeps errors."""


class DependencyValidationError(DependencyGraphError, ValueError):
    """The accumulated edge set cannot form a valid graph."""


class SelfDependencyError(DependencyValidationError):
    """A unit lists itself among its own dependencies."""

    def __init__(self, unit: UnitId):
        self.unit = unit
        super().__init__(f"unit `{unit}` depends on itself")


class CircularDependencyError(DependencyValidationError):
    """
    A depth-first walk reached a unit that was already on the active path.

    Attributes:
        first: first unit on the offending path
        last: last unit pushed before the repeat was found
        path: the whole active path, in walk order
        trace: the path rendered for diagnostics
    """

    def __init__(self, first: UnitId, last: UnitId, path: Sequence[UnitId], separator: str = " -> "):
        self.first = first
        self.last = last
        self.path: Tuple[UnitId, ...] = tuple(path)
        self.trace = separator.join(str(unit) for unit in self.path)
        super().__init__(f"unit `{first}` recurses when depending on `{last}`, `{self.trace}`")


class BuilderError(DependencyGraphError, RuntimeError):
    """Misuse of a builder handle. Not a validation outcome."""


class BuilderConsumedError(BuilderError):
    """The handle was already consumed by build()."""


class BuilderBusyError(BuilderError):
    """The shared accumulator is held by another caller."""
