"""
Incremental builder for dependency graphs.

Edges are accumulated without any checks. Validation happens once, in
build(), which either returns an immutable DependencyGraph or raises a
DependencyValidationError.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple, Union

from unitdeps.config import GraphSettings
from unitdeps.dependency.errors import (
    BuilderBusyError,
    BuilderConsumedError,
    CircularDependencyError,
    SelfDependencyError,
)
from unitdeps.dependency.graph import DependencyGraph
from unitdeps.dependency.ids import UnitId, UnitLike

logger = logging.getLogger("unitdeps.builder")

EdgeMap = Dict[UnitId, Tuple[UnitId, ...]]


class _EdgeAccumulator:
    """Mutable edge map shared by every handle cloned from one builder."""

    def __init__(self) -> None:
        self.edges: Dict[UnitId, List[UnitId]] = {}
        self._lock = threading.Lock()

    @contextmanager
    def borrow(self) -> Iterator[Dict[UnitId, List[UnitId]]]:
        # Conflicting access fails immediately instead of waiting.
        if not self._lock.acquire(blocking=False):
            raise BuilderBusyError("Dependency accumulator is already in use")
        try:
            yield self.edges
        finally:
            self._lock.release()


class DependencyGraphBuilder:
    """
    Accumulates unit -> dependencies edges and validates them into a graph.

    Inserting the same unit twice appends the new dependencies to the
    existing list. Handles created with clone() share the accumulator, so
    every handle observes every insertion. Sharing across threads needs
    external locking; overlapping access raises BuilderBusyError.
    """

    def __init__(self, settings: Optional[GraphSettings] = None,
                 _accumulator: Optional[_EdgeAccumulator] = None):
        self.settings = settings or GraphSettings()
        self._accumulator = _accumulator or _EdgeAccumulator()
        self._consumed = False

    @classmethod
    def from_edges(cls, edges: Union[Mapping[UnitLike, Iterable[UnitLike]], Iterable[Tuple[UnitLike, Iterable[UnitLike]]]],
                   settings: Optional[GraphSettings] = None) -> "DependencyGraphBuilder":
        """Create a builder pre-filled from a mapping or from (unit, deps) pairs."""
        builder = cls(settings)
        items = edges.items() if isinstance(edges, Mapping) else edges
        for unit, deps in items:
            builder.with_dep(unit, deps)
        return builder

    def _ensure_usable(self) -> None:
        if self._consumed:
            raise BuilderConsumedError("Builder handle was already consumed by build()")

    def with_dep(self, unit: UnitLike, deps: Iterable[UnitLike] = ()) -> "DependencyGraphBuilder":
        """
        Record that `unit` depends on each of `deps`.

        Args:
            unit: The unit declaring the dependencies
            deps: Its direct dependencies, in order; may be empty

        Returns:
            This handle, for chaining
        """
        self._ensure_usable()
        if isinstance(deps, UnitId):
            raise TypeError(f"deps must be a sequence of units, not a single unit {deps}")
        unit_id = UnitId.coerce(unit)
        with self._accumulator.borrow() as edges:
            dep_ids = [UnitId.coerce(dep) for dep in deps]
            if unit_id in edges:
                edges[unit_id].extend(dep_ids)
                logger.debug(f"Appended {len(dep_ids)} dependencies to {unit_id}")
            else:
                edges[unit_id] = dep_ids
                logger.debug(f"Added {unit_id} with {len(dep_ids)} dependencies")
        return self

    def clone(self) -> "DependencyGraphBuilder":
        """Return a new handle sharing this builder's accumulator."""
        self._ensure_usable()
        return DependencyGraphBuilder(self.settings, _accumulator=self._accumulator)

    def snapshot(self) -> EdgeMap:
        """Copy of the accumulated edge map, keys in ascending order."""
        with self._accumulator.borrow() as edges:
            return {unit: tuple(edges[unit]) for unit in sorted(edges)}

    def __len__(self) -> int:
        with self._accumulator.borrow() as edges:
            return len(edges)

    def build(self) -> DependencyGraph:
        """
        Consume this handle and validate the accumulated edges.

        Returns:
            An immutable DependencyGraph over the accumulated edges

        Raises:
            SelfDependencyError: if any unit lists itself
            CircularDependencyError: if a walk from some unit re-enters its active path
            BuilderConsumedError: if this handle was already built
        """
        self._ensure_usable()
        edges = self.snapshot()
        self._consumed = True

        visited: Set[UnitId] = set()
        for unit, deps in edges.items():
            if unit in deps:
                logger.warning(f"Unit {unit} depends on itself")
                raise SelfDependencyError(unit)
            path = _find_cycle(unit, edges, visited)
            if path is not None:
                error = CircularDependencyError(path[0], path[-1], path, self.settings.trace_separator)
                logger.warning(f"Detected cycle: {error.trace}")
                raise error

        logger.info(f"Built dependency graph with {len(edges)} units and "
                    f"{sum(len(deps) for deps in edges.values())} edges")
        return DependencyGraph(edges)


def _find_cycle(root: UnitId, edges: EdgeMap, visited: Set[UnitId]) -> Optional[List[UnitId]]:
    """
    Depth-first walk from `root` looking for a unit already on the active path.

    `visited` holds units proven cycle-free and persists across calls within
    one build. Returns the active path when a cycle is found, otherwise None.
    """
    if root in visited:
        return None

    path: List[UnitId] = [root]
    on_path: Set[UnitId] = {root}
    frames = [iter(edges.get(root, ()))]

    while frames:
        dep = next(frames[-1], None)
        if dep is None:
            done = path.pop()
            on_path.discard(done)
            visited.add(done)
            frames.pop()
            continue
        if dep in visited:
            continue
        if dep in on_path:
            return list(path)
        path.append(dep)
        on_path.add(dep)
        frames.append(iter(edges.get(dep, ())))

    return None
