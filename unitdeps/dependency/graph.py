"""
Read-only queries over a validated dependency graph.

A DependencyGraph is produced by DependencyGraphBuilder.build() and is never
mutated afterwards, so one instance can be shared by any number of readers.
"""
import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from unitdeps.dependency.ids import UnitId, UnitLike

logger = logging.getLogger("unitdeps.graph")

Ranking = List[Tuple[UnitId, int]]


class DependencyGraph:
    """
    Immutable unit -> dependencies map with traversal and ranking queries.

    The edge map is assumed to be free of self-references and cycles; build
    instances through DependencyGraphBuilder, which guarantees that.

    Queries:
    1. dependencies_of: transitive dependencies of a unit
    2. dependents_of: units that list a unit directly
    3. most/least_dependencies: units ranked by dependency count
    4. most/least_dependents: units ranked by direct in-degree
    """

    __slots__ = ("_edges",)

    def __init__(self, edges: Optional[Mapping[UnitLike, Sequence[UnitLike]]] = None):
        coerced = {
            UnitId.coerce(unit): tuple(UnitId.coerce(dep) for dep in deps)
            for unit, deps in (edges or {}).items()
        }
        self._edges: Mapping[UnitId, Tuple[UnitId, ...]] = MappingProxyType(
            {unit: coerced[unit] for unit in sorted(coerced)}
        )

    @classmethod
    def empty(cls) -> "DependencyGraph":
        return cls()

    @property
    def edges(self) -> Mapping[UnitId, Tuple[UnitId, ...]]:
        """Read-only view of the edge map, keys ascending."""
        return self._edges

    def units(self) -> List[UnitId]:
        return list(self._edges)

    def direct_dependencies(self, unit: UnitLike) -> Tuple[UnitId, ...]:
        return self._edges.get(UnitId.coerce(unit), ())

    def dependencies_of(self, unit: UnitLike) -> List[UnitId]:
        """
        All units reachable from `unit` by following dependency edges.

        Each unit appears once, in depth-first preorder. An unknown unit has
        no dependencies.
        """
        root = UnitId.coerce(unit)
        visited: Set[UnitId] = {root}
        found: List[UnitId] = []
        stack = [iter(self._edges.get(root, ()))]

        while stack:
            dep = next(stack[-1], None)
            if dep is None:
                stack.pop()
                continue
            if dep in visited:
                continue
            visited.add(dep)
            found.append(dep)
            stack.append(iter(self._edges.get(dep, ())))

        logger.debug(f"{root} has {len(found)} transitive dependencies")
        return found

    def dependents_of(self, unit: UnitLike) -> List[UnitId]:
        """Units that list `unit` directly. Not transitive."""
        target = UnitId.coerce(unit)
        return [key for key, deps in self._edges.items() if target in deps]

    def _count_dependencies(self, root: UnitId) -> int:
        # Each node expands its edges only on its first visit in this root's walk.
        visited: Set[UnitId] = set()
        pending = [root]
        count = 0
        while pending:
            node = pending.pop()
            if node in visited:
                continue
            visited.add(node)
            deps = self._edges.get(node, ())
            count += len(deps)
            pending.extend(deps)
        return count

    def _dependency_counts(self) -> Ranking:
        logger.debug(f"Counting dependencies for {len(self._edges)} units")
        return [(unit, self._count_dependencies(unit)) for unit in self._edges]

    def _dependent_counts(self) -> Ranking:
        listed_by: Dict[UnitId, Set[UnitId]] = {}
        for unit, deps in self._edges.items():
            listed_by.setdefault(unit, set())
            for dep in deps:
                listed_by.setdefault(dep, set()).add(unit)
        return [(unit, len(listed_by[unit])) for unit in sorted(listed_by)]

    def most_dependencies(self) -> Ranking:
        return sorted(self._dependency_counts(), key=lambda pair: pair[1], reverse=True)

    def least_dependencies(self) -> Ranking:
        return sorted(self._dependency_counts(), key=lambda pair: pair[1])

    def most_dependents(self) -> Ranking:
        return sorted(self._dependent_counts(), key=lambda pair: pair[1], reverse=True)

    def least_dependents(self) -> Ranking:
        return sorted(self._dependent_counts(), key=lambda pair: pair[1])

    def to_dict(self) -> Dict[Tuple[int, int], List[Tuple[int, int]]]:
        return {unit.as_tuple(): [dep.as_tuple() for dep in deps] for unit, deps in self._edges.items()}

    def __contains__(self, unit: object) -> bool:
        try:
            return UnitId.coerce(unit) in self._edges
        except (TypeError, ValueError):
            return False

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[UnitId]:
        return iter(self._edges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyGraph):
            return NotImplemented
        return dict(self._edges) == dict(other._edges)

    def __hash__(self) -> int:
        return hash(tuple(self._edges.items()))

    def __str__(self) -> str:
        edge_count = sum(len(deps) for deps in self._edges.values())
        return f"DependencyGraph(units={len(self._edges)}, edges={edge_count})"

    def __repr__(self) -> str:
        return self.__str__()
