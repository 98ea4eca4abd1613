"""
Unit identifiers used as graph keys.

A unit is identified by an opaque (id, version) pair. The pair is never
interpreted here beyond equality and ordering.
"""
from functools import total_ordering
from typing import Any, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


@total_ordering
class UnitId(BaseModel):
    """Immutable composite key ordered lexicographically over (id, version)."""
    id: int = Field(ge=0)
    version: int = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, id: int, version: int = 0) -> "UnitId":
        return cls(id=id, version=version)

    @classmethod
    def coerce(cls, value: Any) -> "UnitId":
        """
        Turn a UnitId or an (id, version) pair into a UnitId.

        Raises:
            TypeError: if the value is neither a UnitId nor a pair
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(id=value[0], version=value[1])
        raise TypeError(f"Cannot interpret {value!r} as a unit identifier")

    def as_tuple(self) -> Tuple[int, int]:
        return (self.id, self.version)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, UnitId):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def __str__(self) -> str:
        return f"({self.id}, {self.version})"

    def __repr__(self) -> str:
        return f"UnitId{self.as_tuple()}"


UnitLike = Union[UnitId, Tuple[int, int], Sequence[int]]
