# pathstep/core/types.py
#!/usr/bin/env python3
"""
Shared contracts for the search engine and the maps it explores.

A map (``MapGraph``) knows how to enumerate neighbors and how to allocate
per-node scratch storage (``MapStorage``). The engine only ever talks to
those two protocols, so any node reference / cost pair works as long as the
map and the ``CostContext`` agree on it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Hashable, Iterator, List, Optional, Protocol, Tuple, TypeVar

R = TypeVar("R", bound=Hashable)  # node reference
C = TypeVar("C")                  # absolute cost
T = TypeVar("T")


# -------------------- cost ordering --------------------

class CostContext(Protocol[C]):
    """Comparison context that travels with every cost in the frontier."""

    zero: C

    def compare(self, a: C, b: C) -> int:
        """Negative if a sorts before b, zero if equal, positive otherwise."""
        ...


class UnitContext:
    """Natural ordering for plain numeric costs."""

    zero = 0

    def compare(self, a, b) -> int:
        return (a > b) - (a < b)

    def __repr__(self) -> str:
        return "UnitContext()"


UNIT_CONTEXT = UnitContext()


# -------------------- map contracts --------------------

class MapStorage(Protocol[R, T]):
    def is_valid(self, node: R) -> bool: ...
    def get(self, node: R) -> T: ...
    def set(self, node: R, value: T) -> None: ...


class MapGraph(Protocol[R, C]):
    def is_valid(self, node: R) -> bool:
        """True if node is addressable (in bounds), not necessarily passable."""
        ...

    def neighbors_of(self, node: R) -> Iterator[Tuple[R, C]]:
        """Fresh iterator of (neighbor, edge cost) for a valid node."""
        ...

    def create_storage(self, default: Any = None) -> MapStorage[R, Any]:
        """New storage sized to the map, every slot holding ``default``."""
        ...


# -------------------- search results --------------------

@dataclass(frozen=True)
class VisitedItem(Generic[C, R]):
    cost: C
    parent: Optional[R] = None   # None marks the start node


class Status(str, Enum):
    COMPUTING = "computing"
    NO_PATH_FOUND = "no_path"
    PATH_FOUND = "path_found"


@dataclass(frozen=True)
class PathResult(Generic[C, R]):
    path: List[R]                # start .. goal inclusive
    start: R
    goal: R
    total_cost: C


@dataclass(frozen=True)
class PathFinderState(Generic[C, R]):
    status: Status
    result: Optional[PathResult] = None

    @property
    def is_done(self) -> bool:
        return self.status is not Status.COMPUTING

    @classmethod
    def found(cls, result: PathResult) -> "PathFinderState":
        return cls(Status.PATH_FOUND, result)


COMPUTING = PathFinderState(Status.COMPUTING)
NO_PATH_FOUND = PathFinderState(Status.NO_PATH_FOUND)


# -------------------- errors --------------------

class PathfindingError(Exception):
    """Base class for errors raised by pathstep."""


class PathReconstructionError(PathfindingError, RuntimeError):
    """Backtracking reached a node that was never settled."""

    def __init__(self, node: Any):
        super().__init__(f"Backtracking led to a node that was never visited: {node!r}")
        self.node = node


class MapFormatError(PathfindingError, ValueError):
    """A serialized map could not be decoded."""
