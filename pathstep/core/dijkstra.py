# pathstep/core/dijkstra.py
#!/usr/bin/env python3
"""
Incremental Dijkstra: one settlement (at most) per step() so a render loop
can animate the frontier.

- PathFinder(start, goal, visited, context) seeds the frontier with start.
- step(graph) pops the cheapest entry, settles it, expands its neighbors.
- finish(graph) steps until a terminal state and hands the storage back.

Stale duplicates are discarded when popped (lazy deletion) instead of
decreasing keys in place. Equal-cost entries pop in insertion order.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, Tuple
import heapq
import logging

from pathstep.config import DEFAULT_STEPS_PER_FRAME
from pathstep.core.types import (
    C, R,
    COMPUTING, NO_PATH_FOUND, UNIT_CONTEXT,
    CostContext, MapGraph, MapStorage,
    PathFinderState, PathReconstructionError, PathResult, VisitedItem,
)

logger = logging.getLogger(__name__)


@dataclass
class _ToVisit(Generic[C, R]):
    context: CostContext
    cost: C
    seq: int
    node: R
    parent: Optional[R]

    def __lt__(self, other: "_ToVisit") -> bool:
        order = self.context.compare(self.cost, other.cost)
        if order != 0:
            return order < 0
        return self.seq < other.seq


@dataclass
class PathFinder(Generic[R, C]):
    start: R
    goal: R
    visited: MapStorage
    context: CostContext = UNIT_CONTEXT

    open_pq: List[_ToVisit] = field(default_factory=list, init=False)
    seq: int = field(default=0, init=False)
    popped_count: int = field(default=0, init=False)
    settled_count: int = field(default=0, init=False)
    discarded_count: int = field(default=0, init=False)
    _state: PathFinderState = field(default=COMPUTING, init=False, repr=False)

    def __post_init__(self) -> None:
        self._push(self.context.zero, self.start, None)

    # -------------------- accessors --------------------

    @property
    def state(self) -> PathFinderState:
        return self._state

    def get_visited(self) -> MapStorage:
        return self.visited

    # -------------------- search --------------------

    def step(self, graph: MapGraph) -> PathFinderState:
        if self._state.is_done:
            return self._state

        if not self.open_pq:
            self._state = NO_PATH_FOUND
            logger.debug("No path from %r to %r after %d settlements",
                         self.start, self.goal, self.settled_count)
            return self._state

        visit = heapq.heappop(self.open_pq)
        self.popped_count += 1

        # a cheaper entry for this node was already settled
        if isinstance(self.visited.get(visit.node), VisitedItem):
            self.discarded_count += 1
            return self._state

        self.visited.set(visit.node, VisitedItem(visit.cost, visit.parent))
        self.settled_count += 1

        if visit.node == self.goal:
            path = self._reconstruct_path()
            self._state = PathFinderState.found(
                PathResult(path=path, start=self.start, goal=self.goal, total_cost=visit.cost))
            logger.debug("Path from %r to %r found: cost=%s len=%d settled=%d",
                         self.start, self.goal, visit.cost, len(path), self.settled_count)
            return self._state

        for node, move_cost in graph.neighbors_of(visit.node):
            if not isinstance(self.visited.get(node), VisitedItem):
                self._push(visit.cost + move_cost, node, visit.node)

        return self._state

    def advance(self, graph: MapGraph, max_steps: int = DEFAULT_STEPS_PER_FRAME) -> PathFinderState:
        """Step at most max_steps times, stopping early once terminal."""
        if max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {max_steps}")
        for _ in range(max_steps):
            if self.step(graph).is_done:
                break
        return self._state

    def finish(self, graph: MapGraph) -> Tuple[PathFinderState, MapStorage]:
        while not self.step(graph).is_done:
            pass
        return self._state, self.visited

    # -------------------- helpers --------------------

    def _push(self, cost: Any, node: R, parent: Optional[R]) -> None:
        self.seq += 1
        heapq.heappush(self.open_pq, _ToVisit(self.context, cost, self.seq, node, parent))

    def _reconstruct_path(self) -> List[R]:
        path: List[R] = [self.goal]
        item = self.visited.get(self.goal)
        while item.parent is not None:
            node = item.parent
            path.append(node)
            item = self.visited.get(node)
            if not isinstance(item, VisitedItem):
                raise PathReconstructionError(node)
        path.reverse()
        return path

    def metrics(self) -> Dict[str, Any]:
        result = self._state.result
        return {
            "popped": self.popped_count,
            "settled": self.settled_count,
            "discarded": self.discarded_count,
            "frontier_size": len(self.open_pq),
            "path_len": len(result.path) if result else 0,
            "total_cost": result.total_cost if result else None,
        }
