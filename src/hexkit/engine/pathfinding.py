"""Hex pathfinding — A* search and precomputed reachability.

Provides:
- ``a_star``: one-shot best-first search between two points
- ``AccessibilityTrie``: every point reachable from an origin within a
  movement budget, with cheap path reconstruction afterwards
- Path helpers (validation, step count, cost)

Both searches are generic over the point type: anything exposing ``q``/``r``
with ``(q, r)`` equality works. Neighbor generation, walkability, heuristic
and movement cost are injected as plain callables.

Neither structure is safe for concurrent use; an AccessibilityTrie must not
be rebuilt while another thread reads from it.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, Generic, Hashable, Iterator, Optional, Protocol, TypeVar

from hexkit.util.constants import DEFAULT_STEP_COST
from hexkit.util.hex_math import distance

log = logging.getLogger(__name__)

P = TypeVar("P", bound=Hashable)

Neighbors = Callable[[P], list[P]]
Walkable = Callable[[P], bool]
Heuristic = Callable[[P, P], int]
MovementCost = Callable[[P, P], float]


class PathTile(Protocol):
    """A point that knows its own walkability, costs and distances."""

    def is_walkable(self) -> bool: ...

    def move_cost_to(self, to) -> float: ...

    def distance_to(self, to) -> int: ...


def axial_distance(a, b) -> int:
    """Default heuristic: hex grid distance between two points."""
    return distance(a.q, a.r, b.q, b.r)


def unit_cost(a, b) -> float:
    """Default movement cost: 1 per step, 0 for staying in place."""
    return 0.0 if a == b else DEFAULT_STEP_COST


class _OpenSet(Generic[P]):
    """Min-heap of (point, priority) candidates.

    Among equal priorities the most recently pushed entry pops first.
    Superseded entries stay in the heap and are expanded again when popped.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, P]] = []
        self._counter = itertools.count()

    def push(self, point: P, priority: float) -> None:
        heapq.heappush(self._heap, (priority, -next(self._counter), point))

    def pop(self) -> tuple[P, float]:
        priority, _, point = heapq.heappop(self._heap)
        return point, priority

    def __bool__(self) -> bool:
        return bool(self._heap)


def _walk_back(predecessors: dict[P, P], point: P) -> list[P]:
    """Follow predecessors from ``point`` until a point without one, then reverse."""
    path = [point]
    current = predecessors.get(point)
    while current is not None:
        path.append(current)
        current = predecessors.get(current)
    path.reverse()
    return path


def a_star(
    start: P,
    goal: P,
    neighbors: Neighbors,
    is_walkable: Walkable,
    heuristic: Heuristic = axial_distance,
    movement_cost: MovementCost = unit_cost,
) -> list[P]:
    """Find the lowest-cost path from ``start`` to ``goal``.

    Args:
        start: Starting point.
        goal: Destination point.
        neighbors: Returns the points adjacent to a point.
        is_walkable: Whether a point may be entered. Non-walkable neighbors
            never enter the open set.
        heuristic: Estimate added to a candidate's cost to order the open set.
            Evaluated from the expanded point to the neighbor being queued.
        movement_cost: Cost of stepping from one point to the next.
            ``movement_cost(start, start)`` seeds the start cost.

    Returns:
        Points from ``start`` to ``goal`` inclusive, ``[start]`` when both are
        the same point, or an empty list if either endpoint is not walkable
        or the goal cannot be reached.
    """
    if not is_walkable(start) or not is_walkable(goal):
        return []
    if start == goal:
        return [start]

    start_cost = movement_cost(start, start)
    costs: dict[P, float] = {start: start_cost}
    predecessors: dict[P, P] = {}
    open_set: _OpenSet[P] = _OpenSet()
    open_set.push(start, start_cost)

    while open_set:
        current, _ = open_set.pop()
        if current == goal:
            break

        current_cost = costs.get(current, 0.0)
        for neighbor in neighbors(current):
            if not is_walkable(neighbor):
                continue
            new_cost = current_cost + movement_cost(current, neighbor)
            previous = costs.get(neighbor)
            if previous is None or new_cost < previous:
                costs[neighbor] = new_cost
                open_set.push(neighbor, new_cost + heuristic(current, neighbor))
                predecessors[neighbor] = current

    if goal not in predecessors:
        return []
    return _walk_back(predecessors, goal)


def a_star_tiles(start, goal, neighbors: Neighbors) -> list:
    """Run ``a_star`` on points implementing the PathTile protocol."""
    return a_star(
        start,
        goal,
        neighbors,
        is_walkable=lambda p: p.is_walkable(),
        heuristic=lambda a, b: a.distance_to(b),
        movement_cost=lambda a, b: a.move_cost_to(b),
    )


class AccessibilityTrie(Generic[P]):
    """Every point reachable from ``origin`` within ``max_move_cost``.

    The reachable set is computed once at construction; afterwards each
    ``get`` walks the stored predecessors back to the origin, so its cost is
    proportional to the path length. Call ``build()`` again when the data
    behind the injected callables has changed.

    Attributes:
        origin: Point every path starts from.
        max_move_cost: Inclusive budget for the cumulative movement cost.
        neighbors: Returns the points adjacent to a point.
        is_walkable: Whether a point may be entered.
        heuristic: Orders the open set only; it does not change which
            points end up accessible.
        movement_cost: Cost of stepping from one point to the next.
    """

    def __init__(
        self,
        origin: P,
        max_move_cost: float,
        neighbors: Neighbors,
        is_walkable: Walkable,
        heuristic: Heuristic = axial_distance,
        movement_cost: MovementCost = unit_cost,
    ) -> None:
        self.origin = origin
        self.max_move_cost = max_move_cost
        self.neighbors = neighbors
        self.is_walkable = is_walkable
        self.heuristic = heuristic
        self.movement_cost = movement_cost

        self._access_map: dict[P, P] = {}
        self._costs: dict[P, float] = {}
        self.build()

    @classmethod
    def for_tiles(cls, origin, max_move_cost: float, neighbors: Neighbors) -> AccessibilityTrie:
        """Build a trie over points implementing the PathTile protocol."""
        return cls(
            origin,
            max_move_cost,
            neighbors,
            is_walkable=lambda p: p.is_walkable(),
            heuristic=lambda a, b: a.distance_to(b),
            movement_cost=lambda a, b: a.move_cost_to(b),
        )

    # -- Build -----------------------------------------------------------

    def build(self) -> None:
        """(Re)compute the accessible set from scratch."""
        self._access_map.clear()
        self._costs.clear()

        if not self.is_walkable(self.origin):
            log.debug("Origin %r is not walkable — nothing accessible", self.origin)
            return

        origin_cost = self.movement_cost(self.origin, self.origin)
        self._costs[self.origin] = origin_cost
        open_set: _OpenSet[P] = _OpenSet()
        open_set.push(self.origin, origin_cost)

        while open_set:
            current, _ = open_set.pop()
            current_cost = self._costs.get(current, 0.0)
            if current_cost > self.max_move_cost:
                continue

            for neighbor in self.neighbors(current):
                if neighbor == self.origin or not self.is_walkable(neighbor):
                    continue
                new_cost = current_cost + self.movement_cost(current, neighbor)
                if new_cost > self.max_move_cost:
                    continue
                previous = self._costs.get(neighbor)
                if previous is None or new_cost < previous:
                    self._costs[neighbor] = new_cost
                    open_set.push(neighbor, new_cost + self.heuristic(current, neighbor))
                    self._access_map[neighbor] = current

        log.debug(
            "Accessibility from %r within %s: %d points",
            self.origin, self.max_move_cost, len(self._access_map),
        )

    # -- Queries ---------------------------------------------------------

    @property
    def accessible(self):
        """Read-only view of every point reachable within the budget.

        The origin itself is not included.
        """
        return self._access_map.keys()

    def get(self, point: P) -> list[P]:
        """Path from the origin to ``point``.

        Returns:
            ``[origin]`` for the origin, origin..point for an accessible
            point, or an empty list if ``point`` is not walkable or not
            accessible.
        """
        if not self.is_walkable(point):
            return []
        if point == self.origin:
            return [self.origin]
        if point not in self._access_map:
            return []
        return _walk_back(self._access_map, point)

    __getitem__ = get

    def cost_of(self, point: P) -> Optional[float]:
        """Cumulative movement cost to ``point``, or None if not accessible."""
        if point == self.origin and self.is_walkable(point):
            return self._costs.get(point)
        if point not in self._access_map:
            return None
        return self._costs[point]

    def __contains__(self, point: object) -> bool:
        return point in self._access_map

    def __len__(self) -> int:
        return len(self._access_map)

    def __iter__(self) -> Iterator[P]:
        return iter(self._access_map)


# -- Path helpers --------------------------------------------------------

def validate_path(path: list) -> bool:
    """Check that each consecutive pair in the path are hex neighbors.

    Args:
        path: Ordered list of points.

    Returns:
        True if the path is valid (all steps are between neighbors).
    """
    if len(path) < 2:
        return True
    return all(
        distance(path[i].q, path[i].r, path[i + 1].q, path[i + 1].r) == 1
        for i in range(len(path) - 1)
    )


def path_distance(path: list) -> int:
    """Return the number of steps in a path (len - 1)."""
    return max(0, len(path) - 1)


def path_cost(path: list, movement_cost: MovementCost = unit_cost) -> float:
    """Sum of the movement costs along a path."""
    return sum(movement_cost(a, b) for a, b in zip(path, path[1:]))
