"""Precomputed line-of-sight and field-of-view on a hex grid.

A ``SymmetricPreComputedVisionTries`` holds one trie per vision radius. The
trie contains the symmetric Bresenham line from (0, 0) to every hex within
the radius; lines sharing a prefix share nodes. Queries translate the trie to
the viewer's position, so one structure serves any number of viewers and
occlusion predicates.

- Line of sight looks up the candidate end nodes for an offset and walks
  each one's ancestors back to the root, stopping at the first blocker.
- Field of view walks the whole trie depth-first and prunes a subtree as
  soon as its node is blocked, so a ray blocked at distance d never tests
  the hexes behind it.

The structure is never mutated after construction and may be shared
read-only between threads once built.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator, Optional

from hexkit.models.hex import AxisPoint, HexCoord
from hexkit.util.constants import STEP_KEY_SLOTS
from hexkit.util.hex_math import bresenhams_line, circle, distance

log = logging.getLogger(__name__)

BlocksVision = Callable[[HexCoord], bool]
PointCallback = Callable[[HexCoord], None]


def los_key(dq: int, dr: int, radius: int) -> int:
    """Index of the offset (dq, dr) within a square of side 2*radius + 1."""
    return radius + dq + (2 * radius + 1) * (dr + radius)


def step_key(dq: int, dr: int) -> int:
    """Child slot for a unit step; both components must be in {-1, 0, 1}."""
    return (dq + 1) + (dr + 1) * 3


class TrieNode:
    """One hex offset from the trie root, reached along one particular line.

    Attributes:
        q: Offset from the root on the q axis.
        r: Offset from the root on the r axis.
        parent: Node this one was reached from; None for the root.
        children: Child nodes in creation order.
        child_index: Step key -> index into ``children``.
    """

    __slots__ = ("q", "r", "parent", "children", "child_index")

    def __init__(self, q: int, r: int, parent: Optional[TrieNode] = None) -> None:
        self.q = q
        self.r = r
        self.parent = parent
        self.children: list[TrieNode] = []
        self.child_index: list[Optional[int]] = [None] * STEP_KEY_SLOTS

    @property
    def depth(self) -> int:
        """Number of steps from the root to this node."""
        n = 0
        node = self.parent
        while node is not None:
            n += 1
            node = node.parent
        return n

    def child(self, dq: int, dr: int) -> Optional[TrieNode]:
        """Child reached by the unit step (dq, dr), if any."""
        index = self.child_index[step_key(dq, dr)]
        return None if index is None else self.children[index]

    def add(
        self,
        dest_q: int,
        dest_r: int,
        radius: int,
        on_new: Optional[Callable[[int, TrieNode], None]] = None,
    ) -> TrieNode:
        """Insert the line from this node's offset to (dest_q, dest_r).

        Existing nodes along the way are reused. Every node created is
        reported to ``on_new`` with its ``los_key``.

        Returns:
            The node at the end of the line.
        """
        current = self
        q, r = self.q, self.r
        for new_q, new_r in bresenhams_line(self.q, self.r, dest_q, dest_r):
            if distance(new_q, new_r, 0, 0) > radius:
                continue
            dq = new_q - q
            dr = new_r - r
            if dq == 0 and dr == 0:
                continue
            q, r = new_q, new_r

            key = step_key(dq, dr)
            index = current.child_index[key]
            if index is None:
                node = TrieNode(q, r, parent=current)
                if on_new is not None:
                    on_new(los_key(q, r, radius), node)
                current.children.append(node)
                index = len(current.children) - 1
                current.child_index[key] = index
            current = current.children[index]
        return current

    def ancestors(self) -> Iterator[TrieNode]:
        """Yield this node, its parent, and so on up to the root."""
        node: Optional[TrieNode] = self
        while node is not None:
            yield node
            node = node.parent

    def pre_order(self, should_stop: Callable[[int, int], bool]) -> None:
        """Visit this node and its descendants, parents before children.

        When ``should_stop(q, r)`` is true for a node, none of its
        descendants are visited; siblings are unaffected.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            if should_stop(node.q, node.r):
                continue
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        return f"TrieNode({self.q},{self.r})"


class SymmetricPreComputedVisionTries:
    """Precomputed vision lines for one radius.

    Args:
        radius: Vision radius. Zero gives a trie holding only the root.

    Raises:
        ValueError: If ``radius`` is negative.

    Attributes:
        radius: Radius the trie was built for.
        root: Node at offset (0, 0).
        fast_los_map: ``los_key`` of an offset -> every node ending at that
            offset, in insertion order. The root has no entry.
    """

    def __init__(self, radius: int) -> None:
        if radius < 0:
            raise ValueError(f"Vision radius must not be negative (got {radius})")
        self.radius = radius
        self.root = TrieNode(0, 0)
        self.fast_los_map: dict[int, list[TrieNode]] = {}
        self.node_count = 1

        for q, r in circle(radius):
            self.root.add(q, r, radius, self._register)

        log.debug(
            "Built vision trie: radius=%d nodes=%d offsets=%d",
            radius, self.node_count, len(self.fast_los_map),
        )

    def _register(self, key: int, node: TrieNode) -> None:
        self.fast_los_map.setdefault(key, []).append(node)
        self.node_count += 1

    # -- Line of sight ---------------------------------------------------

    def _find_line(
        self, start: AxisPoint, end: AxisPoint, does_block_vision: BlocksVision, radius: Optional[int]
    ) -> Optional[TrieNode]:
        limit = self.radius if radius is None else radius
        dq = end.q - start.q
        dr = end.r - start.r
        if distance(start.q, start.r, end.q, end.r) > limit:
            return None
        if max(abs(dq), abs(dr), abs(dq + dr)) > self.radius:
            return None

        for candidate in self.fast_los_map.get(los_key(dq, dr, self.radius), ()):
            if not any(
                does_block_vision(HexCoord.cached(start.q + node.q, start.r + node.r))
                for node in candidate.ancestors()
            ):
                return candidate
        return None

    def line_of_sight(
        self,
        start: AxisPoint,
        end: AxisPoint,
        does_block_vision: BlocksVision,
        radius: Optional[int] = None,
        callback: Optional[PointCallback] = None,
    ) -> bool:
        """Whether an unobstructed line exists from ``start`` to ``end``.

        Args:
            start: Viewer position.
            end: Target position.
            does_block_vision: Called with absolute positions, both endpoints
                included; any True rejects the line being tested.
            radius: Range limit for this query; defaults to the trie radius
                and cannot extend beyond it.
            callback: Receives every point of the accepted line, from
                ``start`` to ``end``.

        Returns:
            True if one of the candidate lines is clear. False when all are
            blocked, when ``end`` is out of range, or when ``start == end``
            (the root has no line of its own).
        """
        found = self._find_line(start, end, does_block_vision, radius)
        if found is None:
            return False
        if callback is not None:
            for node in reversed(list(found.ancestors())):
                callback(HexCoord.cached(start.q + node.q, start.r + node.r))
        return True

    def line_of_sight_path(
        self,
        start: AxisPoint,
        end: AxisPoint,
        does_block_vision: BlocksVision,
        radius: Optional[int] = None,
    ) -> list[HexCoord]:
        """Points of the accepted line from ``start`` to ``end``, or [] if none is clear."""
        points: list[HexCoord] = []
        self.line_of_sight(start, end, does_block_vision, radius, points.append)
        return points

    # -- Field of view ---------------------------------------------------

    def field_of_view(
        self,
        origin: AxisPoint,
        does_block_vision: BlocksVision,
        callback: Optional[PointCallback] = None,
    ) -> set[HexCoord]:
        """All points visible from ``origin`` within the trie radius.

        A blocking point is not visible itself and hides everything the trie
        reaches only through it. The origin is visible unless it blocks.

        Args:
            origin: Viewer position.
            does_block_vision: Called with absolute positions.
            callback: Receives each visible point as it is found; a point
                reached along several lines may be reported more than once.

        Returns:
            The distinct visible points.
        """
        visible: set[HexCoord] = set()
        oq, orr = origin.q, origin.r

        def stop(q: int, r: int) -> bool:
            point = HexCoord.cached(q + oq, r + orr)
            if does_block_vision(point):
                return True
            visible.add(point)
            if callback is not None:
                callback(point)
            return False

        self.root.pre_order(stop)
        return visible


SPCVT = SymmetricPreComputedVisionTries
