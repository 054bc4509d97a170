"""Hexagonal coordinate system using axial coordinates (q, r).

Axial coordinates define position on a hex grid where:
- q axis runs roughly east
- r axis runs roughly south-east
- s = -q - r is the implicit third cube coordinate

Every algorithm in hexkit works on anything that exposes integer ``q`` and
``r`` (the ``AxisPoint`` protocol). ``HexCoord`` is the concrete value type
used for results.

Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@runtime_checkable
class AxisPoint(Protocol):
    """Anything addressable by axial coordinates.

    Equality and hashing of implementations must depend on ``(q, r)`` only,
    since the search structures key their maps by point.
    """

    @property
    def q(self) -> int: ...

    @property
    def r(self) -> int: ...


@dataclass(frozen=True)
class HexCoord:
    """Immutable axial hex coordinate.

    Attributes:
        q: Column coordinate (east axis).
        r: Row coordinate (south-east axis).
    """

    q: int
    r: int

    # -- Construction ----------------------------------------------------

    @classmethod
    def from_cube(cls, q: int, r: int, s: int) -> HexCoord:
        """Build from cube coordinates, rejecting triples that do not sum to 0."""
        if q + r + s != 0:
            raise ValueError(f"q + r + s must be 0 (got {q}, {r}, {s})")
        return cls(q, r)

    @classmethod
    def of(cls, point: AxisPoint) -> HexCoord:
        """Convert any AxisPoint to a HexCoord."""
        if isinstance(point, HexCoord):
            return point
        return cls.cached(point.q, point.r)

    @classmethod
    def cached(cls, q: int, r: int) -> HexCoord:
        """Return the interned instance for ``(q, r)``.

        The table lives for the whole process and is never evicted.
        """
        key = (q, r)
        coord = _INTERNED.get(key)
        if coord is None:
            coord = cls(q, r)
            _INTERNED[key] = coord
        return coord

    # -- Cube coordinate -------------------------------------------------

    @property
    def s(self) -> int:
        """Implicit cube coordinate: s = -q - r."""
        return -self.q - self.r

    # -- Arithmetic ------------------------------------------------------

    def __add__(self, other: AxisPoint) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __sub__(self, other: AxisPoint) -> HexCoord:
        return HexCoord(self.q - other.q, self.r - other.r)

    def scale(self, factor: int) -> HexCoord:
        return HexCoord(self.q * factor, self.r * factor)

    # -- Geometry --------------------------------------------------------

    def distance_to(self, other: AxisPoint) -> int:
        """Hex grid distance (number of steps along hex edges)."""
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - (-other.q - other.r))
        return max(dq, dr, ds)

    def neighbor(self, direction: int) -> HexCoord:
        """Adjacent hex in ``direction`` (0-5, counter-clockwise from east)."""
        dq, dr = DIRECTIONS[direction]
        return HexCoord(self.q + dq, self.r + dr)

    def neighbors(self) -> list[HexCoord]:
        """Return the 6 adjacent hex coordinates."""
        return [HexCoord(self.q + dq, self.r + dr) for dq, dr in DIRECTIONS]

    def diagonal_neighbors(self) -> list[HexCoord]:
        """Return the 6 hexes reached by crossing a vertex (distance 2)."""
        return [HexCoord(self.q + dq, self.r + dr) for dq, dr in DIAGONALS]

    def ring(self, radius: int) -> list[HexCoord]:
        """Hexes exactly ``radius`` steps away, starting south-west.

        Unlike ``hex_math.ring``, which yields the center for radius 0, this
        returns [] for any radius <= 0 so that ``ring(0)`` adds nothing when
        rings are stacked into a disk.
        """
        if radius <= 0:
            return []
        from hexkit.util.hex_math import ring

        return [HexCoord.cached(q, r) for q, r in ring(radius, self.q, self.r)]

    def disk(self, radius: int) -> set[HexCoord]:
        """Every hex within ``radius`` steps, center included."""
        return set(self.circle(radius))

    def circle(self, radius: int) -> list[HexCoord]:
        """Return all hexes within `radius` in q-major enumeration order."""
        from hexkit.util.hex_math import circle

        return [HexCoord.cached(q, r) for q, r in circle(radius, self.q, self.r)]

    def line_to(self, other: AxisPoint) -> list[HexCoord]:
        """Return a list of hex coordinates forming a line from self to other.

        Uses linear interpolation in cube space with rounding.
        """
        from hexkit.util.hex_math import hex_linedraw

        return hex_linedraw(self, HexCoord.of(other))

    def bresenhams_line_to(self, other: AxisPoint) -> list[HexCoord]:
        """Return the symmetric Bresenham line from self to other (inclusive).

        Swapping the endpoints yields the same points in reverse order.
        """
        from hexkit.util.hex_math import bresenhams_line

        return [HexCoord.cached(q, r) for q, r in bresenhams_line(self.q, self.r, other.q, other.r)]

    # -- Serialization ---------------------------------------------------

    def __repr__(self) -> str:
        return f"Hex({self.q},{self.r})"


# The 6 axial direction vectors
DIRECTIONS: list[tuple[int, int]] = [
    (1, 0),   # E
    (1, -1),  # NE
    (0, -1),  # NW
    (-1, 0),  # W
    (-1, 1),  # SW
    (0, 1),   # SE
]

# The 6 diagonal vectors, one per vertex
DIAGONALS: list[tuple[int, int]] = [
    (2, -1),
    (1, -2),
    (-1, -1),
    (-2, 1),
    (-1, 2),
    (1, 1),
]

_INTERNED: dict[tuple[int, int], HexCoord] = {}
