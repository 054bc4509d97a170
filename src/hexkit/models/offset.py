"""Offset and doubled coordinate systems.

Rectangular (col, row) addressing schemes that map one-to-one onto axial
coordinates. Useful when a map is stored as a 2D array or drawn on a
rectangular screen.

- even-q / odd-q: flat-top layouts, every other column shoved down
- even-r / odd-r: pointy-top layouts, every other row shoved right
- double-width / double-height: doubled step on one axis, (col + row) even

Every class exposes ``q`` and ``r`` properties, so any of them can be passed
straight to the pathfinding and vision engines.

Reference: https://www.redblobgames.com/grids/hexagons/#coordinates-offset
"""

from __future__ import annotations

from dataclasses import dataclass

from hexkit.models.hex import HexCoord


class _ColRowCoord:
    """Shared axial view for (col, row) coordinates."""

    col: int
    row: int

    def to_hex(self) -> HexCoord:
        raise NotImplementedError

    @property
    def q(self) -> int:
        return self.to_hex().q

    @property
    def r(self) -> int:
        return self.to_hex().r

    def distance_to(self, other: _ColRowCoord | HexCoord) -> int:
        return self.to_hex().distance_to(other)


class _OffsetCoord(_ColRowCoord):
    # [parity][direction] -> (dcol, drow); directions follow HexCoord order
    _NEIGHBOR_DIFFS: tuple[tuple[tuple[int, int], ...], tuple[tuple[int, int], ...]]

    def _parity(self) -> int:
        raise NotImplementedError

    def neighbor(self, direction: int):
        dcol, drow = self._NEIGHBOR_DIFFS[self._parity()][direction]
        return type(self)(self.col + dcol, self.row + drow)

    def neighbors(self) -> list:
        return [self.neighbor(d) for d in range(6)]


@dataclass(frozen=True)
class EvenQCoord(_OffsetCoord):
    """Flat-top layout; even columns are shoved down."""

    col: int
    row: int

    _NEIGHBOR_DIFFS = (
        ((1, 1), (1, 0), (0, -1), (-1, 0), (-1, 1), (0, 1)),
        ((1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0), (0, 1)),
    )

    def _parity(self) -> int:
        return self.col & 1

    def to_hex(self) -> HexCoord:
        return HexCoord.cached(self.col, self.row - (self.col + (self.col & 1)) // 2)

    @classmethod
    def from_hex(cls, hex: HexCoord) -> EvenQCoord:
        return cls(hex.q, hex.r + (hex.q + (hex.q & 1)) // 2)


@dataclass(frozen=True)
class OddQCoord(_OffsetCoord):
    """Flat-top layout; odd columns are shoved down."""

    col: int
    row: int

    _NEIGHBOR_DIFFS = (
        ((1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0), (0, 1)),
        ((1, 1), (1, 0), (0, -1), (-1, 0), (-1, 1), (0, 1)),
    )

    def _parity(self) -> int:
        return self.col & 1

    def to_hex(self) -> HexCoord:
        return HexCoord.cached(self.col, self.row - (self.col - (self.col & 1)) // 2)

    @classmethod
    def from_hex(cls, hex: HexCoord) -> OddQCoord:
        return cls(hex.q, hex.r + (hex.q - (hex.q & 1)) // 2)


@dataclass(frozen=True)
class EvenRCoord(_OffsetCoord):
    """Pointy-top layout; even rows are shoved right."""

    col: int
    row: int

    _NEIGHBOR_DIFFS = (
        ((1, 0), (1, -1), (0, -1), (-1, 0), (0, 1), (1, 1)),
        ((1, 0), (0, -1), (-1, -1), (-1, 0), (-1, 1), (0, 1)),
    )

    def _parity(self) -> int:
        return self.row & 1

    def to_hex(self) -> HexCoord:
        return HexCoord.cached(self.col - (self.row + (self.row & 1)) // 2, self.row)

    @classmethod
    def from_hex(cls, hex: HexCoord) -> EvenRCoord:
        return cls(hex.q + (hex.r + (hex.r & 1)) // 2, hex.r)


@dataclass(frozen=True)
class OddRCoord(_OffsetCoord):
    """Pointy-top layout; odd rows are shoved right."""

    col: int
    row: int

    _NEIGHBOR_DIFFS = (
        ((1, 0), (0, -1), (-1, -1), (-1, 0), (-1, 1), (0, 1)),
        ((1, 0), (1, -1), (0, -1), (-1, 0), (0, 1), (1, 1)),
    )

    def _parity(self) -> int:
        return self.row & 1

    def to_hex(self) -> HexCoord:
        return HexCoord.cached(self.col - (self.row - (self.row & 1)) // 2, self.row)

    @classmethod
    def from_hex(cls, hex: HexCoord) -> OddRCoord:
        return cls(hex.q + (hex.r - (hex.r & 1)) // 2, hex.r)


# -- Doubled coordinates -------------------------------------------------

class _DoubledCoord(_ColRowCoord):
    _DIRECTIONS: tuple[tuple[int, int], ...]

    def __post_init__(self) -> None:
        if (self.col + self.row) % 2 != 0:
            raise ValueError(f"(col + row) must be even (got {self.col}, {self.row})")

    def __add__(self, other):
        return type(self)(self.col + other.col, self.row + other.row)

    def neighbor(self, direction: int):
        dcol, drow = self._DIRECTIONS[direction]
        return type(self)(self.col + dcol, self.row + drow)

    def neighbors(self) -> list:
        return [self.neighbor(d) for d in range(6)]


@dataclass(frozen=True)
class DoubleWidthCoord(_DoubledCoord):
    """Pointy-top layout; the column advances by 2 per hex."""

    col: int
    row: int

    _DIRECTIONS = ((2, 0), (1, -1), (-1, -1), (-2, 0), (-1, 1), (1, 1))

    def to_hex(self) -> HexCoord:
        return HexCoord.cached((self.col - self.row) // 2, self.row)

    @classmethod
    def from_hex(cls, hex: HexCoord) -> DoubleWidthCoord:
        return cls(hex.q * 2 + hex.r, hex.r)


@dataclass(frozen=True)
class DoubleHeightCoord(_DoubledCoord):
    """Flat-top layout; the row advances by 2 per hex."""

    col: int
    row: int

    _DIRECTIONS = ((1, 1), (1, -1), (0, -2), (-1, -1), (-1, 1), (0, 2))

    def to_hex(self) -> HexCoord:
        return HexCoord.cached(self.col, (self.row - self.col) // 2)

    @classmethod
    def from_hex(cls, hex: HexCoord) -> DoubleHeightCoord:
        return cls(hex.q, hex.r * 2 + hex.q)
