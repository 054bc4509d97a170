"""Hexagonal tile map model.

Holds the tiles of a hex grid and supplies the callables the pathfinding and
vision engines expect: neighbor generation, walkability, movement cost,
heuristic and vision blocking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from hexkit.engine.pathfinding import AccessibilityTrie, a_star
from hexkit.engine.vision import SymmetricPreComputedVisionTries
from hexkit.models.hex import AxisPoint, HexCoord


@dataclass(frozen=True)
class TileType:
    """Terrain properties shared by every tile of one kind.

    Attributes:
        name: Identifier used in map files.
        walkable: Whether units may enter the tile.
        cost: Movement cost for entering the tile.
        opaque: Whether the tile blocks line of sight.
    """

    name: str
    walkable: bool = True
    cost: float = 1.0
    opaque: bool = False


@dataclass
class TileMap:
    """The game map as a hexagonal grid of typed tiles.

    Positions without a tile are off the map: not walkable and opaque.

    Attributes:
        tiles: Tile type per hex coordinate.
    """

    tiles: dict[HexCoord, TileType] = field(default_factory=dict)

    # -- Editing ---------------------------------------------------------

    def set_tile(self, coord: AxisPoint, tile: TileType) -> None:
        self.tiles[HexCoord.of(coord)] = tile

    def remove_tile(self, coord: AxisPoint) -> None:
        self.tiles.pop(HexCoord.of(coord), None)

    def tile_at(self, coord: AxisPoint) -> Optional[TileType]:
        return self.tiles.get(HexCoord.of(coord))

    # -- Strategies for the engines --------------------------------------

    def neighbors(self, coord: HexCoord) -> list[HexCoord]:
        """Adjacent coordinates that are on the map."""
        return [n for n in coord.neighbors() if n in self.tiles]

    def is_walkable(self, coord: HexCoord) -> bool:
        tile = self.tiles.get(coord)
        return tile is not None and tile.walkable

    def move_cost(self, a: HexCoord, b: HexCoord) -> float:
        """Cost of stepping from ``a`` onto ``b``; staying put is free."""
        if a == b:
            return 0.0
        tile = self.tiles.get(b)
        return tile.cost if tile is not None else float("inf")

    @staticmethod
    def heuristic(a: HexCoord, b: HexCoord) -> int:
        return a.distance_to(b)

    def blocks_vision(self, coord: HexCoord) -> bool:
        tile = self.tiles.get(coord)
        return tile is None or tile.opaque

    # -- Queries ---------------------------------------------------------

    def find_path(self, start: AxisPoint, goal: AxisPoint) -> list[HexCoord]:
        """Cheapest walkable path from start to goal, or [] if none."""
        return a_star(
            HexCoord.of(start),
            HexCoord.of(goal),
            self.neighbors,
            self.is_walkable,
            self.heuristic,
            self.move_cost,
        )

    def accessibility(self, origin: AxisPoint, max_move_cost: float) -> AccessibilityTrie[HexCoord]:
        """Everything reachable from ``origin`` within ``max_move_cost``.

        The returned trie reads this map live; call ``build()`` on it after
        editing tiles.
        """
        return AccessibilityTrie(
            HexCoord.of(origin),
            max_move_cost,
            self.neighbors,
            self.is_walkable,
            self.heuristic,
            self.move_cost,
        )

    def field_of_view(self, origin: AxisPoint, vision: SymmetricPreComputedVisionTries) -> set[HexCoord]:
        """Tiles visible from ``origin`` within the radius of ``vision``."""
        return vision.field_of_view(origin, self.blocks_vision)

    def line_of_sight(self, start: AxisPoint, end: AxisPoint, vision: SymmetricPreComputedVisionTries) -> bool:
        return vision.line_of_sight(start, end, self.blocks_vision)
