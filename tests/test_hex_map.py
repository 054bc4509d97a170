"""Tests for TileMap — terrain, pathing and vision over typed tiles."""

from hexkit.engine.vision import SymmetricPreComputedVisionTries
from hexkit.models.hex import HexCoord
from hexkit.models.map import TileMap, TileType

FLOOR = TileType("floor")
ROUGH = TileType("rough", cost=3.0)
WALL = TileType("wall", walkable=False, opaque=True)
WATER = TileType("water", walkable=False)


def _make_open_map(radius: int) -> TileMap:
    """Create a hexagon-shaped map of floor tiles around the origin."""
    return TileMap(tiles={h: FLOOR for h in HexCoord(0, 0).disk(radius)})


class TestTileMapTiles:
    def test_set_and_get(self):
        m = TileMap()
        m.set_tile(HexCoord(1, 2), ROUGH)
        assert m.tile_at(HexCoord(1, 2)) is ROUGH

    def test_remove(self):
        m = _make_open_map(1)
        m.remove_tile(HexCoord(1, 0))
        assert m.tile_at(HexCoord(1, 0)) is None
        assert HexCoord(1, 0) not in m.neighbors(HexCoord(0, 0))

    def test_missing_tile_is_not_walkable_and_blocks(self):
        m = _make_open_map(1)
        assert not m.is_walkable(HexCoord(5, 5))
        assert m.blocks_vision(HexCoord(5, 5))

    def test_edge_neighbors(self):
        m = _make_open_map(1)
        assert len(m.neighbors(HexCoord(0, 0))) == 6
        assert len(m.neighbors(HexCoord(1, 0))) == 3

    def test_move_cost(self):
        m = _make_open_map(1)
        m.set_tile(HexCoord(1, 0), ROUGH)
        assert m.move_cost(HexCoord(0, 0), HexCoord(1, 0)) == 3.0
        assert m.move_cost(HexCoord(1, 0), HexCoord(1, 0)) == 0.0


class TestTileMapPathing:
    def test_straight_path(self):
        m = _make_open_map(3)
        path = m.find_path(HexCoord(-3, 0), HexCoord(3, 0))
        assert len(path) == 7

    def test_detours_around_wall(self):
        m = _make_open_map(2)
        m.set_tile(HexCoord(0, 0), WALL)
        path = m.find_path(HexCoord(-1, 0), HexCoord(1, 0))
        assert HexCoord(0, 0) not in path
        assert len(path) == 4

    def test_avoids_rough_terrain_when_cheaper(self):
        m = _make_open_map(2)
        m.set_tile(HexCoord(0, 0), ROUGH)
        path = m.find_path(HexCoord(-1, 0), HexCoord(1, 0))
        assert HexCoord(0, 0) not in path

    def test_accessibility_respects_budget(self):
        m = _make_open_map(3)
        trie = m.accessibility(HexCoord(0, 0), 2)
        assert set(trie.accessible) == HexCoord(0, 0).disk(2) - {HexCoord(0, 0)}

    def test_accessibility_rebuild_after_edit(self):
        m = _make_open_map(2)
        trie = m.accessibility(HexCoord(0, 0), 1)
        m.set_tile(HexCoord(1, 0), WATER)
        trie.build()
        assert HexCoord(1, 0) not in trie
        assert len(trie) == 5


class TestTileMapVision:
    def test_open_map_sees_everything(self):
        m = _make_open_map(3)
        vision = SymmetricPreComputedVisionTries(3)
        assert m.field_of_view(HexCoord(0, 0), vision) == set(m.tiles)

    def test_water_does_not_block_sight(self):
        m = _make_open_map(3)
        m.set_tile(HexCoord(1, 0), WATER)
        vision = SymmetricPreComputedVisionTries(3)
        assert m.line_of_sight(HexCoord(0, 0), HexCoord(2, 0), vision)

    def test_wall_blocks_sight(self):
        m = _make_open_map(3)
        m.set_tile(HexCoord(1, 0), WALL)
        vision = SymmetricPreComputedVisionTries(3)
        assert not m.line_of_sight(HexCoord(0, 0), HexCoord(2, 0), vision)
        assert HexCoord(2, 0) not in m.field_of_view(HexCoord(0, 0), vision)
