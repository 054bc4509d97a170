"""Tests for the YAML config and map loaders."""

import logging
from pathlib import Path

import pytest

from hexkit.loaders.config_loader import HexConfig, load_hex_config
from hexkit.loaders.map_loader import load_map_from_tiles, load_tile_map
from hexkit.models.hex import HexCoord
from hexkit.models.layout import FLAT, POINTY, Point
from hexkit.util.constants import DEFAULT_MAX_MOVE_COST, DEFAULT_VISION_RADIUS

REPO_ROOT = Path(__file__).resolve().parent.parent


def _write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


class TestLoadHexConfig:
    def test_missing_file_gives_defaults(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            cfg = load_hex_config(tmp_path / "nope.yaml")
        assert cfg.vision_radius == DEFAULT_VISION_RADIUS
        assert cfg.max_move_cost == DEFAULT_MAX_MOVE_COST
        assert "not found" in caplog.text

    def test_empty_file_gives_defaults(self, tmp_path):
        cfg = load_hex_config(_write(tmp_path / "c.yaml", ""))
        assert cfg == HexConfig()

    def test_flat_keys(self, tmp_path):
        cfg = load_hex_config(_write(tmp_path / "c.yaml", "vision_radius: 7\nmax_move_cost: 3\n"))
        assert cfg.vision_radius == 7
        assert cfg.max_move_cost == 3

    def test_unknown_keys_ignored(self, tmp_path):
        cfg = load_hex_config(_write(tmp_path / "c.yaml", "bogus: 1\nvision_radius: 4\n"))
        assert cfg.vision_radius == 4
        assert not hasattr(cfg, "bogus")

    def test_nested_layout(self, tmp_path):
        text = "layout:\n  orientation: flat\n  size_x: 10\n  size_y: 12\n  origin_x: 5\n  junk: 1\n"
        cfg = load_hex_config(_write(tmp_path / "c.yaml", text))
        layout = cfg.make_layout()
        assert layout.orientation is FLAT
        assert layout.size == Point(10, 12)
        assert layout.origin == Point(5, 0.0)

    def test_default_layout(self):
        assert HexConfig().make_layout().orientation is POINTY

    def test_bad_orientation_raises(self, tmp_path):
        cfg = load_hex_config(_write(tmp_path / "c.yaml", "layout:\n  orientation: diamond\n"))
        with pytest.raises(ValueError):
            cfg.make_layout()

    def test_tile_types_extend_and_override(self, tmp_path):
        text = (
            "tile_types:\n"
            "  swamp:\n    cost: 3\n"
            "  floor:\n    cost: 1.5\n"
            "  lava:\n    walkable: false\n"
        )
        cfg = load_hex_config(_write(tmp_path / "c.yaml", text))
        assert cfg.tile_types["swamp"].cost == 3.0
        assert cfg.tile_types["floor"].cost == 1.5
        assert not cfg.tile_types["lava"].walkable
        assert cfg.tile_types["wall"].opaque

    def test_non_mapping_tile_type_skipped(self, tmp_path, caplog):
        text = "tile_types:\n  swamp: 3\n"
        with caplog.at_level(logging.WARNING):
            cfg = load_hex_config(_write(tmp_path / "c.yaml", text))
        assert "swamp" not in cfg.tile_types
        assert "swamp" in caplog.text

    def test_shipped_config(self):
        cfg = load_hex_config(REPO_ROOT / "config" / "hexkit.yaml")
        assert cfg.tile_types["swamp"].cost == 3.0


class TestLoadTileMap:
    def test_from_tiles(self):
        m = load_map_from_tiles({"0,0": "floor", "1,-1": "wall", "-2,3": "rough"})
        assert m.tile_at(HexCoord(0, 0)).name == "floor"
        assert not m.is_walkable(HexCoord(1, -1))
        assert m.tile_at(HexCoord(-2, 3)).cost == 2.0

    def test_void_is_skipped(self):
        m = load_map_from_tiles({"0,0": "floor", "1,0": "void"})
        assert HexCoord(1, 0) not in m.tiles
        assert len(m.tiles) == 1

    def test_unknown_type_skipped_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING):
            m = load_map_from_tiles({"0,0": "floor", "1,0": "lava"})
        assert HexCoord(1, 0) not in m.tiles
        assert "lava" in caplog.text

    def test_custom_config_types(self, tmp_path):
        cfg = load_hex_config(_write(tmp_path / "c.yaml", "tile_types:\n  lava:\n    walkable: false\n"))
        m = load_map_from_tiles({"2,2": "lava"}, cfg)
        assert m.tile_at(HexCoord(2, 2)).name == "lava"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_tile_map(tmp_path / "missing.yaml")

    def test_empty_file_gives_empty_map(self, tmp_path):
        m = load_tile_map(_write(tmp_path / "m.yaml", ""))
        assert m.tiles == {}

    def test_shipped_example_map(self):
        cfg = load_hex_config(REPO_ROOT / "config" / "hexkit.yaml")
        m = load_tile_map(REPO_ROOT / "config" / "maps" / "example.yaml", cfg)
        assert HexCoord(3, 0) not in m.tiles
        assert m.tile_at(HexCoord(-2, 1)).name == "swamp"
        path = m.find_path(HexCoord(-2, 0), HexCoord(2, 0))
        assert path[0] == HexCoord(-2, 0)
        assert path[-1] == HexCoord(2, 0)
        assert HexCoord(1, -1) not in path
