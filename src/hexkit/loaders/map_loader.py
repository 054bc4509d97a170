"""Map loader — parses hex map definitions into TileMap models.

Format: a ``tiles`` dict of {"q,r": "tile_type"} where tile_type names one of
the configured tile types (floor, rough, water, wall, forest, ... ).
"void" tiles are left off the map.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from hexkit.loaders.config_loader import HexConfig
from hexkit.models.hex import HexCoord
from hexkit.models.map import TileMap
from hexkit.util.constants import VOID_TILE

log = logging.getLogger(__name__)


def load_tile_map(path: str | Path, config: Optional[HexConfig] = None) -> TileMap:
    """Load a tile map from a YAML file.

    Args:
        path: Path to the map YAML file.
        config: Supplies the tile type table; defaults to ``HexConfig()``.

    Returns:
        Populated TileMap instance.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    with path.open() as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}

    tile_map = load_map_from_tiles(data.get("tiles") or {}, config)
    log.info("Loaded map %s (%d tiles)", path, len(tile_map.tiles))
    return tile_map


def load_map_from_tiles(tiles: dict[str, str], config: Optional[HexConfig] = None) -> TileMap:
    """Load a TileMap from a tiles dictionary.

    Args:
        tiles: Dict of {"q,r": "tile_type"}.
        config: Supplies the tile type table; defaults to ``HexConfig()``.

    Returns:
        Populated TileMap. Unknown tile types are logged and skipped.
    """
    types = (config or HexConfig()).tile_types
    tile_map = TileMap()

    for key, tile_type in tiles.items():
        if tile_type == VOID_TILE:
            continue
        tile = types.get(tile_type)
        if tile is None:
            log.warning("Unknown tile type %r at %s — skipped", tile_type, key)
            continue
        q, r = map(int, str(key).split(","))
        tile_map.tiles[HexCoord(q, r)] = tile

    return tile_map
