"""Grid configuration — loads tunable settings from config/hexkit.yaml.

Provides a single ``HexConfig`` dataclass that is loaded once at startup
and then passed wherever vision radii, movement budgets, layout parameters
or tile definitions are needed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from hexkit.models.layout import Layout, Orientation, Point
from hexkit.models.map import TileType
from hexkit.util.constants import DEFAULT_MAX_MOVE_COST, DEFAULT_VISION_RADIUS

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/hexkit.yaml"


def _default_tile_types() -> Dict[str, TileType]:
    return {
        "floor": TileType("floor"),
        "rough": TileType("rough", cost=2.0),
        "water": TileType("water", walkable=False),
        "wall": TileType("wall", walkable=False, opaque=True),
        "forest": TileType("forest", cost=2.0, opaque=True),
    }


@dataclass
class LayoutConfig:
    """Pixel layout settings."""
    orientation: str = "pointy"
    size_x: float = 32.0
    size_y: float = 32.0
    origin_x: float = 0.0
    origin_y: float = 0.0


@dataclass
class HexConfig:
    """All tunable grid settings.

    Loaded from ``config/hexkit.yaml``.  Every field has a sensible default
    so the library works even without the file.
    """

    # -- Vision ------------------------------------------------------
    vision_radius: int = DEFAULT_VISION_RADIUS

    # -- Movement ----------------------------------------------------
    max_move_cost: float = DEFAULT_MAX_MOVE_COST

    # -- Rendering ---------------------------------------------------
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    # -- Terrain -----------------------------------------------------
    tile_types: Dict[str, TileType] = field(default_factory=_default_tile_types)

    def make_layout(self) -> Layout:
        """Build the pixel Layout described by the ``layout`` section.

        Raises:
            ValueError: If the orientation name is unknown.
        """
        lc = self.layout
        return Layout(
            orientation=Orientation.by_name(lc.orientation),
            size=Point(lc.size_x, lc.size_y),
            origin=Point(lc.origin_x, lc.origin_y),
        )


def _parse_tile_types(section: Any) -> Dict[str, TileType]:
    """Parse the ``tile_types`` section, keeping built-in types not overridden."""
    types = _default_tile_types()
    for name, attrs in (section or {}).items():
        if not isinstance(attrs, dict):
            log.warning("Tile type %r is not a mapping — skipped", name)
            continue
        types[name] = TileType(
            name=name,
            walkable=bool(attrs.get("walkable", True)),
            cost=float(attrs.get("cost", 1.0)),
            opaque=bool(attrs.get("opaque", False)),
        )
    return types


def load_hex_config(path: str | Path = DEFAULT_CONFIG_PATH) -> HexConfig:
    """Load grid configuration from a YAML file.

    Missing keys fall back to dataclass defaults.  If the file does not
    exist, a warning is logged and pure defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Hex config not found at %s — using defaults", p)
        return HexConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded hex config from %s (%d keys)", p, len(raw))

    # Handle nested sections
    layout_raw = raw.pop("layout", None)
    layout = LayoutConfig(**{
        k: v for k, v in layout_raw.items()
        if k in LayoutConfig.__dataclass_fields__
    }) if isinstance(layout_raw, dict) else LayoutConfig()
    tile_types = _parse_tile_types(raw.pop("tile_types", None))

    # Build config from flat keys + nested sections
    cfg = HexConfig(layout=layout, tile_types=tile_types, **{
        k: v for k, v in raw.items()
        if k in HexConfig.__dataclass_fields__
    })
    return cfg
