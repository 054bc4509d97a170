"""Library constants — defaults and table sizes.

Magic numbers shared by the engines and the config loader, centralized here.
"""

# -- Vision --------------------------------------------------------------

STEP_KEY_SLOTS: int = 9
"""Size of a trie node's child table: one slot per unit step in {-1, 0, 1}²."""

DEFAULT_VISION_RADIUS: int = 10
"""Vision radius used when no configuration is given."""

# -- Movement ------------------------------------------------------------

DEFAULT_MAX_MOVE_COST: int = 5
"""Movement budget used when no configuration is given."""

DEFAULT_STEP_COST: float = 1.0
"""Cost of entering a neighboring hex when no cost function is supplied."""

# -- Tiles ---------------------------------------------------------------

VOID_TILE: str = "void"
"""Tile type that is left out of a loaded map entirely."""
