"""Pixel layout of a hex grid.

Orientation matrices and layout parameters for projecting hexes to screen
space and back. The projection functions live in ``hexkit.util.hex_math``.

Reference: https://www.redblobgames.com/grids/hexagons/implementation.html#layout
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hexkit.models.hex import HexCoord


@dataclass(frozen=True)
class Orientation:
    """Forward (f*) and backward (b*) matrices plus the first corner angle.

    The start angle is in units of 60 degrees.
    """

    f0: float = 0.0
    f1: float = 0.0
    f2: float = 0.0
    f3: float = 0.0
    b0: float = 0.0
    b1: float = 0.0
    b2: float = 0.0
    b3: float = 0.0
    start_angle: float = 0.0

    @classmethod
    def by_name(cls, name: str) -> Orientation:
        """Look up ``"pointy"`` or ``"flat"``."""
        try:
            return _ORIENTATIONS[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown orientation: {name!r}") from None


_SQRT3 = math.sqrt(3.0)

POINTY = Orientation(
    f0=_SQRT3, f1=_SQRT3 / 2.0, f2=0.0, f3=3.0 / 2.0,
    b0=_SQRT3 / 3.0, b1=-1.0 / 3.0, b2=0.0, b3=2.0 / 3.0,
    start_angle=0.5,
)

FLAT = Orientation(
    f0=3.0 / 2.0, f1=0.0, f2=_SQRT3 / 2.0, f3=_SQRT3,
    b0=2.0 / 3.0, b1=0.0, b2=-1.0 / 3.0, b3=_SQRT3 / 3.0,
    start_angle=0.0,
)

_ORIENTATIONS: dict[str, Orientation] = {"pointy": POINTY, "flat": FLAT}


@dataclass(frozen=True)
class Point:
    """A position in pixel space."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Layout:
    """Orientation, hex size and pixel origin of the (0, 0) hex center.

    Equal ``size.x`` and ``size.y`` give regular hexagons.
    """

    orientation: Orientation = POINTY
    size: Point = field(default_factory=lambda: Point(1.0, 1.0))
    origin: Point = field(default_factory=Point)


@dataclass(frozen=True)
class FractionalHex:
    """Cube coordinates that need not be integers (e.g. from a pixel lookup)."""

    q: float
    r: float
    s: float

    def round(self) -> HexCoord:
        """Snap to the nearest whole hex."""
        from hexkit.util.hex_math import hex_round

        return hex_round(self.q, self.r)
