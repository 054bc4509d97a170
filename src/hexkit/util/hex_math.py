"""Hex math utilities — geometry functions for hexagonal grids.

The integer primitives (``distance``, ``circle``, ``ring``, ``bresenhams_line``)
work on raw (q, r) pairs and yield tuples, so the vision and pathfinding
engines can use them without allocating coordinate objects. Ring, disk and
neighbor queries on values live on ``HexCoord`` itself.

Reference: https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations

import math
from typing import Iterator

from hexkit.models.hex import DIRECTIONS, HexCoord
from hexkit.models.layout import FractionalHex, Layout, Point


# -- Integer primitives --------------------------------------------------

def distance(from_q: int, from_r: int, to_q: int, to_r: int) -> int:
    """Hex grid distance between two axial positions."""
    dq = abs(from_q - to_q)
    dr = abs(from_r - to_r)
    ds = abs(-from_q - from_r - (-to_q - to_r))
    return max(dq, dr, ds)


def circle(radius: int, origin_q: int = 0, origin_r: int = 0) -> Iterator[tuple[int, int]]:
    """Yield every position within `radius` of the origin.

    Positions come in q-major order; 3r(r+1)+1 of them for radius r >= 0,
    none for a negative radius.
    """
    for q in range(-radius, radius + 1):
        for r in range(max(-radius, -q - radius), min(radius, -q + radius) + 1):
            yield origin_q + q, origin_r + r


def ring(radius: int, origin_q: int = 0, origin_r: int = 0) -> Iterator[tuple[int, int]]:
    """Yield the positions exactly `radius` steps from the origin.

    Radius 0 yields the origin itself; a negative radius yields nothing.
    """
    if radius < 0:
        return
    if radius == 0:
        yield origin_q, origin_r
        return

    start_q, start_r = DIRECTIONS[4]
    q = origin_q + start_q * radius
    r = origin_r + start_r * radius
    for dq, dr in DIRECTIONS:
        for _ in range(radius):
            yield q, r
            q += dq
            r += dr


def _diff(a: int, b: int) -> tuple[int, int]:
    return (b - a, 1) if a < b else (a - b, -1)


def bresenhams_line(start_q: int, start_r: int, end_q: int, end_r: int) -> Iterator[tuple[int, int]]:
    """Yield the points of a hex Bresenham line, endpoints included.

    The line is symmetric: drawing from end to start yields the same points
    in reverse order. Consecutive points are always adjacent.
    """
    yield start_q, start_r

    dq, sq = _diff(start_q, end_q)
    dr, sr = _diff(start_r, end_r)
    ds, ss = _diff(-start_q - start_r, -end_q - end_r)

    test = -1 if sr == -1 else 0

    q = start_q
    r = start_r
    s = -start_q - start_r

    if dq >= dr and dq >= ds:
        test = (dq + test) >> 1
        for _ in range(dq):
            test -= dr
            q += sq
            if test < 0:
                r += sr
                test += dq
            yield q, r
    elif ds >= dr:
        test = (ds + test) >> 1
        for _ in range(ds):
            test -= dr
            s += ss
            if test < 0:
                r += sr
                test += ds
            q = -s - r
            yield q, r
    else:
        test = (dr + test) >> 1
        for _ in range(dr):
            test -= dq
            r += sr
            if test < 0:
                q += sq
                test += dr
            yield q, r


def lerp_line(start_q: int, start_r: int, end_q: int, end_r: int) -> Iterator[tuple[int, int]]:
    """Yield the points of an interpolated line, endpoints included.

    Not symmetric; use ``bresenhams_line`` where direction must not matter.
    """
    n = distance(start_q, start_r, end_q, end_r)
    if n == 0:
        yield start_q, start_r
        return
    for i in range(n + 1):
        t = i / n
        h = hex_round(start_q + (end_q - start_q) * t, start_r + (end_r - start_r) * t)
        yield h.q, h.r


# -- HexCoord helpers ----------------------------------------------------

def hex_distance(a: HexCoord, b: HexCoord) -> int:
    """Compute the hex grid distance between two coordinates."""
    return a.distance_to(b)


def hex_linedraw(a: HexCoord, b: HexCoord) -> list[HexCoord]:
    """Draw a line between two hex coordinates using linear interpolation.

    Returns a list of hex coordinates from a to b (inclusive).
    """
    return [HexCoord(q, r) for q, r in lerp_line(a.q, a.r, b.q, b.r)]


def hex_round(fq: float, fr: float) -> HexCoord:
    """Round fractional axial coordinates to the nearest hex."""
    fs = -fq - fr
    q = round(fq)
    r = round(fr)
    s = round(fs)

    q_diff = abs(q - fq)
    r_diff = abs(r - fr)
    s_diff = abs(s - fs)

    if q_diff > r_diff and q_diff > s_diff:
        q = -r - s
    elif r_diff > s_diff:
        r = -q - s
    # else: s = -q - r (implicit, not stored)

    return HexCoord.cached(q, r)


# -- Pixel layout --------------------------------------------------------

def hex_to_pixel(layout: Layout, hex: HexCoord) -> Point:
    """Center of ``hex`` in pixel space."""
    m = layout.orientation
    x = (m.f0 * hex.q + m.f1 * hex.r) * layout.size.x
    y = (m.f2 * hex.q + m.f3 * hex.r) * layout.size.y
    return Point(x + layout.origin.x, y + layout.origin.y)


def pixel_to_hex(layout: Layout, point: Point) -> FractionalHex:
    """Fractional hex containing the pixel ``point``; call ``.round()`` to snap."""
    m = layout.orientation
    px = (point.x - layout.origin.x) / layout.size.x
    py = (point.y - layout.origin.y) / layout.size.y
    q = m.b0 * px + m.b1 * py
    r = m.b2 * px + m.b3 * py
    return FractionalHex(q, r, -q - r)


def hex_corner_offset(layout: Layout, corner: int) -> Point:
    angle = 2.0 * math.pi * (layout.orientation.start_angle - corner) / 6
    return Point(layout.size.x * math.cos(angle), layout.size.y * math.sin(angle))


def flat_hex_width(radius: int) -> int:
    """Pixel width of a flat-topped hex with the given corner radius."""
    return radius * 2


def flat_hex_height(radius: int) -> int:
    """Pixel height of a flat-topped hex, truncated to whole pixels."""
    return int(radius * math.cos(math.pi / 6) * 2)


def pointy_hex_width(radius: int) -> int:
    return flat_hex_height(radius)


def pointy_hex_height(radius: int) -> int:
    return flat_hex_width(radius)


def polygon_corners(layout: Layout, hex: HexCoord) -> list[Point]:
    """The 6 corners of ``hex`` in pixel space."""
    center = hex_to_pixel(layout, hex)
    corners: list[Point] = []
    for i in range(6):
        offset = hex_corner_offset(layout, i)
        corners.append(Point(center.x + offset.x, center.y + offset.y))
    return corners
