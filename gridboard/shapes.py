"""
Vertex builders for single board cells.

Each builder takes a reference point and a linear size and returns the
vertices of exactly one shape. Clipping, colouring and id assignment are
left to the grid generators.
"""

import math
from typing import List

from gridboard.models import Orientation, Point, PointLike


SQRT3: float = math.sqrt(3)


# ---------------------------------------------------------------------------
# Hexagon
# ---------------------------------------------------------------------------
def hex_vertices(center: PointLike, size: float, orientation: Orientation) -> List[Point]:
    """Compute the 6 vertices of a regular hexagon centred at ``center``.

    Vertices sit at angles ``rotation + k * 60`` degrees, where rotation is
    30 degrees for pointy-top hexagons and 0 for flat-top ones, proceeding
    clockwise in screen space (y grows downwards).

    Args:
        center: Hexagon centre in pixels.
        size: Circumradius (centre-to-vertex distance) in pixels.
        orientation: Pointy-top or flat-top.

    Returns:
        A list of 6 Points.
    """
    cx, cy = center
    rotation = math.pi / 6.0 if Orientation.parse(orientation) is Orientation.POINTY_TOP else 0.0
    return [
        Point(cx + size * math.cos(rotation + math.pi * k / 3.0),
              cy + size * math.sin(rotation + math.pi * k / 3.0))
        for k in range(6)
    ]


def hex_extent(size: float, orientation: Orientation) -> Point:
    """Return the (width, height) of one hexagon of circumradius ``size``."""
    if Orientation.parse(orientation) is Orientation.POINTY_TOP:
        return Point(SQRT3 * size, 2.0 * size)
    return Point(2.0 * size, SQRT3 * size)


# ---------------------------------------------------------------------------
# Square / diamond
# ---------------------------------------------------------------------------
def square_vertices(center: PointLike, size: float) -> List[Point]:
    """Axis-aligned square corners at +/- size/2, clockwise from top-left."""
    cx, cy = center
    half = size / 2.0
    return [
        Point(cx - half, cy - half),
        Point(cx + half, cy - half),
        Point(cx + half, cy + half),
        Point(cx - half, cy + half),
    ]


def diamond_vertices(center: PointLike, size: float) -> List[Point]:
    """Square rotated 45 degrees: top, right, bottom, left."""
    cx, cy = center
    half = size / 2.0
    return [
        Point(cx, cy - half),
        Point(cx + half, cy),
        Point(cx, cy + half),
        Point(cx - half, cy),
    ]


# ---------------------------------------------------------------------------
# Triangle
# ---------------------------------------------------------------------------
def triangle_height(size: float) -> float:
    return SQRT3 / 2.0 * size


def triangle_vertices(origin: PointLike, size: float, pointing_up: bool) -> List[Point]:
    """Compute an equilateral triangle inside the box anchored at ``origin``.

    The triangle occupies ``[x, x + size] x [y, y + height]``. The apex is
    listed first, followed by the base-left and base-right corners, for
    both directions.

    Args:
        origin: Top-left corner of the triangle's bounding box.
        size: Side length in pixels.
        pointing_up: True for apex above the base, False for the mirror.

    Returns:
        A list of 3 Points.
    """
    x, y = origin
    height = triangle_height(size)
    if pointing_up:
        return [
            Point(x + size / 2.0, y),
            Point(x, y + height),
            Point(x + size, y + height),
        ]
    return [
        Point(x + size / 2.0, y + height),
        Point(x, y),
        Point(x + size, y),
    ]


def centroid(vertices: List[Point]) -> Point:
    """Arithmetic mean of the vertices."""
    n = len(vertices)
    return Point(sum(v.x for v in vertices) / n, sum(v.y for v in vertices) / n)
