"""
Point containment over generated polygons.

Crossing-number ray casting plus a nearest-centre tie-break for points that
fall on boundaries shared by adjacent cells.
"""

import math
from typing import Iterable, Optional, Sequence

from gridboard.models import Circle, PointLike, Polygon


def is_point_in_polygon(point: PointLike, vertices: Sequence[PointLike]) -> bool:
    """Return True if ``point`` lies inside the polygon ``vertices``.

    Casts a horizontal ray and counts edge crossings; an odd count means
    inside. Points exactly on an edge may land on either side.

    Args:
        point: The (x, y) point to test.
        vertices: Polygon outline, implicitly closed.

    Returns:
        True when the crossing count is odd.
    """
    px, py = point
    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > py) != (yj > py) and px < (xj - xi) * (py - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def is_point_in_circle(point: PointLike, circle: Circle) -> bool:
    px, py = point
    dx = px - circle.cx
    dy = py - circle.cy
    return dx * dx + dy * dy <= circle.radius * circle.radius


def find_polygon_at_point(point: PointLike, polygons: Iterable[Polygon]) -> Optional[Polygon]:
    """Resolve which polygon a pointer position targets.

    Polygons whose bounding box excludes the point are skipped before the
    ray-casting test. When several polygons contain the point, the one whose
    centre is nearest wins.

    Args:
        point: Pointer position in canvas pixels.
        polygons: The generated polygon collection.

    Returns:
        The matching Polygon, or None if no polygon contains the point.
    """
    px, py = point
    candidate = None
    smallest_distance = math.inf
    for polygon in polygons:
        if not polygon.bounds.contains((px, py)):
            continue
        if is_point_in_polygon((px, py), polygon.vertices):
            distance = math.hypot(px - polygon.center.x, py - polygon.center.y)
            if distance < smallest_distance:
                smallest_distance = distance
                candidate = polygon
    return candidate
