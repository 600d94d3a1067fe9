"""
Board outline resolution and cell containment.

Given the pixel box a board occupies and its configured shape, resolves the
clipping region (polygon outline, circle, or nothing) and decides whether a
generated cell belongs to the board.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from gridboard.hit_test import is_point_in_circle, is_point_in_polygon
from gridboard.models import (
    BoardConfig,
    BoardShape,
    Circle,
    Orientation,
    Point,
    PointLike,
    TriangleOrientation,
)


class PixelBox(NamedTuple):
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class BoardMetrics:
    """Pixel box of a board plus its optional outline or circle."""

    bounds: PixelBox
    outline: Optional[List[Point]] = None
    circle: Optional[Circle] = None


class BoardDimensions(NamedTuple):
    cols: int
    rows: int


def normalize_board_dimensions(config: BoardConfig) -> BoardDimensions:
    """Resolve how many columns and rows a rectangular generator enumerates.

    Square boards use ``min(width, height)`` on both axes, triangle boards
    use ``size``, hexagon and circle boards use the diameter ``2 * radius + 1``
    and everything else uses ``width`` x ``height``.
    """
    config = BoardConfig.with_defaults(config)
    shape = config.board_shape
    if shape is BoardShape.SQUARE:
        n = min(config.width, config.height)
        return BoardDimensions(n, n)
    if shape is BoardShape.TRIANGLE:
        return BoardDimensions(config.size, config.size)
    if shape in (BoardShape.HEXAGON, BoardShape.CIRCLE):
        diameter = config.radius * 2 + 1
        return BoardDimensions(diameter, diameter)
    return BoardDimensions(config.width, config.height)


def board_hex_outline(box: PixelBox, orientation: Orientation) -> List[Point]:
    """Six-vertex hexagon inscribed in ``box``.

    Pointy-top outlines touch the top and bottom edges at their midpoints and
    the side edges at 25% and 75% of the height; flat-top outlines mirror
    that along the diagonal.
    """
    x, y, width, height = box
    if Orientation.parse(orientation) is Orientation.POINTY_TOP:
        return [
            Point(x + width / 2.0, y),
            Point(x + width, y + height * 0.25),
            Point(x + width, y + height * 0.75),
            Point(x + width / 2.0, y + height),
            Point(x, y + height * 0.75),
            Point(x, y + height * 0.25),
        ]
    return [
        Point(x + width * 0.25, y),
        Point(x + width * 0.75, y),
        Point(x + width, y + height / 2.0),
        Point(x + width * 0.75, y + height),
        Point(x + width * 0.25, y + height),
        Point(x, y + height / 2.0),
    ]


def board_triangle_outline(box: PixelBox, orientation: TriangleOrientation) -> List[Point]:
    """Three-vertex outline filling ``box`` with its apex up or down."""
    x, y, width, height = box
    if TriangleOrientation.parse(orientation) is TriangleOrientation.POINT_DOWN:
        return [
            Point(x, y),
            Point(x + width, y),
            Point(x + width / 2.0, y + height),
        ]
    return [
        Point(x + width / 2.0, y),
        Point(x + width, y + height),
        Point(x, y + height),
    ]


def create_board_metrics(
    offset_x: float,
    offset_y: float,
    width: float,
    height: float,
    config: BoardConfig,
    orientation_hint: Optional[Orientation] = None,
) -> BoardMetrics:
    """Resolve the clipping region for a board occupying the given box.

    Args:
        offset_x: Left edge of the board in canvas pixels.
        offset_y: Top edge of the board in canvas pixels.
        width: Board width in pixels.
        height: Board height in pixels.
        config: Board configuration; only the shape and triangle
            orientation are consulted.
        orientation_hint: Cell orientation used to orient a hexagon
            outline. Without a hint the outline is flat-top.

    Returns:
        BoardMetrics with an outline for hexagon and triangle boards, a
        circle for circle boards, and neither for square/rectangle boards.
    """
    box = PixelBox(offset_x, offset_y, width, height)
    shape = BoardShape.parse(config.board_shape)

    if shape is BoardShape.HEXAGON:
        orientation = Orientation.POINTY_TOP if orientation_hint is Orientation.POINTY_TOP else Orientation.FLAT_TOP
        return BoardMetrics(box, outline=board_hex_outline(box, orientation))
    if shape is BoardShape.TRIANGLE:
        return BoardMetrics(box, outline=board_triangle_outline(box, config.triangle_orientation))
    if shape is BoardShape.CIRCLE:
        circle = Circle(
            cx=offset_x + width / 2.0,
            cy=offset_y + height / 2.0,
            radius=min(width, height) / 2.0,
        )
        return BoardMetrics(box, circle=circle)
    return BoardMetrics(box)


def should_include_polygon(center: PointLike, metrics: Optional[BoardMetrics]) -> bool:
    """Return True if a cell centred at ``center`` belongs to the board."""
    if metrics is None:
        return True
    if metrics.circle is not None:
        return is_point_in_circle(center, metrics.circle)
    if metrics.outline is not None:
        return is_point_in_polygon(center, metrics.outline)
    return True
