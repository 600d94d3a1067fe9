"""
Triangle grid generators.

Three layouts share the equilateral triangle cell: a rectangular strip
tiling clipped to the board outline, a triangle-shaped board tessellated
row by row from its apex, and a hexagon-shaped board cut from an
overscanned triangle lattice snapped to the hex edges.
"""

import math
from typing import List, Optional

import structlog

from gridboard.axial import AxialGrid, hex_unit_extent
from gridboard.config import CANVAS_PADDING, DEFAULT_FILL, MIN_TRIANGLE_SIZE, TRIANGLE_HEX_BLEED
from gridboard.grids.base import CanvasLike, ColorMap, available_area, fitted_size, prior_color, resolve_canvas
from gridboard.hit_test import is_point_in_polygon
from gridboard.models import (
    BoardConfig,
    BoardShape,
    GridType,
    Point,
    Polygon,
    TriangleOrientation,
    create_polygon,
)
from gridboard.outline import create_board_metrics, normalize_board_dimensions, should_include_polygon
from gridboard.shapes import SQRT3, centroid, hex_vertices, triangle_height, triangle_vertices

logger = structlog.get_logger()


def _inside_outline(center: Point, vertices: List[Point], outline: List[Point]) -> bool:
    """A triangle is kept only when its centre and all three vertices are inside."""
    return is_point_in_polygon(center, outline) and all(is_point_in_polygon(v, outline) for v in vertices)


def build_triangle_grid(
    config: BoardConfig,
    canvas: CanvasLike,
    color_map: Optional[ColorMap] = None,
    padding: float = CANVAS_PADDING,
    default_fill: str = DEFAULT_FILL,
) -> List[Polygon]:
    """Generate a triangle tiling for any board shape.

    Triangle boards go to :func:`build_tessellated_triangle`, hexagon boards
    to :func:`build_hexagon_triangle_grid`. Other shapes use a rectangular
    strip of at least 2 columns where cell ``(row, col)`` points up when
    ``(row + col)`` is even. With an outline, a cell survives only if its
    centre and every vertex are inside; circle boards test the centre.

    Args:
        config: Board configuration.
        canvas: Canvas pixel dimensions.
        color_map: Optional ``id -> colour`` map of previously painted cells.
        padding: Pixels reserved on each canvas edge during sizing.
        default_fill: Colour for cells absent from ``color_map``.

    Returns:
        Polygons ``triangle_{row}_{col}`` in row-major order.
    """
    canvas = resolve_canvas(canvas)
    if canvas is None:
        return []
    config = BoardConfig.with_defaults(config)

    if config.board_shape is BoardShape.TRIANGLE:
        return build_tessellated_triangle(config, canvas, color_map, padding, default_fill)
    if config.board_shape is BoardShape.HEXAGON:
        return build_hexagon_triangle_grid(config, canvas, color_map, padding, default_fill)

    dims = normalize_board_dimensions(config)
    cols = max(2, dims.cols)
    rows = max(1, dims.rows)
    available_width, available_height = available_area(canvas, padding)
    size = fitted_size(
        ((available_width * 2) / (cols + 1), (available_height * 2) / (rows * SQRT3)),
        MIN_TRIANGLE_SIZE,
    )
    tri_height = triangle_height(size)
    board_width = (cols * size) / 2.0 + size / 2.0
    board_height = rows * tri_height
    offset_x = (canvas.width - board_width) / 2.0
    offset_y = (canvas.height - board_height) / 2.0
    metrics = create_board_metrics(offset_x, offset_y, board_width, board_height, config)

    polygons: List[Polygon] = []
    for row in range(rows):
        for col in range(cols):
            origin = Point(offset_x + (col * size) / 2.0, offset_y + row * tri_height)
            pointing_up = (row + col) % 2 == 0
            vertices = triangle_vertices(origin, size, pointing_up)
            center = centroid(vertices)
            if metrics.outline is not None:
                keep = _inside_outline(center, vertices, metrics.outline)
            else:
                keep = should_include_polygon(center, metrics)
            if not keep:
                continue
            polygon_id = f"triangle_{row}_{col}"
            polygons.append(create_polygon(
                polygon_id,
                GridType.TRIANGLE,
                center,
                vertices,
                color=prior_color(color_map, polygon_id),
                default_fill=default_fill,
                pointing_up=pointing_up,
            ))

    logger.debug("Triangle grid generated", cols=cols, rows=rows, size=size, polygons=len(polygons))
    return polygons


def build_tessellated_triangle(
    config: BoardConfig,
    canvas: CanvasLike,
    color_map: Optional[ColorMap] = None,
    padding: float = CANVAS_PADDING,
    default_fill: str = DEFAULT_FILL,
) -> List[Polygon]:
    """Fill a triangle-shaped board of base ``size`` cells.

    Counting rows from the apex, logical row ``i`` holds ``2i + 1``
    triangles, alternating direction by column. Point-up boards start each
    row with an upward triangle and grow downwards; point-down boards are
    the vertical mirror. The enumeration fills the outline exactly, so no
    containment test is applied.
    """
    canvas = resolve_canvas(canvas)
    if canvas is None:
        return []
    config = BoardConfig.with_defaults(config)

    base = config.size
    orientation = config.triangle_orientation
    point_up = orientation is TriangleOrientation.POINT_UP
    available_width, available_height = available_area(canvas, padding)
    size = fitted_size(
        (available_width / base, (available_height * 2) / (SQRT3 * base)),
        MIN_TRIANGLE_SIZE,
    )
    tri_height = triangle_height(size)
    board_width = base * size
    board_height = base * tri_height
    offset_x = (canvas.width - board_width) / 2.0
    offset_y = (canvas.height - board_height) / 2.0

    polygons: List[Polygon] = []
    for row in range(base):
        logical_row = row if point_up else base - 1 - row
        triangles_in_row = 2 * logical_row + 1
        row_width_centers = (triangles_in_row - 1) * (size / 2.0)
        start_x = offset_x + board_width / 2.0 - row_width_centers / 2.0
        origin_y = offset_y + row * tri_height

        for col in range(triangles_in_row):
            center_x = start_x + col * (size / 2.0)
            origin = Point(center_x - size / 2.0, origin_y)
            pointing_up = col % 2 == 0 if point_up else col % 2 != 0
            vertices = triangle_vertices(origin, size, pointing_up)
            polygon_id = f"triangle_{row}_{col}"
            polygons.append(create_polygon(
                polygon_id,
                GridType.TRIANGLE,
                centroid(vertices),
                vertices,
                color=prior_color(color_map, polygon_id),
                default_fill=default_fill,
                pointing_up=pointing_up,
            ))

    logger.debug("Triangle board tessellated", base=base, size=size, polygons=len(polygons))
    return polygons


def build_hexagon_triangle_grid(
    config: BoardConfig,
    canvas: CanvasLike,
    color_map: Optional[ColorMap] = None,
    padding: float = CANVAS_PADDING,
    default_fill: str = DEFAULT_FILL,
) -> List[Polygon]:
    """Cut a hexagon-shaped board out of a triangle lattice.

    The hex outline radius is snapped to ``triangle_size * rings`` (rings =
    ``max(1, radius)``) so that lattice vertices land on the outline
    corners. The lattice is anchored at the hex centre, scanned over the
    outline's bounding box plus a bleed of 2 rows/columns, and each
    triangle is kept only if its centre and all vertices are inside.

    Returns:
        Polygons ``triangle_hex_{row}_{col}``; row and column indices are
        relative to the hex centre and may be negative.
    """
    canvas = resolve_canvas(canvas)
    if canvas is None:
        return []
    config = BoardConfig.with_defaults(config)

    grid = AxialGrid(config.orientation)
    sizing = grid.snapped_triangle_sizing(max(1, config.radius), canvas, padding)
    triangle_size = sizing.triangle_size
    tri_height = triangle_height(triangle_size)

    hex_width, hex_height = (v * sizing.size for v in hex_unit_extent(config.orientation))
    offset_x = (canvas.width - hex_width) / 2.0
    offset_y = (canvas.height - hex_height) / 2.0
    hex_center = Point(offset_x + hex_width / 2.0, offset_y + hex_height / 2.0)
    hex_outline = hex_vertices(hex_center, sizing.size, config.orientation)

    anchor_x = hex_center.x - triangle_size / 2.0
    anchor_y = hex_center.y
    bleed = TRIANGLE_HEX_BLEED
    row_start = math.floor((offset_y - anchor_y) / tri_height) - bleed
    row_end = math.ceil((offset_y + hex_height - anchor_y) / tri_height) + bleed
    col_start = math.floor(((offset_x - anchor_x) * 2) / triangle_size) - bleed
    col_end = math.ceil(((offset_x + hex_width - anchor_x) * 2) / triangle_size) + bleed

    polygons: List[Polygon] = []
    for row in range(row_start, row_end + 1):
        origin_y = anchor_y + row * tri_height
        for col in range(col_start, col_end + 1):
            origin = Point(anchor_x + (col * triangle_size) / 2.0, origin_y)
            pointing_up = (row + col) % 2 == 0
            vertices = triangle_vertices(origin, triangle_size, pointing_up)
            center = centroid(vertices)
            if not _inside_outline(center, vertices, hex_outline):
                continue
            polygon_id = f"triangle_hex_{row}_{col}"
            polygons.append(create_polygon(
                polygon_id,
                GridType.TRIANGLE,
                center,
                vertices,
                color=prior_color(color_map, polygon_id),
                default_fill=default_fill,
                pointing_up=pointing_up,
            ))

    logger.debug("Hexagon triangle board generated", rings=sizing.rings, triangle_size=triangle_size,
                 polygons=len(polygons))
    return polygons
