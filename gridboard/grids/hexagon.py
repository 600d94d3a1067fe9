"""
Hexagon grid generators.

Rectangular (staggered) hexagon tilings clipped to the board outline, and
true hexagon-shaped boards laid out in axial coordinates.
"""

from typing import List, Optional

import structlog

from gridboard.axial import AxialGrid
from gridboard.config import CANVAS_PADDING, DEFAULT_FILL, MIN_HEX_SIZE
from gridboard.grids.base import CanvasLike, ColorMap, available_area, fitted_size, prior_color, resolve_canvas
from gridboard.models import BoardConfig, BoardShape, GridType, Orientation, Point, Polygon, create_polygon
from gridboard.outline import create_board_metrics, normalize_board_dimensions, should_include_polygon
from gridboard.shapes import SQRT3, hex_extent, hex_vertices

logger = structlog.get_logger()


def build_hex_grid(
    config: BoardConfig,
    canvas: CanvasLike,
    color_map: Optional[ColorMap] = None,
    padding: float = CANVAS_PADDING,
    default_fill: str = DEFAULT_FILL,
) -> List[Polygon]:
    """Generate a hexagon tiling for any board shape.

    Hexagon-shaped boards are delegated to :func:`build_hexagon_shaped_grid`.
    Other shapes use a staggered rectangular layout: odd rows shift right by
    half a cell for pointy-top hexagons, odd columns shift down by half a
    cell for flat-top ones. Cells whose centre falls outside the board
    outline are dropped.

    Args:
        config: Board configuration.
        canvas: Canvas pixel dimensions.
        color_map: Optional ``id -> colour`` map of previously painted cells.
        padding: Pixels reserved on each canvas edge during sizing.
        default_fill: Colour for cells absent from ``color_map``.

    Returns:
        Polygons ``hex_{row}_{col}`` in row-major order; empty when the
        canvas is unusable.
    """
    canvas = resolve_canvas(canvas)
    if canvas is None:
        return []
    config = BoardConfig.with_defaults(config)
    if config.board_shape is BoardShape.HEXAGON:
        return build_hexagon_shaped_grid(config, canvas, color_map, padding, default_fill)

    cols, rows = normalize_board_dimensions(config)
    orientation = config.orientation
    pointy = orientation is Orientation.POINTY_TOP
    available_width, available_height = available_area(canvas, padding)

    if pointy:
        size_from_width = available_width / (SQRT3 * max(cols, 1))
        size_from_height = available_height / (2 + 1.5 * max(rows - 1, 0))
    else:
        size_from_width = available_width / (2 + 1.5 * max(cols - 1, 0))
        size_from_height = available_height / (SQRT3 * max(rows, 1))
    size = fitted_size((size_from_width, size_from_height), MIN_HEX_SIZE)

    hex_width, hex_height = hex_extent(size, orientation)
    horiz_spacing = hex_width if pointy else 1.5 * size
    vert_spacing = 1.5 * size if pointy else hex_height

    if pointy:
        board_width = SQRT3 * size * cols
        board_height = 2 * size + (rows - 1) * 1.5 * size
    else:
        board_width = 2 * size + (cols - 1) * 1.5 * size
        board_height = SQRT3 * size * rows

    offset_x = (canvas.width - board_width) / 2.0
    offset_y = (canvas.height - board_height) / 2.0
    metrics = create_board_metrics(offset_x, offset_y, board_width, board_height, config, orientation)

    polygons: List[Polygon] = []
    for row in range(rows):
        for col in range(cols):
            if pointy:
                center_x = offset_x + hex_width / 2.0 + col * horiz_spacing
                if row % 2 != 0:
                    center_x += horiz_spacing / 2.0
                center_y = offset_y + size + row * vert_spacing
            else:
                center_x = offset_x + size + col * horiz_spacing
                center_y = offset_y + hex_height / 2.0 + row * vert_spacing
                if col % 2 != 0:
                    center_y += vert_spacing / 2.0

            center = Point(center_x, center_y)
            if not should_include_polygon(center, metrics):
                continue

            polygon_id = f"hex_{row}_{col}"
            polygons.append(create_polygon(
                polygon_id,
                GridType.HEXAGON,
                center,
                hex_vertices(center, size, orientation),
                color=prior_color(color_map, polygon_id),
                default_fill=default_fill,
            ))

    logger.debug("Hexagon grid generated", cols=cols, rows=rows, size=size, polygons=len(polygons))
    return polygons


def build_hexagon_shaped_grid(
    config: BoardConfig,
    canvas: CanvasLike,
    color_map: Optional[ColorMap] = None,
    padding: float = CANVAS_PADDING,
    default_fill: str = DEFAULT_FILL,
) -> List[Polygon]:
    """Generate a radius-R hexagon of hexagons addressed by axial coordinates.

    Produces ``3R^2 + 3R + 1`` cells with ids ``hex_{q}_{r}`` in row-plan
    order.
    """
    canvas = resolve_canvas(canvas)
    if canvas is None:
        return []
    config = BoardConfig.with_defaults(config)

    grid = AxialGrid(config.orientation)
    layout = grid.layout(grid.row_plan(config.radius))
    placement = grid.fit(layout, canvas, padding)

    polygons: List[Polygon] = []
    for cell in layout.coords:
        polygon_id = f"hex_{cell.q}_{cell.r}"
        center = grid.place(layout, placement, cell)
        polygons.append(create_polygon(
            polygon_id,
            GridType.HEXAGON,
            center,
            hex_vertices(center, placement.size, config.orientation),
            color=prior_color(color_map, polygon_id),
            default_fill=default_fill,
        ))

    logger.debug("Hexagon-shaped board generated", radius=config.radius, size=placement.size, polygons=len(polygons))
    return polygons
