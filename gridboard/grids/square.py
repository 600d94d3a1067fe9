"""Square and diamond (orthogonal-square) grid generators."""

from typing import Callable, List, Optional, Sequence

import structlog

from gridboard.config import CANVAS_PADDING, DEFAULT_FILL, MIN_SQUARE_SIZE
from gridboard.grids.base import CanvasLike, ColorMap, available_area, fitted_size, prior_color, resolve_canvas
from gridboard.models import BoardConfig, GridType, Point, Polygon, create_polygon
from gridboard.outline import create_board_metrics, normalize_board_dimensions, should_include_polygon
from gridboard.shapes import diamond_vertices, square_vertices

logger = structlog.get_logger()


def _build_cell_grid(
    config: BoardConfig,
    canvas: CanvasLike,
    color_map: Optional[ColorMap],
    padding: float,
    default_fill: str,
    id_prefix: str,
    grid_type: GridType,
    vertex_builder: Callable[[Point, float], Sequence[Point]],
) -> List[Polygon]:
    canvas = resolve_canvas(canvas)
    if canvas is None:
        return []
    config = BoardConfig.with_defaults(config)

    cols, rows = normalize_board_dimensions(config)
    available_width, available_height = available_area(canvas, padding)
    size = fitted_size((available_width / cols, available_height / rows), MIN_SQUARE_SIZE)
    board_width = size * cols
    board_height = size * rows
    offset_x = (canvas.width - board_width) / 2.0
    offset_y = (canvas.height - board_height) / 2.0
    metrics = create_board_metrics(offset_x, offset_y, board_width, board_height, config)

    polygons: List[Polygon] = []
    for row in range(rows):
        for col in range(cols):
            center = Point(offset_x + size / 2.0 + col * size, offset_y + size / 2.0 + row * size)
            if not should_include_polygon(center, metrics):
                continue
            polygon_id = f"{id_prefix}_{row}_{col}"
            polygons.append(create_polygon(
                polygon_id,
                grid_type,
                center,
                vertex_builder(center, size),
                color=prior_color(color_map, polygon_id),
                default_fill=default_fill,
            ))

    logger.debug("Cell grid generated", grid_type=grid_type.value, cols=cols, rows=rows, size=size,
                 polygons=len(polygons))
    return polygons


def build_square_grid(
    config: BoardConfig,
    canvas: CanvasLike,
    color_map: Optional[ColorMap] = None,
    padding: float = CANVAS_PADDING,
    default_fill: str = DEFAULT_FILL,
) -> List[Polygon]:
    """Generate axis-aligned squares ``square_{row}_{col}`` in row-major order.

    The cell size is the largest integer (at least 12) for which
    ``cols x rows`` cells fit the padded canvas; cells whose centre lies
    outside the board outline are dropped.
    """
    return _build_cell_grid(config, canvas, color_map, padding, default_fill,
                            "square", GridType.SQUARE, square_vertices)


def build_diamond_grid(
    config: BoardConfig,
    canvas: CanvasLike,
    color_map: Optional[ColorMap] = None,
    padding: float = CANVAS_PADDING,
    default_fill: str = DEFAULT_FILL,
) -> List[Polygon]:
    """Generate 45-degree diamonds ``diamond_{row}_{col}`` on the square lattice."""
    return _build_cell_grid(config, canvas, color_map, padding, default_fill,
                            "diamond", GridType.ORTHOGONAL_SQUARE, diamond_vertices)
