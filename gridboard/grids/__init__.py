"""
Grid generation entry point.

Dispatches a board configuration to the generator registered for its grid
type. Unknown grid types are generated as hexagons.
"""

from typing import Callable, Dict, List, Optional

from gridboard.config import CANVAS_PADDING, DEFAULT_FILL
from gridboard.grids.base import CanvasLike, ColorMap, resolve_padding
from gridboard.grids.hexagon import build_hex_grid, build_hexagon_shaped_grid
from gridboard.grids.square import build_diamond_grid, build_square_grid
from gridboard.grids.triangle import build_hexagon_triangle_grid, build_tessellated_triangle, build_triangle_grid
from gridboard.models import BoardConfig, GridType, Polygon

GridBuilder = Callable[..., List[Polygon]]

GENERATORS: Dict[GridType, GridBuilder] = {
    GridType.HEXAGON: build_hex_grid,
    GridType.TRIANGLE: build_triangle_grid,
    GridType.SQUARE: build_square_grid,
    GridType.ORTHOGONAL_SQUARE: build_diamond_grid,
}


def generate_grid(
    config: BoardConfig,
    canvas: CanvasLike,
    color_map: Optional[ColorMap] = None,
    padding: float = CANVAS_PADDING,
    default_fill: str = DEFAULT_FILL,
) -> List[Polygon]:
    """Generate the ordered polygon collection for a board configuration.

    Args:
        config: Board configuration (a BoardConfig or a raw mapping; it is
            normalised with ``BoardConfig.with_defaults``).
        canvas: Canvas pixel dimensions as ``(width, height)``.
        color_map: Optional ``id -> colour`` map used to keep paint across
            regeneration.
        padding: Pixels reserved on each canvas edge during sizing; NaN,
            infinite or negative values fall back to CANVAS_PADDING.
        default_fill: Colour for cells absent from ``color_map``.

    Returns:
        Polygons in generation order; empty when the canvas is unusable.
    """
    config = BoardConfig.with_defaults(config)
    builder = GENERATORS.get(config.grid_type, build_hex_grid)
    return builder(config, canvas, color_map, resolve_padding(padding), default_fill)


__all__ = [
    "GENERATORS",
    "build_diamond_grid",
    "build_hex_grid",
    "build_hexagon_shaped_grid",
    "build_hexagon_triangle_grid",
    "build_square_grid",
    "build_tessellated_triangle",
    "build_triangle_grid",
    "generate_grid",
]
