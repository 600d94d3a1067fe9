"""
Tessellated game-board geometry with hit testing and paint history.

Typical use::

    from gridboard import BoardConfig, BoardSession

    session = BoardSession(canvas=(800, 600))
    session.generate_board(BoardConfig.with_defaults({"grid_type": "square"}))
    session.paint("square_0_0", "#ff0000")
    session.undo()

Log records go through stdlib logging, so nothing below WARNING is shown
until the caller configures a handler, e.g. with ``logging.basicConfig``.
"""

import structlog

from gridboard.config import VERSION
from gridboard.grids import generate_grid
from gridboard.history import HistorySnapshot, PaintHistory, restore_snapshot
from gridboard.hit_test import find_polygon_at_point, is_point_in_circle, is_point_in_polygon
from gridboard.log import configure_logging, configure_structlog
from gridboard.models import (
    BoardConfig,
    BoardShape,
    Bounds,
    CanvasSize,
    GridType,
    Orientation,
    Point,
    Polygon,
    TriangleOrientation,
    create_polygon,
)
from gridboard.outline import create_board_metrics, normalize_board_dimensions, should_include_polygon
from gridboard.session import BoardSession

__version__ = VERSION

if not structlog.is_configured():
    configure_structlog()

__all__ = [
    "BoardConfig",
    "BoardSession",
    "BoardShape",
    "Bounds",
    "CanvasSize",
    "GridType",
    "HistorySnapshot",
    "Orientation",
    "PaintHistory",
    "Point",
    "Polygon",
    "TriangleOrientation",
    "configure_logging",
    "create_board_metrics",
    "create_polygon",
    "find_polygon_at_point",
    "generate_grid",
    "is_point_in_circle",
    "is_point_in_polygon",
    "normalize_board_dimensions",
    "restore_snapshot",
    "should_include_polygon",
]
