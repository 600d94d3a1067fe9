"""
Board session state.

A BoardSession owns everything one painting board needs: canvas size, the
normalised board configuration, the live polygon collection, the paint
history and the current tool selection. Callers construct one per board
and drive it with generation, stroke, paint and undo/redo calls.
"""

import random
import time
from typing import Callable, Dict, List, Optional

import structlog

from gridboard.colors import swatch_fill_value
from gridboard.config import (
    CANVAS_PADDING,
    DEFAULT_FILL,
    DEFAULT_TILE_COLOR,
    HISTORY_LIMIT,
    MOVE_THROTTLE_MS,
    Palette,
    get_default_palette,
    get_palette_by_id,
)
from gridboard.grids import generate_grid
from gridboard.grids.base import CanvasLike, resolve_canvas, resolve_padding
from gridboard.history import PaintHistory
from gridboard.hit_test import find_polygon_at_point
from gridboard.models import BoardConfig, CanvasSize, PointLike, Polygon

logger = structlog.get_logger()


class BoardSession:
    """Explicit state for one painting board.

    Attributes:
        canvas: Canvas pixel dimensions, or None before a canvas exists.
        padding: Pixels reserved on each canvas edge during sizing; unusable
            values are replaced by CANVAS_PADDING.
        default_fill: Colour given to freshly generated cells.
        board_config: Configuration of the current board.
        polygons: Live polygon collection, replaced on every generation.
        history: Undo/redo history of polygon colours.
        current_color: Colour applied by paint operations.
        current_palette_id: Palette the current colour was picked from.
        eraser_active: When True, paint operations apply the blank tile colour.
        hover_polygon_id: Id of the polygon under the pointer, if any.
        is_drawing: True between begin_stroke and end/cancel_stroke.
        last_colored_polygon_id: Last polygon coloured in the current stroke.
        is_dirty: True when the board changed since it was last marked clean.
    """

    def __init__(
        self,
        canvas: CanvasLike = None,
        padding: float = CANVAS_PADDING,
        default_fill: str = DEFAULT_FILL,
        history_limit: int = HISTORY_LIMIT,
        throttle_ms: float = MOVE_THROTTLE_MS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        palette = get_default_palette()
        self.canvas: Optional[CanvasSize] = resolve_canvas(canvas)
        self.padding: float = resolve_padding(padding)
        self.default_fill: str = default_fill
        self.board_config: BoardConfig = BoardConfig.with_defaults()
        self.polygons: List[Polygon] = []
        self.history: PaintHistory = PaintHistory(history_limit)
        self.current_color: str = swatch_fill_value(palette.colors[0])
        self.current_palette_id: str = palette.id
        self.eraser_active: bool = False
        self.hover_polygon_id: Optional[str] = None
        self.is_drawing: bool = False
        self.last_colored_polygon_id: Optional[str] = None
        self.is_dirty: bool = False
        self._throttle_ms: float = max(0.0, throttle_ms)
        self._clock = clock
        self._last_move_ms: Optional[float] = None

    # -- board generation -------------------------------------------------

    @property
    def paint_color(self) -> str:
        """Colour the next paint operation applies."""
        return DEFAULT_TILE_COLOR if self.eraser_active else self.current_color

    def set_polygons(self, polygons: List[Polygon]) -> None:
        self.polygons = polygons
        self.hover_polygon_id = None

    def generate_board(
        self,
        config: Optional[BoardConfig] = None,
        preserve_colors: bool = False,
        preserve_history: bool = False,
        mark_dirty: bool = True,
    ) -> List[Polygon]:
        """Replace the polygon collection with a freshly generated board.

        Args:
            config: Board configuration; defaults to the current one.
            preserve_colors: Carry colours over to cells whose id survives.
            preserve_history: Keep the history and re-apply the snapshot at
                its cursor; an empty history records the new board. Otherwise
                the history is reset and the new board becomes its first
                entry.
            mark_dirty: Mark the session dirty; when False it is marked clean.

        Returns:
            The new polygon collection.
        """
        config = BoardConfig.with_defaults(config if config is not None else self.board_config)
        color_map = self.color_map() if preserve_colors and self.polygons else None
        polygons = generate_grid(config, self.canvas, color_map, self.padding, self.default_fill)
        self.set_polygons(polygons)
        self.board_config = config

        if not preserve_history:
            self.history.reset()
            self.history.record(self.polygons)
        elif len(self.history):
            self.history.restore(self.history.current, self.polygons)
        else:
            self.history.record(self.polygons)

        self.is_dirty = mark_dirty
        logger.info("Board generated", grid_type=config.grid_type.value, board_shape=config.board_shape.value,
                    polygons=len(polygons))
        return polygons

    def resize(self, canvas: CanvasLike) -> List[Polygon]:
        """Regenerate for a new canvas size keeping paint and history."""
        self.canvas = resolve_canvas(canvas)
        return self.generate_board(preserve_colors=True, preserve_history=True, mark_dirty=False)

    def color_map(self) -> Dict[str, str]:
        return {polygon.id: polygon.color for polygon in self.polygons}

    def polygon_by_id(self, polygon_id: str) -> Optional[Polygon]:
        for polygon in self.polygons:
            if polygon.id == polygon_id:
                return polygon
        return None

    def find_polygon(self, point: PointLike) -> Optional[Polygon]:
        return find_polygon_at_point(point, self.polygons)

    # -- painting ---------------------------------------------------------

    def apply_color(
        self,
        polygon: Optional[Polygon],
        color: str,
        record_history: bool = True,
        mark_dirty: bool = True,
    ) -> bool:
        """Set a polygon's colour.

        No-op when the polygon is missing or already has ``color``.

        Returns:
            True if the colour changed.
        """
        if polygon is None or polygon.color == color:
            return False
        polygon.color = color
        if record_history:
            self.history.record(self.polygons)
        if mark_dirty:
            self.is_dirty = True
        return True

    def paint(self, polygon_id: str, color: Optional[str] = None) -> bool:
        """Commit one paint action on the polygon with ``polygon_id``."""
        return self.apply_color(self.polygon_by_id(polygon_id), color or self.paint_color)

    def paint_at(self, point: PointLike, color: Optional[str] = None) -> Optional[Polygon]:
        """Hit-test ``point`` and commit a paint action on the polygon found."""
        polygon = self.find_polygon(point)
        if polygon is not None:
            self.apply_color(polygon, color or self.paint_color)
        return polygon

    def begin_stroke(self, point: PointLike) -> Optional[Polygon]:
        """Start a brush stroke and colour the polygon under ``point``.

        History is not recorded until the stroke ends.
        """
        polygon = self.find_polygon(point)
        self.is_drawing = True
        self.last_colored_polygon_id = polygon.id if polygon is not None else None
        self._last_move_ms = None
        if polygon is not None:
            self.apply_color(polygon, self.paint_color, record_history=False, mark_dirty=False)
        return polygon

    def continue_stroke(self, point: PointLike, now_ms: Optional[float] = None) -> Optional[Polygon]:
        """Handle pointer movement.

        While drawing, colours the polygon under ``point`` unless it was the
        last one coloured or the call arrives within the throttle interval
        of the previous one. Outside a stroke only the hover id is tracked.

        Args:
            point: Pointer position in canvas pixels.
            now_ms: Timestamp in milliseconds; read from the session clock
                when omitted.

        Returns:
            The polygon coloured by this call, or None.
        """
        if not self.is_drawing:
            self.update_hover(point)
            return None

        if now_ms is None:
            now_ms = self._clock() * 1000.0
        if self._last_move_ms is not None and now_ms - self._last_move_ms < self._throttle_ms:
            return None
        self._last_move_ms = now_ms

        polygon = self.find_polygon(point)
        if polygon is None or polygon.id == self.last_colored_polygon_id:
            return None
        self.apply_color(polygon, self.paint_color, record_history=False, mark_dirty=False)
        self.last_colored_polygon_id = polygon.id
        return polygon

    def end_stroke(self) -> bool:
        """Finish a stroke, recording one history entry if anything was coloured."""
        if not self.is_drawing:
            return False
        did_color = self.last_colored_polygon_id is not None
        self.is_drawing = False
        self.last_colored_polygon_id = None
        if did_color:
            self.history.record(self.polygons)
            self.is_dirty = True
        return did_color

    def cancel_stroke(self) -> bool:
        """Pointer left the canvas: finish any stroke and clear the hover."""
        did_color = self.end_stroke()
        self.hover_polygon_id = None
        return did_color

    def update_hover(self, point: PointLike) -> bool:
        """Track the polygon under the pointer. Returns True if it changed."""
        polygon = self.find_polygon(point)
        polygon_id = polygon.id if polygon is not None else None
        if polygon_id == self.hover_polygon_id:
            return False
        self.hover_polygon_id = polygon_id
        return True

    # -- history ----------------------------------------------------------

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self.history.restore(snapshot, self.polygons)
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self.history.restore(snapshot, self.polygons)
        return True

    # -- bulk actions -----------------------------------------------------

    def clear_board(self) -> bool:
        """Reset every polygon to the blank tile colour and record it."""
        if not self.polygons:
            return False
        for polygon in self.polygons:
            polygon.color = DEFAULT_TILE_COLOR
        self.history.record(self.polygons)
        self.is_dirty = True
        return True

    def random_fill(self, rng: Optional[random.Random] = None) -> bool:
        """Paint every polygon with a random swatch of the current palette.

        Args:
            rng: Random source; the module-level generator when omitted.

        Returns:
            False when there is no board or the palette has no swatches.
        """
        if not self.polygons:
            return False
        swatches = self.current_palette.colors
        if not swatches:
            return False
        choice = (rng or random).choice
        for polygon in self.polygons:
            polygon.color = swatch_fill_value(choice(swatches))
        self.history.record(self.polygons)
        self.is_dirty = True
        return True

    # -- tool selection ---------------------------------------------------

    @property
    def current_palette(self) -> Palette:
        return get_palette_by_id(self.current_palette_id) or get_default_palette()

    def select_color(self, color: str) -> None:
        self.current_color = color
        self.eraser_active = False

    def select_palette(self, palette_id: str) -> str:
        """Switch palettes, keeping the current colour if the new palette has it.

        Unknown ids select the default palette. When the current colour is
        not among the new palette's swatches, the first swatch is selected.

        Returns:
            The resulting current colour.
        """
        palette = get_palette_by_id(palette_id) or get_default_palette()
        current = (self.current_color or "").lower()
        values = [swatch_fill_value(swatch) for swatch in palette.colors]
        match = next((value for value in values if value.lower() == current), None)
        self.current_palette_id = palette.id
        if match is None and values:
            match = values[0]
        self.current_color = match or self.current_color
        self.eraser_active = False
        self.is_dirty = True
        return self.current_color

    def activate_eraser(self) -> None:
        self.eraser_active = True
