"""Helpers shared by the grid generators."""

import math
from typing import Mapping, Optional, Tuple, Union

from gridboard.axial import fitted_size
from gridboard.config import CANVAS_PADDING
from gridboard.models import CanvasSize

ColorMap = Mapping[str, str]
CanvasLike = Union[CanvasSize, Tuple[float, float], None]


def resolve_canvas(canvas: CanvasLike) -> Optional[CanvasSize]:
    """Return a usable CanvasSize, or None when there is nothing to draw on."""
    if canvas is None:
        return None
    try:
        resolved = CanvasSize(float(canvas[0]), float(canvas[1]))
    except (TypeError, ValueError, OverflowError, IndexError):
        return None
    return resolved if resolved.usable else None


def resolve_padding(padding) -> float:
    """Return ``padding`` as a finite, non-negative float; anything else is CANVAS_PADDING."""
    try:
        value = float(padding)
    except (TypeError, ValueError, OverflowError):
        return float(CANVAS_PADDING)
    if not math.isfinite(value) or value < 0:
        return float(CANVAS_PADDING)
    return value


def prior_color(color_map: Optional[ColorMap], polygon_id: str) -> Optional[str]:
    if not color_map:
        return None
    return color_map.get(polygon_id)


def available_area(canvas: CanvasSize, padding: float) -> Tuple[float, float]:
    """Canvas width and height left after subtracting ``padding`` on each side."""
    return canvas.width - padding * 2, canvas.height - padding * 2


__all__ = [
    "CanvasLike",
    "ColorMap",
    "available_area",
    "fitted_size",
    "prior_color",
    "resolve_canvas",
    "resolve_padding",
]
