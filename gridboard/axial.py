"""
Axial layout engine for hexagon-shaped boards.

Enumerates the axial coordinates of a radius-bounded hexagon row by row,
projects them to unit pixel space for either orientation, and fits the
projection onto a padded canvas.
"""

import math
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from gridboard.config import CANVAS_PADDING, MIN_HEX_SIZE, MIN_TRIANGLE_SIZE
from gridboard.models import AxialCoord, CanvasSize, Orientation, Point


SQRT3: float = math.sqrt(3)


def fitted_size(candidates: Tuple[float, ...], minimum: int) -> int:
    """Largest integer size satisfying every candidate bound, at least ``minimum``.

    A NaN or infinite bound leaves nothing to fit, so ``minimum`` is returned.
    """
    if not all(math.isfinite(candidate) for candidate in candidates):
        return minimum
    return max(minimum, math.floor(min(candidates)))


class HexRow(NamedTuple):
    """One row of the hexagon row plan.

    Attributes:
        index: Zero-based row index from the top.
        axial_r: Axial r coordinate shared by the row.
        q_start: First q coordinate (inclusive).
        q_end: Last q coordinate (inclusive).
    """

    index: int
    axial_r: int
    q_start: int
    q_end: int

    @property
    def count(self) -> int:
        return self.q_end - self.q_start + 1

    def coords(self) -> List[AxialCoord]:
        return [AxialCoord(q, self.axial_r) for q in range(self.q_start, self.q_end + 1)]


class ProjectedCoord(NamedTuple):
    q: int
    r: int
    x: float
    y: float


@dataclass(frozen=True)
class AxialLayout:
    """Unit-size projection of a row plan and its extent."""

    coords: List[ProjectedCoord]
    min_x: float
    max_x: float
    min_y: float
    max_y: float


@dataclass(frozen=True)
class HexPlacement:
    """Fitted cell size and canvas offset for an axial layout."""

    size: int
    offset_x: float
    offset_y: float
    hex_width_unit: float
    hex_height_unit: float


@dataclass(frozen=True)
class SnappedHexSizing:
    """Hex outline sizing snapped to a whole number of triangle steps.

    Attributes:
        triangle_size: Side length of one triangle cell.
        size: Circumradius of the hex outline, ``triangle_size * rings``.
        rings: Number of triangle steps along each hex edge.
    """

    triangle_size: int
    size: int
    rings: int


def hex_unit_extent(orientation: Orientation) -> Point:
    """Width and height of one hexagon of unit circumradius."""
    if Orientation.parse(orientation) is Orientation.POINTY_TOP:
        return Point(SQRT3, 2.0)
    return Point(2.0, SQRT3)


class AxialGrid:
    """Axial coordinate system for hexagon-shaped boards.

    Provides the row plan for a radius-bounded hexagon, axial-to-pixel
    projection in either orientation, and fitting of the projected board to
    a padded canvas.

    Attributes:
        orientation: Pointy-top or flat-top cell orientation.
    """

    def __init__(self, orientation: Orientation = Orientation.POINTY_TOP) -> None:
        self._orientation: Orientation = Orientation.parse(orientation)

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    def row_plan(self, radius: int) -> List[HexRow]:
        """Enumerate the ``2R + 1`` rows of a radius-R hexagon.

        Row ``i`` has ``r = i - R``; its q range is clipped so that
        ``|q|``, ``|r|`` and ``|q + r|`` all stay within R.

        Args:
            radius: Hexagon radius R; negative values are treated as 0.

        Returns:
            Rows ordered top to bottom.
        """
        R = max(0, int(radius))
        rows: List[HexRow] = []
        for index in range(2 * R + 1):
            r = index - R
            rows.append(HexRow(
                index=index,
                axial_r=r,
                q_start=max(-R, -r - R),
                q_end=min(R, -r + R),
            ))
        return rows

    def coords(self, radius: int) -> List[AxialCoord]:
        """All axial coordinates of a radius-R hexagon in row-plan order."""
        cells: List[AxialCoord] = []
        for row in self.row_plan(radius):
            cells.extend(row.coords())
        return cells

    def axial_to_pixel(self, q: int, r: int, size: float = 1.0) -> Point:
        """Project axial (q, r) to pixel space for a hexagon of circumradius ``size``.

        Pointy-top: ``x = sqrt(3) * (q + r/2)``, ``y = 1.5 * r``.
        Flat-top: ``x = 1.5 * q``, ``y = sqrt(3) * (r + q/2)``.
        """
        if self._orientation is Orientation.POINTY_TOP:
            return Point(size * SQRT3 * (q + r / 2.0), size * 1.5 * r)
        return Point(size * 1.5 * q, size * SQRT3 * (r + q / 2.0))

    def layout(self, rows: List[HexRow]) -> AxialLayout:
        """Project every coordinate of ``rows`` at unit size and track the extent."""
        coords: List[ProjectedCoord] = []
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for row in rows:
            for cell in row.coords():
                x, y = self.axial_to_pixel(cell.q, cell.r)
                coords.append(ProjectedCoord(cell.q, cell.r, x, y))
                min_x = min(min_x, x)
                max_x = max(max_x, x)
                min_y = min(min_y, y)
                max_y = max(max_y, y)
        return AxialLayout(coords, min_x, max_x, min_y, max_y)

    def fit(self, layout: AxialLayout, canvas: CanvasSize, padding: float = CANVAS_PADDING) -> HexPlacement:
        """Fit a unit layout onto the canvas.

        The cell size is the largest integer (at least 8) for which the
        projected centre extent plus one hexagon width/height fits inside the
        canvas minus ``padding`` on every side. The board is then centred on
        the full canvas.

        Args:
            layout: Unit-size projection from :meth:`layout`.
            canvas: Canvas pixel dimensions.
            padding: Pixels reserved on each canvas edge during sizing.

        Returns:
            The fitted HexPlacement.
        """
        unit_w, unit_h = hex_unit_extent(self._orientation)
        width_centers = layout.max_x - layout.min_x
        height_centers = layout.max_y - layout.min_y
        available_width = canvas.width - padding * 2
        available_height = canvas.height - padding * 2

        size = fitted_size(
            (available_width / (width_centers + unit_w), available_height / (height_centers + unit_h)),
            MIN_HEX_SIZE,
        )
        board_width = (width_centers + unit_w) * size
        board_height = (height_centers + unit_h) * size
        return HexPlacement(
            size=size,
            offset_x=(canvas.width - board_width) / 2.0,
            offset_y=(canvas.height - board_height) / 2.0,
            hex_width_unit=unit_w,
            hex_height_unit=unit_h,
        )

    def place(self, layout: AxialLayout, placement: HexPlacement, cell: ProjectedCoord) -> Point:
        """Translate a unit-projected cell into canvas pixels.

        The minimum projected coordinate lands half a hexagon inside the
        board's top-left corner.
        """
        return Point(
            (cell.x - layout.min_x + placement.hex_width_unit / 2.0) * placement.size + placement.offset_x,
            (cell.y - layout.min_y + placement.hex_height_unit / 2.0) * placement.size + placement.offset_y,
        )

    def snapped_triangle_sizing(self, rings: int, canvas: CanvasSize, padding: float = CANVAS_PADDING) -> SnappedHexSizing:
        """Size a single hex outline so its edges hold whole triangle steps.

        ``max_hex_size`` is the largest circumradius (at least 8) whose hexagon
        fits the padded canvas; the triangle side is
        ``floor(max_hex_size / rings)`` (at least 8) and the outline radius is
        snapped back to ``triangle_size * rings``.
        """
        rings = max(1, int(rings))
        unit_w, unit_h = hex_unit_extent(self._orientation)
        available_width = canvas.width - padding * 2
        available_height = canvas.height - padding * 2
        max_hex_size = fitted_size((available_width / unit_w, available_height / unit_h), MIN_HEX_SIZE)
        triangle_size = fitted_size((max_hex_size / rings,), MIN_TRIANGLE_SIZE)
        return SnappedHexSizing(triangle_size=triangle_size, size=triangle_size * rings, rings=rings)
