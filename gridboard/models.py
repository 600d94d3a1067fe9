"""
Core data types shared by the generators, hit tester and paint history.

Board configuration enums with lenient parsing, points and bounding boxes,
the Polygon cell record, and the normalised BoardConfig.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from gridboard.config import DEFAULT_BOARD_CONFIG, DEFAULT_FILL


class _LenientEnum(str, Enum):
    """String enum whose ``parse`` maps unknown tags onto a fallback member."""

    @classmethod
    def default(cls) -> "_LenientEnum":
        raise NotImplementedError

    @classmethod
    def parse(cls, value: Any) -> Any:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.default()


class GridType(_LenientEnum):
    HEXAGON = "hexagon"
    TRIANGLE = "triangle"
    SQUARE = "square"
    ORTHOGONAL_SQUARE = "orthogonal-square"

    @classmethod
    def default(cls) -> "GridType":
        return cls.HEXAGON


class Orientation(_LenientEnum):
    POINTY_TOP = "pointy-top"
    FLAT_TOP = "flat-top"

    @classmethod
    def default(cls) -> "Orientation":
        return cls.POINTY_TOP


class BoardShape(_LenientEnum):
    RECTANGLE = "rectangle"
    SQUARE = "square"
    HEXAGON = "hexagon"
    TRIANGLE = "triangle"
    CIRCLE = "circle"

    @classmethod
    def default(cls) -> "BoardShape":
        # Unmatched outlines behave like an unconstrained rectangle.
        return cls.RECTANGLE


class TriangleOrientation(_LenientEnum):
    POINT_UP = "point-up"
    POINT_DOWN = "point-down"

    @classmethod
    def default(cls) -> "TriangleOrientation":
        return cls.POINT_UP


class Point(NamedTuple):
    x: float
    y: float


PointLike = Union[Point, Tuple[float, float]]


class AxialCoord(NamedTuple):
    """Hex lattice coordinate (q, r)."""

    q: int
    r: int

    def within(self, radius: int) -> bool:
        """Return True if the coordinate lies in the radius-bounded hexagon."""
        return abs(self.q) <= radius and abs(self.r) <= radius and abs(self.q + self.r) <= radius


class CanvasSize(NamedTuple):
    width: float
    height: float

    @property
    def usable(self) -> bool:
        """Whether both dimensions are finite and positive."""
        return all(math.isfinite(v) and v > 0 for v in (self.width, self.height))


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> Bounds:
        xs = []
        ys = []
        for x, y in points:
            xs.append(x)
            ys.append(y)
        if not xs:
            return cls(math.inf, -math.inf, math.inf, -math.inf)
        return cls(min(xs), max(xs), min(ys), max(ys))

    def contains(self, point: PointLike) -> bool:
        x, y = point
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    radius: float


@dataclass(eq=False)
class Polygon:
    """A single generated board cell.

    ``bounds`` is derived from ``vertices`` at construction and never set
    independently; ``color`` is the only field callers mutate.

    Attributes:
        id: Stable identifier encoding generator and grid coordinates.
        type: Grid family the cell belongs to.
        center: Cell centre in canvas pixels.
        vertices: Ordered outline, implicitly closed.
        color: Fill value (hex colour or opaque texture reference).
        pointing_up: Triangle direction; None for other families.
    """

    id: str
    type: GridType
    center: Point
    vertices: Tuple[Point, ...]
    color: str = DEFAULT_FILL
    pointing_up: Optional[bool] = None
    bounds: Bounds = field(init=False)

    def __post_init__(self) -> None:
        self.center = Point(*self.center)
        self.vertices = tuple(Point(*v) for v in self.vertices)
        if not self.color:
            self.color = DEFAULT_FILL
        self.bounds = Bounds.from_points(self.vertices)


def create_polygon(
    polygon_id: str,
    grid_type: GridType,
    center: PointLike,
    vertices: Sequence[PointLike],
    color: Optional[str] = None,
    default_fill: str = DEFAULT_FILL,
    pointing_up: Optional[bool] = None,
) -> Polygon:
    """Build a Polygon, falling back to ``default_fill`` when no colour is given."""
    return Polygon(
        id=polygon_id,
        type=grid_type,
        center=Point(*center),
        vertices=tuple(Point(*v) for v in vertices),
        color=color or default_fill,
        pointing_up=pointing_up,
    )


# camelCase keys accepted from externally produced configuration mappings.
_KEY_ALIASES: Dict[str, str] = {
    "gridType": "grid_type",
    "boardShape": "board_shape",
    "triangleOrientation": "triangle_orientation",
}


def _coerce_int(value: Any, default: Any, minimum: int) -> int:
    """Round ``value`` half-up to an int >= ``minimum``; bad input takes ``default``."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        number = float(default)
    if not math.isfinite(number):
        number = float(default)
    return max(minimum, int(math.floor(number + 0.5)))


@dataclass(frozen=True)
class BoardConfig:
    """User-chosen parameters driving one grid generation."""

    grid_type: GridType = GridType.HEXAGON
    orientation: Orientation = Orientation.POINTY_TOP
    board_shape: BoardShape = BoardShape.HEXAGON
    width: int = 11
    height: int = 11
    radius: int = 5
    size: int = 10
    triangle_orientation: TriangleOrientation = TriangleOrientation.POINT_UP

    @classmethod
    def with_defaults(cls, raw: Union[BoardConfig, Mapping[str, Any], None] = None, **overrides: Any) -> BoardConfig:
        """Normalise a partial configuration into a complete BoardConfig.

        Missing keys take the values in ``DEFAULT_BOARD_CONFIG``. Numeric
        fields are rounded to integers and clamped (width, height and size
        to >= 1, radius to >= 0); non-numeric or non-finite numbers take the
        default. Unknown enum tags fall back to each enum's default member.

        Args:
            raw: A BoardConfig, a mapping with snake_case or camelCase keys,
                or None.
            **overrides: Individual fields that replace entries of ``raw``.

        Returns:
            A fully populated BoardConfig.
        """
        if isinstance(raw, BoardConfig):
            data: Dict[str, Any] = raw.to_dict()
        else:
            data = {}
            for key, value in (raw or {}).items():
                data[_KEY_ALIASES.get(key, key)] = value
        for key, value in overrides.items():
            data[_KEY_ALIASES.get(key, key)] = value

        merged = dict(DEFAULT_BOARD_CONFIG)
        merged.update({k: v for k, v in data.items() if v is not None})
        defaults = DEFAULT_BOARD_CONFIG

        return cls(
            grid_type=GridType.parse(merged["grid_type"]),
            orientation=Orientation.parse(merged["orientation"]),
            board_shape=BoardShape.parse(merged["board_shape"]),
            width=_coerce_int(merged["width"], defaults["width"], 1),
            height=_coerce_int(merged["height"], defaults["height"], 1),
            radius=_coerce_int(merged["radius"], defaults["radius"], 0),
            size=_coerce_int(merged["size"], defaults["size"], 1),
            triangle_orientation=TriangleOrientation.parse(merged["triangle_orientation"]),
        )

    def updated(self, **changes: Any) -> BoardConfig:
        """Return a normalised copy with ``changes`` merged in."""
        return BoardConfig.with_defaults(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid_type": self.grid_type.value,
            "orientation": self.orientation.value,
            "board_shape": self.board_shape.value,
            "width": self.width,
            "height": self.height,
            "radius": self.radius,
            "size": self.size,
            "triangle_orientation": self.triangle_orientation.value,
        }


__all__ = [
    "AxialCoord",
    "BoardConfig",
    "BoardShape",
    "Bounds",
    "CanvasSize",
    "Circle",
    "GridType",
    "Orientation",
    "Point",
    "PointLike",
    "Polygon",
    "TriangleOrientation",
    "create_polygon",
]
