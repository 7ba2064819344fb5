"""Geometry engine — polygon primitives and bounding boxes for opening shapes."""
import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from shapely.geometry import MultiPoint
from shapely.geometry import Polygon as ShapelyPolygon

from carpentry_core.exceptions import InvalidGeometryError
from carpentry_core.services.logging_config import engine_logger

logger = engine_logger("geometry")


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float


@dataclass(frozen=True)
class Bounds:
    width: float
    height: float


@dataclass(frozen=True)
class Polygon:
    """
    Ordered outline of an opening in millimetres, implicitly closed
    (the last point connects back to the first).

    A real shape needs at least 3 points. Fewer are representable so that
    bounds() stays total for uninitialised shapes.
    """
    points: Tuple[Point2D, ...] = ()

    @classmethod
    def from_coords(cls, coords: Iterable[Tuple[float, float]]) -> "Polygon":
        return cls(tuple(Point2D(float(x), float(y)) for x, y in coords))

    @property
    def coords(self) -> list:
        return [(p.x, p.y) for p in self.points]

    @property
    def is_shape(self) -> bool:
        return len(self.points) >= 3

    def to_shapely(self) -> ShapelyPolygon:
        """Shapely polygon for area/collision checks. Requires at least 3 points."""
        if not self.is_shape:
            raise ValueError(f"Polygon needs at least 3 points to form a shape (got {len(self.points)})")
        return ShapelyPolygon(self.coords)


def bounds(polygon: Polygon) -> Bounds:
    """Axis-aligned bounding box size. An empty polygon yields a zero box."""
    if not polygon.points:
        logger.debug("bounds() on empty polygon: returning zero box")
        return Bounds(width=0.0, height=0.0)

    min_x, min_y, max_x, max_y = MultiPoint(polygon.coords).bounds
    return Bounds(width=max_x - min_x, height=max_y - min_y)


def rectangle(width: float, height: float) -> Polygon:
    """Rectangle anchored at the origin. Sign of width/height is the caller's concern."""
    return Polygon.from_coords([
        (0.0, 0.0),
        (width, 0.0),
        (width, height),
        (0.0, height),
    ])


def require_positive(field: str, value: float, context: str = "") -> None:
    """Guard for opening and pane dimensions entering the calculators. NaN and infinity are rejected."""
    if value is None or not math.isfinite(value) or value <= 0:
        raise InvalidGeometryError(field, value, context)
