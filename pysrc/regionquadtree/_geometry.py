# _geometry.py
"""Geometry primitives the quadtree partitions space with."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Protocol, runtime_checkable

from ._common import Bounds, Point, validate_bounds


@runtime_checkable
class Positioned(Protocol):
    """Anything that can report where it is in the plane."""

    def position(self) -> Point: ...


@dataclass(frozen=True)
class Vector2:
    """
    Immutable 2D vector.

    A vector is its own position, so it can be inserted into a tree directly.

    Attributes:
        x: X component.
        y: Y component.
    """

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2) -> Vector2:
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> Vector2:
        return Vector2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> Vector2:
        return Vector2(self.x / k, self.y / k)

    def __neg__(self) -> Vector2:
        return Vector2(-self.x, -self.y)

    def position(self) -> Vector2:
        return self


def position_of(obj: Any) -> Point:
    """
    Resolve the (x, y) position of a vector, positioned object or plain pair.

    Args:
        obj: A Vector2, an object exposing position(), or a sequence of two numbers.

    Returns:
        Position as (x, y).

    Raises:
        TypeError: If no position can be resolved from obj.
    """
    if isinstance(obj, Vector2):
        return (obj.x, obj.y)

    pos = getattr(obj, "position", None)
    if pos is None:
        pos = obj
    elif callable(pos):
        pos = pos()

    try:
        x, y = pos
    except (TypeError, ValueError):
        raise TypeError(
            f"{type(obj).__name__} has no 2D position; expected Positioned or (x, y)"
        ) from None
    return (x, y)


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle described by its center and half extent.

    Both contains() and intersects() use closed bounds, so points on an edge
    are inside and rectangles that only touch still intersect.

    The edges are fixed at construction. Rectangles built with from_bounds()
    or with explicit ``edges`` keep those exact values instead of
    recomputing them as center +/- half_dim, which would not round-trip in
    floating point.

    Attributes:
        center: Center of the rectangle.
        half_dim: Half width and half height.
        edges: Optional exact (min_x, min_y, max_x, max_y).
    """

    center: Vector2
    half_dim: Vector2
    edges: Optional[Bounds] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.half_dim.x < 0 or self.half_dim.y < 0:
            raise ValueError(f"half_dim must be non-negative, got {self.half_dim!r}")
        if self.edges is None:
            cx, cy = self.center
            hx, hy = self.half_dim
            object.__setattr__(self, "edges", (cx - hx, cy - hy, cx + hx, cy + hy))
        else:
            object.__setattr__(self, "edges", validate_bounds(self.edges))

    @classmethod
    def from_bounds(cls, bounds: Bounds) -> Rectangle:
        """Build a rectangle from (min_x, min_y, max_x, max_y)."""
        min_x, min_y, max_x, max_y = validate_bounds(bounds)
        hx = (max_x - min_x) / 2.0
        hy = (max_y - min_y) / 2.0
        return cls(
            Vector2(min_x + hx, min_y + hy),
            Vector2(hx, hy),
            edges=(min_x, min_y, max_x, max_y),
        )

    @property
    def min(self) -> Vector2:
        return Vector2(self.edges[0], self.edges[1])

    @property
    def max(self) -> Vector2:
        return Vector2(self.edges[2], self.edges[3])

    @property
    def bounds(self) -> Bounds:
        """The rectangle as (min_x, min_y, max_x, max_y)."""
        return self.edges

    def contains(self, item: Any) -> bool:
        """Return True if the position of item lies within the closed bounds."""
        x, y = position_of(item)
        return self._contains_xy(x, y)

    def _contains_xy(self, x: float, y: float) -> bool:
        x0, y0, x1, y1 = self.edges
        return x0 <= x <= x1 and y0 <= y <= y1

    def intersects(self, other: Rectangle) -> bool:
        """Return True if the two rectangles overlap or touch."""
        ax0, ay0, ax1, ay1 = self.edges
        bx0, by0, bx1, by1 = other.edges
        return ax0 <= bx1 and bx0 <= ax1 and ay0 <= by1 and by0 <= ay1
