"""Exceptions raised by the quadtree."""

from __future__ import annotations

from ._common import Bounds, Point


class QuadTreeError(Exception):
    """Base exception for all quadtree errors."""

    pass


class OutOfBoundsError(QuadTreeError, ValueError):
    """
    An entry's position lies outside the region governed by the tree.

    Recoverable: the tree never resizes itself, so callers decide whether to
    grow the bounds, clamp the entry or drop it.

    Attributes:
        position: The rejected (x, y) position.
        bounds: The tree bounds as (min_x, min_y, max_x, max_y).
    """

    def __init__(self, position: Point, bounds: Bounds):
        self.position = position
        self.bounds = bounds
        bx0, by0, bx1, by1 = bounds
        super().__init__(
            f"Position {position!r} is outside bounds ({bx0}, {by0}, {bx1}, {by1})"
        )


class InternalConsistencyError(QuadTreeError, RuntimeError):
    """
    The tree's tiling or containment invariant was violated.

    This signals a defect (for example inconsistent floating point boundary
    math) rather than a condition callers are expected to handle.
    """

    pass
