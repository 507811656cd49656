# _common.py
"""Common utilities and constants shared across the quadtree modules."""

from __future__ import annotations

from typing import Any

# Type aliases
Bounds = tuple[float, float, float, float]
"""Axis-aligned rectangle as (min_x, min_y, max_x, max_y)."""

Point = tuple[float, float]
"""2D point as (x, y)."""

NODE_CAPACITY = 4
"""Default number of entries a leaf holds before it subdivides."""


def _is_np_array(x: Any) -> bool:
    """
    Check if x is a NumPy array without importing NumPy.

    This allows type checking without forcing NumPy as a hard dependency.

    Args:
        x: Object to check.

    Returns:
        True if x is a NumPy array.
    """
    mod = getattr(x.__class__, "__module__", "")
    return mod.startswith("numpy") and hasattr(x, "ndim") and hasattr(x, "shape")


def validate_bounds(bounds: Any) -> Bounds:
    """
    Validate and normalize bounds to a tuple of floats.

    Args:
        bounds: Bounds as sequence of 4 numbers.

    Returns:
        Validated bounds as tuple.

    Raises:
        ValueError: If bounds are invalid or inverted.
    """
    if type(bounds) is not tuple:
        bounds = tuple(bounds)
    if len(bounds) != 4:
        raise ValueError(
            "bounds must be a tuple of four numeric values (x min, y min, x max, y max)"
        )
    min_x, min_y, max_x, max_y = (float(v) for v in bounds)
    if min_x > max_x or min_y > max_y:
        raise ValueError(f"bounds {bounds!r} have min greater than max")
    return (min_x, min_y, max_x, max_y)


def validate_capacity(capacity: Any) -> int:
    """
    Validate a node capacity.

    Raises:
        ValueError: If capacity is not a positive integer.
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 1:
        raise ValueError(f"capacity must be a positive integer, got {capacity!r}")
    return capacity
