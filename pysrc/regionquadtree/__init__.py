"""regionquadtree - Point-region quadtree for positioned entries."""

from ._common import NODE_CAPACITY
from ._errors import InternalConsistencyError, OutOfBoundsError, QuadTreeError
from ._geometry import Positioned, Rectangle, Vector2, position_of
from ._insert_result import InsertResult
from ._logger import set_debug
from .quadtree import QuadTree

__all__ = [
    "NODE_CAPACITY",
    "InsertResult",
    "InternalConsistencyError",
    "OutOfBoundsError",
    "Positioned",
    "QuadTree",
    "QuadTreeError",
    "Rectangle",
    "Vector2",
    "position_of",
    "set_debug",
]
