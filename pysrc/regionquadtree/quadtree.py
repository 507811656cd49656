# quadtree.py
"""QuadTree - point-region spatial index over positioned entries."""

from __future__ import annotations

from typing import Any, Generic, Iterator, TypeVar, Union

from ._common import NODE_CAPACITY, Bounds, Point, _is_np_array, validate_capacity
from ._errors import InternalConsistencyError, OutOfBoundsError
from ._geometry import Rectangle, Vector2, position_of
from ._insert_result import InsertResult
from ._logger import logger

# Generic parameters
E = TypeVar("E")  # entry type, anything with a 2D position

RectLike = Union[Rectangle, Bounds]


def _as_rectangle(rect: RectLike) -> Rectangle:
    if isinstance(rect, Rectangle):
        return rect
    return Rectangle.from_bounds(rect)


class QuadTree(Generic[E]):
    """
    Point-region quadtree over entries that expose a 2D position.

    Every QuadTree is a node: it owns a boundary, up to ``capacity`` entries
    of its own and, once it has split, exactly four children covering its
    NW, NE, SW and SE quadrants. The root is simply the node you construct.

    Entries are stored by reference and never copied, so mutating an entry's
    position after insertion leaves the tree stale. The tree never removes
    entries or merges nodes. Entries a node held when it split stay on that
    node; only later entries descend into the children.

    Performance characteristics:
        Inserts: average O(log n)
        Rect queries: average O(log n + k) where k is matches returned

    Thread-safety:
        Instances are not thread-safe. Concurrent queries are fine while
        nothing inserts; guard mutation with an external lock.

    Args:
        boundary: Region covered, as a Rectangle or (min_x, min_y, max_x, max_y).
        capacity: Max number of entries a leaf holds before splitting.

    Raises:
        ValueError: If boundary or capacity is invalid.

    Example:
        ```python
        qt = QuadTree(Rectangle(Vector2(0.0, 0.0), Vector2(100.0, 100.0)))
        qt.insert(Vector2(50.0, 50.0))
        hits = qt.query((0.0, 0.0, 60.0, 60.0))
        ```
    """

    __slots__ = ("_boundary", "_capacity", "_children", "_entries")

    def __init__(self, boundary: RectLike, *, capacity: int = NODE_CAPACITY):
        self._boundary = _as_rectangle(boundary)
        self._capacity = validate_capacity(capacity)
        self._entries: list[E] = []
        self._children: tuple[QuadTree[E], ...] | None = None

    # ---- State ----

    @property
    def boundary(self) -> Rectangle:
        return self._boundary

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> tuple[E, ...]:
        """Entries held directly by this node, in insertion order."""
        return tuple(self._entries)

    @property
    def children(self) -> tuple[QuadTree[E], ...] | None:
        """The NW, NE, SW, SE children, or None while this node is a leaf."""
        return self._children

    @property
    def is_leaf(self) -> bool:
        return self._children is None

    # ---- Insertion ----

    def insert(self, entry: E) -> None:
        """
        Insert a single entry.

        Args:
            entry: Anything with a position (see Positioned) or an (x, y) pair.

        Raises:
            OutOfBoundsError: If the entry lies outside this node's boundary.
                The tree is left untouched.
            InternalConsistencyError: If no child accepts an entry this node
                contains. Indicates broken boundary math, not bad input.
        """
        pos = position_of(entry)
        if not self._boundary.contains(pos):
            logger.debug("Rejected %r: outside %r", pos, self._boundary.bounds)
            raise OutOfBoundsError(pos, self._boundary.bounds)
        self._insert(entry, pos)

    def _insert(self, entry: E, pos: Point) -> None:
        x, y = pos
        node = self
        while True:
            if node._children is None:
                if len(node._entries) < node._capacity:
                    node._entries.append(entry)
                    return
                node._subdivide()

            # First match wins, which settles points on shared edges
            for child in node._children:
                if child._boundary._contains_xy(x, y):
                    node = child
                    break
            else:
                logger.error(
                    "No quadrant of %r accepted %r", node._boundary.bounds, pos
                )
                raise InternalConsistencyError(
                    f"Position {pos!r} is inside {node._boundary.bounds!r} "
                    "but outside all of its quadrants"
                )

    def insert_many(self, entries: Any) -> InsertResult:
        """
        Insert entries in order, collecting those outside the bounds.

        Unlike insert(), an out-of-bounds entry does not abort the batch.

        Args:
            entries: Iterable of entries, or a NumPy array of shape (N, 2)
                whose rows become Vector2 entries.

        Returns:
            InsertResult with the number inserted and the rejected entries.

        Raises:
            ValueError: If a NumPy array does not have shape (N, 2).
        """
        if _is_np_array(entries):
            if entries.ndim != 2 or entries.shape[1] != 2:
                raise ValueError(
                    f"expected an array of shape (N, 2), got {entries.shape}"
                )
            entries = [Vector2(float(x), float(y)) for x, y in entries.tolist()]

        count = 0
        rejected = []
        for entry in entries:
            try:
                self.insert(entry)
            except OutOfBoundsError:
                rejected.append(entry)
            else:
                count += 1
        return InsertResult(count=count, rejected=rejected)

    def _subdivide(self) -> None:
        if self._children is not None:
            raise InternalConsistencyError(
                f"Node {self._boundary.bounds!r} is already subdivided"
            )

        x0, y0, x1, y1 = self._boundary.edges
        px, py = self._boundary.center
        hx, hy = self._boundary.half_dim
        half_dim = Vector2(hx / 2.0, hy / 2.0)
        # Split lines must sit inside the edges even if the center rounded out
        mx = min(max(px, x0), x1)
        my = min(max(py, y0), y1)

        def child(cx: float, cy: float, edges: Bounds) -> QuadTree[E]:
            rect = Rectangle(Vector2(cx, cy), half_dim, edges=edges)
            return QuadTree(rect, capacity=self._capacity)

        # NW, NE, SW, SE; north is toward -y. Children share the parent's
        # exact edges and split lines, so together they cover it exactly.
        self._children = (
            child(px - hx / 2.0, py - hy / 2.0, (x0, y0, mx, my)),
            child(px + hx / 2.0, py - hy / 2.0, (mx, y0, x1, my)),
            child(px - hx / 2.0, py + hy / 2.0, (x0, my, mx, y1)),
            child(px + hx / 2.0, py + hy / 2.0, (mx, my, x1, y1)),
        )
        logger.debug("Subdivided %r", self._boundary.bounds)

    # ---- Queries ----

    def query(self, rect: RectLike) -> list[E]:
        """
        Return all entries whose position lies inside a rectangle.

        Subtrees whose boundary misses the rectangle are skipped entirely.
        Results list this node's entries first, then each child's results in
        NW, NE, SW, SE order.

        Args:
            rect: Query range as a Rectangle or (min_x, min_y, max_x, max_y).

        Returns:
            List of matching entries, each at most once.

        Example:
            ```python
            for entry in qt.query((10.0, 10.0, 20.0, 20.0)):
                print(entry.position())
            ```
        """
        found: list[E] = []
        rect = _as_rectangle(rect)
        stack = [self]
        while stack:
            node = stack.pop()
            if not node._boundary.intersects(rect):
                continue

            for entry in node._entries:
                if rect.contains(entry):
                    found.append(entry)

            if node._children is not None:
                stack.extend(reversed(node._children))
        return found

    def _walk(self) -> Iterator[QuadTree[E]]:
        """Yield every node of this subtree, parents before children."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node._children is not None:
                stack.extend(reversed(node._children))

    def query_np(self, rect: RectLike) -> Any:
        """
        Return positions of all entries inside a rectangle as a NumPy array.

        Args:
            rect: Query range as a Rectangle or (min_x, min_y, max_x, max_y).

        Returns:
            NDArray[np.float64] with shape (N, 2), rows in query() order.

        Raises:
            ImportError: If NumPy is not installed.
        """
        import numpy as np

        coords = [position_of(e) for e in self.query(rect)]
        return np.asarray(coords, dtype=np.float64).reshape(-1, 2)

    # ---- Utilities ----

    def __len__(self) -> int:
        """Return the number of entries stored in this subtree."""
        return sum(len(node._entries) for node in self._walk())

    def __iter__(self) -> Iterator[E]:
        """Iterate over every entry in this subtree, in query order."""
        for node in self._walk():
            yield from node._entries

    def __contains__(self, entry: Any) -> bool:
        """
        Check whether this exact entry object is stored in the tree.

        Membership is by identity, so an equal but distinct Vector2 is not
        found.
        """
        x, y = position_of(entry)
        probe = Rectangle(Vector2(x, y), Vector2(0.0, 0.0))
        return any(hit is entry for hit in self.query(probe))

    def get_all_node_boundaries(self) -> list[Bounds]:
        """
        Return all node boundaries in the tree, parents before children.

        Useful for visualization.
        """
        return [node._boundary.bounds for node in self._walk()]

    def depth(self) -> int:
        """Return the height of this subtree. A leaf has depth 0."""
        deepest = 0
        stack = [(self, 0)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            if node._children is not None:
                stack.extend((child, level + 1) for child in node._children)
        return deepest

    def __repr__(self) -> str:
        kind = "leaf" if self._children is None else "internal"
        return (
            f"{type(self).__name__}(bounds={self._boundary.bounds!r}, "
            f"capacity={self._capacity}, {kind}, len={len(self)})"
        )
