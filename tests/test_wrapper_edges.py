import logging

import pytest

from regionquadtree import (
    InternalConsistencyError,
    OutOfBoundsError,
    QuadTree,
    QuadTreeError,
    Rectangle,
    Vector2,
)

BOUNDS = (0.0, 0.0, 1000.0, 1000.0)


class LyingRectangle(Rectangle):
    """Claims to contain everything, so its quadrants cannot agree with it."""

    def contains(self, item):
        return True


def test_bounds_error_message_includes_point_and_bounds():
    qt = QuadTree(BOUNDS)
    with pytest.raises(
        ValueError, match=r"Position \([^)]*\) is outside bounds \([^)]*\)"
    ) as excinfo:
        qt.insert((1500, -10))
    err = excinfo.value
    assert isinstance(err, OutOfBoundsError)
    assert isinstance(err, QuadTreeError)
    assert err.position == (1500, -10)
    assert err.bounds == BOUNDS


def test_invariant_violation_raises_internal_consistency_error():
    qt = QuadTree(LyingRectangle(Vector2(0.0, 0.0), Vector2(1.0, 1.0)))
    for _ in range(4):
        qt.insert(Vector2(0.5, 0.5))

    with pytest.raises(InternalConsistencyError) as excinfo:
        qt.insert(Vector2(50.0, 50.0))
    assert not isinstance(excinfo.value, OutOfBoundsError)
    assert isinstance(excinfo.value, RuntimeError)
    assert len(qt) == 4


def test_subdivide_twice_is_refused():
    qt = QuadTree(BOUNDS)
    qt._subdivide()
    children = qt.children
    with pytest.raises(InternalConsistencyError):
        qt._subdivide()
    assert qt.children is children


def test_shared_edge_goes_to_first_quadrant():
    qt = QuadTree(Rectangle(Vector2(0.0, 0.0), Vector2(10.0, 10.0)), capacity=1)
    qt.insert(Vector2(-5.0, -5.0))
    center = Vector2(0.0, 0.0)
    on_vertical = Vector2(0.0, 5.0)
    qt.insert(center)
    qt.insert(on_vertical)

    nw, ne, sw, se = qt.children
    assert nw.entries == (center,)
    assert sw.entries == (on_vertical,)
    assert ne.entries == () and se.entries == ()
    assert len(qt.query(qt.boundary)) == 3


@pytest.mark.parametrize("capacity", [0, -1, 2.5, True, "4"])
def test_invalid_capacity(capacity):
    with pytest.raises(ValueError):
        QuadTree(BOUNDS, capacity=capacity)


def test_invalid_bounds():
    with pytest.raises(ValueError):
        QuadTree((0, 0, 10))
    with pytest.raises(ValueError):
        QuadTree((10, 10, 0, 0))


def test_non_positioned_entry_raises_type_error():
    qt = QuadTree(BOUNDS)
    with pytest.raises(TypeError):
        qt.insert(object())
    assert len(qt) == 0


def test_contains_is_by_identity():
    qt = QuadTree(BOUNDS)
    a = Vector2(10.0, 10.0)
    qt.insert(a)
    assert a in qt
    assert Vector2(10.0, 10.0) == a
    assert Vector2(10.0, 10.0) not in qt
    assert Vector2(20.0, 20.0) not in qt


def test_node_boundaries_and_depth():
    qt = QuadTree(BOUNDS, capacity=1)
    assert qt.get_all_node_boundaries() == [BOUNDS]
    assert qt.depth() == 0

    qt.insert((100.0, 100.0))
    qt.insert((200.0, 200.0))
    boundaries = qt.get_all_node_boundaries()
    assert boundaries[0] == BOUNDS
    assert boundaries[1:] == [
        (0.0, 0.0, 500.0, 500.0),
        (500.0, 0.0, 1000.0, 500.0),
        (0.0, 500.0, 500.0, 1000.0),
        (500.0, 500.0, 1000.0, 1000.0),
    ]
    assert qt.depth() == 1

    qt.insert((300.0, 300.0))
    assert qt.depth() == 2
    assert len(qt.get_all_node_boundaries()) == 9


def test_repr_mentions_bounds_and_size():
    qt = QuadTree(BOUNDS)
    qt.insert((1.0, 1.0))
    text = repr(qt)
    assert text.startswith("QuadTree(")
    assert "leaf" in text
    assert "len=1" in text


def test_subdivide_and_rejects_are_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="regionquadtree")
    qt = QuadTree(BOUNDS, capacity=1)
    qt.insert((1.0, 1.0))
    qt.insert((2.0, 2.0))
    with pytest.raises(OutOfBoundsError):
        qt.insert((-1.0, 2.0))

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Subdivided") for m in messages)
    assert any(m.startswith("Rejected") for m in messages)


def test_consistency_failure_is_logged_as_error(caplog):
    qt = QuadTree(LyingRectangle(Vector2(0.0, 0.0), Vector2(1.0, 1.0)), capacity=1)
    qt.insert((0.0, 0.0))
    with caplog.at_level(logging.ERROR, logger="regionquadtree"):
        with pytest.raises(InternalConsistencyError):
            qt.insert((5.0, 5.0))
    assert any(r.levelno == logging.ERROR for r in caplog.records)
