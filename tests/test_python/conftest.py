import pytest

from regionquadtree import Rectangle, Vector2


class Marker:
    """Minimal Positioned entry that is not a Vector2."""

    __slots__ = ("name", "x", "y")

    def __init__(self, x: float, y: float, name: str = ""):
        self.x = x
        self.y = y
        self.name = name

    def position(self):
        return (self.x, self.y)

    def __repr__(self):
        return f"Marker({self.x}, {self.y}, {self.name!r})"


ENTRY_KINDS = {
    "vector": lambda x, y: Vector2(x, y),
    "positioned": lambda x, y: Marker(x, y),
    "pair": lambda x, y: [x, y],
}


@pytest.fixture(params=sorted(ENTRY_KINDS))
def entry_kind(request):
    return request.param


@pytest.fixture
def make_entry(entry_kind):
    """Factory building a fresh entry object of the parametrized kind."""
    return ENTRY_KINDS[entry_kind]


@pytest.fixture
def bounds():
    return (0.0, 0.0, 100.0, 100.0)


@pytest.fixture
def root_rect():
    """Rectangle centered at the origin with half extent 100."""
    return Rectangle(Vector2(0.0, 0.0), Vector2(100.0, 100.0))
