# sight/world/directions.py
from __future__ import annotations
from enum import Enum

Coord = tuple[int, int]


class Direction(Enum):
    RIGHT = (1, 0)
    DOWN_RIGHT = (1, 1)
    DOWN = (0, 1)
    DOWN_LEFT = (-1, 1)
    LEFT = (-1, 0)
    UP_LEFT = (-1, -1)
    UP = (0, -1)
    UP_RIGHT = (1, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class Corner(Enum):
    UP_LEFT = "up_left"
    UP_RIGHT = "up_right"
    DOWN_RIGHT = "down_right"
    DOWN_LEFT = "down_left"


# Screen space (+y down), so "clockwise" starts at RIGHT and turns through DOWN.
DIRECTIONS_CLOCKWISE: tuple[Direction, ...] = (
    Direction.RIGHT,
    Direction.DOWN_RIGHT,
    Direction.DOWN,
    Direction.DOWN_LEFT,
    Direction.LEFT,
    Direction.UP_LEFT,
    Direction.UP,
    Direction.UP_RIGHT,
)
CORNERS_CLOCKWISE: tuple[Corner, ...] = (
    Corner.UP_LEFT,
    Corner.UP_RIGHT,
    Corner.DOWN_RIGHT,
    Corner.DOWN_LEFT,
)

_DIR_INDEX: dict[Direction, int] = {d: i for i, d in enumerate(DIRECTIONS_CLOCKWISE)}
_CORNER_INDEX: dict[Corner, int] = {c: i for i, c in enumerate(CORNERS_CLOCKWISE)}

# direction from a cell's centre towards each of its corners
_CORNER_DIRECTION: dict[Corner, Direction] = {
    Corner.UP_LEFT: Direction.UP_LEFT,
    Corner.UP_RIGHT: Direction.UP_RIGHT,
    Corner.DOWN_RIGHT: Direction.DOWN_RIGHT,
    Corner.DOWN_LEFT: Direction.DOWN_LEFT,
}


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


# --- direction ring ---
def direction_index(d: Direction) -> int:
    return _DIR_INDEX[d]


def rotate(d: Direction, steps: int) -> Direction:
    """Step around the ring; positive is clockwise."""
    return DIRECTIONS_CLOCKWISE[(_DIR_INDEX[d] + steps) % 8]


def opposite_direction(d: Direction) -> Direction:
    return rotate(d, 4)


def is_orthogonal(d: Direction) -> bool:
    return d.dx == 0 or d.dy == 0


def direction_from_ray(dx: int, dy: int) -> Direction:
    """Octant of a ray by the signs of its components only."""
    assert dx != 0 or dy != 0, "zero-length ray has no direction"
    return Direction((_sign(dx), _sign(dy)))


def are_rays_parallel(origin: Coord, a: Coord, b: Coord) -> bool:
    """True if origin->a and origin->b are collinear, or either has zero length."""
    ax, ay = a[0] - origin[0], a[1] - origin[1]
    bx, by = b[0] - origin[0], b[1] - origin[1]
    if (ax, ay) == (0, 0) or (bx, by) == (0, 0):
        return True
    return ax * by - ay * bx == 0


# --- corners ---
def corner_direction(c: Corner) -> Direction:
    return _CORNER_DIRECTION[c]


def opposite_corner(c: Corner) -> Corner:
    return CORNERS_CLOCKWISE[(_CORNER_INDEX[c] + 2) % 4]


def next_corner(c: Corner) -> Corner:
    return CORNERS_CLOCKWISE[(_CORNER_INDEX[c] + 1) % 4]
