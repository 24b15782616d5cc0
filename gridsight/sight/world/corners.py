# sight/world/corners.py
from __future__ import annotations
from typing import NamedTuple

from sight.world.directions import Corner, Direction, is_orthogonal
from sight.world.grid import EdgeDirection


class Point(NamedTuple):
    """Vertex-space coordinate, range [0,width] x [0,height]."""
    x: int
    y: int


class EdgePoint(NamedTuple):
    x: int
    y: int
    dir: EdgeDirection


class RayCastPoint(NamedTuple):
    """A vertex named as one particular cell's corner (x, y are cell coords)."""
    x: int
    y: int
    corner: Corner


_RIGHT_SIDE = frozenset({Corner.UP_RIGHT, Corner.DOWN_RIGHT})
_BOTTOM_SIDE = frozenset({Corner.DOWN_RIGHT, Corner.DOWN_LEFT})


def cell_to_point(cell: tuple[int, int], corner: Corner) -> Point:
    x, y = cell
    return Point(x + (corner in _RIGHT_SIDE), y + (corner in _BOTTOM_SIDE))


def ray_point_to_point(p: RayCastPoint) -> Point:
    return cell_to_point((p.x, p.y), p.corner)


def point_to_edge_point(point: tuple[int, int], direction: Direction) -> EdgePoint:
    """Canonical edge leaving `point` in an orthogonal direction."""
    assert is_orthogonal(direction), f"no edge runs diagonally ({direction.name})"
    x, y = point
    if direction is Direction.RIGHT:
        return EdgePoint(x, y, EdgeDirection.RIGHT)
    if direction is Direction.DOWN:
        return EdgePoint(x, y, EdgeDirection.DOWN)
    if direction is Direction.LEFT:
        return EdgePoint(x - 1, y, EdgeDirection.RIGHT)
    return EdgePoint(x, y - 1, EdgeDirection.DOWN)
