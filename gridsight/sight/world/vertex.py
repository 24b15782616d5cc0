# sight/world/vertex.py
from __future__ import annotations
from functools import lru_cache

from sight.world.corners import point_to_edge_point
from sight.world.directions import Direction, direction_index, is_orthogonal, rotate
from sight.world.grid import GridBoard

Coord = tuple[int, int]


def _sweep(start: Direction, end: Direction, step: int) -> tuple[Direction, ...]:
    """Directions from start to end inclusive, stepping by +1 (cw) or -1 (ccw)."""
    span = (direction_index(end) - direction_index(start)) * step % 8
    return tuple(rotate(start, i * step) for i in range(span + 1))


@lru_cache(maxsize=None)
def sweep_edges(in_direction: Direction, out_direction: Direction) -> tuple[tuple[Direction, ...], tuple[Direction, ...]]:
    """Orthogonal directions met by the clockwise and counter-clockwise sweeps."""
    cw = tuple(d for d in _sweep(in_direction, out_direction, 1) if is_orthogonal(d))
    ccw = tuple(d for d in _sweep(in_direction, out_direction, -1) if is_orthogonal(d))
    return cw, ccw


def _side_blocked(board: GridBoard, vertex: Coord, directions: tuple[Direction, ...]) -> bool:
    return any(board.does_edge_block_line_of_sight(*point_to_edge_point(vertex, d)) for d in directions)


def check_point(board: GridBoard, vertex: Coord, in_direction: Direction, out_direction: Direction) -> bool:
    """
    Can a sightline that reaches `vertex` from the in_direction side leave it
    towards out_direction? Both directions point away from the vertex.
    Returns True when blocked. Sight bends around the vertex on whichever side
    (cw or ccw) has no blocking edge, so only a vertex walled on both sides stops it.
    """
    if in_direction is out_direction:
        return False
    cw, ccw = sweep_edges(in_direction, out_direction)
    return _side_blocked(board, vertex, cw) and _side_blocked(board, vertex, ccw)
