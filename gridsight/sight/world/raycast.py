# sight/world/raycast.py
from __future__ import annotations
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Callable, Iterator, Literal, Optional

from sight.world.grid import EdgeDirection

Coord = tuple[int, int]
EventKind = Literal["cell", "edge", "vertex"]

CellPredicate = Callable[[int, int], bool]
EdgePredicate = Callable[[int, int, EdgeDirection], bool]
VertexPredicate = Callable[[int, int], bool]


@dataclass(frozen=True, slots=True)
class RayEvent:
    kind: EventKind
    x: int
    y: int
    dir: Optional[EdgeDirection] = None


def _crossings(start: int, end: int) -> list[Fraction]:
    """Parameters t in (0, 1) where the segment meets an integer grid line on one axis."""
    if start == end:
        return []
    lo, hi = sorted((start, end))
    return [Fraction(k - start, end - start) for k in range(lo + 1, hi)]


def walk_segment(source: Coord, dest: Coord) -> Iterator[RayEvent]:
    """
    Supercover walk from one grid vertex to another, in travel order.

    Yields a "cell" event for every cell whose interior the segment enters, an
    "edge" event for every edge crossed away from its end points and a "vertex"
    event for every intermediate vertex the segment passes exactly through.
    A segment lying on a grid line enters no cells and crosses no edges.
    """
    x0, y0 = source
    x1, y1 = dest
    dx, dy = x1 - x0, y1 - y0
    # vertical and horizontal line crossings that coincide are one vertex pass
    stops = sorted(set(_crossings(x0, x1)) | set(_crossings(y0, y1)))

    prev = Fraction(0)
    for t in stops + [Fraction(1)]:
        mid = (prev + t) / 2
        mx, my = x0 + mid * dx, y0 + mid * dy
        if mx.denominator != 1 and my.denominator != 1:
            yield RayEvent("cell", math.floor(mx), math.floor(my))
        if t == 1:
            break
        px, py = x0 + t * dx, y0 + t * dy
        if px.denominator == 1 and py.denominator == 1:
            yield RayEvent("vertex", int(px), int(py))
        elif px.denominator == 1:
            yield RayEvent("edge", int(px), math.floor(py), EdgeDirection.DOWN)
        else:
            yield RayEvent("edge", math.floor(px), int(py), EdgeDirection.RIGHT)
        prev = t


def grid_cast_ray(
    source: Coord,
    dest: Coord,
    cell_pred: CellPredicate,
    edge_pred: EdgePredicate,
    vertex_pred: VertexPredicate,
) -> bool:
    """Walk source->dest; True (blocked) as soon as any predicate fires."""
    for ev in walk_segment(source, dest):
        if ev.kind == "cell":
            hit = cell_pred(ev.x, ev.y)
        elif ev.kind == "edge":
            hit = edge_pred(ev.x, ev.y, ev.dir)
        else:
            hit = vertex_pred(ev.x, ev.y)
        if hit:
            return True
    return False
