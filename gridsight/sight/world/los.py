# sight/world/los.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional

from sight.world.corners import Point, RayCastPoint, cell_to_point, ray_point_to_point
from sight.world.directions import (
    CORNERS_CLOCKWISE,
    Corner,
    Direction,
    are_rays_parallel,
    corner_direction,
    direction_from_ray,
    next_corner,
    opposite_direction,
)
from sight.world.grid import Cell, EdgeDirection, GridBoard
from sight.world.raycast import grid_cast_ray
from sight.world.vertex import check_point

logger = logging.getLogger(__name__)

Coord = tuple[int, int]


@dataclass(slots=True)
class LineOfSightResult:
    source: Coord
    target: Coord
    has_line_of_sight: bool = False
    source_corner: Optional[Corner] = None
    target_corners: tuple[Corner, ...] = ()
    # per source corner, the target corners reachable by an unblocked ray
    visible: dict[Corner, list[Corner]] = field(default_factory=dict)

    def sightlines(self) -> list[tuple[Point, Point]]:
        """Vertex segments of the winning wedge (empty when there is no LOS)."""
        if not self.has_line_of_sight or self.source_corner is None:
            return []
        origin = cell_to_point(self.source, self.source_corner)
        return [(origin, cell_to_point(self.target, c)) for c in self.target_corners]


def _into_cell(corner: Corner) -> Direction:
    """Direction from a corner vertex back into the cell that owns it."""
    return opposite_direction(corner_direction(corner))


def check_ray(board: GridBoard, source: RayCastPoint, dest: RayCastPoint, ignore_figures: bool = False) -> bool:
    """True if the ray between two cell corners is blocked."""
    src = ray_point_to_point(source)
    dst = ray_point_to_point(dest)
    if src == dst:
        return True

    ray_direction = direction_from_ray(dst.x - src.x, dst.y - src.y)
    back = opposite_direction(ray_direction)

    # the source corner must let the ray out, the destination corner must let it in
    if check_point(board, src, _into_cell(source.corner), ray_direction):
        return True
    if check_point(board, dst, back, _into_cell(dest.corner)):
        return True

    ends = {(source.x, source.y), (dest.x, dest.y)}

    def cell_pred(x: int, y: int) -> bool:
        if (x, y) in ends:
            return False
        # BLOCKING covers both terrain and figures standing in the cell
        return not ignore_figures and board.get_cell(x, y) is not Cell.EMPTY

    def edge_pred(x: int, y: int, dir: EdgeDirection) -> bool:
        return board.does_edge_block_line_of_sight(x, y, dir)

    def vertex_pred(x: int, y: int) -> bool:
        return check_point(board, (x, y), back, ray_direction)

    return grid_cast_ray(src, dst, cell_pred, edge_pred, vertex_pred)


def check_line_of_sight(board: GridBoard, source: Coord, target: Coord, *, ignore_figures: bool = False) -> LineOfSightResult:
    """
    Try every source/target corner pair and keep the tightest wedge: a source
    corner plus two clockwise-adjacent target corners, both rays unblocked and
    not parallel, with the smallest sum of squared ray lengths.
    """
    result = LineOfSightResult(source=source, target=target)
    if tuple(source) == tuple(target):
        # corners of one cell can "see" each other along its own sides
        return result

    for c0 in CORNERS_CLOCKWISE:
        s = RayCastPoint(source[0], source[1], c0)
        result.visible[c0] = [
            c for c in CORNERS_CLOCKWISE
            if not check_ray(board, s, RayCastPoint(target[0], target[1], c), ignore_figures)
        ]

    best: Optional[int] = None
    for c0, reachable in result.visible.items():
        origin = cell_to_point(source, c0)
        for c1 in reachable:
            c2 = next_corner(c1)
            if c2 not in reachable:
                continue
            p1 = cell_to_point(target, c1)
            p2 = cell_to_point(target, c2)
            if are_rays_parallel(origin, p1, p2):
                continue
            score = _dist2(origin, p1) + _dist2(origin, p2)
            if best is None or score < best:
                best = score
                result.source_corner = c0
                result.target_corners = (c1, c2)

    result.has_line_of_sight = best is not None
    logger.debug(
        "LOS %s -> %s: %s (corner=%s targets=%s)",
        source, target, result.has_line_of_sight,
        result.source_corner.name if result.source_corner else None,
        [c.name for c in result.target_corners],
    )
    return result


def _dist2(a: Coord, b: Coord) -> int:
    return (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2
