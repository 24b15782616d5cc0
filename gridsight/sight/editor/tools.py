# sight/editor/tools.py
from __future__ import annotations
import logging
import math
from typing import Optional

from sight import settings
from sight.world.corners import EdgePoint
from sight.world.grid import Cell, Edge, EdgeDirection, GridBoard

logger = logging.getLogger(__name__)

CELL_CYCLE: tuple[Cell, ...] = (Cell.EMPTY, Cell.BLOCKING, Cell.OUT_OF_BOUNDS)
EDGE_CYCLE: tuple[Edge, ...] = (Edge.CLEAR, Edge.WALL, Edge.BLOCKING, Edge.IMPASSABLE)


def pick_cell(board: GridBoard, fx: float, fy: float) -> Optional[tuple[int, int]]:
    x, y = math.floor(fx), math.floor(fy)
    return (x, y) if board.is_valid_cell(x, y) else None


def pick_edge(
    board: GridBoard,
    fx: float,
    fy: float,
    *,
    threshold: float = settings.EDGE_PICK_THRESHOLD,
    corner_threshold: float = settings.EDGE_PICK_CORNER_THRESHOLD,
) -> Optional[EdgePoint]:
    """Cell side nearest to a fractional board position (in cell units), if close enough."""
    cx, cy = math.floor(fx), math.floor(fy)
    xf, yf = fx - cx, fy - cy
    candidates = sorted(
        (
            (xf, EdgePoint(cx, cy, EdgeDirection.DOWN)),          # left
            (1 - xf, EdgePoint(cx + 1, cy, EdgeDirection.DOWN)),  # right
            (yf, EdgePoint(cx, cy, EdgeDirection.RIGHT)),         # top
            (1 - yf, EdgePoint(cx, cy + 1, EdgeDirection.RIGHT)), # bottom
        ),
        key=lambda c: c[0],
    )
    best_dist, best = candidates[0]
    if best_dist > threshold:
        return None
    # too close to two sides at once: that's a corner, not an edge
    if candidates[1][0] < corner_threshold:
        return None
    if not board.is_valid_edge(*best):
        return None
    return best


def _next(cycle: tuple, current):
    return cycle[(cycle.index(current) + 1) % len(cycle)]


def cycle_cell(board: GridBoard, x: int, y: int) -> Cell:
    cell = _next(CELL_CYCLE, board.get_cell(x, y))
    board.set_cell(x, y, cell)
    logger.debug("Cell (%d, %d) -> %s", x, y, cell.value)
    return cell


def cycle_edge(board: GridBoard, edge: EdgePoint) -> Edge:
    value = _next(EDGE_CYCLE, board.stored_edge(*edge))
    board.set_edge(edge.x, edge.y, edge.dir, value)
    logger.debug("Edge (%d, %d, %s) -> %s", edge.x, edge.y, edge.dir.value, value.value)
    return value
