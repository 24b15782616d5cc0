import pytest

from sight.editor.tools import cycle_cell, cycle_edge, pick_cell, pick_edge
from sight.world.corners import EdgePoint
from sight.world.grid import Cell, Edge, EdgeDirection

R, D = EdgeDirection.RIGHT, EdgeDirection.DOWN


def test_pick_cell(board3):
    assert pick_cell(board3, 1.7, 0.2) == (1, 0)
    assert pick_cell(board3, -0.1, 1.0) is None
    assert pick_cell(board3, 3.0, 1.0) is None


@pytest.mark.parametrize(
    "fx, fy, expected",
    [
        (1.05, 1.5, EdgePoint(1, 1, D)),   # left side of (1, 1)
        (2.95, 1.5, EdgePoint(3, 1, D)),   # right side of (2, 1), on the board edge
        (1.5, 1.1, EdgePoint(1, 1, R)),    # top side of (1, 1)
        (0.5, 2.9, EdgePoint(0, 3, R)),    # bottom side of (0, 2)
    ],
)
def test_pick_edge_near_a_side(board3, fx, fy, expected):
    assert pick_edge(board3, fx, fy) == expected


def test_pick_edge_ignores_cell_centres_and_corners(board3):
    assert pick_edge(board3, 1.5, 1.5) is None
    assert pick_edge(board3, 1.05, 1.1) is None


def test_pick_edge_off_the_board(board3):
    assert pick_edge(board3, 1.5, -0.95) is None


def test_cycle_cell(board3):
    assert cycle_cell(board3, 0, 0) is Cell.BLOCKING
    assert cycle_cell(board3, 0, 0) is Cell.OUT_OF_BOUNDS
    assert cycle_cell(board3, 0, 0) is Cell.EMPTY
    assert board3.get_cell(0, 0) is Cell.EMPTY


def test_cycle_edge_uses_stored_value(board3):
    top = EdgePoint(1, 0, R)  # reads as wall, stored as clear
    assert cycle_edge(board3, top) is Edge.WALL
    inner = EdgePoint(1, 1, D)
    seen = [cycle_edge(board3, inner) for _ in range(4)]
    assert seen == [Edge.WALL, Edge.BLOCKING, Edge.IMPASSABLE, Edge.CLEAR]
