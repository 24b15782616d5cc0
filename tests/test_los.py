import itertools

import pytest

from sight.world.corners import Point, RayCastPoint
from sight.world.directions import Corner
from sight.world.grid import Cell, Edge, EdgeDirection, GridBoard
from sight.world.los import check_line_of_sight, check_ray

UL, UR, DR, DL = Corner.UP_LEFT, Corner.UP_RIGHT, Corner.DOWN_RIGHT, Corner.DOWN_LEFT


def _all_cells(board):
    return [(x, y) for x, y, _ in board.cells()]


def test_open_board_sees_every_other_cell(board4x3):
    for a, b in itertools.permutations(_all_cells(board4x3), 2):
        assert check_line_of_sight(board4x3, a, b).has_line_of_sight, (a, b)


def test_a_cell_never_sees_itself(board4x3):
    for c in _all_cells(board4x3):
        res = check_line_of_sight(board4x3, c, c)
        assert res.has_line_of_sight is False
        assert res.source_corner is None
        assert res.sightlines() == []


def test_blocking_cell_between_neighbours(board3):
    board3.set_cell(1, 1, Cell.BLOCKING)
    assert check_line_of_sight(board3, (0, 1), (2, 1)).has_line_of_sight is False


def test_ignore_figures_looks_through_blocking_cells(board3):
    board3.set_cell(1, 1, Cell.BLOCKING)
    assert check_line_of_sight(board3, (0, 1), (2, 1), ignore_figures=True).has_line_of_sight is True


def test_wall_line_cuts_the_board_even_ignoring_figures(board3):
    for y in range(3):
        board3.set_edge(2, y, EdgeDirection.DOWN, Edge.WALL)
    for ignore in (False, True):
        assert check_line_of_sight(board3, (0, 1), (2, 1), ignore_figures=ignore).has_line_of_sight is False
    # same side of the wall is unaffected
    assert check_line_of_sight(board3, (0, 0), (1, 2)).has_line_of_sight is True


def test_impassable_edges_do_not_block_sight(board3):
    for y in range(3):
        board3.set_edge(2, y, EdgeDirection.DOWN, Edge.IMPASSABLE)
    assert check_line_of_sight(board3, (0, 1), (2, 1)).has_line_of_sight is True


def test_same_vertex_ray_is_blocked(board3):
    assert check_ray(board3, RayCastPoint(0, 0, UR), RayCastPoint(1, 0, UL)) is True


def test_source_and_target_cells_do_not_occlude_their_own_ray():
    board = GridBoard(4, 4)
    board.set_cell(1, 1, Cell.BLOCKING)
    board.set_cell(2, 2, Cell.BLOCKING)
    assert check_ray(board, RayCastPoint(1, 1, UL), RayCastPoint(2, 2, DR)) is False


def test_ray_through_a_figure():
    board = GridBoard(4, 4)
    board.set_cell(2, 2, Cell.BLOCKING)
    src, dst = RayCastPoint(1, 1, UL), RayCastPoint(3, 3, DR)
    assert check_ray(board, src, dst) is True
    assert check_ray(board, src, dst, ignore_figures=True) is False


def test_out_of_bounds_cells_block_like_terrain():
    board = GridBoard(4, 4)
    board.set_cell(2, 2, Cell.OUT_OF_BOUNDS)
    assert check_ray(board, RayCastPoint(1, 1, UL), RayCastPoint(3, 3, DR)) is True


def test_tightest_wedge_is_reported(board4x3):
    res = check_line_of_sight(board4x3, (1, 1), (2, 1))
    assert res.has_line_of_sight
    assert res.source_corner is UL
    assert res.target_corners == (DL, UL)
    assert res.sightlines() == [(Point(1, 1), Point(2, 2)), (Point(1, 1), Point(2, 1))]
    # only the shared vertices are blocked between these two cells
    assert res.visible[UR] == [UR, DR, DL]
    assert res.visible[DR] == [UL, UR, DR]


def test_symmetry_is_not_assumed(board4x3):
    forward = check_line_of_sight(board4x3, (1, 1), (2, 1))
    backward = check_line_of_sight(board4x3, (2, 1), (1, 1))
    assert forward.has_line_of_sight and backward.has_line_of_sight
    # the winning wedges are not mirror images of each other
    assert (forward.source_corner, forward.target_corners) == (UL, (DL, UL))
    assert (backward.source_corner, backward.target_corners) == (UL, (DR, DL))


@pytest.mark.parametrize("source, target", [((0, 1), (2, 1)), ((2, 1), (0, 1))])
def test_blocked_answer_matches_in_both_directions(board3, source, target):
    board3.set_cell(1, 1, Cell.BLOCKING)
    assert check_line_of_sight(board3, source, target).has_line_of_sight is False
