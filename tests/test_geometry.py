import pytest

from sight.world.corners import EdgePoint, Point, RayCastPoint, cell_to_point, point_to_edge_point, ray_point_to_point
from sight.world.directions import (
    CORNERS_CLOCKWISE,
    DIRECTIONS_CLOCKWISE,
    Corner,
    Direction,
    are_rays_parallel,
    corner_direction,
    direction_from_ray,
    is_orthogonal,
    next_corner,
    opposite_corner,
    opposite_direction,
    rotate,
)
from sight.world.grid import EdgeDirection


def test_clockwise_tables():
    assert DIRECTIONS_CLOCKWISE[0] is Direction.RIGHT
    assert DIRECTIONS_CLOCKWISE[2] is Direction.DOWN
    assert DIRECTIONS_CLOCKWISE[6] is Direction.UP
    assert CORNERS_CLOCKWISE == (Corner.UP_LEFT, Corner.UP_RIGHT, Corner.DOWN_RIGHT, Corner.DOWN_LEFT)


def test_opposite_direction_is_four_steps_round():
    for d in DIRECTIONS_CLOCKWISE:
        o = opposite_direction(d)
        assert (o.dx, o.dy) == (-d.dx, -d.dy)
        assert opposite_direction(o) is d


def test_rotate_wraps():
    assert rotate(Direction.UP_RIGHT, 1) is Direction.RIGHT
    assert rotate(Direction.RIGHT, -1) is Direction.UP_RIGHT


def test_corner_helpers():
    assert next_corner(Corner.DOWN_LEFT) is Corner.UP_LEFT
    assert opposite_corner(Corner.UP_RIGHT) is Corner.DOWN_LEFT
    assert corner_direction(Corner.DOWN_RIGHT) is Direction.DOWN_RIGHT
    assert [is_orthogonal(d) for d in DIRECTIONS_CLOCKWISE] == [True, False] * 4


@pytest.mark.parametrize(
    "dx, dy, expected",
    [
        (5, 0, Direction.RIGHT),
        (3, 1, Direction.DOWN_RIGHT),
        (1, 7, Direction.DOWN_RIGHT),
        (0, 2, Direction.DOWN),
        (-4, 9, Direction.DOWN_LEFT),
        (-1, 0, Direction.LEFT),
        (-2, -3, Direction.UP_LEFT),
        (0, -1, Direction.UP),
        (6, -1, Direction.UP_RIGHT),
    ],
)
def test_direction_from_ray_uses_signs_only(dx, dy, expected):
    assert direction_from_ray(dx, dy) is expected


def test_direction_from_zero_ray_is_an_error():
    with pytest.raises(AssertionError):
        direction_from_ray(0, 0)


def test_are_rays_parallel():
    assert are_rays_parallel((0, 0), (2, 1), (4, 2))
    assert are_rays_parallel((1, 1), (3, 1), (0, 1))  # opposite sense still collinear
    assert are_rays_parallel((1, 1), (1, 1), (3, 2))  # zero-length ray
    assert not are_rays_parallel((0, 0), (2, 1), (2, 2))


def test_cell_to_point():
    assert cell_to_point((2, 5), Corner.UP_LEFT) == Point(2, 5)
    assert cell_to_point((2, 5), Corner.UP_RIGHT) == Point(3, 5)
    assert cell_to_point((2, 5), Corner.DOWN_RIGHT) == Point(3, 6)
    assert cell_to_point((2, 5), Corner.DOWN_LEFT) == Point(2, 6)
    # neighbours share vertices
    assert ray_point_to_point(RayCastPoint(1, 1, Corner.UP_RIGHT)) == ray_point_to_point(
        RayCastPoint(2, 0, Corner.DOWN_LEFT)
    )


def test_point_to_edge_point():
    p = Point(3, 4)
    assert point_to_edge_point(p, Direction.RIGHT) == EdgePoint(3, 4, EdgeDirection.RIGHT)
    assert point_to_edge_point(p, Direction.DOWN) == EdgePoint(3, 4, EdgeDirection.DOWN)
    assert point_to_edge_point(p, Direction.LEFT) == EdgePoint(2, 4, EdgeDirection.RIGHT)
    assert point_to_edge_point(p, Direction.UP) == EdgePoint(3, 3, EdgeDirection.DOWN)


def test_point_to_edge_point_rejects_diagonals():
    with pytest.raises(AssertionError):
        point_to_edge_point(Point(1, 1), Direction.UP_LEFT)
