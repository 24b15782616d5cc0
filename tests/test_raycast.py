from sight.world.grid import EdgeDirection
from sight.world.raycast import RayEvent, grid_cast_ray, walk_segment

R, D = EdgeDirection.RIGHT, EdgeDirection.DOWN


def test_shallow_ray_visits_cells_and_edges_in_order():
    assert list(walk_segment((0, 0), (3, 1))) == [
        RayEvent("cell", 0, 0),
        RayEvent("edge", 1, 0, D),
        RayEvent("cell", 1, 0),
        RayEvent("edge", 2, 0, D),
        RayEvent("cell", 2, 0),
    ]


def test_reversed_ray_visits_the_same_things_backwards():
    forward = list(walk_segment((0, 0), (3, 1)))
    assert list(walk_segment((3, 1), (0, 0))) == forward[::-1]


def test_steep_ray_crosses_a_right_edge():
    assert list(walk_segment((0, 0), (1, 2))) == [
        RayEvent("cell", 0, 0),
        RayEvent("edge", 0, 1, R),
        RayEvent("cell", 0, 1),
    ]


def test_ray_along_a_grid_line_only_passes_vertices():
    assert list(walk_segment((0, 1), (3, 1))) == [
        RayEvent("vertex", 1, 1),
        RayEvent("vertex", 2, 1),
    ]
    assert list(walk_segment((2, 3), (2, 0))) == [
        RayEvent("vertex", 2, 2),
        RayEvent("vertex", 2, 1),
    ]


def test_exact_vertex_pass_is_not_two_edge_crossings():
    assert list(walk_segment((0, 0), (2, 2))) == [
        RayEvent("cell", 0, 0),
        RayEvent("vertex", 1, 1),
        RayEvent("cell", 1, 1),
    ]
    events = list(walk_segment((0, 0), (4, 2)))
    assert RayEvent("vertex", 2, 1) in events
    assert [e for e in events if e.kind == "edge"] == [RayEvent("edge", 1, 0, D), RayEvent("edge", 3, 1, D)]


def test_adjacent_and_identical_vertices_have_no_events():
    assert list(walk_segment((1, 1), (2, 1))) == []
    assert list(walk_segment((1, 1), (2, 2))) == [RayEvent("cell", 1, 1)]
    assert list(walk_segment((1, 1), (1, 1))) == []


def test_cast_stops_at_first_blocking_predicate():
    seen = []

    def cell_pred(x, y):
        seen.append(("cell", x, y))
        return (x, y) == (1, 0)

    def edge_pred(x, y, dir):
        seen.append(("edge", x, y, dir))
        return False

    def vertex_pred(x, y):
        seen.append(("vertex", x, y))
        return False

    assert grid_cast_ray((0, 0), (3, 1), cell_pred, edge_pred, vertex_pred) is True
    assert seen == [("cell", 0, 0), ("edge", 1, 0, D), ("cell", 1, 0)]


def test_cast_without_hits_is_unblocked():
    never = lambda *a: False  # noqa: E731
    assert grid_cast_ray((0, 0), (5, 3), never, never, never) is False


def test_vertex_predicate_decides_exact_passes():
    no = lambda *a: False  # noqa: E731
    assert grid_cast_ray((0, 0), (2, 2), no, no, lambda x, y: (x, y) == (1, 1)) is True
    assert grid_cast_ray((0, 0), (2, 2), no, lambda *a: True, no) is False
