"""Tests for orthogonal edge routing."""

from workflow_diagram.geometry import (
    Point,
    Rect,
    dedupe_consecutive_points,
    dedupe_near_points,
    simplify_collinear_points,
)
from workflow_diagram.layout.engine import compute_layout
from workflow_diagram.layout.graph_model import build_graph_model
from workflow_diagram.layout.routing import build_edge_path, route_edge_points, route_edges
from workflow_diagram.layout.routing.core import build_bend_x_candidates
from workflow_diagram.parser.model import LayoutResult, Task, TaskStatus

SOURCE = Point(100, 20)
TARGET = Point(300, 140)


def test_same_row_is_straight():
    assert build_edge_path(Point(256, 86), Point(712, 86)) == "M 256,86 L 712,86"


def test_same_row_ignores_obstacles():
    path = build_edge_path(Point(0, 20), Point(400, 20), obstacles=[Rect(150, 0, 40, 40)])
    assert path == "M 0,20 L 400,20"


def test_midpoint_bend_without_hints():
    assert build_edge_path(SOURCE, TARGET) == "M 100,20 L 200,20 L 200,140 L 300,140"


def test_bend_follows_first_interior_hint():
    hints = [Point(256, 70), Point(306, 22), Point(712, 22)]
    path = build_edge_path(Point(256, 86), Point(712, 22), hint_points=hints)
    assert path == "M 256,86 L 306,86 L 306,22 L 712,22"


def test_border_hints_are_not_lanes():
    # Points within 1px of either endpoint x are card borders
    hints = [Point(100.5, 20), Point(299.5, 140)]
    assert route_edge_points(SOURCE, TARGET, hint_points=hints)[1].x == 200


def test_short_final_approach_is_widened():
    path = build_edge_path(SOURCE, TARGET, hint_points=[Point(298, 20)])
    assert path == "M 100,20 L 280,20 L 280,140 L 300,140"


def test_bend_moves_off_blocking_card():
    points = route_edge_points(
        SOURCE, TARGET, hint_points=[Point(160, 80)], obstacles=[Rect(140, 0, 40, 40)]
    )
    assert points[1].x == 120
    assert len(points) == 4


def test_bend_clears_card_on_target_row():
    target = Point(700, 140)
    blocker = Rect(220, 118, 256, 44)
    points = route_edge_points(SOURCE, target, obstacles=[blocker])
    bend_x = points[1].x
    # Must pass the padded right side of the card before dropping to the row
    assert bend_x > 488
    assert bend_x == 496


def test_unroutable_edge_keeps_baseline():
    everywhere = Rect(-1000, -1000, 5000, 5000)
    path = build_edge_path(SOURCE, TARGET, obstacles=[everywhere])
    assert path == "M 100,20 L 200,20 L 200,140 L 300,140"


def test_target_approach_offset_adds_lane():
    path = build_edge_path(
        SOURCE, TARGET, hint_points=[Point(160, 80)], target_approach_y_offset=-12
    )
    assert path == "M 100,20 L 160,20 L 160,128 L 280,128 L 280,140 L 300,140"


def test_offset_route_probes_around_blocking_card():
    path = build_edge_path(
        SOURCE,
        TARGET,
        hint_points=[Point(160, 80)],
        obstacles=[Rect(140, 0, 40, 40)],
        target_approach_y_offset=-12,
    )
    assert path == "M 100,20 L 120,20 L 120,128 L 280,128 L 280,140 L 300,140"


def test_offset_route_skips_approach_boundary_lane():
    with_offset = build_bend_x_candidates(
        160, [], SOURCE, TARGET, target_approach_y_offset=-12, max_nudge_steps=0
    )
    assert with_offset == [160]
    without_offset = build_bend_x_candidates(160, [], SOURCE, TARGET, max_nudge_steps=0)
    assert without_offset == [160, 280]


def test_same_row_ignores_hints_and_merge_lane():
    points = route_edge_points(
        Point(0, 20),
        Point(400, 20),
        hint_points=[Point(200, 80), Point(300, 20)],
        obstacles=[Rect(150, 0, 40, 40)],
        preferred_bend_x=380,
    )
    assert points == [Point(0, 20), Point(400, 20)]



def test_preferred_bend_overrides_hints():
    target = Point(780, 140)
    for source in (Point(300, 20), Point(300, 260)):
        points = route_edge_points(
            source, target, hint_points=[Point(500, 80)], preferred_bend_x=760
        )
        assert points[1].x == 760
        assert points[2].x == 760


def test_right_to_left_edge_keeps_visible_approach():
    points = route_edge_points(Point(300, 20), Point(200, 140), hint_points=[Point(210, 80)])
    assert points[1].x >= 220


def test_candidates_sorted_nearest_first():
    candidates = build_bend_x_candidates(200, [Rect(150, 0, 40, 40)], SOURCE, TARGET)
    assert candidates[0] == 200
    distances = [abs(c - 200) for c in candidates]
    assert distances == sorted(distances)
    assert len(candidates) == len(set(candidates))
    assert 138 in candidates and 202 in candidates
    assert 280 in candidates


def test_routing_is_idempotent():
    kwargs = dict(hint_points=[Point(160, 80)], obstacles=[Rect(140, 0, 40, 40)])
    assert build_edge_path(SOURCE, TARGET, **kwargs) == build_edge_path(SOURCE, TARGET, **kwargs)


def test_accepts_plain_tuples():
    path = build_edge_path((100, 20), (300, 140), hint_points=[(160, 80)])
    assert path == "M 100,20 L 160,20 L 160,140 L 300,140"


def _fan_in_layout():
    tasks = [Task(id=i, name=f"s{i}", status=TaskStatus.COMPLETED) for i in range(1, 6)]
    tasks.append(Task(id=9, name="sink", deps=tuple(f"s{i}" for i in range(1, 6))))
    return compute_layout(build_graph_model(tasks))


def test_route_edges_covers_every_edge():
    layout = _fan_in_layout()
    routes = route_edges(layout)
    assert [r.edge.id for r in routes] == [e.id for e in layout.edges]


def test_fan_in_merges_on_one_lane():
    layout = _fan_in_layout()
    sink = layout.node_map()["9"]
    routes = route_edges(layout)
    bends = {r.points[1].x for r in routes if len(r.points) == 4}
    assert bends == {sink.position.x - 20}
    assert sum(1 for r in routes if len(r.points) == 2) == 1


def test_routing_order_does_not_matter():
    layout = _fan_in_layout()
    forward = {r.edge.id: r.path for r in route_edges(layout)}
    reversed_layout = LayoutResult(
        nodes=layout.nodes, edges=tuple(reversed(layout.edges)), obstacles=layout.obstacles
    )
    backward = {r.edge.id: r.path for r in route_edges(reversed_layout)}
    assert forward == backward


def test_missing_nodes_are_skipped():
    layout = _fan_in_layout()
    partial = LayoutResult(nodes=layout.nodes[1:], edges=layout.edges, obstacles=layout.obstacles)
    assert len(route_edges(partial)) == len(layout.edges) - 1


def test_cleanup_is_idempotent_on_router_output():
    points = route_edge_points(
        SOURCE, TARGET, hint_points=[Point(160, 80)], target_approach_y_offset=-12
    )
    again = simplify_collinear_points(dedupe_near_points(dedupe_consecutive_points(points)))
    assert again == points
