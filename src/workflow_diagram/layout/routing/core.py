"""Core edge routing: orthogonal paths with obstacle-aware lane probing.

Routing policy for left-to-right workflows:

1. Build the Manhattan route with a single bend lane:
   ``source -> (bend_x, source.y) -> (bend_x, target.y) -> target``.
2. Take ``bend_x`` from the layout's first interior hint, or halfway
   between the endpoints. A shared merge lane, when given, replaces it.
3. Keep that route unless it turns inside a padded card, crosses a card
   it does not start or end on, or arrives with too short a final run.
4. Otherwise probe nearby lanes, nearest first, and take the first valid
   one. When nothing validates, keep the baseline.

Every edge reads the same obstacle snapshot, so edges can be routed in
any order with identical results.
"""

from __future__ import annotations

__all__ = [
    "build_bend_x_candidates",
    "build_edge_path",
    "choose_valid_bend_x",
    "find_valid_bend_x",
    "route_edge",
    "route_edge_points",
    "route_edges",
]

import logging
from typing import Sequence

from workflow_diagram.geometry import (
    Point,
    Rect,
    dedupe_consecutive_points,
    dedupe_near_points,
    simplify_collinear_points,
    to_path,
)
from workflow_diagram.layout.constants import (
    BEND_NUDGE_MAX_STEPS,
    BEND_NUDGE_STEP,
    MIN_TARGET_APPROACH,
    TURN_NODE_PADDING,
)
from workflow_diagram.layout.routing.common import (
    RoutedPath,
    baseline_bend_x,
    build_path_for_bend_x,
    target_approach_boundary,
)
from workflow_diagram.layout.routing.validity import (
    blocking_rects_for_segments,
    blocking_rects_for_turns,
    is_candidate_path_valid,
)
from workflow_diagram.parser.model import Edge, LayoutResult, Node

logger = logging.getLogger(__name__)


def build_bend_x_candidates(
    baseline_x: float,
    blocking_rects: Sequence[Rect],
    source: Point,
    target: Point,
    target_approach_y_offset: float = 0.0,
    padding: float = TURN_NODE_PADDING,
    min_approach: float = MIN_TARGET_APPROACH,
    nudge_step: float = BEND_NUDGE_STEP,
    max_nudge_steps: int = BEND_NUDGE_MAX_STEPS,
) -> list[float]:
    """Candidate lanes, deduplicated and sorted nearest-first to the baseline."""
    candidates: dict[float, None] = {baseline_x: None}

    if target_approach_y_offset == 0:
        candidates[target_approach_boundary(source, target, min_approach)] = None

    # Lanes hugging the blocking cards usually change the route the least
    for rect in blocking_rects:
        candidates[rect.x - padding] = None
        candidates[rect.x + rect.width + padding] = None

    for step in range(1, max_nudge_steps + 1):
        offset = step * nudge_step
        candidates[baseline_x - offset] = None
        candidates[baseline_x + offset] = None

    # sorted() is stable: equidistant lanes keep insertion order
    return sorted(candidates, key=lambda x: abs(x - baseline_x))


def find_valid_bend_x(
    baseline_x: float,
    obstacles: Sequence[Rect],
    source: Point,
    target: Point,
    target_approach_y_offset: float = 0.0,
    padding: float = TURN_NODE_PADDING,
    min_approach: float = MIN_TARGET_APPROACH,
    nudge_step: float = BEND_NUDGE_STEP,
    max_nudge_steps: int = BEND_NUDGE_MAX_STEPS,
) -> float | None:
    """Nearest lane whose route passes every validity check, or None."""

    def build(bend_x: float) -> list[Point]:
        return build_path_for_bend_x(
            bend_x, source, target, target_approach_y_offset, min_approach
        )

    def valid(bend_x: float, points: list[Point]) -> bool:
        return is_candidate_path_valid(
            bend_x,
            points,
            obstacles,
            source,
            target,
            target_approach_y_offset,
            padding,
            min_approach,
        )

    baseline = build(baseline_x)
    if valid(baseline_x, baseline):
        return baseline_x

    blocking = list(
        dict.fromkeys(
            blocking_rects_for_segments(baseline, obstacles, source, target, padding)
            + blocking_rects_for_turns(baseline, obstacles, padding)
        )
    )
    candidates = build_bend_x_candidates(
        baseline_x,
        blocking,
        source,
        target,
        target_approach_y_offset,
        padding,
        min_approach,
        nudge_step,
        max_nudge_steps,
    )
    for bend_x in candidates:
        if valid(bend_x, build(bend_x)):
            return bend_x
    return None


def choose_valid_bend_x(
    baseline_x: float,
    obstacles: Sequence[Rect],
    source: Point,
    target: Point,
    target_approach_y_offset: float = 0.0,
    padding: float = TURN_NODE_PADDING,
    min_approach: float = MIN_TARGET_APPROACH,
    nudge_step: float = BEND_NUDGE_STEP,
    max_nudge_steps: int = BEND_NUDGE_MAX_STEPS,
) -> float:
    """Pick the nearest valid lane, falling back to the baseline."""
    bend_x = find_valid_bend_x(
        baseline_x,
        obstacles,
        source,
        target,
        target_approach_y_offset,
        padding,
        min_approach,
        nudge_step,
        max_nudge_steps,
    )
    if bend_x is not None:
        return bend_x

    logger.debug(
        "No valid lane for %s -> %s; keeping baseline x=%s", source, target, baseline_x
    )
    return baseline_x


def route_edge_points(
    source: Point,
    target: Point,
    hint_points: Sequence[Point] = (),
    obstacles: Sequence[Rect] = (),
    preferred_bend_x: float | None = None,
    target_approach_y_offset: float = 0.0,
    padding: float = TURN_NODE_PADDING,
    min_approach: float = MIN_TARGET_APPROACH,
    nudge_step: float = BEND_NUDGE_STEP,
    max_nudge_steps: int = BEND_NUDGE_MAX_STEPS,
) -> list[Point]:
    """Route one edge and return its cleaned orthogonal waypoints."""
    source = Point(*source)
    target = Point(*target)
    offset = target_approach_y_offset or 0.0

    # Same-row edges stay straight unless an approach lane was requested
    if source.y == target.y and offset == 0:
        return [source, target]

    if preferred_bend_x is not None:
        baseline_x = preferred_bend_x
    else:
        baseline_x = baseline_bend_x(source, target, [Point(*p) for p in hint_points])

    bend_x = choose_valid_bend_x(
        baseline_x,
        obstacles,
        source,
        target,
        offset,
        padding,
        min_approach,
        nudge_step,
        max_nudge_steps,
    )
    points = build_path_for_bend_x(bend_x, source, target, offset, min_approach)
    return simplify_collinear_points(
        dedupe_near_points(dedupe_consecutive_points(points))
    )


def build_edge_path(
    source: Point,
    target: Point,
    hint_points: Sequence[Point] = (),
    obstacles: Sequence[Rect] = (),
    preferred_bend_x: float | None = None,
    target_approach_y_offset: float = 0.0,
    **kwargs,
) -> str:
    """Route one edge and return its SVG path string."""
    return to_path(
        route_edge_points(
            source,
            target,
            hint_points,
            obstacles,
            preferred_bend_x,
            target_approach_y_offset,
            **kwargs,
        )
    )


def route_edge(edge: Edge, source: Node, target: Node, **kwargs) -> RoutedPath:
    """Route ``edge`` from ``source``'s outgoing handle to ``target``'s incoming one."""
    points = route_edge_points(
        source.source_handle,
        target.target_handle,
        edge.hint_points,
        edge.obstacles,
        edge.preferred_bend_x,
        edge.target_approach_y_offset,
        **kwargs,
    )
    return RoutedPath(edge=edge, points=points, path=to_path(points))


def route_edges(layout: LayoutResult, **kwargs) -> list[RoutedPath]:
    """Route every edge of a layout, in edge order."""
    nodes = layout.node_map()
    routes: list[RoutedPath] = []
    for edge in layout.edges:
        src = nodes.get(edge.source)
        tgt = nodes.get(edge.target)
        if src is None or tgt is None:
            logger.debug("Edge %s references a node missing from the layout", edge.id)
            continue
        routes.append(route_edge(edge, src, tgt, **kwargs))
    return routes
