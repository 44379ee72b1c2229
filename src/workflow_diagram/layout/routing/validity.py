"""Route validity checks.

A candidate route is valid when none of its turns sits inside a padded
node card, none of its segments crosses a padded card other than the
cards it starts or ends on, and (without an approach offset) its final
horizontal run into the target is long enough to read as an arrival.
Baseline and probed routes go through the same checks.
"""

from __future__ import annotations

from typing import Sequence

from workflow_diagram.geometry import (
    Point,
    Rect,
    are_collinear,
    is_point_in_any_rect,
    is_point_in_rect,
    segment_intersects_rect,
)
from workflow_diagram.layout.constants import MIN_TARGET_APPROACH, TURN_NODE_PADDING
from workflow_diagram.layout.routing.common import is_target_approach_visible


def turn_points(points: Sequence[Point]) -> list[Point]:
    """Interior vertices where the route changes direction."""
    return [
        points[i]
        for i in range(1, len(points) - 1)
        if not are_collinear(points[i - 1], points[i], points[i + 1])
    ]


def is_endpoint_rect(rect: Rect, source: Point, target: Point) -> bool:
    return is_point_in_rect(source, rect) or is_point_in_rect(target, rect)


def is_path_turn_safe(
    points: Sequence[Point],
    rects: Sequence[Rect],
    padding: float = TURN_NODE_PADDING,
) -> bool:
    return not any(is_point_in_any_rect(turn, rects, padding) for turn in turn_points(points))


def is_path_segment_safe(
    points: Sequence[Point],
    rects: Sequence[Rect],
    source: Point,
    target: Point,
    padding: float = TURN_NODE_PADDING,
) -> bool:
    return not blocking_rects_for_segments(points, rects, source, target, padding)


def blocking_rects_for_turns(
    points: Sequence[Point],
    rects: Sequence[Rect],
    padding: float = TURN_NODE_PADDING,
) -> list[Rect]:
    turns = turn_points(points)
    if not turns:
        return []
    return [
        rect for rect in rects
        if any(is_point_in_rect(turn, rect, padding) for turn in turns)
    ]


def blocking_rects_for_segments(
    points: Sequence[Point],
    rects: Sequence[Rect],
    source: Point,
    target: Point,
    padding: float = TURN_NODE_PADDING,
) -> list[Rect]:
    blocking: list[Rect] = []
    for rect in rects:
        if is_endpoint_rect(rect, source, target):
            continue
        if any(
            segment_intersects_rect(points[i], points[i + 1], rect, padding)
            for i in range(len(points) - 1)
        ):
            blocking.append(rect)
    return blocking


def is_candidate_path_valid(
    bend_x: float,
    points: Sequence[Point],
    rects: Sequence[Rect],
    source: Point,
    target: Point,
    target_approach_y_offset: float = 0.0,
    padding: float = TURN_NODE_PADDING,
    min_approach: float = MIN_TARGET_APPROACH,
) -> bool:
    if not is_path_turn_safe(points, rects, padding):
        return False
    if not is_path_segment_safe(points, rects, source, target, padding):
        return False
    if target_approach_y_offset == 0:
        return is_target_approach_visible(bend_x, source, target, min_approach)
    return True
