"""Shared types and helper functions for edge routing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from workflow_diagram.geometry import Point
from workflow_diagram.layout.constants import INTERIOR_HINT_EPSILON, MIN_TARGET_APPROACH
from workflow_diagram.parser.model import Edge


@dataclass
class RoutedPath:
    """A routed edge: cleaned orthogonal waypoints and their path string."""

    edge: Edge
    points: list[Point]
    path: str


def interior_hint_points(
    source: Point,
    target: Point,
    hint_points: Sequence[Point],
    epsilon: float = INTERIOR_HINT_EPSILON,
) -> list[Point]:
    """Hint points whose x lies strictly between the endpoints.

    Points within ``epsilon`` of either endpoint's x are border points
    of the source or target card and are not useful as lanes.
    """
    min_x = min(source.x, target.x)
    max_x = max(source.x, target.x)
    return [p for p in hint_points if min_x + epsilon < p.x < max_x - epsilon]


def baseline_bend_x(
    source: Point,
    target: Point,
    hint_points: Sequence[Point],
) -> float:
    """Follow the layout's first interior lane, else bend halfway."""
    interior = interior_hint_points(source, target, hint_points)
    if interior:
        return interior[0].x
    return source.x + (target.x - source.x) / 2


def target_approach_boundary(
    source: Point,
    target: Point,
    min_approach: float = MIN_TARGET_APPROACH,
) -> float:
    """Nearest lane to the target that still leaves ``min_approach`` of run."""
    if source.x <= target.x:
        return target.x - min_approach
    return target.x + min_approach


def is_target_approach_visible(
    bend_x: float,
    source: Point,
    target: Point,
    min_approach: float = MIN_TARGET_APPROACH,
) -> bool:
    if source.x <= target.x:
        return target.x - bend_x >= min_approach
    return bend_x - target.x >= min_approach


def build_path_for_bend_x(
    bend_x: float,
    source: Point,
    target: Point,
    target_approach_y_offset: float = 0.0,
    min_approach: float = MIN_TARGET_APPROACH,
) -> list[Point]:
    """Manhattan route turning on the vertical lane ``bend_x``.

    With an approach offset the route first lands on
    ``target.y + offset``, runs to the approach boundary, then drops onto
    the target row.
    """
    if source.y == target.y:
        return [source, target]

    if target_approach_y_offset == 0:
        return [
            source,
            Point(bend_x, source.y),
            Point(bend_x, target.y),
            target,
        ]

    approach_x = target_approach_boundary(source, target, min_approach)
    lane_y = target.y + target_approach_y_offset
    return [
        source,
        Point(bend_x, source.y),
        Point(bend_x, lane_y),
        Point(approach_x, lane_y),
        Point(approach_x, target.y),
        target,
    ]
