"""Shared merge lanes for edges converging on one target.

When a target has a same-row incoming edge plus incoming edges from
other rows, the off-row edges are asked to bend on one shared lane just
left of the target so they join the straight edge in a single place.
Purely cosmetic: routing is correct without these hints.
"""

from __future__ import annotations

__all__ = ["with_preferred_target_merge_x"]

from collections import defaultdict
from dataclasses import replace
from typing import Sequence

from workflow_diagram.layout.constants import SAME_ROW_TOLERANCE, TARGET_MERGE_PADDING
from workflow_diagram.parser.model import Edge, Node


def _center_y(node: Node) -> float:
    y = node.position.y if node.position else 0.0
    return y + node.height / 2


def with_preferred_target_merge_x(
    edges: Sequence[Edge],
    nodes: Sequence[Node],
    same_row_tolerance: float = SAME_ROW_TOLERANCE,
    merge_padding: float = TARGET_MERGE_PADDING,
) -> tuple[Edge, ...]:
    """Return edges with ``preferred_bend_x`` set on off-row converging edges."""
    node_by_id = {node.id: node for node in nodes}
    incoming: dict[str, list[Edge]] = defaultdict(list)
    for edge in edges:
        incoming[edge.target].append(edge)

    preferred: dict[str, float] = {}
    for target_id, group in incoming.items():
        if len(group) < 2:
            continue
        target = node_by_id.get(target_id)
        if target is None or target.position is None:
            continue

        target_y = _center_y(target)
        off_row: list[Edge] = []
        has_same_row = False
        for edge in group:
            source = node_by_id.get(edge.source)
            if source is None:
                continue
            if abs(_center_y(source) - target_y) <= same_row_tolerance:
                has_same_row = True
            else:
                off_row.append(edge)

        if not has_same_row or not off_row:
            continue

        bend_x = target.position.x - merge_padding
        for edge in off_row:
            preferred[edge.id] = bend_x

    if not preferred:
        return tuple(edges)

    return tuple(
        replace(edge, preferred_bend_x=preferred[edge.id]) if edge.id in preferred else edge
        for edge in edges
    )
