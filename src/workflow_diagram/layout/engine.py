"""Layout coordinator: runs the layered layout and projects it onto the model.

The layered algorithm is the only expensive step. ``run_layered_layout``
is the single place that invokes it; its ``LayoutGeometry`` depends only
on topology, so callers cache it under ``topology_key`` and replay it with
``apply_layout`` whenever task statuses change.
"""

from __future__ import annotations

__all__ = [
    "LayoutGeometry",
    "apply_layout",
    "compute_layout",
    "run_layered_layout",
    "topology_key",
]

import hashlib
import json
import logging
from dataclasses import dataclass, field, replace

from workflow_diagram.geometry import Point, Rect
from workflow_diagram.layout.merge_hints import with_preferred_target_merge_x
from workflow_diagram.layout.sugiyama import LayeredLayoutEngine, SugiyamaLayout
from workflow_diagram.parser.model import GraphModel, LayoutResult, PortSide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutGeometry:
    """Topology-dependent layout output, reusable across status changes.

    ``positions`` holds top-left corners by node id, ``hints`` the
    suggested route points by edge id, and ``obstacles`` one rect per node
    in model order.
    """

    positions: dict[str, Point] = field(default_factory=dict)
    hints: dict[str, tuple[Point, ...]] = field(default_factory=dict)
    obstacles: tuple[Rect, ...] = ()


def topology_key(model: GraphModel) -> str:
    """Stable hash of everything the layered layout depends on."""
    payload = {
        "nodes": [[node.id, node.width, node.height] for node in model.nodes],
        "edges": [[edge.id, edge.source, edge.target] for edge in model.edges],
    }
    encoded = json.dumps(payload, sort_keys=True).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def run_layered_layout(
    model: GraphModel,
    engine: LayeredLayoutEngine | None = None,
) -> LayoutGeometry:
    """Run the layered layout for ``model``'s topology."""
    if engine is None:
        engine = SugiyamaLayout()

    sizes = {node.id: (node.width, node.height) for node in model.nodes}
    edges = [(edge.id, edge.source, edge.target) for edge in model.edges]
    logger.debug(
        "Running layered layout: %d nodes, %d edges", len(sizes), len(edges)
    )
    layered = engine.layout(sizes, edges)

    positions: dict[str, Point] = {}
    for node in model.nodes:
        center = layered.centers.get(node.id)
        if center is None:
            logger.debug("Layout engine returned no position for node %s", node.id)
            positions[node.id] = Point(0.0, 0.0)
            continue
        # Engines position by centre; cards are anchored top-left
        positions[node.id] = Point(center.x - node.width / 2, center.y - node.height / 2)

    # One snapshot shared by every edge so avoidance never depends on
    # routing order
    obstacles = tuple(
        Rect(positions[node.id].x, positions[node.id].y, node.width, node.height)
        for node in model.nodes
    )
    hints = {
        edge.id: tuple(Point(p.x, p.y) for p in layered.polylines.get(edge.id, ()))
        for edge in model.edges
    }
    return LayoutGeometry(positions=positions, hints=hints, obstacles=obstacles)


def apply_layout(model: GraphModel, geometry: LayoutGeometry) -> LayoutResult:
    """Project cached geometry onto a model without re-running the layout."""
    nodes = tuple(
        replace(
            node,
            position=geometry.positions.get(node.id, Point(0.0, 0.0)),
            source_side=PortSide.RIGHT,
            target_side=PortSide.LEFT,
        )
        for node in model.nodes
    )
    edges = tuple(
        replace(
            edge,
            hint_points=geometry.hints.get(edge.id, ()),
            obstacles=geometry.obstacles,
        )
        for edge in model.edges
    )
    return LayoutResult(nodes=nodes, edges=edges, obstacles=geometry.obstacles)


def compute_layout(
    model: GraphModel,
    engine: LayeredLayoutEngine | None = None,
    merge_hints: bool = True,
) -> LayoutResult:
    """Compute positions, routing hints and merge lanes for ``model``."""
    result = apply_layout(model, run_layered_layout(model, engine))
    if merge_hints:
        result = replace(
            result, edges=with_preferred_target_merge_x(result.edges, result.nodes)
        )
    return result
