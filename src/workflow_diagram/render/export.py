"""Plain-data export of a laid-out, routed and styled diagram.

The output uses only dicts, lists, strings, numbers and booleans, so any
canvas or SVG front end can draw it without importing this package's
types.
"""

from __future__ import annotations

__all__ = ["DiagramData", "node_data", "to_render_data"]

from dataclasses import dataclass, field
from typing import Any, Mapping

from workflow_diagram.layout.routing import RoutedPath
from workflow_diagram.parser.model import LayoutResult, Node
from workflow_diagram.render.style import EdgeStyle


@dataclass
class DiagramData:
    nodes: list[dict[str, Any]] = field(default_factory=list)
    edges: list[dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {"nodes": self.nodes, "edges": self.edges}


def node_data(node: Node, selected: bool = False) -> dict[str, Any]:
    pos = node.rect
    return {
        "id": node.id,
        "x": pos.x,
        "y": pos.y,
        "width": node.width,
        "height": node.height,
        "source_side": node.source_side.value,
        "target_side": node.target_side.value,
        "selected": selected,
        "task": node.task.name,
        "status": node.task.status.value,
        "has_upstream_deps": node.has_upstream_deps,
        "has_downstream_deps": node.has_downstream_deps,
    }


def to_render_data(
    layout: LayoutResult,
    routes: Mapping[str, RoutedPath],
    styles: Mapping[str, EdgeStyle],
    selected_id: str | None = None,
) -> DiagramData:
    """Combine layout, routes and styles into renderer-ready data.

    Edge status and animation come from ``layout.edges``; routes only
    contribute geometry, so a route computed for an earlier status of the
    same topology is still valid here. Selection is applied here and
    nowhere else.
    """
    nodes = [node_data(node, selected=node.id == selected_id) for node in layout.nodes]
    edges = []
    for edge in layout.edges:
        route = routes.get(edge.id)
        if route is None:
            continue
        style = styles.get(edge.id)
        edges.append({
            "id": edge.id,
            "source": edge.source,
            "target": edge.target,
            "path": route.path,
            "style": style.as_dict() if style else {},
            "animated": edge.animated,
            "dep_status": edge.dep_status.value,
        })
    return DiagramData(nodes=nodes, edges=edges)
