"""Edge routing subpackage for workflow diagram layout.

Public API:
- route_edges: Route every edge of a layout
- route_edge_points / build_edge_path: Route a single edge
- RoutedPath: Routed path dataclass
"""

from workflow_diagram.layout.routing.common import RoutedPath
from workflow_diagram.layout.routing.core import (
    build_edge_path,
    route_edge,
    route_edge_points,
    route_edges,
)

__all__ = [
    "RoutedPath",
    "build_edge_path",
    "route_edge",
    "route_edge_points",
    "route_edges",
]
