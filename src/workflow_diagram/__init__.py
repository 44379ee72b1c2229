"""workflow-diagram: layered layout and orthogonal edge routing for task dependency graphs."""

__version__ = "0.1.0"

from workflow_diagram.diagram import DiagramPipeline
from workflow_diagram.layout import build_graph_model, compute_layout
from workflow_diagram.layout.routing import build_edge_path, route_edge_points, route_edges
from workflow_diagram.parser import Task, TaskStatus, load_tasks

__all__ = [
    "DiagramPipeline",
    "Task",
    "TaskStatus",
    "__version__",
    "build_edge_path",
    "build_graph_model",
    "compute_layout",
    "load_tasks",
    "route_edge_points",
    "route_edges",
]
