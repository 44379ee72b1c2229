"""Layout: graph model building, layered positioning, merge hints and routing."""

from workflow_diagram.layout.engine import (
    LayoutGeometry,
    apply_layout,
    compute_layout,
    run_layered_layout,
    topology_key,
)
from workflow_diagram.layout.graph_model import build_graph_model, dep_status_from_task
from workflow_diagram.layout.merge_hints import with_preferred_target_merge_x
from workflow_diagram.layout.sugiyama import (
    LayeredGeometry,
    LayeredLayoutEngine,
    SugiyamaLayout,
)

__all__ = [
    "LayeredGeometry",
    "LayeredLayoutEngine",
    "LayoutGeometry",
    "SugiyamaLayout",
    "apply_layout",
    "build_graph_model",
    "compute_layout",
    "dep_status_from_task",
    "run_layered_layout",
    "topology_key",
    "with_preferred_target_merge_x",
]
