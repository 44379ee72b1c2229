"""Dark slate theme."""

from workflow_diagram.parser.model import DependencyStatus
from workflow_diagram.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    edge_colors={
        DependencyStatus.BLOCKED: "#475569",
        DependencyStatus.FAILED: "#dc2626",
        DependencyStatus.UNBLOCKED: "#475569",
    },
    background_color="#050505",
    node_fill="#0f172a",
    node_stroke="#334155",
    node_selected_stroke="#60a5fa",
    label_color="#e2e8f0",
    status_colors={
        "available": "#b45309",
        "pending": "#b45309",
        "retryable": "#b45309",
        "scheduled": "#b45309",
        "cancelled": "#b91c1c",
        "discarded": "#b91c1c",
        "completed": "#22c55e",
        "running": "#1d4ed8",
    },
)
