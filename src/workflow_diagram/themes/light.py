"""Light theme."""

from workflow_diagram.parser.model import DependencyStatus
from workflow_diagram.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    edge_colors={
        DependencyStatus.BLOCKED: "#cbd5e1",
        DependencyStatus.FAILED: "#dc2626",
        DependencyStatus.UNBLOCKED: "#cbd5e1",
    },
    background_color="#fafafa",
    node_fill="#ffffff",
    node_stroke="#cbd5e1",
    node_selected_stroke="#2563eb",
    label_color="#0f172a",
    status_colors={
        "available": "#f59e0b",
        "pending": "#f59e0b",
        "retryable": "#f59e0b",
        "scheduled": "#f59e0b",
        "cancelled": "#ef4444",
        "discarded": "#ef4444",
        "completed": "#22c55e",
        "running": "#3b82f6",
    },
)
