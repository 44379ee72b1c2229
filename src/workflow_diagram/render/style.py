"""Theme and edge style definitions for workflow diagrams.

Edge styling is kept apart from layout and routing: switching themes
only re-runs ``apply_edge_visuals``.
"""

from __future__ import annotations

__all__ = ["EdgeStyle", "Theme", "apply_edge_visuals", "edge_style"]

from dataclasses import dataclass, field
from typing import Iterable

from workflow_diagram.parser.model import DependencyStatus, Edge
from workflow_diagram.render.constants import DASHED_STROKE, EDGE_STROKE_WIDTH, SOLID_STROKE


@dataclass
class Theme:
    """Visual theme for a workflow diagram."""

    name: str
    edge_colors: dict[DependencyStatus, str]
    background_color: str
    node_fill: str
    node_stroke: str
    node_selected_stroke: str
    label_color: str
    label_font_family: str = "'Helvetica Neue', Helvetica, Arial, sans-serif"
    label_font_size: float = 13.0
    node_corner_radius: float = 6.0
    node_stroke_width: float = 1.0
    edge_width: float = EDGE_STROKE_WIDTH
    # Status swatch on the left of each card
    status_colors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EdgeStyle:
    """Stroke attributes for one dependency edge."""

    stroke: str
    stroke_width: float
    stroke_dasharray: str

    def as_dict(self) -> dict[str, object]:
        return {
            "stroke": self.stroke,
            "stroke_width": self.stroke_width,
            "stroke_dasharray": self.stroke_dasharray,
        }


def edge_style(status: DependencyStatus, theme: Theme) -> EdgeStyle:
    """Solid for unblocked, dashed otherwise; colour tells failed from blocked."""
    dash = SOLID_STROKE if status is DependencyStatus.UNBLOCKED else DASHED_STROKE
    return EdgeStyle(
        stroke=theme.edge_colors[status],
        stroke_width=theme.edge_width,
        stroke_dasharray=dash,
    )


def apply_edge_visuals(edges: Iterable[Edge], theme: Theme) -> dict[str, EdgeStyle]:
    """Map edge id -> style, in edge order."""
    return {edge.id: edge_style(edge.dep_status, theme) for edge in edges}
