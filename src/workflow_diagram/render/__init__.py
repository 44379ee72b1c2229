"""Rendering: edge styles, plain-data export and SVG preview."""

from workflow_diagram.render.export import DiagramData, node_data, to_render_data
from workflow_diagram.render.style import EdgeStyle, Theme, apply_edge_visuals, edge_style
from workflow_diagram.render.svg import render_svg

__all__ = [
    "DiagramData",
    "EdgeStyle",
    "Theme",
    "apply_edge_visuals",
    "edge_style",
    "node_data",
    "render_svg",
    "to_render_data",
]
