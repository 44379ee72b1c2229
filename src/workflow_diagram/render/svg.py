"""SVG preview of workflow diagrams using drawsvg."""

from __future__ import annotations

__all__ = ["arrow_points", "render_svg"]

from typing import Any

import drawsvg as draw

from workflow_diagram.render.constants import (
    ANIMATION_DURATION,
    ARROW_SIZE,
    CANVAS_PADDING,
    LABEL_INSET,
    STATUS_SWATCH_WIDTH,
)
from workflow_diagram.render.export import DiagramData
from workflow_diagram.render.style import Theme


def render_svg(
    data: DiagramData,
    theme: Theme,
    padding: float = CANVAS_PADDING,
) -> str:
    """Render exported diagram data to an SVG string."""
    if not data.nodes:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>'

    max_x = max(n["x"] + n["width"] for n in data.nodes)
    max_y = max(n["y"] + n["height"] for n in data.nodes)
    svg_width = int(max_x + padding * 2)
    svg_height = int(max_y + padding * 2)

    d = draw.Drawing(svg_width, svg_height)
    d.append(draw.Rectangle(0, 0, svg_width, svg_height, fill=theme.background_color))

    # Layout coordinates start at the origin; shift everything by the padding
    canvas = draw.Group(transform=f"translate({padding},{padding})")

    # Edges behind cards
    for edge in data.edges:
        _render_edge(canvas, edge)
    for node in data.nodes:
        _render_node(canvas, node, theme)

    d.append(canvas)
    return d.as_svg()


def _render_edge(group: draw.Group, edge: dict[str, Any]) -> None:
    style = edge["style"]
    stroke = style.get("stroke", "#000000")
    width = style.get("stroke_width", 1)
    dash = style.get("stroke_dasharray", "0")

    if edge["animated"]:
        # Marching dashes: shift by one full dash period per cycle
        period = sum(float(part) for part in dash.split()) or 1
        group.append(draw.Raw(
            f'<path d="{edge["path"]}" fill="none" stroke="{stroke}" '
            f'stroke-width="{width}" stroke-dasharray="{dash}">'
            f'<animate attributeName="stroke-dashoffset" from="{period:g}" to="0" '
            f'dur="{ANIMATION_DURATION}s" repeatCount="indefinite"/>'
            f"</path>"
        ))
    else:
        group.append(draw.Path(
            d=edge["path"],
            fill="none",
            stroke=stroke,
            stroke_width=width,
            stroke_dasharray=dash,
        ))

    arrow = arrow_points(edge["path"])
    if arrow is not None:
        group.append(draw.Lines(*[c for point in arrow for c in point], close=True, fill=stroke))


def _path_points(path: str) -> list[tuple[float, float]]:
    """Coordinate pairs of an ``M x,y L x,y`` path."""
    points = []
    for token in path.split():
        if "," in token:
            x, y = token.split(",", 1)
            points.append((float(x), float(y)))
    return points


def arrow_points(
    path: str, size: float = ARROW_SIZE
) -> list[tuple[float, float]] | None:
    """Tip and base corners of the arrowhead, aligned with the last segment."""
    points = _path_points(path)
    if len(points) < 2:
        return None
    (px, py), (x, y) = points[-2], points[-1]
    half = size / 2

    if px != x:
        back = -size if x > px else size
        return [(x, y), (x + back, y - half), (x + back, y + half)]
    back = -size if y > py else size
    return [(x, y), (x - half, y + back), (x + half, y + back)]


def _render_node(group: draw.Group, node: dict[str, Any], theme: Theme) -> None:
    x, y = node["x"], node["y"]
    w, h = node["width"], node["height"]
    stroke = theme.node_selected_stroke if node["selected"] else theme.node_stroke
    stroke_width = theme.node_stroke_width * (2 if node["selected"] else 1)

    group.append(draw.Rectangle(
        x, y, w, h,
        rx=theme.node_corner_radius, ry=theme.node_corner_radius,
        fill=theme.node_fill,
        stroke=stroke,
        stroke_width=stroke_width,
    ))

    swatch = theme.status_colors.get(node["status"])
    if swatch:
        group.append(draw.Rectangle(
            x, y, STATUS_SWATCH_WIDTH, h,
            rx=theme.node_corner_radius / 2,
            fill=swatch,
        ))

    group.append(draw.Text(
        node["task"],
        theme.label_font_size,
        x + LABEL_INSET, y + h / 2,
        fill=theme.label_color,
        font_family=theme.label_font_family,
        dominant_baseline="central",
    ))
