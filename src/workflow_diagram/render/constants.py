"""Render constants used across render modules.

Theme-dependent values remain in style.py and the themes package.
"""

# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------
EDGE_STROKE_WIDTH: float = 2.0
"""Stroke width of dependency edges."""

SOLID_STROKE: str = "0"
"""Dash pattern for edges whose upstream task completed."""

DASHED_STROKE: str = "6 3"
"""Dash pattern for blocked and failed edges."""

ANIMATION_DURATION: float = 0.5
"""Seconds per dash cycle on animated (actively waiting) edges."""

ARROW_SIZE: float = 6.0
"""Length of the arrowhead drawn at each edge's target end."""

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
CANVAS_PADDING: float = 32.0
"""Padding around the diagram in the SVG preview."""

STATUS_SWATCH_WIDTH: float = 6.0
"""Width of the status colour strip on the left of each node card."""

LABEL_INSET: float = 16.0
"""Horizontal inset of the task name inside a node card."""
