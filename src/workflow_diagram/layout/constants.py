"""Layout constants used across layout modules.

Centralizes magic numbers from engine.py, sugiyama.py, merge_hints.py
and the routing package.
"""

# ---------------------------------------------------------------------------
# Node cards
# ---------------------------------------------------------------------------
NODE_WIDTH: float = 256.0
"""Rendered width of each workflow node card."""

NODE_HEIGHT: float = 44.0
"""Rendered height of each workflow node card."""

# ---------------------------------------------------------------------------
# Layered layout spacing (left-to-right)
# ---------------------------------------------------------------------------
RANK_SEP: float = 100.0
"""Horizontal gap between adjacent rank columns."""

NODE_SEP: float = 20.0
"""Vertical gap between two node cards in the same rank."""

EDGE_SEP: float = 100.0
"""Vertical gap between two dummy lanes of long edges in the same rank."""

MAX_ORDERING_PASSES: int = 24
"""Upper bound on barycenter sweeps during crossing minimisation."""

COORDINATE_SWEEPS: int = 4
"""Alternating down/up sweeps used to straighten cross-axis positions."""

DUMMY_PREFIX: str = "__dummy__"
"""Prefix for synthetic nodes inserted along edges spanning several ranks."""

# ---------------------------------------------------------------------------
# Edge routing
# ---------------------------------------------------------------------------
TURN_NODE_PADDING: float = 12.0
"""Margin around every node card where edge turns and crossings are forbidden."""

MIN_TARGET_APPROACH: float = 20.0
"""Minimum length of the final horizontal run into the target handle."""

BEND_NUDGE_STEP: float = 8.0
"""Horizontal distance between successive probed bend lanes."""

BEND_NUDGE_MAX_STEPS: int = 24
"""Probe steps in each direction from the baseline lane (+/-192px)."""

INTERIOR_HINT_EPSILON: float = 1.0
"""Hint points closer than this to either endpoint's x are not interior."""

# ---------------------------------------------------------------------------
# Merge hints
# ---------------------------------------------------------------------------
SAME_ROW_TOLERANCE: float = 1.0
"""Vertical tolerance for treating two node centres as the same row."""

TARGET_MERGE_PADDING: float = 20.0
"""Distance left of a target card where converging edges share a lane."""
