"""Point and rectangle primitives shared by layout and routing.

All routed paths are orthogonal: every segment is either horizontal or
vertical. Helpers here treat diagonal segments as a caller error and never
report them as intersecting anything.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

__all__ = [
    "Point",
    "Rect",
    "are_collinear",
    "dedupe_consecutive_points",
    "dedupe_near_points",
    "format_coord",
    "intersect_rect",
    "is_point_in_any_rect",
    "is_point_in_rect",
    "segment_intersects_rect",
    "simplify_collinear_points",
    "to_path",
]

COLLINEAR_EPSILON: float = 0.01
NEAR_POINT_EPSILON: float = 0.5


class Point(NamedTuple):
    x: float
    y: float


class Rect(NamedTuple):
    """Axis-aligned rectangle anchored at its top-left corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    def padded(self, padding: float) -> Rect:
        return Rect(
            self.x - padding,
            self.y - padding,
            self.width + 2 * padding,
            self.height + 2 * padding,
        )


def dedupe_consecutive_points(points: Sequence[Point]) -> list[Point]:
    """Drop points identical to their predecessor."""
    result: list[Point] = []
    for i, point in enumerate(points):
        if i > 0 and points[i - 1] == point:
            continue
        result.append(point)
    return result


def dedupe_near_points(
    points: Sequence[Point], epsilon: float = NEAR_POINT_EPSILON
) -> list[Point]:
    """Drop points within ``epsilon`` of their predecessor on both axes."""
    result: list[Point] = []
    for i, point in enumerate(points):
        if i > 0:
            prev = points[i - 1]
            if abs(prev.x - point.x) <= epsilon and abs(prev.y - point.y) <= epsilon:
                continue
        result.append(point)
    return result


def are_collinear(a: Point, b: Point, c: Point) -> bool:
    cross = (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)
    return abs(cross) < COLLINEAR_EPSILON


def simplify_collinear_points(points: Sequence[Point]) -> list[Point]:
    """Collapse runs of three or more collinear points to their endpoints."""
    if len(points) <= 2:
        return list(points)

    simplified = [points[0]]
    for i in range(1, len(points) - 1):
        if not are_collinear(simplified[-1], points[i], points[i + 1]):
            simplified.append(points[i])
    simplified.append(points[-1])
    return simplified


def format_coord(value: float) -> str:
    """Shortest text form of a coordinate; integral values lose the ``.0``."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_path(points: Sequence[Point]) -> str:
    """Render points as an SVG path string: ``M x,y L x,y ...``."""
    if not points:
        return ""

    parts = [f"M {format_coord(points[0].x)},{format_coord(points[0].y)}"]
    parts.extend(f"L {format_coord(p.x)},{format_coord(p.y)}" for p in points[1:])
    return " ".join(parts)


def is_point_in_rect(point: Point, rect: Rect, padding: float = 0.0) -> bool:
    """Inclusive containment test against ``rect`` grown by ``padding``."""
    return (
        rect.x - padding <= point.x <= rect.x + rect.width + padding
        and rect.y - padding <= point.y <= rect.y + rect.height + padding
    )


def is_point_in_any_rect(
    point: Point, rects: Sequence[Rect], padding: float = 0.0
) -> bool:
    return any(is_point_in_rect(point, rect, padding) for rect in rects)


def segment_intersects_rect(
    start: Point, end: Point, rect: Rect, padding: float = 0.0
) -> bool:
    """Whether an orthogonal segment passes through ``rect`` grown by ``padding``.

    Touching the padded boundary along the segment's own axis does not
    count as crossing; the overlap must be strictly positive.
    """
    min_x = rect.x - padding
    max_x = rect.x + rect.width + padding
    min_y = rect.y - padding
    max_y = rect.y + rect.height + padding

    if start.y == end.y:
        if start.y < min_y or start.y > max_y:
            return False
        seg_min = min(start.x, end.x)
        seg_max = max(start.x, end.x)
        return seg_max > min_x and seg_min < max_x

    if start.x == end.x:
        if start.x < min_x or start.x > max_x:
            return False
        seg_min = min(start.y, end.y)
        seg_max = max(start.y, end.y)
        return seg_max > min_y and seg_min < max_y

    return False


def intersect_rect(rect: Rect, toward: Point) -> Point:
    """Point where the ray from ``rect``'s centre toward ``toward`` leaves it.

    Returns the centre itself when ``toward`` coincides with it.
    """
    cx, cy = rect.center
    dx = toward.x - cx
    dy = toward.y - cy
    w = rect.width / 2
    h = rect.height / 2

    if dx == 0 and dy == 0:
        return Point(cx, cy)

    if abs(dy) * w > abs(dx) * h:
        # Leaves through the top or bottom side
        if dy < 0:
            h = -h
        return Point(cx + h * dx / dy, cy + h)

    if dx < 0:
        w = -w
    return Point(cx + w, cy + w * dy / dx)
