"""Data model for workflow dependency diagrams."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from workflow_diagram.geometry import Point, Rect


class TaskStatus(Enum):
    """Lifecycle state of a workflow task."""

    AVAILABLE = "available"
    PENDING = "pending"
    SCHEDULED = "scheduled"
    RETRYABLE = "retryable"
    RUNNING = "running"
    CANCELLED = "cancelled"
    DISCARDED = "discarded"
    COMPLETED = "completed"


class DependencyStatus(Enum):
    """Whether an upstream task still holds back its dependents."""

    BLOCKED = "blocked"
    UNBLOCKED = "unblocked"
    FAILED = "failed"


class PortSide(Enum):
    """Side of a node card where edges attach."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Task:
    """A workflow task as delivered by the job store.

    ``deps`` holds task names, not ids. ``None`` means the record carried
    no dependency list at all and is treated as empty.
    """

    id: int | str
    name: str
    deps: tuple[str, ...] | None = None
    status: TaskStatus = TaskStatus.PENDING

    @property
    def dependency_names(self) -> tuple[str, ...]:
        return self.deps or ()


@dataclass(frozen=True)
class Node:
    """A task card in the diagram."""

    id: str
    task: Task
    width: float
    height: float
    has_upstream_deps: bool = False
    has_downstream_deps: bool = False
    # Populated by layout engine
    position: Point | None = None
    source_side: PortSide = PortSide.RIGHT
    target_side: PortSide = PortSide.LEFT

    @property
    def rect(self) -> Rect:
        pos = self.position or Point(0.0, 0.0)
        return Rect(pos.x, pos.y, self.width, self.height)

    @property
    def source_handle(self) -> Point:
        """Attachment point for outgoing edges (middle of the right side)."""
        r = self.rect
        return Point(r.x + r.width, r.y + r.height / 2)

    @property
    def target_handle(self) -> Point:
        """Attachment point for incoming edges (middle of the left side)."""
        r = self.rect
        return Point(r.x, r.y + r.height / 2)


@dataclass(frozen=True)
class Edge:
    """A dependency edge from an upstream task to the task that waits on it."""

    id: str
    source: str
    target: str
    dep_status: DependencyStatus = DependencyStatus.BLOCKED
    animated: bool = False
    # Populated by layout engine
    hint_points: tuple[Point, ...] = ()
    obstacles: tuple[Rect, ...] = ()
    # Populated by the merge-hint pass
    preferred_bend_x: float | None = None
    target_approach_y_offset: float = 0.0


@dataclass(frozen=True)
class GraphModel:
    """Nodes and edges before layout."""

    nodes: tuple[Node, ...] = field(default_factory=tuple)
    edges: tuple[Edge, ...] = field(default_factory=tuple)

    def node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


@dataclass(frozen=True)
class LayoutResult:
    """Positioned nodes and hinted edges.

    ``obstacles`` is the single rect snapshot that every edge in
    ``edges`` references.
    """

    nodes: tuple[Node, ...] = field(default_factory=tuple)
    edges: tuple[Edge, ...] = field(default_factory=tuple)
    obstacles: tuple[Rect, ...] = field(default_factory=tuple)

    def node_map(self) -> dict[str, Node]:
        return {node.id: node for node in self.nodes}
