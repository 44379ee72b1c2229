"""Graph model builder: task list to unpositioned nodes and edges."""

from __future__ import annotations

__all__ = ["build_graph_model", "dep_status_from_task", "edge_id"]

import logging
from typing import Iterable

from workflow_diagram.layout.constants import NODE_HEIGHT, NODE_WIDTH
from workflow_diagram.parser.model import (
    DependencyStatus,
    Edge,
    GraphModel,
    Node,
    Task,
    TaskStatus,
)

logger = logging.getLogger(__name__)


def dep_status_from_task(task: Task) -> DependencyStatus:
    """How an upstream task's state affects the tasks that depend on it."""
    if task.status in (TaskStatus.CANCELLED, TaskStatus.DISCARDED):
        return DependencyStatus.FAILED
    if task.status is TaskStatus.COMPLETED:
        return DependencyStatus.UNBLOCKED
    return DependencyStatus.BLOCKED


def edge_id(dependency: Task, dependent: Task) -> str:
    return f"e-{dependency.id}-{dependent.id}"


def build_graph_model(
    tasks: Iterable[Task],
    node_width: float = NODE_WIDTH,
    node_height: float = NODE_HEIGHT,
) -> GraphModel:
    """Build one node per task and one edge per resolvable dependency.

    Nodes keep input order. Edges are emitted task by task, and within a
    task in the order its dependencies are listed, so repeated calls with
    the same input produce identical edge sequences. Dependency names that
    do not match any task are skipped.
    """
    tasks = list(tasks)

    # One pass for both lookups so large workflows avoid repeated scans
    by_name: dict[str, Task] = {}
    named_as_dependency: set[str] = set()
    for task in tasks:
        by_name[task.name] = task
        named_as_dependency.update(task.dependency_names)

    nodes = tuple(
        Node(
            id=str(task.id),
            task=task,
            width=node_width,
            height=node_height,
            has_upstream_deps=len(task.dependency_names) > 0,
            has_downstream_deps=task.name in named_as_dependency,
        )
        for task in tasks
    )

    edges: list[Edge] = []
    for task in tasks:
        seen: set[str] = set()
        for dep_name in task.dependency_names:
            dep = by_name.get(dep_name)
            if dep is None:
                logger.debug(
                    "Task %r depends on unknown task %r; dropping edge",
                    task.name,
                    dep_name,
                )
                continue
            if dep_name in seen:
                continue
            seen.add(dep_name)

            dep_status = dep_status_from_task(dep)
            # Only tasks still waiting on upstream work animate their edges
            is_waiting = task.status is TaskStatus.PENDING
            edges.append(
                Edge(
                    id=edge_id(dep, task),
                    source=str(dep.id),
                    target=str(task.id),
                    dep_status=dep_status,
                    animated=dep_status is DependencyStatus.BLOCKED and is_waiting,
                )
            )

    return GraphModel(nodes=nodes, edges=tuple(edges))
