"""Task model and task list loading."""

from workflow_diagram.parser.model import (
    DependencyStatus,
    Edge,
    GraphModel,
    LayoutResult,
    Node,
    PortSide,
    Task,
    TaskStatus,
)
from workflow_diagram.parser.tasks import TaskParseError, load_tasks

__all__ = [
    "DependencyStatus",
    "Edge",
    "GraphModel",
    "LayoutResult",
    "Node",
    "PortSide",
    "Task",
    "TaskParseError",
    "TaskStatus",
    "load_tasks",
]
