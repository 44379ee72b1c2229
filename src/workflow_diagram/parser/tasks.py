"""Task list loader for JSON exports of workflow jobs.

Accepts either a bare list or an object with a ``tasks`` list. Each entry
looks like::

    {"id": 3, "task": "transform", "deps": ["extract"], "state": "pending"}

``deps`` may be absent or ``null``; both mean "no dependencies".
"""

from __future__ import annotations

__all__ = ["TaskParseError", "load_tasks", "parse_task"]

import json
from typing import Any

from workflow_diagram.parser.model import Task, TaskStatus


class TaskParseError(ValueError):
    """Raised when a task document cannot be turned into tasks."""


def parse_task(entry: Any, index: int = 0) -> Task:
    """Build a Task from one decoded JSON object."""
    if not isinstance(entry, dict):
        raise TaskParseError(f"Task #{index} is not an object")

    if "id" not in entry:
        raise TaskParseError(f"Task #{index} has no 'id'")
    task_id = entry["id"]
    if not isinstance(task_id, (int, str)) or isinstance(task_id, bool):
        raise TaskParseError(f"Task #{index} has an invalid id {task_id!r}")

    name = entry.get("task")
    if not isinstance(name, str) or not name:
        raise TaskParseError(f"Task #{index} has no 'task' name")

    deps = entry.get("deps")
    if deps is not None:
        if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
            raise TaskParseError(f"Task {name!r}: 'deps' must be a list of task names")
        deps = tuple(deps)

    state = entry.get("state", TaskStatus.PENDING.value)
    try:
        status = TaskStatus(state)
    except ValueError:
        raise TaskParseError(f"Task {name!r}: unknown state {state!r}") from None

    return Task(id=task_id, name=name, deps=deps, status=status)


def load_tasks(text: str) -> list[Task]:
    """Parse a JSON task document into Task objects, preserving order."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise TaskParseError(f"Invalid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("tasks")
    if not isinstance(data, list):
        raise TaskParseError("Expected a list of tasks or an object with a 'tasks' list")

    return [parse_task(entry, i) for i, entry in enumerate(data)]
