"""Staged diagram pipeline with explicit per-stage caches.

Stages and their cache keys:

* graph model and positioned layout: task content hash (ids, names,
  dependencies, statuses);
* layered layout geometry: topology hash, so status changes reuse it;
* edge routes: topology hash, since positions, hints and obstacles all
  derive from topology;
* edge styles: task content hash plus theme name.

Selection is applied on every call and never invalidates anything.
"""

from __future__ import annotations

__all__ = ["DiagramPipeline", "StageCache", "task_content_key"]

import hashlib
import json
import logging
from collections import OrderedDict
from dataclasses import replace
from typing import Callable, Generic, Hashable, Sequence, TypeVar

from workflow_diagram.layout.engine import (
    LayoutGeometry,
    apply_layout,
    run_layered_layout,
    topology_key,
)
from workflow_diagram.layout.graph_model import build_graph_model
from workflow_diagram.layout.merge_hints import with_preferred_target_merge_x
from workflow_diagram.layout.routing import RoutedPath, route_edges
from workflow_diagram.layout.sugiyama import LayeredLayoutEngine, SugiyamaLayout
from workflow_diagram.parser.model import GraphModel, LayoutResult, Task
from workflow_diagram.render.export import DiagramData, to_render_data
from workflow_diagram.render.style import EdgeStyle, Theme, apply_edge_visuals
from workflow_diagram.themes import THEMES

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CACHE_ENTRIES: int = 16


def task_content_key(tasks: Sequence[Task]) -> str:
    """Stable hash of a task list, statuses included."""
    payload = [
        [
            str(task.id),
            task.name,
            list(task.deps) if task.deps is not None else None,
            task.status.value,
        ]
        for task in tasks
    ]
    encoded = json.dumps(payload).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


class StageCache(Generic[T]):
    """Bounded least-recently-used cache for one pipeline stage."""

    def __init__(self, name: str, max_entries: int = DEFAULT_CACHE_ENTRIES) -> None:
        self.name = name
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[Hashable, T] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        if key in self._entries:
            self.hits += 1
            logger.debug("%s cache hit", self.name)
            self._entries.move_to_end(key)
            return self._entries[key]

        self.misses += 1
        logger.debug("%s cache miss", self.name)
        value = compute()
        self._entries[key] = value
        if len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return value

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0


class DiagramPipeline:
    """Turns task lists into renderer data, re-running only what changed."""

    def __init__(
        self,
        engine: LayeredLayoutEngine | None = None,
        merge_hints: bool = True,
        max_entries: int = DEFAULT_CACHE_ENTRIES,
    ) -> None:
        self.engine = engine if engine is not None else SugiyamaLayout()
        self.merge_hints = merge_hints
        self.models: StageCache[GraphModel] = StageCache("model", max_entries)
        self.geometry: StageCache[LayoutGeometry] = StageCache("layout", max_entries)
        self.layouts: StageCache[LayoutResult] = StageCache("positioned", max_entries)
        self.routes: StageCache[dict[str, RoutedPath]] = StageCache("routing", max_entries)
        self.styles: StageCache[dict[str, EdgeStyle]] = StageCache("style", max_entries)

    def model(self, tasks: Sequence[Task]) -> GraphModel:
        tasks = tuple(tasks)
        return self.models.get_or_compute(
            task_content_key(tasks), lambda: build_graph_model(tasks)
        )

    def layout(self, tasks: Sequence[Task]) -> LayoutResult:
        tasks = tuple(tasks)
        return self.layouts.get_or_compute(
            task_content_key(tasks), lambda: self._position(self.model(tasks))
        )

    def _position(self, model: GraphModel) -> LayoutResult:
        geometry = self.geometry.get_or_compute(
            topology_key(model), lambda: run_layered_layout(model, self.engine)
        )
        result = apply_layout(model, geometry)
        if self.merge_hints:
            result = replace(
                result, edges=with_preferred_target_merge_x(result.edges, result.nodes)
            )
        return result

    def routed(self, tasks: Sequence[Task]) -> dict[str, RoutedPath]:
        """Routes by edge id. Only ``points`` and ``path`` are topology-bound."""
        layout = self.layout(tasks)
        key = topology_key(self.model(tasks))
        return self.routes.get_or_compute(
            key, lambda: {route.edge.id: route for route in route_edges(layout)}
        )

    def edge_styles(self, tasks: Sequence[Task], theme: Theme | str) -> dict[str, EdgeStyle]:
        theme = resolve_theme(theme)
        model = self.model(tasks)
        return self.styles.get_or_compute(
            (task_content_key(tuple(tasks)), theme.name),
            lambda: apply_edge_visuals(model.edges, theme),
        )

    def render_data(
        self,
        tasks: Sequence[Task],
        theme: Theme | str = "light",
        selected_id: str | int | None = None,
    ) -> DiagramData:
        tasks = tuple(tasks)
        selected = str(selected_id) if selected_id is not None else None
        return to_render_data(
            self.layout(tasks),
            self.routed(tasks),
            self.edge_styles(tasks, theme),
            selected_id=selected,
        )

    def cache_stats(self) -> dict[str, tuple[int, int]]:
        """(hits, misses) per stage."""
        return {
            cache.name: (cache.hits, cache.misses)
            for cache in (self.models, self.geometry, self.layouts, self.routes, self.styles)
        }


def resolve_theme(theme: Theme | str) -> Theme:
    if isinstance(theme, Theme):
        return theme
    return THEMES.get(theme, THEMES["light"])
