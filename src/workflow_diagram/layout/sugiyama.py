"""Sugiyama-style layered layout, left to right.

Phases:
  1. Ranking (longest path, see layers.py)
  2. Dummy node insertion for long edges
  3. Crossing minimisation (barycenter, see ordering.py)
  4. Coordinate assignment
  5. Edge polylines through dummy nodes

Any engine satisfying ``LayeredLayoutEngine`` can replace this one: it
receives node sizes and edges and returns node centres and suggested
polylines.
"""

from __future__ import annotations

__all__ = ["LayeredGeometry", "LayeredLayoutEngine", "SugiyamaLayout"]

from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence

import networkx as nx

from workflow_diagram.geometry import Point, Rect, intersect_rect
from workflow_diagram.layout.constants import (
    COORDINATE_SWEEPS,
    EDGE_SEP,
    MAX_ORDERING_PASSES,
    NODE_SEP,
    RANK_SEP,
)
from workflow_diagram.layout.layers import (
    LayeredGraph,
    assign_layers,
    build_dag,
    insert_dummy_nodes,
)
from workflow_diagram.layout.ordering import minimise_crossings


@dataclass(frozen=True)
class LayeredGeometry:
    """Output of a layered layout engine.

    ``centers`` maps node id -> centre point. ``polylines`` maps edge
    id -> suggested route points (possibly empty).
    """

    centers: dict[str, Point] = field(default_factory=dict)
    polylines: dict[str, tuple[Point, ...]] = field(default_factory=dict)


class LayeredLayoutEngine(Protocol):
    def layout(
        self,
        sizes: Mapping[str, tuple[float, float]],
        edges: Sequence[tuple[str, str, str]],
    ) -> LayeredGeometry:
        """Position nodes of the given (width, height) and suggest edge routes.

        ``edges`` holds (edge_id, source_id, target_id) triples.
        """
        ...


class SugiyamaLayout:
    """Default layered layout engine."""

    def __init__(
        self,
        rank_sep: float = RANK_SEP,
        node_sep: float = NODE_SEP,
        edge_sep: float = EDGE_SEP,
        max_passes: int = MAX_ORDERING_PASSES,
        sweeps: int = COORDINATE_SWEEPS,
    ) -> None:
        self.rank_sep = rank_sep
        self.node_sep = node_sep
        self.edge_sep = edge_sep
        self.max_passes = max_passes
        self.sweeps = sweeps

    def __repr__(self) -> str:
        return (
            f"SugiyamaLayout(rank_sep={self.rank_sep}, node_sep={self.node_sep}, "
            f"edge_sep={self.edge_sep})"
        )

    def layout(
        self,
        sizes: Mapping[str, tuple[float, float]],
        edges: Sequence[tuple[str, str, str]],
    ) -> LayeredGeometry:
        if not sizes:
            return LayeredGeometry()

        dag = build_dag(sizes.keys(), edges)
        ranks = assign_layers(dag)
        layered = insert_dummy_nodes(dag, ranks, edges)
        ordering = minimise_crossings(layered, self.max_passes)

        xs = self._assign_rank_x(ordering, layered, sizes)
        ys = self._assign_cross_axis(ordering, layered, sizes)

        # Normalise so the top-left-most card starts at the origin
        min_left = min(xs[nid] - sizes[nid][0] / 2 for nid in sizes)
        min_top = min(ys[nid] - sizes[nid][1] / 2 for nid in sizes)
        centers_all = {
            nid: Point(xs[nid] - min_left, ys[nid] - min_top) for nid in xs
        }

        centers = {nid: centers_all[nid] for nid in sizes}
        polylines = {
            eid: self._polyline(chain, centers_all, sizes)
            for eid, chain in layered.chains.items()
        }
        return LayeredGeometry(centers=centers, polylines=polylines)

    def _size(
        self, node_id: str, layered: LayeredGraph, sizes: Mapping[str, tuple[float, float]]
    ) -> tuple[float, float]:
        if layered.is_dummy(node_id):
            return (0.0, 0.0)
        return sizes[node_id]

    def _assign_rank_x(
        self,
        ordering: list[list[str]],
        layered: LayeredGraph,
        sizes: Mapping[str, tuple[float, float]],
    ) -> dict[str, float]:
        """Centre every node of a rank on that rank's column."""
        xs: dict[str, float] = {}
        left = 0.0
        for rank in ordering:
            width = max((self._size(nid, layered, sizes)[0] for nid in rank), default=0.0)
            center = left + width / 2
            for nid in rank:
                xs[nid] = center
            left += width + self.rank_sep
        return xs

    def _separation(
        self, a: str, b: str, layered: LayeredGraph, sizes: Mapping[str, tuple[float, float]]
    ) -> float:
        """Minimum centre-to-centre distance between neighbours in a rank."""
        gap_a = self.edge_sep if layered.is_dummy(a) else self.node_sep
        gap_b = self.edge_sep if layered.is_dummy(b) else self.node_sep
        half_a = self._size(a, layered, sizes)[1] / 2
        half_b = self._size(b, layered, sizes)[1] / 2
        return half_a + half_b + (gap_a + gap_b) / 2

    def _assign_cross_axis(
        self,
        ordering: list[list[str]],
        layered: LayeredGraph,
        sizes: Mapping[str, tuple[float, float]],
    ) -> dict[str, float]:
        """Vertical centres: packed first, then pulled toward neighbours."""
        graph = layered.graph
        ys: dict[str, float] = {}
        seps: list[list[float]] = []

        for rank in ordering:
            rank_seps = [
                self._separation(rank[i], rank[i + 1], layered, sizes)
                for i in range(len(rank) - 1)
            ]
            seps.append(rank_seps)
            y = 0.0
            for i, nid in enumerate(rank):
                if i > 0:
                    y += rank_seps[i - 1]
                ys[nid] = y

        for _sweep in range(self.sweeps):
            for idx in range(1, len(ordering)):
                self._place_rank(ordering[idx], seps[idx], ys, graph, incoming=True)
            for idx in range(len(ordering) - 2, -1, -1):
                self._place_rank(ordering[idx], seps[idx], ys, graph, incoming=False)

        return ys

    @staticmethod
    def _place_rank(
        rank: list[str],
        seps: list[float],
        ys: dict[str, float],
        graph: nx.DiGraph,
        incoming: bool,
    ) -> None:
        if not rank:
            return

        desired: list[float] = []
        for nid in rank:
            neighbors = list(graph.predecessors(nid) if incoming else graph.successors(nid))
            if neighbors:
                desired.append(sum(ys[nb] for nb in neighbors) / len(neighbors))
            else:
                desired.append(ys[nid])

        n = len(rank)
        down = list(desired)
        for i in range(1, n):
            down[i] = max(desired[i], down[i - 1] + seps[i - 1])
        up = list(desired)
        for i in range(n - 2, -1, -1):
            up[i] = min(desired[i], up[i + 1] - seps[i])

        # Both passes keep order and spacing, so their mean does too
        for i, nid in enumerate(rank):
            ys[nid] = (down[i] + up[i]) / 2

    def _polyline(
        self,
        chain: list[str],
        centers: dict[str, Point],
        sizes: Mapping[str, tuple[float, float]],
    ) -> tuple[Point, ...]:
        if len(chain) < 2:
            return ()

        def rect(nid: str) -> Rect:
            w, h = sizes[nid]
            c = centers[nid]
            return Rect(c.x - w / 2, c.y - h / 2, w, h)

        interior = [centers[nid] for nid in chain[1:-1]]
        start = intersect_rect(rect(chain[0]), interior[0] if interior else centers[chain[-1]])
        end = intersect_rect(rect(chain[-1]), interior[-1] if interior else centers[chain[0]])
        return (start, *interior, end)
