"""Within-rank ordering: barycenter crossing minimisation.

Starts from input order and alternates downward and upward sweeps,
sorting each rank by the mean position of its neighbours in the rank
just swept. Ties keep their current relative order, so equal inputs
always yield equal orderings.
"""

from __future__ import annotations

__all__ = ["count_crossings", "initial_ordering", "minimise_crossings"]

import networkx as nx

from workflow_diagram.layout.constants import MAX_ORDERING_PASSES
from workflow_diagram.layout.layers import LayeredGraph


def initial_ordering(layered: LayeredGraph) -> list[list[str]]:
    ordering: list[list[str]] = [[] for _ in range(layered.rank_count)]
    for node_id in layered.graph.nodes:
        ordering[layered.ranks[node_id]].append(node_id)
    return ordering


def minimise_crossings(
    layered: LayeredGraph,
    max_passes: int = MAX_ORDERING_PASSES,
) -> list[list[str]]:
    """Return per-rank node orderings with few edge crossings."""
    ordering = initial_ordering(layered)
    graph = layered.graph

    best = [list(rank) for rank in ordering]
    best_crossings = count_crossings(ordering, graph)

    for _pass in range(max_passes):
        if best_crossings == 0:
            break

        for idx in range(1, len(ordering)):
            _sort_by_barycenter(ordering[idx], ordering[idx - 1], graph, incoming=True)
        for idx in range(len(ordering) - 2, -1, -1):
            _sort_by_barycenter(ordering[idx], ordering[idx + 1], graph, incoming=False)

        crossings = count_crossings(ordering, graph)
        if crossings >= best_crossings:
            break
        best_crossings = crossings
        best = [list(rank) for rank in ordering]

    return best


def _sort_by_barycenter(
    rank: list[str],
    fixed: list[str],
    graph: nx.DiGraph,
    incoming: bool,
) -> None:
    fixed_pos = {node_id: float(i) for i, node_id in enumerate(fixed)}
    keys: dict[str, float] = {}
    for i, node_id in enumerate(rank):
        neighbors = graph.predecessors(node_id) if incoming else graph.successors(node_id)
        positions = [fixed_pos[nb] for nb in neighbors if nb in fixed_pos]
        # Nodes without neighbours in the fixed rank hold their place
        keys[node_id] = sum(positions) / len(positions) if positions else float(i)
    rank.sort(key=lambda node_id: keys[node_id])


def count_crossings(ordering: list[list[str]], graph: nx.DiGraph) -> int:
    total = 0
    for idx in range(len(ordering) - 1):
        tgt_pos = {node_id: i for i, node_id in enumerate(ordering[idx + 1])}
        segments: list[tuple[int, int]] = []
        for sp, src in enumerate(ordering[idx]):
            for nb in graph.successors(src):
                if nb in tgt_pos:
                    segments.append((sp, tgt_pos[nb]))
        for i in range(len(segments)):
            for j in range(i + 1, len(segments)):
                a, b = segments[i], segments[j]
                if (a[0] - b[0]) * (a[1] - b[1]) < 0:
                    total += 1
    return total
