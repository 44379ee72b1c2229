"""Rank assignment for the left-to-right layered layout.

Uses longest-path layering on a topological sort to ensure left-to-right
monotonicity: every edge goes from a lower rank to a higher rank.
"""

from __future__ import annotations

__all__ = ["LayeredGraph", "assign_layers", "build_dag", "insert_dummy_nodes"]

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import networkx as nx

from workflow_diagram.layout.constants import DUMMY_PREFIX

logger = logging.getLogger(__name__)


@dataclass
class LayeredGraph:
    """Graph whose edges all span exactly one rank.

    ``chains`` maps each input edge id to the node sequence it passes
    through: source, any dummy nodes, target.
    """

    graph: nx.DiGraph
    ranks: dict[str, int]
    chains: dict[str, list[str]] = field(default_factory=dict)

    @property
    def rank_count(self) -> int:
        return (max(self.ranks.values()) + 1) if self.ranks else 0

    def is_dummy(self, node_id: str) -> bool:
        return node_id.startswith(DUMMY_PREFIX)


def build_dag(
    node_ids: Iterable[str],
    edges: Sequence[tuple[str, str, str]],
) -> nx.DiGraph:
    """Build the DAG used for ranking.

    Self loops, edges to unknown nodes and edges that would close a cycle
    are left out, so malformed input still produces a layout.
    """
    G = nx.DiGraph()
    for node_id in node_ids:
        G.add_node(node_id)

    for eid, source, target in edges:
        if source == target or source not in G or target not in G:
            continue
        if G.has_edge(source, target):
            continue
        if nx.has_path(G, target, source):
            logger.debug("Edge %s closes a cycle; ignored for ranking", eid)
            continue
        G.add_edge(source, target)

    return G


def assign_layers(G: nx.DiGraph) -> dict[str, int]:
    """Assign each node to a rank (integer X position).

    Uses longest-path layering: each node's rank is 1 + the maximum
    rank of its predecessors. This keeps every edge pointing rightward.

    Returns a dict mapping node_id -> rank (0-based).
    """
    layers: dict[str, int] = {}
    for node in nx.topological_sort(G):
        preds = list(G.predecessors(node))
        if not preds:
            layers[node] = 0
        else:
            layers[node] = max(layers[p] for p in preds) + 1

    return layers


def insert_dummy_nodes(
    dag: nx.DiGraph,
    ranks: dict[str, int],
    edges: Sequence[tuple[str, str, str]],
) -> LayeredGraph:
    """Split edges spanning several ranks into chains of unit-span edges.

    Edges that were left out of the DAG keep a direct two-node chain and
    take no part in ordering.
    """
    g = nx.DiGraph()
    for node_id in dag.nodes:
        g.add_node(node_id)

    layered_ranks = dict(ranks)
    chains: dict[str, list[str]] = {}

    for eid, source, target in edges:
        if not dag.has_edge(source, target):
            chains[eid] = [source, target] if source != target else [source]
            continue

        span = ranks[target] - ranks[source]
        chain = [source]
        for i in range(1, span):
            dummy_id = f"{DUMMY_PREFIX}{eid}_{i}"
            g.add_node(dummy_id)
            layered_ranks[dummy_id] = ranks[source] + i
            g.add_edge(chain[-1], dummy_id)
            chain.append(dummy_id)
        g.add_edge(chain[-1], target)
        chain.append(target)
        chains[eid] = chain

    return LayeredGraph(graph=g, ranks=layered_ranks, chains=chains)
