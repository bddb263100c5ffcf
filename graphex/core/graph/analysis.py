"""Graph analysis: dependency rankings."""

from __future__ import annotations

from graphex.core.graph.base import Graph
from graphex.core.graph.traversal import all_deps_on
from graphex.core.graph.views import reverse_edges


def rankings(graph: Graph) -> dict[str, int]:
    """Count of transitive dependents for every node. O(V * (V + E)).

    Computed over the reversed graph, so a node ranks by how many nodes
    reach it rather than by how many it reaches.
    """
    reverse = reverse_edges(graph)
    return {node: len(all_deps_on(reverse, node)) for node in graph}


def ranked(graph: Graph, top_k: int | None = None) -> list[tuple[str, int]]:
    """Most depended upon nodes first. Ties keep key order."""
    scored = sorted(rankings(graph).items(), key=lambda x: -x[1])
    return scored if top_k is None else scored[:top_k]
