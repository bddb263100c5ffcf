"""Derived views: edge reversal and node-set restriction.

Every function returns a new Graph and leaves its input untouched.
"""

from __future__ import annotations

from collections.abc import Iterable

from graphex.core.graph.base import Graph
from graphex.core.graph.traversal import all_deps_on


def reverse_edges(graph: Graph) -> Graph:
    """Flip every edge. Keys of the input stay keys of the result. O(V + E)."""
    reversed_adj: dict[str, set[str]] = {node: set() for node in graph}
    for source, target in graph.iter_edges():
        reversed_adj[target].add(source)
    return Graph(reversed_adj)


def restrict_to(graph: Graph, nodes: Iterable[str]) -> Graph:
    """Node-induced subgraph: keep only the given nodes and edges between them.

    Names in ``nodes`` that the graph does not know are ignored.
    """
    keep = {node for node in nodes if node in graph}
    return Graph({node: graph[node] & keep for node in keep})


def select(graph: Graph, node: str) -> Graph:
    """Subgraph of everything reachable from ``node``, including itself."""
    if node not in graph:
        return Graph()
    return restrict_to(graph, all_deps_on(graph, node) | {node})
