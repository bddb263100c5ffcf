"""Path queries: shortest example path and all-paths subgraph."""

from __future__ import annotations

from collections import deque

from graphex.core.graph.base import Graph
from graphex.core.graph.traversal import all_deps_on
from graphex.core.graph.views import restrict_to, reverse_edges


def why(graph: Graph, from_node: str, to_node: str) -> list[str]:
    """One shortest path from ``from_node`` to ``to_node``, both included.

    BFS over sorted neighbours, so the answer is deterministic. Returns an
    empty list when either node is unknown or no path exists.
    """
    if from_node not in graph or to_node not in graph:
        return []
    if from_node == to_node:
        return [from_node]

    queue: deque[str] = deque([from_node])
    parent: dict[str, str] = {}
    visited: set[str] = {from_node}

    while queue:
        current = queue.popleft()
        for nxt in sorted(graph[current]):
            if nxt not in visited:
                visited.add(nxt)
                parent[nxt] = current
                if nxt == to_node:
                    return _reconstruct(from_node, to_node, parent)
                queue.append(nxt)

    return []


def all_paths_to(graph: Graph, from_node: str, to_node: str) -> Graph:
    """Subgraph of every node and edge lying on some path between two nodes.

    A node qualifies when it is reachable from ``from_node`` and can itself
    reach ``to_node``. Empty when no path exists.
    """
    if not why(graph, from_node, to_node):
        return Graph()

    forward = all_deps_on(graph, from_node)
    backward = all_deps_on(reverse_edges(graph), to_node)
    return restrict_to(graph, (forward & backward) | {from_node, to_node})


def _reconstruct(from_node: str, to_node: str, parent: dict[str, str]) -> list[str]:
    """Reconstruct path from BFS parent map."""
    path = [to_node]
    current = to_node
    while current != from_node:
        current = parent[current]
        path.append(current)
    path.reverse()
    return path
