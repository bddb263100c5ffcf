"""Reachability queries and tree extraction."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Iterator

from graphex.core.graph.base import Graph
from graphex.core.graph.models import TreeNode

Neighbours = Callable[[str], Iterable[str]]


def direct_deps_on(graph: Graph, node: str) -> frozenset[str]:
    """Edge set of a node, verbatim. Empty when unknown. O(1)."""
    return graph.edges_of(node)


def flood(neighbours: Neighbours, start: str) -> set[str]:
    """Saturate from ``{start}`` until no new nodes appear.

    The result always contains ``start``. Visited nodes are never expanded
    twice, so cycles terminate.
    """
    visited: set[str] = set()
    frontier = {start}
    while frontier:
        visited |= frontier
        frontier = set().union(*(neighbours(n) for n in frontier)) - visited
    return visited


def all_deps_on(graph: Graph, node: str) -> set[str]:
    """Everything transitively reachable from ``node``.

    The node itself is part of the result only when it lists itself as a
    direct edge. A longer cycle leading back to it does not count, so
    ``{A: [B], B: [A]}`` gives ``{B}`` for ``A``. Unknown nodes yield an
    empty set.
    """
    if node not in graph:
        return set()
    reached = flood(graph.edges_of, node)
    if node not in graph[node]:
        reached.discard(node)
    return reached


def bfs_on(neighbours: Neighbours, start: str) -> list[str]:
    """Breadth-first visit order from ``start``, each node once. O(V + E)."""
    order = [start]
    seen = {start}
    queue: deque[str] = deque([start])
    while queue:
        current = queue.popleft()
        for nxt in sorted(neighbours(current)):
            if nxt not in seen:
                seen.add(nxt)
                order.append(nxt)
                queue.append(nxt)
    return order


def dfs_on(neighbours: Neighbours, start: str) -> list[str]:
    """Depth-first pre-order from ``start``, each node once. O(V + E)."""
    order: list[str] = []
    seen: set[str] = set()
    stack = [start]
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        order.append(current)
        stack.extend(n for n in sorted(neighbours(current), reverse=True) if n not in seen)
    return order


def graph_to_tree(graph: Graph, root: str, max_depth: int | None = None) -> TreeNode:
    """Build a display tree of everything reachable from root.

    Depth-first with an explicit stack, so long chains cannot exhaust the
    interpreter's recursion limit. Nodes already on the current
    root-to-node path are skipped, so cyclic graphs terminate. Shared
    dependencies repeat once per path; pass ``max_depth`` to bound the
    output. A root the graph does not know renders as a single leaf.
    """
    tree = TreeNode(label=root)
    if max_depth is not None and max_depth <= 0:
        return tree

    on_path = {root}
    stack: list[tuple[TreeNode, Iterator[str]]] = [(tree, iter(sorted(graph.edges_of(root))))]
    while stack:
        parent, pending = stack[-1]
        child = next((c for c in pending if c not in on_path), None)
        if child is None:
            stack.pop()
            on_path.discard(parent.label)
            continue

        node = TreeNode(label=child, depth=parent.depth + 1)
        parent.children.append(node)
        if max_depth is None or node.depth < max_depth:
            on_path.add(child)
            stack.append((node, iter(sorted(graph.edges_of(child)))))

    return tree


def flatten_tree(root: TreeNode, include_root: bool = True) -> list[str]:
    """Flatten tree labels in pre-order. O(n)."""
    labels = [node.label for node in root]
    return labels if include_root else labels[1:]
