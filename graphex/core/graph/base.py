"""Core Graph value: an immutable adjacency map keyed by node name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

_EMPTY: frozenset[str] = frozenset()


class Graph(Mapping[str, frozenset[str]]):
    """Directed graph of named nodes.

    Each key maps to the set of nodes it points at. The mapping is total:
    every node that appears as an edge target is also a key, possibly with
    an empty edge set. Instances are never mutated after construction.
    """

    __slots__ = ("_adj",)

    def __init__(self, adjacency: Mapping[str, Iterable[str]] | None = None) -> None:
        adj: dict[str, frozenset[str]] = {}
        for node, targets in (adjacency or {}).items():
            adj[node] = adj.get(node, _EMPTY) | frozenset(targets)
        for targets in list(adj.values()):
            for target in targets:
                if target not in adj:
                    adj[target] = _EMPTY
        self._adj = adj

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[str, str]], nodes: Iterable[str] = ()) -> Graph:
        """Build a graph from (from, to) pairs plus optional isolated nodes. O(V + E)."""
        adj: dict[str, set[str]] = {node: set() for node in nodes}
        for source, target in edges:
            adj.setdefault(source, set()).add(target)
            adj.setdefault(target, set())
        return cls(adj)

    def __getitem__(self, node: str) -> frozenset[str]:
        return self._adj[node]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._adj))

    def __len__(self) -> int:
        return len(self._adj)

    def __contains__(self, node: object) -> bool:
        return node in self._adj

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Graph):
            return self._adj == other._adj
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def edges_of(self, node: str) -> frozenset[str]:
        """Outbound edges of a node, empty when unknown. O(1)."""
        return self._adj.get(node, _EMPTY)

    def iter_edges(self) -> Iterator[tuple[str, str]]:
        """All (from, to) pairs in sorted order."""
        for node in self:
            for target in sorted(self._adj[node]):
                yield node, target

    @property
    def num_nodes(self) -> int:
        return len(self._adj)

    @property
    def num_edges(self) -> int:
        return sum(len(targets) for targets in self._adj.values())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.num_nodes}, edges={self.num_edges})"

    def __str__(self) -> str:
        return ", ".join(f"{node} -> {sorted(self._adj[node])}" for node in self)
