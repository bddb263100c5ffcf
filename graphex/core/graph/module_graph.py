"""Mergeable importer -> imported contributions.

Discovery produces one ModuleGraph per module and combines them with ``|``.
The merge unions edge sets per importer, so it is associative and
commutative with ``ModuleGraph()`` as identity: results from many files may
be combined in any order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from graphex.core.graph.base import Graph


class ModuleGraph(Mapping[str, frozenset[str]]):
    """Immutable map from importer to the set of modules it imports."""

    __slots__ = ("_imports",)

    def __init__(self, imports: Mapping[str, Iterable[str]] | None = None) -> None:
        self._imports: dict[str, frozenset[str]] = {
            importer: frozenset(imported) for importer, imported in (imports or {}).items()
        }

    @classmethod
    def singleton(cls, importer: str, imported: str) -> ModuleGraph:
        """A single importer -> imported edge."""
        return cls({importer: (imported,)})

    @classmethod
    def of(cls, importer: str, imported: Iterable[str]) -> ModuleGraph:
        """One importer with all of its imports. An empty list still records the importer."""
        return cls({importer: imported})

    @classmethod
    def concat(cls, graphs: Iterable[ModuleGraph]) -> ModuleGraph:
        """Merge any number of contributions."""
        merged: dict[str, frozenset[str]] = {}
        for graph in graphs:
            for importer, imported in graph._imports.items():
                merged[importer] = merged.get(importer, frozenset()) | imported
        return cls(merged)

    @classmethod
    def from_graph(cls, graph: Graph) -> ModuleGraph:
        return cls.concat(cls.of(node, graph[node]) for node in graph)

    def __or__(self, other: object) -> ModuleGraph:
        if not isinstance(other, ModuleGraph):
            return NotImplemented
        return ModuleGraph.concat((self, other))

    def __getitem__(self, importer: str) -> frozenset[str]:
        return self._imports[importer]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._imports))

    def __len__(self) -> int:
        return len(self._imports)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ModuleGraph):
            return self._imports == other._imports
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def to_graph(self) -> Graph:
        """Total Graph view: imported modules become keys too."""
        return Graph(self._imports)

    def __repr__(self) -> str:
        edges = sum(len(v) for v in self._imports.values())
        return f"ModuleGraph(modules={len(self._imports)}, imports={edges})"
