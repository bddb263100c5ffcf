"""Exchange records: node/edge lists at the I/O boundary.

JSON shape::

    {"nodes": {"A": {"label": "A"}, "B": {}},
     "edges": [{"from": "A", "to": "B"}]}

On input ``nodes`` may also be a list of names or of ``{"id", "label"}``
objects. Edge endpoints missing from ``nodes`` still become graph keys.
"""

from __future__ import annotations

import csv
import io
import json
from dataclasses import dataclass, field
from typing import Any

from graphex.core.exceptions import GraphLoadError
from graphex.core.graph.base import Graph


@dataclass(frozen=True)
class DepNode:
    """A node record with an optional display label."""

    label: str | None = None

    def to_dict(self) -> dict[str, str]:
        return {} if self.label is None else {"label": self.label}


@dataclass(frozen=True)
class DepEdge:
    """A (from, to) edge record."""

    from_: str
    to: str

    def to_dict(self) -> dict[str, str]:
        return {"from": self.from_, "to": self.to}


@dataclass
class Dep:
    """Node list plus edge list."""

    nodes: dict[str, DepNode] = field(default_factory=dict)
    edges: list[DepEdge] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": {name: node.to_dict() for name, node in self.nodes.items()},
            "edges": [edge.to_dict() for edge in self.edges],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Dep:
        """Validate and convert decoded JSON. Raises GraphLoadError."""
        if not isinstance(data, dict):
            raise GraphLoadError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(
            nodes=_parse_nodes(data.get("nodes", {})),
            edges=_parse_edges(data.get("edges", [])),
        )


def graph_to_dep(graph: Graph, labels: dict[str, str] | None = None) -> Dep:
    """One node record per key, one edge record per edge."""
    labels = labels or {}
    return Dep(
        nodes={node: DepNode(label=labels.get(node, node)) for node in graph},
        edges=[DepEdge(from_=source, to=target) for source, target in graph.iter_edges()],
    )


def dep_to_graph(dep: Dep) -> Graph:
    """Rebuild a total Graph from an exchange record."""
    return Graph.from_edges(((e.from_, e.to) for e in dep.edges), nodes=dep.nodes)


def dep_from_json(text: str | bytes) -> Dep:
    """Decode the JSON wire form. Raises GraphLoadError."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise GraphLoadError(f"Invalid JSON: {e}") from e
    return Dep.from_dict(data)


def dep_to_json(dep: Dep, indent: int | None = None) -> str:
    return json.dumps(dep.to_dict(), indent=indent)


def graph_to_csv(graph: Graph) -> str:
    """Tabular edge list with a ``from,to`` header.

    Nodes without outbound edges are written as ``node,`` rows.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(["from", "to"])
    for node in graph:
        targets = sorted(graph[node])
        if not targets:
            writer.writerow([node, ""])
        for target in targets:
            writer.writerow([node, target])
    return buf.getvalue()


def _parse_nodes(raw: Any) -> dict[str, DepNode]:
    if isinstance(raw, dict):
        items = list(raw.items())
    elif isinstance(raw, list):
        items = []
        for entry in raw:
            if isinstance(entry, str):
                items.append((entry, {}))
            elif isinstance(entry, dict) and "id" in entry:
                items.append((entry["id"], entry))
            else:
                raise GraphLoadError(f"Malformed node entry: {entry!r}")
    else:
        raise GraphLoadError(f"'nodes' must be an object or a list, got {type(raw).__name__}")

    nodes: dict[str, DepNode] = {}
    for name, attrs in items:
        if not isinstance(name, str):
            raise GraphLoadError(f"Node identifier must be a string: {name!r}")
        if attrs is None:
            attrs = {}
        if not isinstance(attrs, dict):
            raise GraphLoadError(f"Node {name!r} must map to an object")
        label = attrs.get("label")
        if label is not None and not isinstance(label, str):
            raise GraphLoadError(f"Label of node {name!r} must be a string")
        nodes[name] = DepNode(label=label)
    return nodes


def _parse_edges(raw: Any) -> list[DepEdge]:
    if not isinstance(raw, list):
        raise GraphLoadError(f"'edges' must be a list, got {type(raw).__name__}")

    edges: list[DepEdge] = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise GraphLoadError(f"Malformed edge entry: {entry!r}")
        source, target = entry.get("from"), entry.get("to")
        if not isinstance(source, str) or not isinstance(target, str):
            raise GraphLoadError(f"Edge needs string 'from' and 'to': {entry!r}")
        edges.append(DepEdge(from_=source, to=target))
    return edges
