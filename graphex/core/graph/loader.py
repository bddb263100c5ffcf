"""Load a Graph from an exchange-format file."""

from __future__ import annotations

import logging
from pathlib import Path

from graphex.core.exceptions import GraphLoadError
from graphex.core.graph.base import Graph
from graphex.core.graph.exchange import dep_from_json, dep_to_graph

logger = logging.getLogger(__name__)


def load_graph(path: Path) -> Graph:
    """Read and decode a graph file. Raises GraphLoadError."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise GraphLoadError(f"Cannot read {path}: {e}") from e

    try:
        graph = dep_to_graph(dep_from_json(text))
    except GraphLoadError as e:
        raise GraphLoadError(f"{path}: {e}") from e

    logger.debug("Loaded %s: %d nodes, %d edges", path, graph.num_nodes, graph.num_edges)
    return graph
