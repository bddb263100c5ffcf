"""
Graphex: dependency questions over a directed graph of named modules.

Graphex answers:
- What depends on X, directly or transitively
- Why does A depend on B (an example path)
- Which subgraph matters to get from A to B
- Which modules are most depended upon

Usage:
    from pathlib import Path
    from graphex.core.graph import load_graph, reverse_edges, why

    graph = reverse_edges(load_graph(Path("graph.json")))
    print(why(graph, "Data.Text", "Main"))
"""

__version__ = "0.1.0"
