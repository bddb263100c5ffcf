"""
MCP server for Graphex.

Exposes dependency graph queries to LLMs via the Model Context Protocol.

Tools:
    - graphex_deps: Direct dependencies of a module
    - graphex_all: Transitive dependencies of modules
    - graphex_why: Shortest path between two modules
    - graphex_rank: Most depended upon modules
    - graphex_select / graphex_paths: Subgraphs as node/edge records
    - graphex_tree: Nested dependency tree
    - graphex_stats: Graph size

Usage:
    Run: graphex-mcp  (reads the graph named by GRAPHEX_GRAPH)
"""

import asyncio

from graphex.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
