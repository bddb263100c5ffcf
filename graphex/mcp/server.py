"""MCP server implementation for Graphex."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from graphex.core.config import get_settings
from graphex.core.exceptions import GraphexError
from graphex.core.graph import (
    Graph,
    all_deps_on,
    all_paths_to,
    direct_deps_on,
    graph_to_dep,
    graph_to_tree,
    load_graph,
    ranked,
    reverse_edges,
    select,
    why,
)

server = Server("graphex")

logger = logging.getLogger(__name__)

_REVERSE_PROPERTY = {
    "type": "boolean",
    "description": "Reverse edges first (answer 'what depends on' instead of 'what is used by')",
    "default": False,
}


def _module_property(description: str) -> dict[str, str]:
    return {"type": "string", "description": description}


def _get_graph(reverse: bool = False) -> Graph:
    """Load the configured graph file."""
    path: Path = get_settings().graph
    if not path.exists():
        raise FileNotFoundError(
            f"No graph file found. Set GRAPHEX_GRAPH or create one.\nExpected: {path}"
        )
    graph = load_graph(path)
    return reverse_edges(graph) if reverse else graph


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="graphex_deps",
            description="List the direct dependencies of a module.",
            inputSchema={
                "type": "object",
                "properties": {
                    "module": _module_property("Module name"),
                    "reverse": _REVERSE_PROPERTY,
                },
                "required": ["module"],
            },
        ),
        Tool(
            name="graphex_all",
            description="List every module transitively reachable from one or more modules.",
            inputSchema={
                "type": "object",
                "properties": {
                    "modules": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Module names",
                    },
                    "reverse": _REVERSE_PROPERTY,
                },
                "required": ["modules"],
            },
        ),
        Tool(
            name="graphex_why",
            description=(
                "Explain why one module depends on another by returning a shortest path "
                "between them. An empty path means no connection."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "from": _module_property("Module to start from"),
                    "to": _module_property("Module to reach"),
                    "reverse": _REVERSE_PROPERTY,
                },
                "required": ["from", "to"],
            },
        ),
        Tool(
            name="graphex_rank",
            description="Rank modules by how many modules transitively depend on them.",
            inputSchema={
                "type": "object",
                "properties": {
                    "top": {
                        "type": "integer",
                        "description": "Number of modules to return (default: 20)",
                        "default": 20,
                    },
                    "reverse": _REVERSE_PROPERTY,
                },
            },
        ),
        Tool(
            name="graphex_select",
            description="Return the subgraph reachable from a module as node/edge records.",
            inputSchema={
                "type": "object",
                "properties": {
                    "module": _module_property("Module to start from"),
                    "reverse": _REVERSE_PROPERTY,
                },
                "required": ["module"],
            },
        ),
        Tool(
            name="graphex_paths",
            description=(
                "Return every module and edge lying on some path between two modules, "
                "as node/edge records."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "from": _module_property("Module to start from"),
                    "to": _module_property("Module to reach"),
                    "reverse": _REVERSE_PROPERTY,
                },
                "required": ["from", "to"],
            },
        ),
        Tool(
            name="graphex_tree",
            description="Render everything reachable from a module as a nested tree.",
            inputSchema={
                "type": "object",
                "properties": {
                    "module": _module_property("Root module"),
                    "max_depth": {
                        "type": "integer",
                        "description": "Maximum depth to render (default: 5)",
                        "default": 5,
                    },
                    "reverse": _REVERSE_PROPERTY,
                },
                "required": ["module"],
            },
        ),
        Tool(
            name="graphex_stats",
            description="Get node and edge counts of the configured graph.",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        result = handle_tool(name, arguments)
    except (FileNotFoundError, GraphexError, KeyError) as e:
        logger.warning("Tool %s failed: %s", name, e)
        result = {"error": str(e)}

    return [TextContent(type="text", text=json.dumps(result, indent=2))]


def handle_tool(name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Dispatch a tool call to its query."""
    reverse = bool(arguments.get("reverse", False))

    if name == "graphex_deps":
        graph = _get_graph(reverse)
        return {"results": sorted(direct_deps_on(graph, arguments["module"]))}
    if name == "graphex_all":
        graph = _get_graph(reverse)
        found: set[str] = set()
        for module in arguments["modules"]:
            found |= all_deps_on(graph, module)
        return {"results": sorted(found)}
    if name == "graphex_why":
        graph = _get_graph(reverse)
        return {"path": why(graph, arguments["from"], arguments["to"])}
    if name == "graphex_rank":
        graph = _get_graph(reverse)
        top = arguments.get("top", 20)
        return {"results": [{"module": m, "count": n} for m, n in ranked(graph, top)]}
    if name == "graphex_select":
        graph = _get_graph(reverse)
        return graph_to_dep(select(graph, arguments["module"])).to_dict()
    if name == "graphex_paths":
        graph = _get_graph(reverse)
        return graph_to_dep(all_paths_to(graph, arguments["from"], arguments["to"])).to_dict()
    if name == "graphex_tree":
        graph = _get_graph(reverse)
        root = graph_to_tree(graph, arguments["module"], arguments.get("max_depth", 5))
        return root.to_dict()
    if name == "graphex_stats":
        graph = _get_graph()
        return {"nodes": graph.num_nodes, "edges": graph.num_edges}
    return {"error": f"Unknown tool: {name}"}


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
