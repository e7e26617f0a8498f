"""MCP server implementation for Frontier."""

from __future__ import annotations

import json
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from frontier.core.exceptions import FrontierError
from frontier.core.graph import GENERATORS, Graph, generate
from frontier.core.models import TraversalOptions
from frontier.core.optimized import CompactGraph
from frontier.core.traversal import (
    breadth_first_search,
    is_bipartite,
    select_strategy,
    shortest_path_bfs,
)

server = Server("frontier")

_MAX_ORDER = 200

_GRAPH_PROPERTIES: dict[str, Any] = {
    "graph": {
        "type": "string",
        "enum": sorted(GENERATORS),
        "description": "Generated graph type (default: small-world)",
        "default": "small-world",
    },
    "nodes": {
        "type": "integer",
        "description": "Number of nodes (default: 1000)",
        "default": 1000,
    },
    "seed": {
        "type": "integer",
        "description": "Seed for random graph types (default: 42)",
        "default": 42,
    },
    "directed": {
        "type": "boolean",
        "description": "Generate a directed graph (default: false)",
        "default": False,
    },
}


def _graph_from(arguments: dict[str, Any]) -> Graph:
    """Build the generated graph described by tool arguments."""
    return generate(
        arguments.get("graph", "small-world"),
        int(arguments.get("nodes", 1000)),
        seed=int(arguments.get("seed", 42)),
        directed=bool(arguments.get("directed", False)),
    )


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="frontier_traverse",
            description=(
                "Breadth-first traversal of a generated graph from a start node. "
                "Returns visit count, depth and the first nodes in visiting order."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "start": {"type": "integer", "description": "Start node"},
                    "target": {
                        "type": "integer",
                        "description": "Stop once this node is visited (optional)",
                    },
                    **_GRAPH_PROPERTIES,
                },
                "required": ["start"],
            },
        ),
        Tool(
            name="frontier_shortest_path",
            description="Shortest unweighted path between two nodes of a generated graph.",
            inputSchema={
                "type": "object",
                "properties": {
                    "source": {"type": "integer", "description": "Source node"},
                    "target": {"type": "integer", "description": "Target node"},
                    **_GRAPH_PROPERTIES,
                },
                "required": ["source", "target"],
            },
        ),
        Tool(
            name="frontier_bipartite",
            description="Check whether an undirected generated graph is bipartite.",
            inputSchema={
                "type": "object",
                "properties": {k: v for k, v in _GRAPH_PROPERTIES.items() if k != "directed"},
            },
        ),
        Tool(
            name="frontier_info",
            description="Size, CSR memory footprint and chosen BFS engine for a generated graph.",
            inputSchema={
                "type": "object",
                "properties": _GRAPH_PROPERTIES,
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        if name == "frontier_traverse":
            result = _handle_traverse(arguments)
        elif name == "frontier_shortest_path":
            result = _handle_shortest_path(arguments)
        elif name == "frontier_bipartite":
            result = _handle_bipartite(arguments)
        elif name == "frontier_info":
            result = _handle_info(arguments)
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except (FrontierError, ValueError, KeyError) as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]


def _handle_traverse(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle frontier_traverse tool."""
    graph = _graph_from(arguments)
    depth = 0

    def on_visit(node: object, level: int) -> None:
        nonlocal depth
        depth = max(depth, level)

    result = breadth_first_search(
        graph,
        arguments["start"],
        TraversalOptions(visit_callback=on_visit, target_node=arguments.get("target")),
    )
    return {
        "start": arguments["start"],
        "visited": len(result.visited),
        "depth": depth,
        "order": result.order[:_MAX_ORDER],
        "truncated": len(result.order) > _MAX_ORDER,
    }


def _handle_shortest_path(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle frontier_shortest_path tool."""
    graph = _graph_from(arguments)
    result = shortest_path_bfs(graph, arguments["source"], arguments["target"])
    if result is None:
        return {"distance": None, "path": []}
    return {"distance": result.distance, "path": result.path}


def _handle_bipartite(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle frontier_bipartite tool."""
    graph = _graph_from({**arguments, "directed": False})
    return {"bipartite": is_bipartite(graph)}


def _handle_info(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handle frontier_info tool."""
    graph = _graph_from(arguments)
    compact = CompactGraph.from_graph(graph)
    return {
        "nodes": graph.node_count,
        "edges": graph.total_edge_count,
        "directed": graph.is_directed,
        "csr_entries": compact.edge_count,
        "csr_bytes": compact.memory_bytes(),
        "strategy": select_strategy(graph).value,
    }


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
