"""
MCP server for Frontier.

Exposes graph traversal tools to LLMs via the Model Context Protocol.

Tools:
    - frontier_traverse: BFS from a node of a generated graph
    - frontier_shortest_path: Shortest unweighted path between two nodes
    - frontier_bipartite: Two-colorability check
    - frontier_info: CSR snapshot statistics

Usage:
    Run: mcp-server-frontier
"""

import asyncio

from frontier.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
