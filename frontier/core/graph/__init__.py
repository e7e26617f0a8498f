"""
Mutable graph container, the read protocol and graph generators.

Data Structures:
    - Graph: Directed/undirected adjacency-dict graph used to build inputs
    - ReadableGraph: Protocol every traversal entry point accepts

Generators:
    - path_graph, cycle_graph, star_graph, grid_graph, complete_graph,
      binary_tree_graph, small_world_graph, random_graph
    - generate(): build by name, used by the CLI and MCP server
"""

from frontier.core.graph.base import Graph
from frontier.core.graph.generators import (
    GENERATORS,
    binary_tree_graph,
    complete_graph,
    cycle_graph,
    generate,
    grid_graph,
    path_graph,
    random_graph,
    small_world_graph,
    star_graph,
)
from frontier.core.graph.protocol import ReadableGraph

__all__ = [
    "Graph",
    "ReadableGraph",
    "GENERATORS",
    "generate",
    "path_graph",
    "cycle_graph",
    "star_graph",
    "grid_graph",
    "complete_graph",
    "binary_tree_graph",
    "small_world_graph",
    "random_graph",
]
