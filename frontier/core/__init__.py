"""
Core module: data models, exceptions, graph storage and traversal.

Models (models.py):
    - TraversalResult / ShortestPathResult: caller-facing result shapes
    - BFSResult: index-free output of the optimized engine
    - Direction / Strategy / SearchState: engine enums

Exceptions (exceptions.py):
    - FrontierError: Base exception for all frontier errors
    - NodeNotFoundError: Start/source/target node not in the graph
    - DirectedGraphError: Operation needs an undirected graph
    - GraphInvariantError: CSR builder defect

Subpackages:
    - graph/: mutable Graph, ReadableGraph protocol, generators
    - optimized/: CompactGraph, DirectionOptimizedBFS, snapshot cache
    - traversal/: dispatcher and BFS variants
"""

from frontier.core.config import BFSConfig
from frontier.core.exceptions import (
    DirectedGraphError,
    FrontierError,
    GraphInvariantError,
    IndexOutOfRangeError,
    NodeNotFoundError,
)
from frontier.core.graph import Graph, ReadableGraph
from frontier.core.models import (
    BFSResult,
    Direction,
    Edge,
    ShortestPathResult,
    Strategy,
    TraversalOptions,
    TraversalResult,
)
from frontier.core.optimized import CompactGraph, DirectionOptimizedBFS
from frontier.core.traversal import (
    breadth_first_search,
    is_bipartite,
    shortest_path_bfs,
    single_source_shortest_path_bfs,
)

__all__ = [
    # Models
    "BFSConfig",
    "BFSResult",
    "Direction",
    "Edge",
    "ShortestPathResult",
    "Strategy",
    "TraversalOptions",
    "TraversalResult",
    # Exceptions
    "FrontierError",
    "NodeNotFoundError",
    "IndexOutOfRangeError",
    "DirectedGraphError",
    "GraphInvariantError",
    # Graphs
    "Graph",
    "ReadableGraph",
    "CompactGraph",
    "DirectionOptimizedBFS",
    # Traversal
    "breadth_first_search",
    "shortest_path_bfs",
    "single_source_shortest_path_bfs",
    "is_bipartite",
]
