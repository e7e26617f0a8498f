"""
Frontier: CSR graph snapshots and direction-optimizing BFS for Python.

Frontier gives higher-level graph analytics one stable traversal API:
- Breadth-first search with visit callbacks and early stop
- Single-pair and single-source unweighted shortest paths
- Bipartite checks

Large graphs are transparently snapshotted into a cache-friendly
Compressed Sparse Row layout and searched with a push/pull hybrid BFS.

Usage:
    from frontier.core import Graph, breadth_first_search, shortest_path_bfs

    graph = Graph()
    graph.add_edge("a", "b")
    graph.add_edge("b", "c")
    result = breadth_first_search(graph, "a")
"""

__version__ = "0.1.0"
