"""
Traversal entry points.

Dispatcher (bfs.py):
    - breadth_first_search, shortest_path_bfs,
      single_source_shortest_path_bfs, is_bipartite
    - select_strategy: baseline queue BFS vs. CSR + DOBFS by node count

Variants (variants.py):
    - bfs_with_path_counting, bfs_distances_only,
      bfs_coloring_with_partitions, bfs_augmenting_path,
      bfs_weighted_distances
"""

from frontier.core.traversal.bfs import (
    breadth_first_search,
    is_bipartite,
    select_strategy,
    shortest_path_bfs,
    single_source_shortest_path_bfs,
)
from frontier.core.traversal.paths import reconstruct_path
from frontier.core.traversal.variants import (
    bfs_augmenting_path,
    bfs_coloring_with_partitions,
    bfs_distances_only,
    bfs_weighted_distances,
    bfs_with_path_counting,
)

__all__ = [
    "breadth_first_search",
    "shortest_path_bfs",
    "single_source_shortest_path_bfs",
    "is_bipartite",
    "select_strategy",
    "reconstruct_path",
    "bfs_with_path_counting",
    "bfs_distances_only",
    "bfs_coloring_with_partitions",
    "bfs_augmenting_path",
    "bfs_weighted_distances",
]
