"""
Optimized graph storage and traversal.

Components:
    - CompactGraph: Immutable CSR snapshot with sorted rows and reverse edges
    - DirectionOptimizedBFS: Push/pull hybrid BFS over a CompactGraph
    - CompactGraphCache: Identity-keyed, thread-safe snapshot cache
    - BitSet: Boolean-mask visited/frontier membership over dense indices

CompactGraph snapshots are never refreshed when the source graph changes.
Call ``default_cache.invalidate(graph)`` after mutating a graph that has
already been traversed on the optimized path.
"""

from frontier.core.optimized.bitset import BitSet
from frontier.core.optimized.cache import CompactGraphCache, default_cache
from frontier.core.optimized.compact import (
    CompactGraph,
    NeighborView,
    create_compact_graph,
    is_compact_graph,
)
from frontier.core.optimized.dobfs import DirectionOptimizedBFS, direction_optimized_bfs

__all__ = [
    "BitSet",
    "CompactGraph",
    "CompactGraphCache",
    "DirectionOptimizedBFS",
    "NeighborView",
    "create_compact_graph",
    "default_cache",
    "direction_optimized_bfs",
    "is_compact_graph",
]
