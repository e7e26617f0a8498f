"""Breadth-first traversal entry points with automatic engine selection.

Graphs with more than ``OPTIMIZATION_THRESHOLD`` nodes are snapshotted
into a cached CompactGraph and searched with DirectionOptimizedBFS;
smaller graphs run a plain FIFO-queue BFS directly on the mutable graph.
Both engines return the same result shapes and identical distances.
"""

from __future__ import annotations

import logging
from collections import deque

from frontier.core.config import BFSConfig, threshold_from_env
from frontier.core.exceptions import DirectedGraphError, NodeNotFoundError
from frontier.core.graph.protocol import ReadableGraph
from frontier.core.models import (
    BFSResult,
    NodeId,
    ShortestPathResult,
    Strategy,
    TraversalOptions,
    TraversalResult,
)
from frontier.core.optimized.cache import CompactGraphCache, default_cache
from frontier.core.optimized.compact import CompactGraph
from frontier.core.optimized.dobfs import DirectionOptimizedBFS
from frontier.core.traversal.paths import reconstruct_path
from frontier.core.traversal.variants import bfs_coloring_with_partitions

logger = logging.getLogger(__name__)


def select_strategy(graph: ReadableGraph, threshold: int | None = None) -> Strategy:
    """Optimized engine strictly above the node-count threshold."""
    limit = threshold_from_env() if threshold is None else threshold
    return Strategy.OPTIMIZED if graph.node_count > limit else Strategy.BASELINE


def _resolve(graph: ReadableGraph, strategy: Strategy | None) -> Strategy:
    chosen = strategy if strategy is not None else select_strategy(graph)
    logger.debug("Using %s BFS for %d-node graph", chosen.value, graph.node_count)
    return chosen


def _search_optimized(
    graph: ReadableGraph, source: NodeId, cache: CompactGraphCache | None
) -> tuple[CompactGraph, BFSResult]:
    compact = (cache or default_cache).get(graph)
    return compact, DirectionOptimizedBFS(compact, BFSConfig()).search(source)


def breadth_first_search(
    graph: ReadableGraph,
    start: NodeId,
    options: TraversalOptions | None = None,
    *,
    strategy: Strategy | None = None,
    cache: CompactGraphCache | None = None,
) -> TraversalResult:
    """Traverse from *start* in breadth-first order.

    ``options.visit_callback(node, level)`` fires once per visited node in
    traversal order. With ``options.target_node`` the traversal stops once
    the target is visited.
    """
    if not graph.has_node(start):
        raise NodeNotFoundError(start, "Start node")

    opts = options or TraversalOptions()
    if _resolve(graph, strategy) is Strategy.OPTIMIZED:
        return _breadth_first_search_optimized(graph, start, opts, cache)
    return _breadth_first_search_baseline(graph, start, opts)


def _breadth_first_search_baseline(
    graph: ReadableGraph, start: NodeId, options: TraversalOptions
) -> TraversalResult:
    visited: set[NodeId] = {start}
    order: list[NodeId] = []
    tree: dict[NodeId, NodeId | None] = {start: None}
    queue: deque[tuple[NodeId, int]] = deque([(start, 0)])

    while queue:
        node, level = queue.popleft()
        order.append(node)

        if options.visit_callback is not None:
            options.visit_callback(node, level)

        # stop on dequeue, not enqueue, so order ends with the target
        if options.target_node is not None and node == options.target_node:
            break

        for neighbor in graph.neighbors(node):
            if neighbor not in visited:
                visited.add(neighbor)
                tree[neighbor] = node
                queue.append((neighbor, level + 1))

    return TraversalResult(visited=visited, order=order, tree=tree)


def _breadth_first_search_optimized(
    graph: ReadableGraph,
    start: NodeId,
    options: TraversalOptions,
    cache: CompactGraphCache | None,
) -> TraversalResult:
    compact, result = _search_optimized(graph, start, cache)
    parents = result.parents

    # distances is in discovery order, which is ascending distance
    order: list[NodeId] = []
    stopped = False
    for node, distance in result.distances.items():
        order.append(node)
        if options.visit_callback is not None:
            options.visit_callback(node, distance)
        if options.target_node is not None and node == options.target_node:
            stopped = True
            break

    tree = {node: parents[node] for node in order}
    if stopped:
        # nodes a queue would have enqueued before dequeuing the target
        for node in order[:-1]:
            for neighbor in compact.neighbors(node):
                tree.setdefault(neighbor, node)
    return TraversalResult(visited=set(tree), order=order, tree=tree)


def shortest_path_bfs(
    graph: ReadableGraph,
    source: NodeId,
    target: NodeId,
    *,
    strategy: Strategy | None = None,
    cache: CompactGraphCache | None = None,
) -> ShortestPathResult | None:
    """Unweighted shortest path from *source* to *target*, or None if unreachable."""
    if not graph.has_node(source):
        raise NodeNotFoundError(source, "Source node")
    if not graph.has_node(target):
        raise NodeNotFoundError(target, "Target node")

    if source == target:
        return ShortestPathResult(distance=0, path=[source], predecessor={source: None})

    if _resolve(graph, strategy) is Strategy.OPTIMIZED:
        _, result = _search_optimized(graph, source, cache)
        if target not in result.distances:
            return None
        return ShortestPathResult(
            distance=result.distances[target],
            path=reconstruct_path(target, result.parents),
            predecessor=result.parents,
        )

    predecessor: dict[NodeId, NodeId | None] = {source: None}
    queue: deque[tuple[NodeId, int]] = deque([(source, 0)])

    while queue:
        node, distance = queue.popleft()
        if node == target:
            return ShortestPathResult(
                distance=distance,
                path=reconstruct_path(target, predecessor),
                predecessor=predecessor,
            )
        for neighbor in graph.neighbors(node):
            if neighbor not in predecessor:
                predecessor[neighbor] = node
                queue.append((neighbor, distance + 1))

    return None


def single_source_shortest_path_bfs(
    graph: ReadableGraph,
    source: NodeId,
    *,
    strategy: Strategy | None = None,
    cache: CompactGraphCache | None = None,
) -> dict[NodeId, ShortestPathResult]:
    """Shortest paths from *source* to every reachable node.

    All results share one predecessor map.
    """
    if not graph.has_node(source):
        raise NodeNotFoundError(source, "Source node")

    if _resolve(graph, strategy) is Strategy.OPTIMIZED:
        _, result = _search_optimized(graph, source, cache)
        distances, predecessor = result.distances, result.parents
    else:
        distances = {source: 0}
        predecessor = {source: None}
        queue: deque[NodeId] = deque([source])
        while queue:
            node = queue.popleft()
            for neighbor in graph.neighbors(node):
                if neighbor not in distances:
                    distances[neighbor] = distances[node] + 1
                    predecessor[neighbor] = node
                    queue.append(neighbor)

    return {
        node: ShortestPathResult(
            distance=distance,
            path=reconstruct_path(node, predecessor),
            predecessor=predecessor,
        )
        for node, distance in distances.items()
    }


def is_bipartite(graph: ReadableGraph) -> bool:
    """Two-color every connected component with a plain BFS.

    Always runs on the baseline traversal regardless of graph size.
    """
    if graph.is_directed:
        raise DirectedGraphError("Bipartite test requires an undirected graph")
    return bfs_coloring_with_partitions(graph).is_bipartite
