"""Specialised BFS variants used by higher-level analytics.

- bfs_with_path_counting: shortest-path counts (betweenness centrality)
- bfs_distances_only: hop distances with optional cutoff (closeness)
- bfs_coloring_with_partitions: two-coloring (bipartite checks, matching)
- bfs_augmenting_path: residual-graph paths (max flow)
- bfs_weighted_distances: priority-queue search over edge weights
"""

from __future__ import annotations

import heapq
import itertools
from collections import deque
from collections.abc import Callable, Iterable, Mapping

from frontier.core.config import BFSConfig, threshold_from_env
from frontier.core.exceptions import NodeNotFoundError
from frontier.core.graph.protocol import ReadableGraph, get_edge_weight
from frontier.core.models import (
    AugmentingPath,
    BipartiteResult,
    NodeId,
    PathCountingResult,
)
from frontier.core.optimized.cache import default_cache
from frontier.core.optimized.dobfs import DirectionOptimizedBFS


def _use_compact(graph: ReadableGraph, optimized: bool) -> bool:
    return optimized and graph.node_count > threshold_from_env()


def bfs_with_path_counting(
    graph: ReadableGraph, source: NodeId, optimized: bool = False
) -> PathCountingResult:
    """BFS that records every shortest-path predecessor and path count.

    ``stack`` holds nodes in non-decreasing distance order, ready for
    Brandes-style dependency accumulation in reverse.
    """
    if not graph.has_node(source):
        raise NodeNotFoundError(source, "Source node")

    neighbors: Callable[[NodeId], Iterable[NodeId]] = graph.neighbors
    if _use_compact(graph, optimized):
        neighbors = default_cache.get(graph).neighbors

    distances: dict[NodeId, int] = {source: 0}
    predecessors: dict[NodeId, list[NodeId]] = {}
    sigma: dict[NodeId, int] = {source: 1}
    stack: list[NodeId] = []
    queue: deque[NodeId] = deque([source])

    while queue:
        current = queue.popleft()
        stack.append(current)
        current_distance = distances[current]

        for neighbor in neighbors(current):
            if neighbor not in distances:
                distances[neighbor] = current_distance + 1
                queue.append(neighbor)
            if distances[neighbor] == current_distance + 1:
                sigma[neighbor] = sigma.get(neighbor, 0) + sigma[current]
                predecessors.setdefault(neighbor, []).append(current)

    return PathCountingResult(
        distances=distances,
        predecessors=predecessors,
        sigma=sigma,
        stack=stack,
    )


def bfs_distances_only(
    graph: ReadableGraph,
    source: NodeId,
    cutoff: int | None = None,
    optimized: bool = False,
) -> dict[NodeId, int]:
    """Hop distances from *source*, skipping predecessor bookkeeping.

    Nodes farther than *cutoff* are omitted. With ``optimized=True`` large
    graphs go through the cached CompactGraph and DirectionOptimizedBFS.
    """
    if not graph.has_node(source):
        raise NodeNotFoundError(source, "Source node")

    if _use_compact(graph, optimized):
        result = DirectionOptimizedBFS(default_cache.get(graph), BFSConfig()).search(source)
        if cutoff is None:
            return result.distances
        return {node: d for node, d in result.distances.items() if d <= cutoff}

    distances: dict[NodeId, int] = {source: 0}
    queue: deque[NodeId] = deque([source])

    while queue:
        current = queue.popleft()
        current_distance = distances[current]
        if cutoff is not None and current_distance >= cutoff:
            continue
        for neighbor in graph.neighbors(current):
            if neighbor not in distances:
                distances[neighbor] = current_distance + 1
                queue.append(neighbor)

    return distances


def bfs_coloring_with_partitions(graph: ReadableGraph) -> BipartiteResult:
    """Two-color each connected component. O(V + E).

    Returns the two color classes when the graph is bipartite.
    """
    colors: dict[NodeId, int] = {}
    partition_a: set[NodeId] = set()
    partition_b: set[NodeId] = set()

    for start in graph.nodes():
        if start in colors:
            continue
        colors[start] = 0
        partition_a.add(start)
        queue: deque[NodeId] = deque([start])

        while queue:
            current = queue.popleft()
            current_color = colors[current]
            next_color = 1 - current_color

            for neighbor in graph.neighbors(current):
                if neighbor not in colors:
                    colors[neighbor] = next_color
                    (partition_a if next_color == 0 else partition_b).add(neighbor)
                    queue.append(neighbor)
                elif colors[neighbor] == current_color:
                    return BipartiteResult(is_bipartite=False)

    return BipartiteResult(is_bipartite=True, partitions=(partition_a, partition_b))


def bfs_augmenting_path(
    residual: Mapping[NodeId, Mapping[NodeId, float]],
    source: NodeId,
    sink: NodeId,
) -> AugmentingPath | None:
    """Shortest source-to-sink path over arcs with positive residual capacity.

    ``capacity`` is the bottleneck along the path.
    """
    parent: dict[NodeId, NodeId | None] = {source: None}
    queue: deque[NodeId] = deque([source])

    while queue:
        current = queue.popleft()
        if current == sink:
            path: list[NodeId] = []
            bottleneck = float("inf")
            node: NodeId | None = sink
            while node is not None:
                path.append(node)
                prev = parent[node]
                if prev is not None:
                    bottleneck = min(bottleneck, residual[prev][node])
                node = prev
            path.reverse()
            return AugmentingPath(path=path, capacity=bottleneck)

        for neighbor, capacity in residual.get(current, {}).items():
            if neighbor not in parent and capacity > 0:
                parent[neighbor] = current
                queue.append(neighbor)

    return None


def bfs_weighted_distances(
    graph: ReadableGraph,
    source: NodeId,
    cutoff: float | None = None,
) -> dict[NodeId, float]:
    """Dijkstra over edge weights (missing weights count as 1).

    Nodes settled at distance >= *cutoff* are not expanded further.
    """
    if not graph.has_node(source):
        raise NodeNotFoundError(source, "Source node")

    distances: dict[NodeId, float] = {source: 0.0}
    settled: set[NodeId] = set()
    # counter breaks ties so node ids never need to be comparable
    tie = itertools.count()
    heap: list[tuple[float, int, NodeId]] = [(0.0, next(tie), source)]

    while heap:
        current_distance, _, current = heapq.heappop(heap)
        if current in settled:
            continue
        settled.add(current)

        if cutoff is not None and current_distance >= cutoff:
            continue

        for neighbor in graph.neighbors(current):
            if neighbor in settled:
                continue
            weight = get_edge_weight(graph, current, neighbor)
            candidate = current_distance + (1.0 if weight is None else weight)
            if candidate < distances.get(neighbor, float("inf")):
                distances[neighbor] = candidate
                heapq.heappush(heap, (candidate, next(tie), neighbor))

    return distances
