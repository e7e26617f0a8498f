"""Direction-optimizing breadth-first search over a CompactGraph.

Each BFS level runs either top-down (push: expand the frontier's outgoing
rows) or bottom-up (pull: every unvisited node scans its incoming row for
a frontier member and keeps the first hit). The direction is chosen
before every level from the frontier's statistics:

    top-down -> bottom-up  when  out-edges(frontier) > edge_count / alpha
    bottom-up -> top-down  when  |frontier|          < node_count / beta

Both steps work on a whole level at once with numpy index arrays.
Distances are identical to a plain top-down BFS. Parents may differ where
several shortest-path parents exist.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from frontier.core.config import BFSConfig
from frontier.core.models import BFSResult, Direction, NodeId, SearchState
from frontier.core.optimized.bitset import BitSet
from frontier.core.optimized.compact import CompactGraph

logger = logging.getLogger(__name__)

_NONE = -1


def _first_per_node(nodes: np.ndarray) -> np.ndarray:
    """Positions of the first occurrence of each distinct value, in input order."""
    _, first = np.unique(nodes, return_index=True)
    first.sort()
    return first


class DirectionOptimizedBFS:
    """Hybrid push/pull BFS engine bound to one CompactGraph.

    Per-search state is preallocated once and cleared by reset(), so one
    engine can serve many searches over the same snapshot.
    """

    def __init__(self, graph: CompactGraph, config: BFSConfig | None = None) -> None:
        self._graph = graph
        self._config = config or BFSConfig()
        n = graph.node_count
        self._distance = np.full(n, _NONE, dtype=np.int64)
        self._parent = np.full(n, _NONE, dtype=np.int64)
        self._visited = BitSet(n)
        self._discovered: list[np.ndarray] = []
        self._frontier = np.empty(0, dtype=np.int64)
        self._direction = Direction.TOP_DOWN
        self._direction_log: list[Direction] = []
        self._state = SearchState.IDLE

    @property
    def graph(self) -> CompactGraph:
        return self._graph

    @property
    def config(self) -> BFSConfig:
        return self._config

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def direction(self) -> Direction:
        return self._direction

    def reset(self) -> None:
        """Clear all per-search state. The CompactGraph is kept."""
        for level in self._discovered:
            self._distance[level] = _NONE
            self._parent[level] = _NONE
        self._visited.clear()
        self._discovered = []
        self._frontier = np.empty(0, dtype=np.int64)
        self._direction = Direction.TOP_DOWN
        self._direction_log = []
        self._state = SearchState.IDLE

    def search(self, source: NodeId) -> BFSResult:
        """Single-source BFS. Raises NodeNotFoundError for unknown sources."""
        return self.search_multiple([source])

    def search_multiple(self, sources: Iterable[NodeId]) -> BFSResult:
        """BFS seeded with every source at distance 0.

        A node reachable from several sources at the same distance gets
        its parent from whichever expansion reaches it first; no tie-break
        between sources is guaranteed.
        """
        seeds = list(dict.fromkeys(self._graph.node_to_index(s) for s in sources))
        if not seeds:
            raise ValueError("search_multiple requires at least one source")

        if self._state is not SearchState.IDLE:
            self.reset()
        self._state = SearchState.RUNNING

        roots = np.asarray(seeds, dtype=np.int64)
        self._settle(roots, np.full(len(roots), _NONE, dtype=np.int64), 0)

        level = 0
        while len(self._frontier):
            self._direction = self._next_direction(self._frontier)
            self._direction_log.append(self._direction)
            if self._direction is Direction.TOP_DOWN:
                self._top_down_step(self._frontier, level)
            else:
                self._bottom_up_step(self._frontier, level)
            level += 1

        self._state = SearchState.DONE
        logger.debug(
            "DOBFS from %d source(s): visited %d/%d nodes in %d levels (%d bottom-up)",
            len(seeds),
            len(self._visited),
            self._graph.node_count,
            len(self._direction_log),
            self._direction_log.count(Direction.BOTTOM_UP),
        )
        return self._collect()

    def _next_direction(self, frontier: np.ndarray) -> Direction:
        graph = self._graph
        current = self._direction

        if current is Direction.TOP_DOWN:
            if not graph.has_reverse:
                return Direction.TOP_DOWN
            edges_to_check = graph.out_degree_sum(frontier)
            if edges_to_check > graph.edge_count / self._config.alpha:
                logger.debug(
                    "Switching to bottom-up: frontier=%d, edges_to_check=%d",
                    len(frontier),
                    edges_to_check,
                )
                return Direction.BOTTOM_UP
            return Direction.TOP_DOWN

        if len(frontier) < graph.node_count / self._config.beta:
            logger.debug("Switching to top-down: frontier=%d", len(frontier))
            return Direction.TOP_DOWN
        return Direction.BOTTOM_UP

    def _settle(self, nodes: np.ndarray, parents: np.ndarray, distance: int) -> None:
        """Mark *nodes* visited at *distance* and make them the next frontier."""
        self._visited.update(nodes)
        self._distance[nodes] = distance
        self._parent[nodes] = parents
        self._discovered.append(nodes)
        self._frontier = nodes

    def _top_down_step(self, frontier: np.ndarray, level: int) -> None:
        sources, targets = self._graph.expand(frontier)
        fresh = ~self._visited.mask[targets]
        sources, targets = sources[fresh], targets[fresh]
        # the first frontier node (in frontier order) to reach a target is its parent
        first = _first_per_node(targets)
        self._settle(targets[first], sources[first], level + 1)

    def _bottom_up_step(self, frontier: np.ndarray, level: int) -> None:
        graph = self._graph
        in_frontier = BitSet(graph.node_count, frontier)
        unvisited = np.flatnonzero(~self._visited.mask)
        targets, sources = graph.expand_incoming(unvisited)
        hit = in_frontier.mask[sources]
        targets, sources = targets[hit], sources[hit]
        # incoming rows are ascending, so the first hit is the smallest frontier parent
        nodes, first = np.unique(targets, return_index=True)
        self._settle(nodes, sources[first], level + 1)

    def _collect(self) -> BFSResult:
        graph = self._graph
        order = np.concatenate(self._discovered) if self._discovered else np.empty(0, dtype=np.int64)
        parent_index = self._parent[order].tolist()
        # discovery order is level order
        nodes = graph.nodes_at(order.tolist())
        distances = dict(zip(nodes, self._distance[order].tolist()))
        parents: dict[NodeId, NodeId | None] = {
            node: None if p == _NONE else graph.index_to_node(p) for node, p in zip(nodes, parent_index)
        }

        return BFSResult(
            distances=distances,
            parents=parents,
            visited_count=len(order),
            levels=len(self._direction_log),
            direction_log=list(self._direction_log),
        )


def direction_optimized_bfs(
    graph: CompactGraph,
    source: NodeId,
    config: BFSConfig | None = None,
) -> BFSResult:
    """One-shot DOBFS from *source*."""
    return DirectionOptimizedBFS(graph, config).search(source)
