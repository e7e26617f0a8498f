"""Data models for Frontier."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass, field
from enum import Enum

NodeId = Hashable


class Direction(Enum):
    """Traversal mode of a single BFS level."""

    TOP_DOWN = "top_down"
    BOTTOM_UP = "bottom_up"


class SearchState(Enum):
    """Lifecycle of a DirectionOptimizedBFS instance."""

    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


class Strategy(Enum):
    """Which BFS engine the dispatcher runs."""

    BASELINE = "baseline"
    OPTIMIZED = "optimized"


@dataclass(frozen=True)
class Edge:
    """An edge of the mutable graph. Weight is optional metadata."""

    source: NodeId
    target: NodeId
    weight: float | None = None


@dataclass
class TraversalOptions:
    """Options for breadth_first_search."""

    visit_callback: Callable[[NodeId, int], None] | None = None
    target_node: NodeId | None = None


@dataclass
class TraversalResult:
    """Visited set, visitation order and BFS parent tree (root maps to None)."""

    visited: set[NodeId] = field(default_factory=set)
    order: list[NodeId] = field(default_factory=list)
    tree: dict[NodeId, NodeId | None] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self.order)


@dataclass
class ShortestPathResult:
    """Hop distance, node path and the predecessor map it was read from.

    The predecessor map is shared between all results of one
    single-source run.
    """

    distance: int
    path: list[NodeId]
    predecessor: dict[NodeId, NodeId | None]

    def __len__(self) -> int:
        return len(self.path)

    def __repr__(self) -> str:
        hops = " -> ".join(str(n) for n in self.path)
        return f"ShortestPathResult(distance={self.distance}, path={hops})"


@dataclass
class BFSResult:
    """Output of DirectionOptimizedBFS, keyed by node id."""

    distances: dict[NodeId, int]
    parents: dict[NodeId, NodeId | None]
    visited_count: int
    levels: int = 0
    direction_log: list[Direction] = field(default_factory=list)

    @property
    def switched(self) -> bool:
        """True if any level ran bottom-up."""
        return Direction.BOTTOM_UP in self.direction_log


@dataclass
class PathCountingResult:
    """BFS with shortest-path counts, as used by betweenness centrality."""

    distances: dict[NodeId, int]
    predecessors: dict[NodeId, list[NodeId]]
    sigma: dict[NodeId, int]
    stack: list[NodeId]


@dataclass
class BipartiteResult:
    is_bipartite: bool
    partitions: tuple[set[NodeId], set[NodeId]] | None = None


@dataclass
class AugmentingPath:
    path: list[NodeId]
    capacity: float
