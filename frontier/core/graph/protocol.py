"""ReadableGraph protocol -- the read contract the traversal core consumes.

Public API:
    ReadableGraph: Runtime-checkable protocol for graphs fed to BFS.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from frontier.core.models import NodeId


@runtime_checkable
class ReadableGraph(Protocol):
    """Read-only view every traversal entry point accepts.

    Graph containers need not inherit from anything; any object with
    these members works. ``get_edge`` is optional and only used for
    weight-aware CSR conversion and weighted distances.
    """

    def has_node(self, node: NodeId) -> bool:
        """True if *node* is in the graph."""
        ...

    def neighbors(self, node: NodeId) -> Iterable[NodeId]:
        """Finite sequence of outgoing neighbors of *node*."""
        ...

    def nodes(self) -> Iterable[NodeId]:
        """Every node in the graph."""
        ...

    def degree(self, node: NodeId) -> int:
        ...

    def out_degree(self, node: NodeId) -> int:
        ...

    @property
    def node_count(self) -> int:
        ...

    @property
    def total_edge_count(self) -> int:
        ...

    @property
    def is_directed(self) -> bool:
        ...


def get_edge_weight(graph: ReadableGraph, source: NodeId, target: NodeId) -> float | None:
    """Weight of ``source -> target`` if the graph exposes one, else None."""
    getter = getattr(graph, "get_edge", None)
    if getter is None:
        return None
    edge = getter(source, target)
    if edge is None:
        return None
    return getattr(edge, "weight", None)
