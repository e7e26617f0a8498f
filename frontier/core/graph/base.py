"""Mutable Graph class with adjacency list representation."""

from __future__ import annotations

from collections.abc import Iterator

from frontier.core.models import Edge, NodeId


class Graph:
    """Directed or undirected graph used to assemble traversal inputs.

    Uses insertion-ordered adjacency dicts for O(1) neighbor lookup.
    Undirected edges are stored in both endpoints' rows.
    """

    __slots__ = ("_out", "_in", "_edges", "_directed", "_allow_self_loops", "__weakref__")

    def __init__(self, directed: bool = False, allow_self_loops: bool = True) -> None:
        self._out: dict[NodeId, dict[NodeId, Edge]] = {}
        self._in: dict[NodeId, dict[NodeId, Edge]] = {}
        self._edges: dict[tuple[NodeId, NodeId], Edge] = {}
        self._directed = directed
        self._allow_self_loops = allow_self_loops

    def add_node(self, node: NodeId) -> None:
        """Add a node. O(1). Re-adding is a no-op."""
        if node not in self._out:
            self._out[node] = {}
            self._in[node] = {}

    def add_edge(self, source: NodeId, target: NodeId, weight: float | None = None) -> Edge:
        """Add an edge, creating missing endpoints. O(1).

        Adding an existing edge replaces its weight.
        """
        if source == target and not self._allow_self_loops:
            raise ValueError(f"Self-loop on {source!s} not allowed in this graph")

        self.add_node(source)
        self.add_node(target)
        edge = Edge(source=source, target=target, weight=weight)
        if not self._directed and (target, source) in self._edges:
            # keep one key per undirected edge
            del self._edges[(target, source)]
        self._edges[(source, target)] = edge
        self._out[source][target] = edge
        self._in[target][source] = edge
        if not self._directed:
            self._out[target][source] = edge
            self._in[source][target] = edge
        return edge

    def has_node(self, node: NodeId) -> bool:
        return node in self._out

    def has_edge(self, source: NodeId, target: NodeId) -> bool:
        """Edge membership, following direction for directed graphs. O(1)."""
        return target in self._out.get(source, {})

    def get_edge(self, source: NodeId, target: NodeId) -> Edge | None:
        return self._out.get(source, {}).get(target)

    def neighbors(self, node: NodeId) -> Iterator[NodeId]:
        """Outgoing neighbors in insertion order. O(out-degree)."""
        return iter(list(self._out.get(node, {})))

    def predecessors(self, node: NodeId) -> Iterator[NodeId]:
        """Incoming neighbors. Same as neighbors() for undirected graphs."""
        return iter(list(self._in.get(node, {})))

    def degree(self, node: NodeId) -> int:
        """Number of incident edges (in + out for directed graphs). O(1)."""
        if self._directed:
            return len(self._out.get(node, {})) + len(self._in.get(node, {}))
        return len(self._out.get(node, {}))

    def out_degree(self, node: NodeId) -> int:
        return len(self._out.get(node, {}))

    def in_degree(self, node: NodeId) -> int:
        return len(self._in.get(node, {}))

    def nodes(self) -> Iterator[NodeId]:
        return iter(list(self._out))

    def edges(self) -> Iterator[Edge]:
        return iter(list(self._edges.values()))

    @property
    def node_count(self) -> int:
        return len(self._out)

    @property
    def total_edge_count(self) -> int:
        return len(self._edges)

    @property
    def is_directed(self) -> bool:
        return self._directed

    def __contains__(self, node: object) -> bool:
        return node in self._out

    def __len__(self) -> int:
        return len(self._out)

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count}, edges={self.total_edge_count})"
