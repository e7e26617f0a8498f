"""Frontier custom exceptions."""

from __future__ import annotations

from collections.abc import Hashable


class FrontierError(Exception):
    """Base exception for Frontier errors."""


class NodeNotFoundError(FrontierError):
    """Node is not present in the graph."""

    def __init__(self, node: Hashable, role: str = "Node") -> None:
        self.node = node
        self.role = role
        super().__init__(f"{role} {node!s} not found in graph")


class IndexOutOfRangeError(FrontierError):
    """Dense node index outside ``[0, node_count)``."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Index {index} out of range [0, {size})")


class DirectedGraphError(FrontierError):
    """Operation requires an undirected graph."""


class GraphInvariantError(FrontierError):
    """Internal CSR invariant violated. Indicates a builder defect."""
