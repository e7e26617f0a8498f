"""Path reconstruction from BFS predecessor maps."""

from __future__ import annotations

from collections.abc import Mapping

from frontier.core.models import NodeId


def reconstruct_path(target: NodeId, predecessor: Mapping[NodeId, NodeId | None]) -> list[NodeId]:
    """Walk predecessor pointers back from *target* to the root. O(path length).

    Returns an empty list if *target* was never reached.
    """
    if target not in predecessor:
        return []

    path: list[NodeId] = []
    current: NodeId | None = target
    while current is not None:
        path.append(current)
        current = predecessor.get(current)
    path.reverse()
    return path
