"""Compressed Sparse Row (CSR) graph snapshot.

A CompactGraph is built once from an adjacency mapping and never mutated.
Node ids are mapped to dense indices ``0..n-1``; every row of the flat
``col_index`` array is sorted ascending so edge tests are a binary search
over the row slice and plain expansion is a sequential scan.

All buffers are numpy arrays flagged read-only after construction.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from functools import cmp_to_key
from numbers import Real
from typing import Any

import numpy as np

from frontier.core.exceptions import GraphInvariantError, IndexOutOfRangeError, NodeNotFoundError
from frontier.core.graph.protocol import ReadableGraph, get_edge_weight
from frontier.core.models import NodeId

logger = logging.getLogger(__name__)

OFFSET_DTYPE = np.int64
INDEX_DTYPE = np.int32
WEIGHT_DTYPE = np.float64
DEFAULT_WEIGHT = 1.0


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _compare_ids(a: Any, b: Any) -> int:
    """Numeric order when both ids are numbers, lexical order of str() otherwise."""
    if _is_number(a) and _is_number(b):
        return (a > b) - (a < b)
    sa, sb = str(a), str(b)
    return (sa > sb) - (sa < sb)


node_sort_key = cmp_to_key(_compare_ids)


def _frozen(values: np.ndarray) -> np.ndarray:
    values.setflags(write=False)
    return values


def _offsets(owners: np.ndarray, n: int) -> np.ndarray:
    """Row offsets for entries grouped by ascending owner index."""
    offsets = np.zeros(n + 1, dtype=OFFSET_DTYPE)
    np.cumsum(np.bincount(owners, minlength=n), out=offsets[1:])
    return offsets


def _gather(offsets: np.ndarray, values: np.ndarray, rows: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Concatenate ``values`` over the CSR rows in *rows*.

    Returns ``(owner, value)`` parallel arrays, rows in the given order and
    each row in stored order.
    """
    starts = offsets[rows]
    counts = offsets[rows + 1] - starts
    total = int(counts.sum())
    if total == 0:
        empty = np.empty(0, dtype=np.int64)
        return empty, empty
    owners = np.repeat(rows, counts)
    shift = np.repeat(starts - (np.cumsum(counts) - counts), counts)
    positions = np.arange(total, dtype=np.int64) + shift
    return owners, values[positions].astype(np.int64)


class NeighborView:
    """Restartable, finite view over one CSR row.

    Iteration re-reads the stored slice every time, so a view can be
    iterated any number of times and never holds traversal state.
    """

    __slots__ = ("_graph", "_start", "_end")

    def __init__(self, graph: CompactGraph, start: int, end: int) -> None:
        self._graph = graph
        self._start = start
        self._end = end

    def __iter__(self) -> Iterator[NodeId]:
        id_of = self._graph._id_of
        for j in self._graph._col_index[self._start : self._end].tolist():
            yield id_of[j]

    def __len__(self) -> int:
        return self._end - self._start

    def __contains__(self, node: object) -> bool:
        index = self._graph._index_of.get(node)  # type: ignore[call-overload]
        if index is None:
            return False
        return self._graph._find(index, self._start, self._end) != -1

    def __repr__(self) -> str:
        return f"NeighborView({list(self)!r})"


class CompactGraph:
    """Immutable CSR adjacency with optional weights and reverse (incoming) rows.

    Build cost O(E log E). Edge lookup O(log out-degree).
    """

    __slots__ = (
        "_index_of",
        "_id_of",
        "_row_start",
        "_col_index",
        "_edge_weight",
        "_reverse_row_start",
        "_reverse_col_index",
    )

    def __init__(
        self,
        adjacency: Mapping[NodeId, Iterable[NodeId]],
        weights: Mapping[tuple[NodeId, NodeId], float] | None = None,
        include_reverse: bool = True,
    ) -> None:
        rows: dict[NodeId, list[NodeId]] = {node: list(nbrs) for node, nbrs in adjacency.items()}
        all_nodes: set[NodeId] = set(rows)
        for nbrs in rows.values():
            all_nodes.update(nbrs)

        id_of = sorted(all_nodes, key=node_sort_key)
        index_of = {node: i for i, node in enumerate(id_of)}
        n = len(id_of)

        sources: list[int] = []
        targets: list[int] = []
        raw_weights: list[float] = []
        for node, nbrs in rows.items():
            s = index_of[node]
            for nbr in nbrs:
                sources.append(s)
                targets.append(index_of[nbr])
                if weights is not None:
                    w = weights.get((node, nbr))
                    raw_weights.append(DEFAULT_WEIGHT if w is None else float(w))

        # one key per (source, target); sorting the keys orders rows and
        # columns at once, and return_index keeps the first weight seen
        width = max(n, 1)
        keys = np.asarray(sources, dtype=np.int64) * width + np.asarray(targets, dtype=np.int64)
        keys, first = np.unique(keys, return_index=True)
        src = keys // width

        self._index_of = index_of
        self._id_of = id_of
        self._row_start = _frozen(_offsets(src, n))
        self._col_index = _frozen((keys % width).astype(INDEX_DTYPE))
        self._edge_weight = (
            _frozen(np.asarray(raw_weights, dtype=WEIGHT_DTYPE)[first]) if weights is not None else None
        )
        self._reverse_row_start: np.ndarray | None = None
        self._reverse_col_index: np.ndarray | None = None

        if include_reverse:
            self._reverse_row_start, self._reverse_col_index = self._transpose(src)

        self._check_invariants()
        logger.debug(
            "Built CompactGraph: %d nodes, %d edges, reverse=%s, weighted=%s",
            n,
            len(self._col_index),
            include_reverse,
            self._edge_weight is not None,
        )

    @classmethod
    def build(
        cls,
        adjacency: Mapping[NodeId, Iterable[NodeId]],
        weights: Mapping[tuple[NodeId, NodeId], float] | None = None,
        include_reverse: bool = True,
    ) -> CompactGraph:
        return cls(adjacency, weights=weights, include_reverse=include_reverse)

    @classmethod
    def from_graph(
        cls,
        graph: ReadableGraph,
        include_weights: bool = False,
        include_reverse: bool = True,
    ) -> CompactGraph:
        """Snapshot a mutable graph. O(V + E) reads plus the CSR build."""
        adjacency: dict[NodeId, list[NodeId]] = {}
        weights: dict[tuple[NodeId, NodeId], float] = {}

        for node in graph.nodes():
            nbrs = list(graph.neighbors(node))
            adjacency[node] = nbrs
            if include_weights:
                for nbr in nbrs:
                    w = get_edge_weight(graph, node, nbr)
                    if w is not None:
                        weights[(node, nbr)] = w

        return cls(
            adjacency,
            weights=weights if weights else None,
            include_reverse=include_reverse,
        )

    def _transpose(self, src: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        n = len(self._id_of)
        col = self._col_index
        # stable sort by target keeps sources ascending inside each reverse row
        order = np.argsort(col, kind="stable")
        reverse_row_start = _offsets(col.astype(np.int64), n)
        reverse_col_index = src[order].astype(INDEX_DTYPE)
        return _frozen(reverse_row_start), _frozen(reverse_col_index)

    def _check_invariants(self) -> None:
        n = len(self._id_of)
        rs = self._row_start
        col = self._col_index
        if len(rs) != n + 1 or rs[0] != 0 or rs[n] != len(col):
            raise GraphInvariantError(
                f"row_start malformed: len={len(rs)}, first={rs[0]}, last={rs[-1]}, edges={len(col)}"
            )
        if np.any(np.diff(rs) < 0):
            raise GraphInvariantError("row_start is not non-decreasing")
        if len(col) > 1:
            owners = np.repeat(np.arange(n), np.diff(rs))
            same_row = owners[1:] == owners[:-1]
            if np.any(np.diff(col)[same_row] <= 0):
                raise GraphInvariantError("col_index rows are not strictly ascending")
        if self._edge_weight is not None and len(self._edge_weight) != len(col):
            raise GraphInvariantError("edge_weight is not parallel to col_index")
        if self._reverse_row_start is not None:
            rrs = self._reverse_row_start
            rci = self._reverse_col_index
            if rci is None or len(rrs) != n + 1 or rrs[n] != len(rci) or len(rci) != len(col):
                raise GraphInvariantError("reverse structure is not a transpose of the forward rows")

    def _find(self, target: int, start: int, end: int) -> int:
        """Position of *target* in ``col_index[start:end]`` or -1."""
        row = self._col_index[start:end]
        pos = int(np.searchsorted(row, target, side="left"))
        if pos < len(row) and row[pos] == target:
            return start + pos
        return -1

    def _row_bounds(self, index: int) -> tuple[int, int]:
        return int(self._row_start[index]), int(self._row_start[index + 1])

    # ----- id-level API -----

    def has_node(self, node: NodeId) -> bool:
        return node in self._index_of

    def has_edge(self, source: NodeId, target: NodeId) -> bool:
        """Binary search inside the source row. O(log out-degree)."""
        s = self._index_of.get(source)
        t = self._index_of.get(target)
        if s is None or t is None:
            return False
        start, end = self._row_bounds(s)
        return self._find(t, start, end) != -1

    def neighbors(self, node: NodeId) -> NeighborView:
        """Outgoing neighbors, ascending by index. Empty for unknown ids."""
        index = self._index_of.get(node)
        if index is None:
            return NeighborView(self, 0, 0)
        start, end = self._row_bounds(index)
        return NeighborView(self, start, end)

    def out_degree(self, node: NodeId) -> int:
        index = self._index_of.get(node)
        if index is None:
            return 0
        return self.out_degree_at(index)

    def in_degree(self, node: NodeId) -> int:
        index = self._index_of.get(node)
        if index is None:
            return 0
        return self.in_degree_at(index)

    def edge_weight(self, source: NodeId, target: NodeId) -> float | None:
        """Stored weight of ``source -> target``.

        None when the snapshot carries no weights or the edge is absent.
        """
        if self._edge_weight is None:
            return None
        s = self._index_of.get(source)
        t = self._index_of.get(target)
        if s is None or t is None:
            return None
        start, end = self._row_bounds(s)
        pos = self._find(t, start, end)
        if pos == -1:
            return None
        return float(self._edge_weight[pos])

    def node_to_index(self, node: NodeId) -> int:
        try:
            return self._index_of[node]
        except KeyError:
            raise NodeNotFoundError(node) from None

    def index_to_node(self, index: int) -> NodeId:
        if not 0 <= index < len(self._id_of):
            raise IndexOutOfRangeError(index, len(self._id_of))
        return self._id_of[index]

    def nodes(self) -> Iterator[NodeId]:
        """Node ids in index order."""
        return iter(self._id_of)

    def edges(self) -> Iterator[tuple[NodeId, NodeId]]:
        id_of = self._id_of
        owners = np.repeat(np.arange(len(id_of)), np.diff(self._row_start))
        for s, t in zip(owners.tolist(), self._col_index.tolist()):
            yield id_of[s], id_of[t]

    # ----- index-level API used by the BFS engine -----

    def neighbor_indices(self, index: int) -> Iterator[int]:
        self._check_index(index)
        start, end = self._row_bounds(index)
        return iter(self._col_index[start:end].tolist())

    def incoming_indices(self, index: int) -> Iterator[int]:
        """Sources of edges into *index*. Empty when built without reverse rows."""
        self._check_index(index)
        if self._reverse_row_start is None or self._reverse_col_index is None:
            return iter(())
        start = int(self._reverse_row_start[index])
        end = int(self._reverse_row_start[index + 1])
        return iter(self._reverse_col_index[start:end].tolist())

    def out_degree_at(self, index: int) -> int:
        self._check_index(index)
        return int(self._row_start[index + 1] - self._row_start[index])

    def in_degree_at(self, index: int) -> int:
        self._check_index(index)
        if self._reverse_row_start is None:
            raise GraphInvariantError("in-degree requested on a CompactGraph built without reverse rows")
        return int(self._reverse_row_start[index + 1] - self._reverse_row_start[index])

    def out_degree_sum(self, indices: np.ndarray) -> int:
        """Total out-degree of a batch of node indices."""
        return int((self._row_start[indices + 1] - self._row_start[indices]).sum())

    def expand(self, indices: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Every outgoing edge of *indices* as parallel ``(source, target)`` arrays."""
        return _gather(self._row_start, self._col_index, indices)

    def expand_incoming(self, indices: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Every incoming edge of *indices* as parallel ``(target, source)`` arrays.

        Sources come out ascending within each target.
        """
        if self._reverse_row_start is None or self._reverse_col_index is None:
            raise GraphInvariantError("incoming edges requested on a CompactGraph built without reverse rows")
        return _gather(self._reverse_row_start, self._reverse_col_index, indices)

    def nodes_at(self, indices: Iterable[int]) -> list[NodeId]:
        """Ids for a batch of indices."""
        id_of = self._id_of
        return [id_of[i] for i in indices]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._id_of):
            raise IndexOutOfRangeError(index, len(self._id_of))

    # ----- raw read-only buffers -----

    @property
    def row_start(self) -> np.ndarray:
        return self._row_start

    @property
    def col_index(self) -> np.ndarray:
        return self._col_index

    @property
    def edge_weights(self) -> np.ndarray | None:
        return self._edge_weight

    @property
    def reverse_row_start(self) -> np.ndarray | None:
        return self._reverse_row_start

    @property
    def reverse_col_index(self) -> np.ndarray | None:
        return self._reverse_col_index

    @property
    def has_reverse(self) -> bool:
        return self._reverse_row_start is not None

    @property
    def is_weighted(self) -> bool:
        return self._edge_weight is not None

    @property
    def node_count(self) -> int:
        return len(self._id_of)

    @property
    def edge_count(self) -> int:
        return len(self._col_index)

    def memory_bytes(self) -> int:
        """Size of the flat CSR buffers (excludes the id mapping)."""
        buffers = [
            self._row_start,
            self._col_index,
            self._edge_weight,
            self._reverse_row_start,
            self._reverse_col_index,
        ]
        return int(sum(buf.nbytes for buf in buffers if buf is not None))

    def __contains__(self, node: object) -> bool:
        return node in self._index_of

    def __len__(self) -> int:
        return len(self._id_of)

    def __repr__(self) -> str:
        return f"CompactGraph(nodes={self.node_count}, edges={self.edge_count}, reverse={self.has_reverse})"


def create_compact_graph(
    nodes: Iterable[NodeId],
    edges: Iterable[tuple[NodeId, NodeId] | tuple[NodeId, NodeId, float | None]],
    include_reverse: bool = True,
) -> CompactGraph:
    """Build a CompactGraph from a node list and ``(source, target[, weight])`` tuples.

    Edges whose source is not listed in *nodes* are dropped.
    """
    adjacency: dict[NodeId, list[NodeId]] = {node: [] for node in nodes}
    weights: dict[tuple[NodeId, NodeId], float] = {}
    for edge in edges:
        source, target = edge[0], edge[1]
        if source not in adjacency:
            continue
        adjacency[source].append(target)
        if len(edge) > 2 and edge[2] is not None:  # type: ignore[misc]
            weights.setdefault((source, target), float(edge[2]))  # type: ignore[misc]
    return CompactGraph(adjacency, weights=weights or None, include_reverse=include_reverse)


def is_compact_graph(obj: object) -> bool:
    return isinstance(obj, CompactGraph)
