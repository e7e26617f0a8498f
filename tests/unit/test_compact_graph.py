"""Unit tests for the CSR snapshot."""

import random

import numpy as np
import pytest

from frontier.core.exceptions import GraphInvariantError, IndexOutOfRangeError, NodeNotFoundError
from frontier.core.graph import Graph, path_graph
from frontier.core.optimized import CompactGraph, create_compact_graph, is_compact_graph


@pytest.fixture
def small_compact() -> CompactGraph:
    """a -> c, a -> b (listed twice), b -> a; c has no outgoing row."""
    return CompactGraph({"a": ["c", "b", "b"], "b": ["a"]})


@pytest.fixture
def weighted_graph() -> Graph:
    """Directed a -> b (2.5), a -> c (unweighted), b -> c (0.5)."""
    graph = Graph(directed=True)
    graph.add_edge("a", "b", weight=2.5)
    graph.add_edge("a", "c")
    graph.add_edge("b", "c", weight=0.5)
    return graph


class TestCSRLayout:
    """Tests for the flat row_start / col_index arrays."""

    def test_row_start_and_col_index(self, small_compact: CompactGraph) -> None:
        assert small_compact.row_start.tolist() == [0, 2, 3, 3]
        assert small_compact.col_index.tolist() == [1, 2, 0]
        assert small_compact.row_start.dtype == np.int64
        assert small_compact.col_index.dtype == np.int32

    def test_nodes_include_neighbor_only_ids(self, small_compact: CompactGraph) -> None:
        """c only appears as a neighbor but still gets an index."""
        assert list(small_compact.nodes()) == ["a", "b", "c"]
        assert small_compact.node_count == 3

    def test_duplicates_collapsed(self, small_compact: CompactGraph) -> None:
        assert small_compact.edge_count == 3
        assert list(small_compact.neighbors("a")) == ["b", "c"]

    def test_numeric_ids_sorted_numerically(self) -> None:
        compact = CompactGraph({10: [2], 2: [1]})
        assert list(compact.nodes()) == [1, 2, 10]

    def test_mixed_ids_sorted_by_string(self) -> None:
        compact = CompactGraph({1: ["x"], "x": []})
        assert list(compact.nodes()) == [1, "x"]

    def test_rows_sorted_ascending(self) -> None:
        compact = CompactGraph({0: [5, 3, 4, 1]})
        row = list(compact.neighbor_indices(compact.node_to_index(0)))
        assert row == sorted(row)

    def test_buffers_read_only(self, small_compact: CompactGraph) -> None:
        with pytest.raises(ValueError):
            small_compact.row_start[0] = 7
        with pytest.raises(ValueError):
            small_compact.col_index[0] = 7
        with pytest.raises(ValueError):
            small_compact.reverse_col_index[0] = 7  # type: ignore[index]

    def test_empty_graph(self) -> None:
        compact = CompactGraph({})
        assert compact.node_count == 0
        assert compact.edge_count == 0
        assert compact.row_start.tolist() == [0]


class TestReverseRows:
    """Tests for the transposed (incoming) structure."""

    def test_transpose(self, small_compact: CompactGraph) -> None:
        assert small_compact.has_reverse
        assert small_compact.reverse_row_start.tolist() == [0, 1, 2, 3]  # type: ignore[union-attr]
        assert small_compact.reverse_col_index.tolist() == [1, 0, 0]  # type: ignore[union-attr]

    def test_in_degrees(self, small_compact: CompactGraph) -> None:
        assert small_compact.in_degree("a") == 1
        assert small_compact.in_degree("c") == 1
        assert small_compact.in_degree("missing") == 0

    def test_incoming_matches_forward_edges(self) -> None:
        compact = CompactGraph.from_graph(path_graph(6, directed=True))
        for i in range(compact.node_count):
            for j in compact.incoming_indices(i):
                assert i in list(compact.neighbor_indices(j))

    def test_without_reverse(self) -> None:
        compact = CompactGraph({"a": ["b"]}, include_reverse=False)
        assert not compact.has_reverse
        assert compact.reverse_row_start is None
        assert compact.reverse_col_index is None
        assert list(compact.incoming_indices(1)) == []

    def test_in_degree_requires_reverse(self) -> None:
        compact = CompactGraph({"a": ["b"]}, include_reverse=False)
        with pytest.raises(GraphInvariantError):
            compact.in_degree_at(1)

    def test_reverse_costs_memory(self) -> None:
        adjacency = {i: [i + 1] for i in range(10)}
        with_reverse = CompactGraph(adjacency).memory_bytes()
        without = CompactGraph(adjacency, include_reverse=False).memory_bytes()
        assert with_reverse > without > 0


class TestLookups:
    """Tests for id-level and index-level queries."""

    def test_has_edge(self, small_compact: CompactGraph) -> None:
        assert small_compact.has_edge("a", "b")
        assert small_compact.has_edge("b", "a")
        assert not small_compact.has_edge("c", "a")
        assert not small_compact.has_edge("a", "missing")

    def test_has_node(self, small_compact: CompactGraph) -> None:
        assert small_compact.has_node("c")
        assert "b" in small_compact
        assert not small_compact.has_node("z")

    def test_degrees(self, small_compact: CompactGraph) -> None:
        assert small_compact.out_degree("a") == 2
        assert small_compact.out_degree("c") == 0
        assert small_compact.out_degree("missing") == 0

    def test_unknown_node_has_no_neighbors(self, small_compact: CompactGraph) -> None:
        assert list(small_compact.neighbors("missing")) == []

    def test_node_to_index_unknown(self, small_compact: CompactGraph) -> None:
        with pytest.raises(NodeNotFoundError) as exc_info:
            small_compact.node_to_index("zz")
        assert "Node zz not found in graph" in str(exc_info.value)

    def test_index_round_trip(self, small_compact: CompactGraph) -> None:
        for node in small_compact.nodes():
            assert small_compact.index_to_node(small_compact.node_to_index(node)) == node

    def test_index_out_of_range(self, small_compact: CompactGraph) -> None:
        with pytest.raises(IndexOutOfRangeError) as exc_info:
            small_compact.index_to_node(5)
        assert "Index 5 out of range [0, 3)" in str(exc_info.value)

        with pytest.raises(IndexOutOfRangeError):
            small_compact.out_degree_at(-1)

    def test_edges(self, small_compact: CompactGraph) -> None:
        assert list(small_compact.edges()) == [("a", "b"), ("a", "c"), ("b", "a")]


class TestNeighborView:
    """Tests for restartable neighbor views."""

    def test_reiterable(self, small_compact: CompactGraph) -> None:
        view = small_compact.neighbors("a")
        assert list(view) == ["b", "c"]
        assert list(view) == ["b", "c"]

    def test_len_and_contains(self, small_compact: CompactGraph) -> None:
        view = small_compact.neighbors("a")
        assert len(view) == 2
        assert "c" in view
        assert "a" not in view
        assert "missing" not in view


class TestWeights:
    """Tests for the optional parallel weight array."""

    def test_unweighted_by_default(self, small_compact: CompactGraph) -> None:
        assert not small_compact.is_weighted
        assert small_compact.edge_weights is None
        assert small_compact.edge_weight("a", "b") is None

    def test_missing_weight_defaults_to_one(self) -> None:
        compact = CompactGraph({"a": ["b", "c"]}, weights={("a", "b"): 3.0})
        assert compact.edge_weight("a", "b") == 3.0
        assert compact.edge_weight("a", "c") == 1.0
        assert compact.edge_weight("b", "a") is None

    def test_weights_parallel_to_col_index(self) -> None:
        compact = CompactGraph({"a": ["c", "b"]}, weights={("a", "b"): 2.0, ("a", "c"): 5.0})
        assert compact.edge_weights.tolist() == [2.0, 5.0]  # type: ignore[union-attr]

    def test_from_graph_with_weights(self, weighted_graph: Graph) -> None:
        compact = CompactGraph.from_graph(weighted_graph, include_weights=True)
        assert compact.edge_weight("a", "b") == 2.5
        assert compact.edge_weight("a", "c") == 1.0
        assert compact.edge_weight("b", "c") == 0.5

    def test_from_graph_ignores_weights_by_default(self, weighted_graph: Graph) -> None:
        compact = CompactGraph.from_graph(weighted_graph)
        assert not compact.is_weighted


class TestBuilders:
    """Tests for the alternative constructors."""

    def test_from_undirected_graph(self) -> None:
        compact = CompactGraph.from_graph(path_graph(3))
        assert compact.edge_count == 4
        assert compact.has_edge(1, 0)
        assert compact.has_edge(1, 2)

    def test_build_classmethod(self) -> None:
        compact = CompactGraph.build({"x": ["y"]}, include_reverse=False)
        assert compact.has_edge("x", "y")
        assert not compact.has_reverse

    def test_create_compact_graph(self) -> None:
        compact = create_compact_graph(["a", "b"], [("a", "b"), ("z", "a"), ("b", "a", 2.0)])
        assert list(compact.nodes()) == ["a", "b"]
        assert not compact.has_node("z")
        assert compact.edge_weight("b", "a") == 2.0
        assert compact.edge_weight("a", "b") == 1.0

    def test_is_compact_graph(self, small_compact: CompactGraph) -> None:
        assert is_compact_graph(small_compact)
        assert not is_compact_graph({"a": ["b"]})

    def test_repr(self, small_compact: CompactGraph) -> None:
        assert repr(small_compact) == "CompactGraph(nodes=3, edges=3, reverse=True)"


@pytest.fixture
def random_adjacency() -> dict[int, list[int]]:
    """Seeded adjacency over 0..24 with duplicates, self-loops and neighbor-only ids 25..29."""
    rng = random.Random(2024)
    adjacency: dict[int, list[int]] = {}
    for u in range(25):
        row = [rng.randrange(25) for _ in range(rng.randint(0, 6))]
        if row and rng.random() < 0.4:
            row.append(row[0])
        if rng.random() < 0.2:
            row.append(u)
        adjacency[u] = row
    for extra in range(25, 30):
        adjacency[rng.randrange(25)].append(extra)
    return adjacency


class TestRoundTrip:
    """Tests that the CSR answers exactly what the source adjacency says."""

    def test_has_edge_for_every_pair(self, random_adjacency: dict[int, list[int]]) -> None:
        compact = CompactGraph(random_adjacency)
        assert compact.node_count == 30
        assert compact.edge_count == sum(len(set(row)) for row in random_adjacency.values())
        # 30 is never part of the graph
        for u in range(31):
            for v in range(31):
                assert compact.has_edge(u, v) == (v in random_adjacency.get(u, [])), (u, v)

    def test_neighbors_are_deduplicated_rows(self, random_adjacency: dict[int, list[int]]) -> None:
        compact = CompactGraph(random_adjacency)
        for u in range(30):
            assert list(compact.neighbors(u)) == sorted(set(random_adjacency.get(u, [])))

    def test_reverse_is_exact_transpose(self, random_adjacency: dict[int, list[int]]) -> None:
        compact = CompactGraph(random_adjacency)
        n = compact.node_count
        incoming = [list(compact.incoming_indices(i)) for i in range(n)]
        outgoing = [list(compact.neighbor_indices(j)) for j in range(n)]
        for i in range(n):
            assert incoming[i] == sorted(incoming[i])
            assert compact.in_degree_at(i) == len(incoming[i])
            for j in range(n):
                assert (j in incoming[i]) == (i in outgoing[j]), (i, j)

    def test_first_weight_wins_on_duplicates(self) -> None:
        adjacency = {"a": ["b", "b"]}
        compact = create_compact_graph(["a"], [("a", "b", 4.0), ("a", "b", 9.0)])
        assert compact.edge_count == 1
        assert compact.edge_weight("a", "b") == 4.0
        assert CompactGraph(adjacency).edge_count == 1


class TestBatchExpansion:
    """Tests for the array-level edge gathers used by the BFS engine."""

    def test_expand(self, small_compact: CompactGraph) -> None:
        sources, targets = small_compact.expand(np.array([1, 0]))
        assert sources.tolist() == [1, 0, 0]
        assert targets.tolist() == [0, 1, 2]

    def test_expand_empty_rows(self, small_compact: CompactGraph) -> None:
        sources, targets = small_compact.expand(np.array([2], dtype=np.int64))
        assert sources.tolist() == []
        assert targets.tolist() == []

    def test_expand_incoming(self, small_compact: CompactGraph) -> None:
        targets, sources = small_compact.expand_incoming(np.array([0, 1, 2]))
        assert targets.tolist() == [0, 1, 2]
        assert sources.tolist() == [1, 0, 0]

    def test_expand_incoming_requires_reverse(self) -> None:
        compact = CompactGraph({"a": ["b"]}, include_reverse=False)
        with pytest.raises(GraphInvariantError):
            compact.expand_incoming(np.array([1]))

    def test_out_degree_sum(self, small_compact: CompactGraph) -> None:
        assert small_compact.out_degree_sum(np.array([0, 1, 2])) == 3
        assert small_compact.out_degree_sum(np.array([], dtype=np.int64)) == 0

    def test_nodes_at(self, small_compact: CompactGraph) -> None:
        assert small_compact.nodes_at([2, 0]) == ["c", "a"]
