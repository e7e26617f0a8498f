"""Unit tests for the specialised BFS variants."""

import pytest

from frontier.core.config import THRESHOLD_ENV_VAR
from frontier.core.exceptions import NodeNotFoundError
from frontier.core.graph import Graph, cycle_graph, path_graph
from frontier.core.traversal import (
    bfs_augmenting_path,
    bfs_coloring_with_partitions,
    bfs_distances_only,
    bfs_weighted_distances,
    bfs_with_path_counting,
)


@pytest.fixture
def diamond() -> Graph:
    r"""Undirected diamond: 0 - 1 - 3 and 0 - 2 - 3."""
    graph = Graph()
    graph.add_edge(0, 1)
    graph.add_edge(0, 2)
    graph.add_edge(1, 3)
    graph.add_edge(2, 3)
    return graph


@pytest.fixture
def weighted() -> Graph:
    """Directed a -> b (1), b -> c (1), a -> c (5)."""
    graph = Graph(directed=True)
    graph.add_edge("a", "b", weight=1.0)
    graph.add_edge("b", "c", weight=1.0)
    graph.add_edge("a", "c", weight=5.0)
    return graph


class TestPathCounting:
    """Tests for bfs_with_path_counting."""

    def test_diamond_counts(self, diamond: Graph) -> None:
        result = bfs_with_path_counting(diamond, 0)
        assert result.distances == {0: 0, 1: 1, 2: 1, 3: 2}
        assert result.sigma[3] == 2
        assert sorted(result.predecessors[3]) == [1, 2]
        assert 0 not in result.predecessors

    def test_stack_in_distance_order(self, diamond: Graph) -> None:
        result = bfs_with_path_counting(diamond, 0)
        assert result.stack[0] == 0
        assert result.stack[-1] == 3
        assert [result.distances[n] for n in result.stack] == [0, 1, 1, 2]

    def test_unknown_source(self, diamond: Graph) -> None:
        with pytest.raises(NodeNotFoundError):
            bfs_with_path_counting(diamond, 9)

    def test_optimized_matches(self, diamond: Graph, monkeypatch: pytest.MonkeyPatch) -> None:
        expected = bfs_with_path_counting(diamond, 0)
        monkeypatch.setenv(THRESHOLD_ENV_VAR, "0")
        result = bfs_with_path_counting(diamond, 0, optimized=True)
        assert result.distances == expected.distances
        assert result.sigma == expected.sigma


class TestDistancesOnly:
    """Tests for bfs_distances_only."""

    def test_full(self) -> None:
        assert bfs_distances_only(path_graph(4), 0) == {0: 0, 1: 1, 2: 2, 3: 3}

    def test_cutoff(self) -> None:
        assert bfs_distances_only(path_graph(10), 0, cutoff=3) == {0: 0, 1: 1, 2: 2, 3: 3}

    def test_cutoff_zero(self) -> None:
        assert bfs_distances_only(path_graph(10), 4, cutoff=0) == {4: 0}

    def test_optimized_cutoff(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(THRESHOLD_ENV_VAR, "0")
        result = bfs_distances_only(path_graph(10), 0, cutoff=3, optimized=True)
        assert result == {0: 0, 1: 1, 2: 2, 3: 3}

    def test_unknown_source(self) -> None:
        with pytest.raises(NodeNotFoundError):
            bfs_distances_only(path_graph(3), "x")


class TestColoring:
    """Tests for bfs_coloring_with_partitions."""

    def test_path_partitions(self) -> None:
        result = bfs_coloring_with_partitions(path_graph(4))
        assert result.is_bipartite
        assert result.partitions == ({0, 2}, {1, 3})

    def test_odd_cycle(self) -> None:
        result = bfs_coloring_with_partitions(cycle_graph(3))
        assert not result.is_bipartite
        assert result.partitions is None

    def test_isolated_nodes(self) -> None:
        graph = Graph()
        graph.add_node("x")
        graph.add_node("y")
        result = bfs_coloring_with_partitions(graph)
        assert result.partitions == ({"x", "y"}, set())

    def test_empty_graph(self) -> None:
        result = bfs_coloring_with_partitions(Graph())
        assert result.is_bipartite


class TestAugmentingPath:
    """Tests for bfs_augmenting_path."""

    def test_bottleneck(self) -> None:
        residual = {"s": {"a": 3.0, "b": 2.0}, "a": {"t": 2.0}, "b": {"t": 5.0}, "t": {}}
        result = bfs_augmenting_path(residual, "s", "t")
        assert result is not None
        assert result.path == ["s", "a", "t"]
        assert result.capacity == 2.0

    def test_saturated_arcs_skipped(self) -> None:
        residual = {"s": {"a": 0.0, "b": 1.0}, "a": {"t": 4.0}, "b": {"t": 4.0}}
        result = bfs_augmenting_path(residual, "s", "t")
        assert result is not None
        assert result.path == ["s", "b", "t"]
        assert result.capacity == 1.0

    def test_no_path(self) -> None:
        assert bfs_augmenting_path({"s": {"t": 0.0}}, "s", "t") is None


class TestWeightedDistances:
    """Tests for bfs_weighted_distances."""

    def test_prefers_lighter_route(self, weighted: Graph) -> None:
        assert bfs_weighted_distances(weighted, "a") == {"a": 0.0, "b": 1.0, "c": 2.0}

    def test_missing_weights_count_as_one(self) -> None:
        assert bfs_weighted_distances(path_graph(3), 0) == {0: 0.0, 1: 1.0, 2: 2.0}

    def test_cutoff(self) -> None:
        assert bfs_weighted_distances(path_graph(5), 0, cutoff=2) == {0: 0.0, 1: 1.0, 2: 2.0}

    def test_unknown_source(self, weighted: Graph) -> None:
        with pytest.raises(NodeNotFoundError) as exc_info:
            bfs_weighted_distances(weighted, "z")
        assert "Source node z" in str(exc_info.value)
