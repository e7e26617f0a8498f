"""Tests for error handling paths."""

import pytest

from frontier.core.exceptions import (
    DirectedGraphError,
    FrontierError,
    GraphInvariantError,
    IndexOutOfRangeError,
    NodeNotFoundError,
)
from frontier.core.graph import Graph, path_graph
from frontier.core.optimized import CompactGraph, DirectionOptimizedBFS
from frontier.core.traversal import breadth_first_search, is_bipartite


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    def test_node_not_found_is_frontier_error(self) -> None:
        assert issubclass(NodeNotFoundError, FrontierError)

    def test_index_out_of_range_is_frontier_error(self) -> None:
        assert issubclass(IndexOutOfRangeError, FrontierError)

    def test_directed_graph_error_is_frontier_error(self) -> None:
        assert issubclass(DirectedGraphError, FrontierError)

    def test_invariant_error_is_frontier_error(self) -> None:
        assert issubclass(GraphInvariantError, FrontierError)

    def test_catch_all_with_base(self) -> None:
        """Every traversal failure can be caught as FrontierError."""
        with pytest.raises(FrontierError):
            breadth_first_search(Graph(), "missing")
        with pytest.raises(FrontierError):
            is_bipartite(path_graph(2, directed=True))


class TestErrorAttributes:
    """Tests for the data carried by exceptions."""

    def test_node_not_found_fields(self) -> None:
        error = NodeNotFoundError("x", "Source node")
        assert error.node == "x"
        assert error.role == "Source node"
        assert str(error) == "Source node x not found in graph"

    def test_node_not_found_default_role(self) -> None:
        assert str(NodeNotFoundError(7)) == "Node 7 not found in graph"

    def test_index_out_of_range_fields(self) -> None:
        error = IndexOutOfRangeError(12, 4)
        assert (error.index, error.size) == (12, 4)
        assert str(error) == "Index 12 out of range [0, 4)"


class TestEngineErrors:
    """Tests for failures raised from the CSR engine."""

    def test_empty_graph_has_no_source(self) -> None:
        engine = DirectionOptimizedBFS(CompactGraph({}))
        with pytest.raises(NodeNotFoundError):
            engine.search(0)

    def test_failed_search_leaves_engine_idle(self) -> None:
        compact = CompactGraph({"a": ["b"]})
        engine = DirectionOptimizedBFS(compact)
        with pytest.raises(NodeNotFoundError):
            engine.search("zz")
        assert engine.search("a").distances == {"a": 0, "b": 1}
