"""
Tests for the weighted digraph: weight accumulation, node ordering, matrix views, freezing.
"""

from __future__ import annotations

import numpy as np
import pytest

from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.core.exceptions import InvalidGraphError


def test_add_edge_accumulates_weight():
    """Repeated transitions between the same ordered pair sum into one weight."""
    graph = Graph()
    graph.add_edge("a", "b", 2)
    graph.add_edge("a", "b", 3.5)
    graph.add_edge("b", "a")
    assert graph.weight("a", "b") == 5.5
    assert graph.weight("b", "a") == 1.0
    assert graph.num_edges() == 2
    assert graph.num_nodes() == 2


def test_nodes_keep_insertion_order():
    """Node order is first-seen order, sources before targets."""
    graph = Graph.from_edges([("x", "y"), ("z", "x"), ("y", "w")])
    assert graph.nodes() == ("x", "y", "z", "w")
    assert graph.index_of("z") == 2


def test_adjacency_matrix_weighted_and_unweighted():
    """entry[i][j] is the edge weight, or 1.0 when unweighted."""
    graph = Graph.from_edges([("a", "b", 3), ("b", "c", 0.5), ("a", "b", 1)])
    weighted = graph.adjacency_matrix(weighted=True)
    unweighted = graph.adjacency_matrix(weighted=False)
    expected = np.array([[0, 4, 0], [0, 0, 0.5], [0, 0, 0]], dtype=float)
    np.testing.assert_array_equal(weighted, expected)
    np.testing.assert_array_equal(unweighted, (expected > 0).astype(float))


def test_adjacency_matrix_is_stable_and_read_only(singapore_graph):
    """Repeated calls give the same read-only matrix for the same graph."""
    first = singapore_graph.adjacency_matrix()
    second = singapore_graph.adjacency_matrix()
    assert first is second
    assert not first.flags.writeable
    with pytest.raises(ValueError):
        first[0, 0] = 1.0


def test_authority_matrix_is_cocitation(singapore_graph):
    """authority_matrix is A^T A and symmetric."""
    a = singapore_graph.adjacency_matrix()
    m = singapore_graph.authority_matrix()
    np.testing.assert_array_equal(m, a.T @ a)
    np.testing.assert_array_equal(m, m.T)


def test_negative_weight_rejected():
    """Negative and non-finite weights raise InvalidGraphError."""
    graph = Graph()
    with pytest.raises(InvalidGraphError):
        graph.add_edge("a", "b", -1)
    with pytest.raises(InvalidGraphError):
        graph.add_edge("a", "b", float("nan"))
    with pytest.raises(InvalidGraphError):
        graph.add_edge("a", "b", float("inf"))


def test_zero_weight_registers_nodes_without_edge():
    """A zero-weight transition adds both nodes but no edge."""
    graph = Graph()
    graph.add_edge("a", "b", 0)
    assert graph.nodes() == ("a", "b")
    assert graph.num_edges() == 0
    np.testing.assert_array_equal(graph.adjacency_matrix(weighted=False), np.zeros((2, 2)))


def test_empty_graph_raises():
    """Matrix views on a graph with zero nodes raise InvalidGraphError."""
    graph = Graph()
    with pytest.raises(InvalidGraphError):
        graph.adjacency_matrix()
    with pytest.raises(InvalidGraphError):
        graph.require_nodes()


def test_graph_freezes_after_first_matrix_use(cycle_graph):
    """Once a matrix view exists the graph can no longer be mutated."""
    assert not cycle_graph.frozen
    cycle_graph.adjacency_matrix()
    assert cycle_graph.frozen
    with pytest.raises(InvalidGraphError):
        cycle_graph.add_edge("A", "D")
    with pytest.raises(InvalidGraphError):
        cycle_graph.add_node("D")


def test_from_edges_rejects_malformed_tuple():
    with pytest.raises(InvalidGraphError):
        Graph.from_edges([("a",)])


def test_degree_helpers(singapore_graph):
    """Out/in degree count edges; weighted variants sum weights."""
    assert singapore_graph.out_degree("Marina Bay Sands") == 2
    assert singapore_graph.in_degree("Gardens by the Bay") == 2
    assert singapore_graph.in_degree("Gardens by the Bay", weighted=True) == 2.0
    assert singapore_graph.in_degree("Chinatown") == 0


def test_vector_from_mapping_orders_by_node_index(cycle_graph):
    """Mappings are laid out in node order; missing nodes get 0; unknown nodes raise."""
    vec = cycle_graph.vector_from_mapping({"C": 3.0, "A": 1.0})
    np.testing.assert_array_equal(vec, np.array([1.0, 0.0, 3.0]))
    with pytest.raises(InvalidGraphError):
        cycle_graph.vector_from_mapping({"Z": 1.0})
    with pytest.raises(InvalidGraphError):
        cycle_graph.vector_from_mapping([1.0, 2.0])
