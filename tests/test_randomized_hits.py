"""
Tests for Randomised-HITS (teleport-mixed authority iteration).
"""

from __future__ import annotations

import numpy as np
import pytest

from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.analysis_engine.hits import hits
from hangout_rank.analysis_engine.models import IterationState
from hangout_rank.analysis_engine.randomized_hits import mixed_authority_matrix, randomized_hits
from hangout_rank.config.settings import RankConfig
from hangout_rank.core.exceptions import ConfigurationError


def test_converges_with_isolated_node(cycle_with_isolated_graph):
    """eps > 0 makes M' strictly positive: converges and every node gets a positive score."""
    result = randomized_hits(cycle_with_isolated_graph, RankConfig(eps=0.15))
    assert result.converged
    assert all(score > 0 for score in result.scores.values())
    assert result.scores["Changi"] < result.scores["A"]


def test_mixed_matrix_is_strictly_positive(cycle_with_isolated_graph):
    mixed = mixed_authority_matrix(cycle_with_isolated_graph.authority_matrix(), 0.15)
    assert np.all(mixed > 0)
    np.testing.assert_allclose(mixed, mixed.T)


def test_unit_l2_norm(singapore_graph):
    result = randomized_hits(singapore_graph)
    assert result.normalization == "l2"
    assert np.linalg.norm(list(result.scores.values())) == pytest.approx(1.0)
    assert result.params["eps"] == 0.15


def test_zero_eps_matches_plain_hits_authorities(singapore_graph):
    """Without teleportation the dominant eigenvector of A^T A is the HITS authority vector."""
    config = RankConfig(eps=0.0)
    randomized = randomized_hits(singapore_graph, config)
    plain = hits(singapore_graph, config)
    for node in singapore_graph.nodes():
        assert randomized.scores[node] == pytest.approx(plain.scores[node], abs=1e-6)


def test_teleport_lifts_uncited_nodes(singapore_graph):
    """Chinatown has no in-links: 0 under plain HITS, positive under Randomised-HITS."""
    result = randomized_hits(singapore_graph, RankConfig(eps=0.3))
    assert result.scores["Chinatown"] > 0


def test_eps_out_of_range():
    with pytest.raises(ConfigurationError):
        RankConfig(eps=1.5)
    with pytest.raises(ConfigurationError):
        RankConfig(eps=-0.1)


def test_deterministic(cycle_with_isolated_graph):
    first = randomized_hits(cycle_with_isolated_graph)
    second = randomized_hits(cycle_with_isolated_graph)
    assert first.scores == second.scores
    assert first.iterations == second.iterations


def test_near_tie_is_best_effort_under_default_cap():
    """Two authorities cited 20 and 21 times: slow but steady, capped at max_iter."""
    edges = [(f"hotel {i}", "Clarke Quay") for i in range(20)]
    edges += [(f"hostel {i}", "Boat Quay") for i in range(21)]
    graph = Graph.from_edges(edges)

    capped = randomized_hits(graph)
    assert not capped.converged
    assert capped.iterations == 200
    assert capped.state == IterationState.MAX_ITER_REACHED
    assert capped.scores["Boat Quay"] > capped.scores["Clarke Quay"]

    patient = randomized_hits(graph, RankConfig(max_iter=1000))
    assert patient.converged
    assert patient.top(2)[0][0] == "Boat Quay"
