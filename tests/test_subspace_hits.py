"""
Tests for Subspace-HITS (authority iteration projected onto the dominant eigensubspace).
"""

from __future__ import annotations

import numpy as np
import pytest

from hangout_rank.analysis_engine.randomized_hits import randomized_hits
from hangout_rank.analysis_engine.subspace_hits import dominant_eigenbasis, subspace_hits
from hangout_rank.config.settings import RankConfig
from hangout_rank.core.exceptions import ConfigurationError, NumericalError


def test_full_subspace_matches_unrestricted_power_iteration(singapore_graph):
    """k_sub = n gives the same authority vector as plain power iteration on A^T A."""
    n = singapore_graph.num_nodes()
    subspace = subspace_hits(singapore_graph, RankConfig(k_sub=n))
    unrestricted = randomized_hits(singapore_graph, RankConfig(eps=0.0))
    assert subspace.converged
    for node in singapore_graph.nodes():
        assert subspace.scores[node] == pytest.approx(unrestricted.scores[node], abs=1e-6)


def test_one_dimensional_subspace_is_dominant_eigenvector(singapore_graph):
    """k_sub = 1 starts on the top eigenvector, so one update settles it."""
    result = subspace_hits(singapore_graph, RankConfig(k_sub=1))
    assert result.converged
    assert result.iterations <= 2
    assert result.top(1)[0][0] == "Gardens by the Bay"
    # Top eigenvector of [[2, 1], [1, 1]] on (Gardens, Sentosa): ratio golden-ratio.
    golden = (1 + np.sqrt(5)) / 2
    assert result.scores["Gardens by the Bay"] / result.scores["Sentosa"] == pytest.approx(golden, rel=1e-6)
    assert result.scores["Singapore Zoo"] == pytest.approx(0.0, abs=1e-9)


def test_dominant_eigenbasis_is_orthonormal_and_descending(singapore_graph):
    values, basis = dominant_eigenbasis(singapore_graph.authority_matrix(), 3)
    assert basis.shape == (5, 3)
    np.testing.assert_allclose(basis.T @ basis, np.eye(3), atol=1e-12)
    assert list(values) == sorted(values, reverse=True)
    assert values[0] == pytest.approx((3 + np.sqrt(5)) / 2)


def test_k_sub_out_of_range(singapore_graph):
    with pytest.raises(ConfigurationError):
        RankConfig(k_sub=0)
    with pytest.raises(ConfigurationError):
        subspace_hits(singapore_graph, RankConfig(k_sub=6))


def test_eigen_solver_failure_is_numerical_error(singapore_graph, monkeypatch):
    def failing_eigh(matrix):
        raise np.linalg.LinAlgError("Eigenvalues did not converge")

    monkeypatch.setattr(np.linalg, "eigh", failing_eigh)
    with pytest.raises(NumericalError):
        subspace_hits(singapore_graph)


def test_scores_non_negative_unit_norm(singapore_graph):
    result = subspace_hits(singapore_graph, RankConfig(k_sub=3))
    assert all(score >= 0 for score in result.scores.values())
    assert np.linalg.norm(list(result.scores.values())) == pytest.approx(1.0, abs=1e-6)


def test_deterministic(singapore_graph):
    config = RankConfig(k_sub=2)
    first = subspace_hits(singapore_graph, config)
    second = subspace_hits(singapore_graph, config)
    assert first.scores == second.scores
    assert first.iterations == second.iterations
