"""
Subspace-HITS: authority iteration restricted to the dominant eigensubspace of A^T A.

M = A^T A is symmetric, so numpy.linalg.eigh gives real eigenvalues and an
orthonormal eigenbasis exactly (no iterative eigen-solver). Q holds the k_sub
eigenvectors with the largest eigenvalues, in descending eigenvalue order
(stable sort, so ties keep eigh's order). Every iterate is projected back with
QQ^T after applying M:

    x0 = normalize(QQ^T uniform)
    x' = normalize(QQ^T M x)

With k_sub = n, QQ^T is the identity up to round-off and this is plain power
iteration on M.
"""

from __future__ import annotations

import time

import numpy as np

from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.analysis_engine.models import NORMALIZATION_L2, IterationResult
from hangout_rank.analysis_engine.power_iteration import (
    l2_normalize,
    power_iterate,
    to_result,
    uniform_vector,
)
from hangout_rank.config.settings import RankConfig
from hangout_rank.core.exceptions import ConfigurationError, NumericalError
from hangout_rank.rank_logging import get_logger

logger = get_logger(__name__)

ALGORITHM = "subspace_hits"


def dominant_eigenbasis(matrix: np.ndarray, k: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Top-k eigenpairs of a symmetric matrix.

    Returns (eigenvalues, Q): eigenvalues descending, Q n x k with orthonormal columns.

    Raises:
        ConfigurationError: k < 1 or k > n.
        NumericalError: the eigen-decomposition did not converge.
    """
    n = matrix.shape[0]
    if k < 1 or k > n:
        raise ConfigurationError(f"k_sub must be in [1, {n}], got {k}")
    try:
        eigenvalues, eigenvectors = np.linalg.eigh(matrix)
    except np.linalg.LinAlgError as e:
        raise NumericalError(f"Eigen-decomposition failed: {e}") from e
    if not (np.all(np.isfinite(eigenvalues)) and np.all(np.isfinite(eigenvectors))):
        raise NumericalError("Eigen-decomposition returned NaN or Inf")
    order = np.argsort(-eigenvalues, kind="stable")[:k]
    return eigenvalues[order], eigenvectors[:, order]


def subspace_hits(graph: Graph, config: RankConfig | None = None) -> IterationResult:
    """
    Compute Subspace-HITS authority scores.

    Returns:
        IterationResult with unit-L2 authority scores (normalization "l2").
        Round-off negatives are clipped to 0 in the reported scores.

    Raises:
        InvalidGraphError: graph has no nodes.
        ConfigurationError: k_sub < 1 or k_sub > n.
        NumericalError: eigen-decomposition failed or an iterate went NaN/Inf.
    """
    config = config or RankConfig()
    n = graph.require_nodes()
    started = time.perf_counter()

    authority = graph.authority_matrix(config.weighted)
    eigenvalues, basis = dominant_eigenbasis(authority, config.k_sub)
    projector = basis @ basis.T
    logger.debug(
        "subspace_hits_basis",
        k_sub=config.k_sub,
        num_nodes=n,
        top_eigenvalue=float(eigenvalues[0]),
    )

    start = l2_normalize(projector @ uniform_vector(n))

    outcome = power_iterate(
        lambda x: projector @ (authority @ x),
        n,
        x0=start,
        normalize=l2_normalize,
        tol=config.tol,
        max_iter=config.max_iter,
        label=ALGORITHM,
    )
    runtime = time.perf_counter() - started
    return to_result(
        outcome,
        algorithm=ALGORITHM,
        scores=graph.scores_from_vector(np.clip(outcome.vector, 0.0, None)),
        runtime_sec=runtime,
        normalization=NORMALIZATION_L2,
        params={
            "k_sub": config.k_sub,
            "tol": config.tol,
            "max_iter": config.max_iter,
            "weighted": config.weighted,
        },
    )
