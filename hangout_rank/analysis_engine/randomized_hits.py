"""
Randomised-HITS: authority iteration with teleportation mixed into A^T A.

    M  = A^T A
    M' = (1 - eps) * M + (eps / n) * J        (J = all-ones)

With eps > 0 every entry of M' is strictly positive, so the dominant
eigenvector is unique and power iteration converges on any graph, including
disconnected ones and graphs with isolated nodes. eps plays the role that
1 - alpha plays in PageRank. eps = 0 is plain power iteration on M.
"""

from __future__ import annotations

import time

import numpy as np

from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.analysis_engine.models import NORMALIZATION_L2, IterationResult
from hangout_rank.analysis_engine.power_iteration import l2_normalize, power_iterate, to_result
from hangout_rank.config.settings import RankConfig

ALGORITHM = "randomized_hits"


def mixed_authority_matrix(authority: np.ndarray, eps: float) -> np.ndarray:
    """(1 - eps) * M + (eps / n) * J as a new dense array."""
    n = authority.shape[0]
    return (1.0 - eps) * authority + (eps / n) * np.ones((n, n), dtype=np.float64)


def randomized_hits(graph: Graph, config: RankConfig | None = None) -> IterationResult:
    """
    Compute Randomised-HITS authority scores.

    Returns:
        IterationResult with unit-L2 authority scores (normalization "l2").

    Raises:
        InvalidGraphError: graph has no nodes.
        NumericalError: an iterate went NaN/Inf.
    """
    config = config or RankConfig()
    n = graph.require_nodes()
    started = time.perf_counter()

    mixed = mixed_authority_matrix(graph.authority_matrix(config.weighted), config.eps)

    outcome = power_iterate(
        lambda x: mixed @ x,
        n,
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
            "eps": config.eps,
            "tol": config.tol,
            "max_iter": config.max_iter,
            "weighted": config.weighted,
        },
    )
