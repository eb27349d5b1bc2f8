"""
HITS: alternating hub / authority power iteration on the adjacency matrix A.

    a <- normalize(A^T h)
    h <- normalize(A a)

Both vectors are kept at unit L2 norm while iterating and the run stops when
each one's L1 change is below tol. At the fixed point a is the dominant
eigenvector of A^T A and h that of A A^T. The loop runs on the shared power
iteration engine over the stacked vector [h; a].

Reported scores (IterationResult.scores / .hubs) are the L2-normalized
vectors; use distribution() / hub_distribution() for sum-to-1 rescaling.
"""

from __future__ import annotations

import time

import numpy as np

from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.analysis_engine.models import NORMALIZATION_L2, IterationResult
from hangout_rank.analysis_engine.power_iteration import (
    l1_distance,
    l2_normalize,
    power_iterate,
    to_result,
)
from hangout_rank.config.settings import RankConfig

ALGORITHM = "hits"


def _split(x: np.ndarray, n: int) -> tuple[np.ndarray, np.ndarray]:
    return x[:n], x[n:]


def _block_normalizer(n: int):
    uniform = l2_normalize(np.ones(n, dtype=np.float64))

    def normalize(x: np.ndarray) -> np.ndarray:
        hubs, authorities = _split(x, n)
        hubs = l2_normalize(hubs) if np.any(hubs) else uniform
        authorities = l2_normalize(authorities) if np.any(authorities) else uniform
        return np.concatenate([hubs, authorities])

    return normalize


def _block_distance(n: int):
    def distance(new: np.ndarray, old: np.ndarray) -> float:
        new_h, new_a = _split(new, n)
        old_h, old_a = _split(old, n)
        return max(l1_distance(new_h, old_h), l1_distance(new_a, old_a))

    return distance


def hits(graph: Graph, config: RankConfig | None = None) -> IterationResult:
    """
    Compute HITS hub and authority scores.

    Returns:
        IterationResult whose scores are authorities and hubs are hub scores,
        both at unit L2 norm (normalization "l2").

    Raises:
        InvalidGraphError: graph has no nodes.
        NumericalError: an iterate went NaN/Inf.
    """
    config = config or RankConfig()
    n = graph.require_nodes()
    started = time.perf_counter()

    adjacency = graph.adjacency_matrix(config.weighted)
    transposed = np.ascontiguousarray(adjacency.T)

    def update(x: np.ndarray) -> np.ndarray:
        hubs, _ = _split(x, n)
        authorities = transposed @ hubs
        norm = np.linalg.norm(authorities)
        if norm > 0.0:
            authorities = authorities / norm
        return np.concatenate([adjacency @ authorities, authorities])

    outcome = power_iterate(
        update,
        2 * n,
        normalize=_block_normalizer(n),
        distance=_block_distance(n),
        tol=config.tol,
        max_iter=config.max_iter,
        label=ALGORITHM,
    )
    runtime = time.perf_counter() - started
    hubs, authorities = _split(outcome.vector, n)
    return to_result(
        outcome,
        algorithm=ALGORITHM,
        scores=graph.scores_from_vector(authorities),
        hubs=graph.scores_from_vector(hubs),
        runtime_sec=runtime,
        normalization=NORMALIZATION_L2,
        params={
            "tol": config.tol,
            "max_iter": config.max_iter,
            "weighted": config.weighted,
        },
    )
