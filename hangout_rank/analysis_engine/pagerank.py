"""
PageRank: stationary distribution of a random surfer with teleportation.

The surfer follows an outgoing transition with probability alpha (choosing
among out-edges in proportion to their weight) and teleports with
probability 1 - alpha, either uniformly or according to a personalization
vector. Dangling nodes (no outgoing transitions) jump uniformly to every node.

    x' = alpha * P^T x + (1 - alpha) * t

The update preserves sum(x) = 1, so no renormalization step is applied. The
teleport term makes the chain irreducible and aperiodic: the fixed point is
unique and independent of the starting vector.
"""

from __future__ import annotations

import time
from collections.abc import Hashable, Mapping, Sequence
from typing import Union

import numpy as np

from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.analysis_engine.models import NORMALIZATION_L1, IterationResult
from hangout_rank.analysis_engine.power_iteration import power_iterate, to_result, uniform_vector
from hangout_rank.config.settings import RankConfig
from hangout_rank.core.exceptions import ConfigurationError
from hangout_rank.rank_logging import get_logger

logger = get_logger(__name__)

ALGORITHM = "pagerank"
PERSONALIZATION_SUM_TOL = 1e-6

VectorLike = Union[Mapping[Hashable, float], Sequence[float], np.ndarray]


def transition_matrix(adjacency: np.ndarray) -> np.ndarray:
    """
    Row-stochastic transition matrix from a non-negative adjacency matrix.

    Each row is divided by its total outgoing weight; all-zero rows (dangling
    nodes) become uniform 1/n.
    """
    n = adjacency.shape[0]
    out_weight = adjacency.sum(axis=1)
    dangling = out_weight == 0.0
    safe = np.where(dangling, 1.0, out_weight)
    transition = adjacency / safe[:, None]
    transition[dangling, :] = 1.0 / n
    return transition


def _personalization_vector(graph: Graph, personalization: Mapping[Hashable, float]) -> np.ndarray:
    """Validate node -> weight mapping (non-negative, known nodes, sums to 1) and order it."""
    unknown = [node for node in personalization if node not in graph]
    if unknown:
        raise ConfigurationError(f"Personalization names unknown nodes: {unknown[:5]!r}")
    vec = graph.vector_from_mapping(personalization, name="personalization")
    if np.any(vec < 0.0):
        raise ConfigurationError("Personalization weights must be non-negative")
    total = float(vec.sum())
    if abs(total - 1.0) > PERSONALIZATION_SUM_TOL:
        raise ConfigurationError(f"Personalization must sum to 1, got {total}")
    return vec / total


def _initial_vector(graph: Graph, x0: VectorLike) -> np.ndarray:
    if isinstance(x0, Mapping):
        unknown = [node for node in x0 if node not in graph]
        if unknown:
            raise ConfigurationError(f"Initial vector names unknown nodes: {unknown[:5]!r}")
    vec = graph.vector_from_mapping(x0, name="x0")
    if np.any(vec < 0.0):
        raise ConfigurationError("Initial vector must be non-negative")
    total = float(vec.sum())
    if total <= 0.0:
        raise ConfigurationError("Initial vector must have a positive sum")
    return vec / total


def pagerank(
    graph: Graph,
    config: RankConfig | None = None,
    *,
    personalization: Mapping[Hashable, float] | None = None,
    x0: VectorLike | None = None,
) -> IterationResult:
    """
    Compute PageRank over the graph.

    Args:
        graph: Graph to rank; frozen by this call.
        config: Solver settings (alpha, tol, max_iter, weighted); defaults if None.
        personalization: Optional node -> teleport weight (non-negative, sums to 1).
            Replaces the uniform teleport target; nodes not named get 0.
        x0: Optional starting distribution (mapping or length-n sequence).
            Rescaled to sum to 1; does not change the fixed point.

    Returns:
        IterationResult with scores summing to 1 (normalization "l1").

    Raises:
        InvalidGraphError: graph has no nodes.
        ConfigurationError: invalid personalization or x0.
        NumericalError: an iterate went NaN/Inf.
    """
    config = config or RankConfig()
    n = graph.require_nodes()
    started = time.perf_counter()

    alpha = config.alpha
    adjacency = graph.adjacency_matrix(config.weighted)
    transposed = np.ascontiguousarray(transition_matrix(adjacency).T)
    if personalization is not None:
        teleport = _personalization_vector(graph, personalization)
    else:
        teleport = uniform_vector(n)
    teleport_term = (1.0 - alpha) * teleport
    start = _initial_vector(graph, x0) if x0 is not None else None
    logger.debug(
        "pagerank_setup",
        num_nodes=n,
        dangling_nodes=int(np.count_nonzero(adjacency.sum(axis=1) == 0.0)),
        personalized=personalization is not None,
    )

    def update(x: np.ndarray) -> np.ndarray:
        return alpha * (transposed @ x) + teleport_term

    outcome = power_iterate(
        update,
        n,
        x0=start,
        normalize=None,
        tol=config.tol,
        max_iter=config.max_iter,
        label=ALGORITHM,
    )
    runtime = time.perf_counter() - started
    return to_result(
        outcome,
        algorithm=ALGORITHM,
        scores=graph.scores_from_vector(outcome.vector),
        runtime_sec=runtime,
        normalization=NORMALIZATION_L1,
        params={
            "alpha": alpha,
            "tol": config.tol,
            "max_iter": config.max_iter,
            "weighted": config.weighted,
            "personalized": personalization is not None,
        },
    )
