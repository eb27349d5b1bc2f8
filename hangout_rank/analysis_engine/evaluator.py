"""
Cross-algorithm comparison of score vectors.

Given algorithm name -> scores (all over the same graph), report:
- Spearman rank correlation between every pair of algorithms over the common node set,
- top-K nodes per algorithm (ties keep node insertion order),
- min / max / mean / std of each score distribution.

No iteration of its own. IterationResult inputs are compared on their
sum-to-1 distribution(); Spearman correlation is scale-invariant anyway.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from dataclasses import asdict, dataclass
from typing import Any, Union

import numpy as np
import pandas as pd

from hangout_rank.analysis_engine.models import IterationResult, ScoreVector
from hangout_rank.core.exceptions import InvalidGraphError
from hangout_rank.rank_logging import get_logger

logger = get_logger(__name__)

DEFAULT_TOP_K = 10

ScoresLike = Union[ScoreVector, IterationResult]


@dataclass(frozen=True)
class ScoreStats:
    """Summary of one score distribution; std is the population standard deviation (ddof=0)."""

    min: float
    max: float
    mean: float
    std: float
    count: int


@dataclass(frozen=True)
class EvaluationReport:
    """
    correlation: symmetric algorithm x algorithm DataFrame of Spearman coefficients in [-1, 1].
        Undefined pairs (a constant score vector) are 0.0; the diagonal is 1.0.
    top_k: algorithm -> [(node, score), ...] best first.
    stats: algorithm -> ScoreStats.
    nodes: common node set used for correlation, in insertion order.
    """

    correlation: pd.DataFrame
    top_k: dict[str, list[tuple[Hashable, float]]]
    stats: dict[str, ScoreStats]
    nodes: tuple[Hashable, ...]

    def correlation_between(self, first: str, second: str) -> float:
        return float(self.correlation.loc[first, second])

    def to_dict(self) -> dict[str, Any]:
        return {
            "correlation": {
                row: {col: float(value) for col, value in values.items()}
                for row, values in self.correlation.to_dict(orient="index").items()
            },
            "top_k": {name: [[node, score] for node, score in ranked] for name, ranked in self.top_k.items()},
            "stats": {name: asdict(s) for name, s in self.stats.items()},
            "num_nodes": len(self.nodes),
        }


def _as_vector(name: str, scores: ScoresLike) -> ScoreVector:
    vector = scores.distribution() if isinstance(scores, IterationResult) else dict(scores)
    if not vector:
        raise InvalidGraphError(f"Score vector for {name!r} is empty")
    return vector


def top_k_nodes(scores: ScoreVector, k: int = DEFAULT_TOP_K) -> list[tuple[Hashable, float]]:
    """Highest-scoring k nodes; sorted() is stable so ties keep insertion order."""
    ranked = sorted(scores.items(), key=lambda item: -item[1])
    return [(node, float(score)) for node, score in ranked[: max(0, k)]]


def score_stats(scores: ScoreVector) -> ScoreStats:
    series = pd.Series(list(scores.values()), dtype="float64")
    return ScoreStats(
        min=float(series.min()),
        max=float(series.max()),
        mean=float(series.mean()),
        std=float(series.std(ddof=0)),
        count=int(series.size),
    )


def spearman_matrix(vectors: Mapping[str, ScoreVector], nodes: list[Hashable]) -> pd.DataFrame:
    """Pairwise Spearman correlation over `nodes`; NaN (constant input) -> 0.0, diagonal 1.0."""
    frame = pd.DataFrame(
        {name: [vector[node] for node in nodes] for name, vector in vectors.items()},
    )
    corr = frame.corr(method="spearman").fillna(0.0)
    values = corr.to_numpy(copy=True)
    np.fill_diagonal(values, 1.0)
    values = np.clip(values, -1.0, 1.0)
    return pd.DataFrame(values, index=corr.index, columns=corr.columns)


def evaluate_scores(
    scores: Mapping[str, ScoresLike],
    top_k: int = DEFAULT_TOP_K,
) -> EvaluationReport:
    """
    Compare score vectors from several algorithms.

    Args:
        scores: algorithm name -> ScoreVector or IterationResult.
        top_k: Number of nodes to list per algorithm.

    Returns:
        EvaluationReport with correlation matrix, top-K lists and statistics.

    Raises:
        InvalidGraphError: no score vectors, an empty vector, or no node common to all vectors.
    """
    if not scores:
        raise InvalidGraphError("No score vectors to evaluate")
    vectors = {name: _as_vector(name, value) for name, value in scores.items()}

    first = next(iter(vectors.values()))
    common = [node for node in first if all(node in vector for vector in vectors.values())]
    if not common:
        raise InvalidGraphError("Score vectors share no nodes")
    if any(len(vector) != len(common) for vector in vectors.values()):
        logger.warning(
            "evaluator_node_sets_differ",
            common_nodes=len(common),
            sizes={name: len(vector) for name, vector in vectors.items()},
        )

    report = EvaluationReport(
        correlation=spearman_matrix(vectors, common),
        top_k={name: top_k_nodes(vector, top_k) for name, vector in vectors.items()},
        stats={name: score_stats(vector) for name, vector in vectors.items()},
        nodes=tuple(common),
    )
    logger.info(
        "evaluation_done",
        algorithms=list(vectors),
        num_nodes=len(common),
        top_k=top_k,
    )
    return report
