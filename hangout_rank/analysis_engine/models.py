"""
Data models for solver output.

IterationResult bundles one solver run: the score vector, how many update
steps were taken, whether tol was reached, and wall-clock runtime. Created
once per invocation and never mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from hangout_rank.core.exceptions import ConvergenceNotReached

ScoreVector = dict[Hashable, float]

NORMALIZATION_L1 = "l1"
NORMALIZATION_L2 = "l2"


class IterationState(str, Enum):
    INITIALIZED = "initialized"
    ITERATING = "iterating"
    CONVERGED = "converged"
    MAX_ITER_REACHED = "max_iter_reached"


def rescale_to_sum_one(scores: ScoreVector) -> ScoreVector:
    """Rescale a non-negative score vector so it sums to 1. All-zero input is returned as zeros."""
    total = sum(scores.values())
    if total <= 0.0:
        return {node: 0.0 for node in scores}
    return {node: value / total for node, value in scores.items()}


@dataclass(frozen=True)
class IterationResult:
    """
    Result of one solver run.

    scores: node -> score, in graph node order. Normalization given by `normalization`:
        "l1" (sums to 1, PageRank) or "l2" (unit Euclidean norm, HITS family).
    hubs: hub vector for plain HITS (same normalization as scores); None otherwise.
    degenerate: True if some update produced the zero vector and the uniform
        vector was substituted.
    """

    algorithm: str
    scores: ScoreVector
    iterations: int
    converged: bool
    runtime_sec: float
    state: IterationState
    normalization: str = NORMALIZATION_L1
    degenerate: bool = False
    hubs: ScoreVector | None = None
    params: dict[str, Any] = field(default_factory=dict)

    def distribution(self) -> ScoreVector:
        """Scores rescaled to sum to 1 for reporting (identity for PageRank)."""
        if self.normalization == NORMALIZATION_L1:
            return dict(self.scores)
        return rescale_to_sum_one(self.scores)

    def hub_distribution(self) -> ScoreVector | None:
        if self.hubs is None:
            return None
        return rescale_to_sum_one(self.hubs)

    def top(self, k: int) -> list[tuple[Hashable, float]]:
        """Top-k (node, score) pairs; ties keep graph node order."""
        ranked = sorted(self.scores.items(), key=lambda item: -item[1])
        return ranked[: max(0, k)]

    def raise_for_convergence(self) -> None:
        """Raise ConvergenceNotReached if the run stopped at max_iter."""
        if not self.converged:
            raise ConvergenceNotReached(
                self.algorithm,
                self.iterations,
                float(self.params.get("tol", float("nan"))),
            )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "algorithm": self.algorithm,
            "scores": dict(self.scores),
            "iterations": self.iterations,
            "converged": self.converged,
            "runtime_sec": self.runtime_sec,
            "state": self.state.value,
            "normalization": self.normalization,
            "degenerate": self.degenerate,
            "params": dict(self.params),
        }
        if self.hubs is not None:
            out["hubs"] = dict(self.hubs)
        return out
