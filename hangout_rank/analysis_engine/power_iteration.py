"""
Power iteration: the fixed-point loop shared by every solver.

x <- normalize(f(x)) until the distance between consecutive iterates drops
below tol or max_iter update steps have run. Deterministic: no randomness,
so identical inputs always produce bit-identical iterate sequences.

A zero update is not fatal: the normalized uniform vector is substituted and
the run is flagged degenerate. A NaN/Inf iterate raises NumericalError.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from hangout_rank.analysis_engine.models import IterationResult, IterationState, ScoreVector
from hangout_rank.core.exceptions import ConfigurationError, NumericalError
from hangout_rank.rank_logging import bind_algorithm

Vector = np.ndarray
UpdateFn = Callable[[Vector], Vector]
NormalizeFn = Callable[[Vector], Vector]
DistanceFn = Callable[[Vector, Vector], float]


def uniform_vector(n: int) -> Vector:
    return np.full(n, 1.0 / n, dtype=np.float64)


def l1_normalize(x: Vector) -> Vector:
    total = np.abs(x).sum()
    if total == 0.0:
        return x
    return x / total


def l2_normalize(x: Vector) -> Vector:
    """Scale to unit Euclidean norm, oriented so the entries sum to a non-negative value."""
    norm = np.linalg.norm(x)
    if norm == 0.0:
        return x
    x = x / norm
    if x.sum() < 0.0:
        x = -x
    return x


def l1_distance(new: Vector, old: Vector) -> float:
    return float(np.abs(new - old).sum())


@dataclass(frozen=True)
class PowerIterationOutcome:
    vector: Vector
    iterations: int
    converged: bool
    degenerate: bool
    state: IterationState


def power_iterate(
    update: UpdateFn,
    n: int,
    *,
    x0: Vector | None = None,
    normalize: NormalizeFn | None = l1_normalize,
    tol: float,
    max_iter: int,
    distance: DistanceFn = l1_distance,
    label: str = "power_iteration",
) -> PowerIterationOutcome:
    """
    Iterate x <- normalize(update(x)) from x0 (default uniform 1/n).

    Args:
        update: f(x) -> x, must return a new length-n array.
        n: Vector dimension (number of graph nodes).
        x0: Initial vector; normalized before the first step.
        normalize: Renormalization rule; None for updates that already preserve the norm.
        tol: Stop once distance(x_new, x_old) < tol.
        max_iter: Maximum number of update steps.
        distance: Convergence metric, L1 by default.
        label: Algorithm name attached to log records and error messages.

    Returns:
        PowerIterationOutcome with the last iterate, update steps performed,
        converged flag, degenerate flag, and terminal state.

    Raises:
        ConfigurationError: tol <= 0, max_iter <= 0, n < 1, or x0 of the wrong shape.
        NumericalError: an iterate contains NaN or Inf.
    """
    if n < 1:
        raise ConfigurationError(f"n must be >= 1, got {n}")
    if not tol > 0:
        raise ConfigurationError(f"tol must be > 0, got {tol}")
    if max_iter <= 0:
        raise ConfigurationError(f"max_iter must be > 0, got {max_iter}")

    log = bind_algorithm(__name__, label)
    norm = normalize if normalize is not None else (lambda v: v)
    fallback = norm(uniform_vector(n))

    if x0 is None:
        x = uniform_vector(n)
    else:
        x = np.asarray(x0, dtype=np.float64).reshape(-1)
        if x.shape[0] != n:
            raise ConfigurationError(f"x0 has length {x.shape[0]}, expected {n}")
    if not np.all(np.isfinite(x)):
        raise NumericalError(f"{label}: initial vector contains NaN or Inf")
    x = norm(x)
    if not np.any(x):
        x = fallback.copy()

    degenerate = False
    converged = False
    iterations = 0
    for _ in range(max_iter):
        y = np.asarray(update(x), dtype=np.float64)
        iterations += 1
        if not np.all(np.isfinite(y)):
            raise NumericalError(f"{label}: iterate {iterations} contains NaN or Inf")
        if not np.any(y):
            if not degenerate:
                log.warning("power_iteration_zero_update", iteration=iterations)
            degenerate = True
            y = fallback.copy()
        else:
            y = norm(y)
        delta = distance(y, x)
        x = y
        if delta < tol:
            converged = True
            break

    state = IterationState.CONVERGED if converged else IterationState.MAX_ITER_REACHED
    log.debug(
        "power_iteration_done",
        iterations=iterations,
        converged=converged,
        degenerate=degenerate,
        state=state.value,
    )
    return PowerIterationOutcome(
        vector=x,
        iterations=iterations,
        converged=converged,
        degenerate=degenerate,
        state=state,
    )


def to_result(
    outcome: PowerIterationOutcome,
    *,
    algorithm: str,
    scores: ScoreVector,
    runtime_sec: float,
    normalization: str,
    hubs: ScoreVector | None = None,
    params: dict[str, Any] | None = None,
) -> IterationResult:
    """Wrap an outcome into an IterationResult and log the run (warning if not converged)."""
    result = IterationResult(
        algorithm=algorithm,
        scores=scores,
        iterations=outcome.iterations,
        converged=outcome.converged,
        runtime_sec=runtime_sec,
        state=outcome.state,
        normalization=normalization,
        degenerate=outcome.degenerate,
        hubs=hubs,
        params=dict(params or {}),
    )
    log = bind_algorithm(__name__, algorithm)
    if outcome.converged:
        log.info(
            "solver_done",
            iterations=outcome.iterations,
            converged=True,
            degenerate=outcome.degenerate,
            runtime_sec=round(runtime_sec, 6),
        )
    else:
        log.warning(
            "solver_max_iter_reached",
            iterations=outcome.iterations,
            converged=False,
            degenerate=outcome.degenerate,
            runtime_sec=round(runtime_sec, 6),
        )
    return result
