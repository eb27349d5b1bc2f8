"""
Engine settings: solver parameters with defaults and range validation.

RankConfig is the single configuration surface for all four solvers and the
evaluator. get_settings() builds one from environment variables (see
hangout_rank.config.env); callers may also construct RankConfig directly.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from typing import Any

from hangout_rank.config.env import env_bool, env_float, env_int, load_rank_env
from hangout_rank.core.exceptions import ConfigurationError

DEFAULT_ALPHA = 0.85
DEFAULT_EPS = 0.15
DEFAULT_TOL = 1e-8
DEFAULT_MAX_ITER = 200
DEFAULT_K_SUB = 1
DEFAULT_WEIGHTED = True
DEFAULT_TOP_K = 10


@dataclass(frozen=True)
class RankConfig:
    """
    Parameters shared by the link-analysis solvers.

    alpha: PageRank link-following probability, in (0, 1).
    eps: Randomised-HITS teleport probability, in [0, 1].
    tol: L1 distance between consecutive iterates below which a run has converged.
    max_iter: Hard cap on update steps.
    k_sub: Subspace-HITS eigensubspace dimension; checked against n at solve time.
    weighted: Use accumulated edge weights (True) or 0/1 adjacency (False).
    top_k: Number of nodes reported per algorithm by the evaluator.
    """

    alpha: float = DEFAULT_ALPHA
    eps: float = DEFAULT_EPS
    tol: float = DEFAULT_TOL
    max_iter: int = DEFAULT_MAX_ITER
    k_sub: int = DEFAULT_K_SUB
    weighted: bool = DEFAULT_WEIGHTED
    top_k: int = DEFAULT_TOP_K

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Fail fast on out-of-range parameters. k_sub <= n is checked by the solver."""
        if not (0.0 < self.alpha < 1.0):
            raise ConfigurationError(f"alpha must be in (0, 1), got {self.alpha}")
        if not (0.0 <= self.eps <= 1.0):
            raise ConfigurationError(f"eps must be in [0, 1], got {self.eps}")
        if not (self.tol > 0.0) or not math.isfinite(self.tol):
            raise ConfigurationError(f"tol must be a positive finite number, got {self.tol}")
        if self.max_iter <= 0:
            raise ConfigurationError(f"max_iter must be positive, got {self.max_iter}")
        if self.k_sub < 1:
            raise ConfigurationError(f"k_sub must be >= 1, got {self.k_sub}")
        if self.top_k < 1:
            raise ConfigurationError(f"top_k must be >= 1, got {self.top_k}")

    def with_overrides(self, **overrides: Any) -> RankConfig:
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **overrides)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def get_settings() -> RankConfig:
    """
    Return engine settings from the environment.

    Reads RANK_ALPHA, RANK_EPS, RANK_TOL, RANK_MAX_ITER, RANK_K_SUB,
    RANK_WEIGHTED and RANK_TOP_K after loading .env; unset variables keep
    the defaults. Raises ConfigurationError if a value is out of range or
    cannot be parsed.
    """
    load_rank_env()
    try:
        values: dict[str, Any] = {
            "alpha": env_float("RANK_ALPHA", DEFAULT_ALPHA),
            "eps": env_float("RANK_EPS", DEFAULT_EPS),
            "tol": env_float("RANK_TOL", DEFAULT_TOL),
            "max_iter": env_int("RANK_MAX_ITER", DEFAULT_MAX_ITER),
            "k_sub": env_int("RANK_K_SUB", DEFAULT_K_SUB),
            "weighted": env_bool("RANK_WEIGHTED", DEFAULT_WEIGHTED),
            "top_k": env_int("RANK_TOP_K", DEFAULT_TOP_K),
        }
    except ValueError as e:
        raise ConfigurationError(f"Unparseable rank setting in environment: {e}") from e
    return RankConfig(**values)
