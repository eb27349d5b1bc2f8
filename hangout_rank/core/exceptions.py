"""
Application-level exceptions.

Every error raised by the link-analysis engine derives from RankError so
callers can catch the whole family at one seam:

- InvalidGraphError: the graph (or a score vector handed to evaluation) is
  unusable: no nodes, negative or non-finite weights, mutation after freeze.
- ConfigurationError: a parameter is out of range. Raised before iteration.
- NumericalError: eigen-decomposition failed or an iterate went NaN/Inf.
  Aborts only the solver run that hit it.
- ConvergenceNotReached: max_iter exhausted before tol. Not raised by solvers;
  results carry converged=False and callers opt in via
  IterationResult.raise_for_convergence().
"""

from __future__ import annotations


class RankError(Exception):
    """Base class for link-analysis engine errors."""


class InvalidGraphError(RankError):
    pass


class ConfigurationError(RankError, ValueError):
    pass


class NumericalError(RankError, ArithmeticError):
    pass


class ConvergenceNotReached(RankError):
    """max_iter reached before the iterates settled within tol."""

    def __init__(self, algorithm: str, iterations: int, tol: float) -> None:
        self.algorithm = algorithm
        self.iterations = iterations
        self.tol = tol
        super().__init__(
            f"{algorithm} did not converge within {iterations} iterations (tol={tol:g})"
        )
