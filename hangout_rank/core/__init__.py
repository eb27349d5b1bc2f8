"""
Core package: shared exceptions used across the analysis engine and pipeline.
"""

from hangout_rank.core.exceptions import (
    ConfigurationError,
    ConvergenceNotReached,
    InvalidGraphError,
    NumericalError,
    RankError,
)

__all__ = [
    "RankError",
    "InvalidGraphError",
    "ConfigurationError",
    "NumericalError",
    "ConvergenceNotReached",
]
