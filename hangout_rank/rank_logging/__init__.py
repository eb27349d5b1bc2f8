"""
Structured logging for hangout-rank.

get_logger(__name__) for module-level events; bind_algorithm(__name__, name) for
records belonging to one solver run.
"""

from hangout_rank.rank_logging.logger import bind_algorithm, configure_logging, get_logger

__all__ = ["bind_algorithm", "configure_logging", "get_logger"]
