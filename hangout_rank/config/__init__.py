"""
Configuration management for the link-analysis engine.

Loads and validates solver settings from environment variables and an
optional .env file. RankConfig is the single source of truth for all solver
parameters.
"""

from hangout_rank.config.settings import RankConfig, get_settings  # noqa: F401

__all__ = ["RankConfig", "get_settings"]
