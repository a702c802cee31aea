# promptfit/config/__init__.py
"""Preset table loading and per-call option schema."""

from promptfit.config.loader import (
    DEFAULT_LIMITS_PATH,
    LimitsTable,
    deep_merge,
    load_limits_table,
    load_yaml,
)
from promptfit.config.schema import ChunkOptions

__all__ = [
    "ChunkOptions",
    "DEFAULT_LIMITS_PATH",
    "LimitsTable",
    "deep_merge",
    "load_limits_table",
    "load_yaml",
]
