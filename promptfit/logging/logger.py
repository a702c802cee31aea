# promptfit/logging/logger.py
"""
Unified logging setup for promptfit.

All modules use:
    from promptfit.logging.logger import get_logger
    logger = get_logger(__name__)

The library never installs handlers on import. Applications that want
promptfit output call configure_logging() once at startup.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

DEFAULT_FORMAT = "[%(levelname)s] %(name)s - %(message)s"


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: TextIO = sys.stdout,
) -> None:
    """
    Configure the promptfit logger hierarchy.

    Safe to call multiple times - handler duplication is prevented.
    """
    root = logging.getLogger("promptfit")
    if not root.handlers:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(handler)

    root.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    """
    Modules call this to get a logger.

    Do NOT configure logging here - configuration happens in configure_logging().
    """
    return logging.getLogger(name)


__all__ = ["DEFAULT_FORMAT", "configure_logging", "get_logger"]
