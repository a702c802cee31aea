# promptfit/logging/__init__.py
"""Logging helpers shared by every promptfit subsystem."""

from promptfit.logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
