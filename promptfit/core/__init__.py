# promptfit/core/__init__.py
"""
promptfit core - measurement, limits, data model and errors.

Everything here is pure and side-effect free; the chunking package builds
on these pieces.
"""

from .chunk import Chunk, ChunkMetadata, ChunkResult, Image
from .exceptions import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    ImageLimitError,
    InvalidInputError,
    LimitExceededError,
    PartitionStalledError,
    PromptFitError,
    ProviderNotSupportedError,
)
from .limits import FitResult, LimitDimension, Limits, LimitsOverride, check_fits, ensure_fits
from .measure import byte_length, estimate_tokens, images_byte_size

__all__ = [
    # Types
    "Image",
    "Chunk",
    "ChunkMetadata",
    "ChunkResult",
    "Limits",
    "LimitsOverride",
    "LimitDimension",
    "FitResult",
    # Measurement
    "byte_length",
    "estimate_tokens",
    "images_byte_size",
    # Fit check
    "check_fits",
    "ensure_fits",
    # Exceptions
    "PromptFitError",
    "InvalidInputError",
    "ProviderNotSupportedError",
    "ImageLimitError",
    "LimitExceededError",
    "PartitionStalledError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
]
