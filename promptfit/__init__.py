# promptfit/__init__.py
"""
promptfit - split prompts into chunks that fit provider payload limits.

A pre-flight safety layer: given a provider/model (or custom limits), it
partitions text plus optional images into chunks that each respect byte,
character, estimated-token and image limits, or fails with a structured
error. It never talks to the network.

Examples:
    >>> from promptfit import chunk_prompt
    >>> result = chunk_prompt(provider="openai", model="gpt-4o", input="Hello, world!")
    >>> [c.text for c in result.chunks]
    ['Hello, world!']

    >>> result = chunk_prompt(
    ...     provider="openai",
    ...     model="gpt-4o",
    ...     input="A" * 5000,
    ...     options={"customLimits": {"maxBytes": 1000, "maxChars": 500, "maxTokens": 250}},
    ... )
    >>> result.metadata.total_chunks
    10
"""

from promptfit.chunking import (
    ChunkingEngine,
    ChunkRequest,
    LimitPartitioner,
    aggregate_metadata,
    chunk_prompt,
    partition,
)
from promptfit.config import ChunkOptions, load_limits_table
from promptfit.core import (
    Chunk,
    ChunkMetadata,
    ChunkResult,
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    FitResult,
    Image,
    ImageLimitError,
    InvalidInputError,
    LimitDimension,
    LimitExceededError,
    Limits,
    LimitsOverride,
    PartitionStalledError,
    PromptFitError,
    ProviderNotSupportedError,
    byte_length,
    check_fits,
    ensure_fits,
    estimate_tokens,
)
from promptfit.images import normalize_image, validate_images
from promptfit.providers import LimitsResolver, get_default_resolver

__version__ = "0.1.0"

__all__ = [
    # Primary operation
    "chunk_prompt",
    "ChunkingEngine",
    "ChunkRequest",
    "ChunkOptions",
    # Types
    "Chunk",
    "ChunkMetadata",
    "ChunkResult",
    "Image",
    "Limits",
    "LimitsOverride",
    "LimitDimension",
    "FitResult",
    # Building blocks
    "byte_length",
    "estimate_tokens",
    "check_fits",
    "ensure_fits",
    "LimitPartitioner",
    "partition",
    "aggregate_metadata",
    "LimitsResolver",
    "get_default_resolver",
    "load_limits_table",
    "normalize_image",
    "validate_images",
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
