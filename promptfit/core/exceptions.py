# promptfit/core/exceptions.py
"""
All exceptions raised by promptfit.

Hierarchy:
    PromptFitError
    ├── InvalidInputError - Missing or malformed input, identifiers or options
    ├── ProviderNotSupportedError - No limits known for a provider
    ├── ImageLimitError - Too many images, or one image over the size cap
    ├── LimitExceededError - Content cannot satisfy the capacity limits
    │   └── PartitionStalledError - Partitioner made no progress (internal invariant)
    └── ConfigError - Preset table loading failures
        ├── ConfigNotFoundError
        ├── ConfigParseError
        └── ConfigValidationError

Every error exposes a stable ``code`` and structured attributes so callers
never have to parse messages.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from promptfit.core.limits import LimitDimension


def _target(provider: Optional[str], model: Optional[str]) -> str:
    if provider and model:
        return f"{provider}/{model}"
    return provider or model or "custom limits"


class PromptFitError(Exception):
    """
    Base exception for all promptfit errors.

    Examples:
        >>> try:
        ...     chunk_prompt(provider="openai", model="gpt-4o", input=text)
        ... except PromptFitError as e:
        ...     print(e.code, e)
    """

    code = "PROMPTFIT_ERROR"

    def __init__(
        self,
        message: str,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.model = model


# =============================================================================
# Input Errors
# =============================================================================


class InvalidInputError(PromptFitError):
    """Input text, identifiers or options are missing or malformed."""

    code = "INVALID_INPUT"


class ProviderNotSupportedError(PromptFitError):
    """No limits are registered for the requested provider."""

    code = "PROVIDER_NOT_SUPPORTED"

    def __init__(self, provider: str, model: Optional[str] = None) -> None:
        super().__init__(
            f'Provider "{provider}" is not supported',
            provider=provider,
            model=model,
        )


# =============================================================================
# Capacity Errors
# =============================================================================


class ImageLimitError(PromptFitError):
    """
    Images violate the image count or per-image byte cap.

    ``image_index`` is set when a single image is at fault.
    """

    code = "IMAGE_LIMIT_EXCEEDED"

    def __init__(
        self,
        *,
        limit: "LimitDimension",
        actual: int,
        allowed: int,
        image_index: Optional[int] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        detail = f"actual: {actual}, allowed: {allowed}"
        if image_index is not None:
            detail += f", image index: {image_index}"
        super().__init__(
            f"Image limit error for {_target(provider, model)}: "
            f"{limit.value} exceeded ({detail})",
            provider=provider,
            model=model,
        )
        self.limit = limit
        self.actual = actual
        self.allowed = allowed
        self.image_index = image_index


class LimitExceededError(PromptFitError):
    """Content cannot satisfy a capacity limit, even after splitting."""

    code = "LIMIT_EXCEEDED"

    def __init__(
        self,
        *,
        limit: "LimitDimension",
        actual: int,
        allowed: int,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> None:
        super().__init__(
            f"Limit exceeded for {_target(provider, model)}: "
            f"{limit.value} (actual: {actual}, allowed: {allowed})",
            provider=provider,
            model=model,
        )
        self.limit = limit
        self.actual = actual
        self.allowed = allowed


class PartitionStalledError(LimitExceededError):
    """
    The partitioner produced a chunk consuming zero characters.

    The unsplittable-input guard should make this unreachable, so seeing it
    means an internal invariant was broken.
    """

    code = "PARTITION_STALLED"


# =============================================================================
# Config Errors
# =============================================================================


class ConfigError(PromptFitError):
    """Base error for preset table configuration issues."""

    code = "CONFIG_ERROR"

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """Raised when a config file doesn't exist."""

    pass


class ConfigParseError(ConfigError):
    """Raised when YAML parsing fails."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when config doesn't match the limits schema."""

    pass


__all__ = [
    "PromptFitError",
    # Input
    "InvalidInputError",
    "ProviderNotSupportedError",
    # Capacity
    "ImageLimitError",
    "LimitExceededError",
    "PartitionStalledError",
    # Config
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
]
