# promptfit/core/limits.py
"""
Capacity limits and the no-split fit check.

Limits describe what a downstream consumer accepts in one payload. When
estimates disagree, the byte limit is the binding constraint: the fit
check reports a byte violation before looking at characters or tokens.

Usage:
    >>> limits = Limits(max_tokens=250, max_chars=500, max_bytes=1000,
    ...                 max_images=0, image_byte_limit=0)
    >>> check_fits("hello", [], limits).fits
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from promptfit.core.chunk import Image
from promptfit.core.exceptions import LimitExceededError
from promptfit.core.measure import byte_length, estimate_tokens, images_byte_size


class LimitDimension(str, Enum):
    """The capacity bound a violation refers to."""

    MAX_BYTES = "maxBytes"
    MAX_CHARS = "maxChars"
    MAX_TOKENS = "maxTokens"
    MAX_IMAGES = "maxImages"
    IMAGE_BYTE_LIMIT = "imageByteLimit"


class Limits(BaseModel):
    """
    Capacity ceiling for one payload.

    Accepts snake_case names or the camelCase aliases used in preset
    tables shared with other tooling (``maxBytes`` etc.).
    """

    max_tokens: int = Field(..., ge=0, description="Maximum estimated tokens")
    max_chars: int = Field(..., ge=0, description="Maximum characters")
    max_bytes: int = Field(..., ge=0, description="Maximum UTF-8 bytes, images included")
    max_images: int = Field(default=0, ge=0, description="Maximum image count")
    image_byte_limit: int = Field(default=0, ge=0, description="Maximum bytes per image")

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class LimitsOverride(BaseModel):
    """Partial Limits used to override resolved values field by field."""

    max_tokens: Optional[int] = Field(default=None, ge=0)
    max_chars: Optional[int] = Field(default=None, ge=0)
    max_bytes: Optional[int] = Field(default=None, ge=0)
    max_images: Optional[int] = Field(default=None, ge=0)
    image_byte_limit: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def apply(self, limits: Limits) -> Limits:
        """Return limits with every field set on this override replaced."""
        merged: Dict[str, Any] = {
            **limits.model_dump(),
            **self.model_dump(exclude_none=True),
        }
        return Limits.model_validate(merged)


@dataclass(frozen=True)
class FitResult:
    """Outcome of a fit check. ``dimension`` is None when the content fits."""

    fits: bool
    dimension: Optional[LimitDimension] = None
    actual: Optional[int] = None
    allowed: Optional[int] = None


def check_fits(text: str, images: Sequence[Image], limits: Limits) -> FitResult:
    """
    Check whether text plus images fit without splitting.

    Dimensions are checked in a fixed order (bytes, characters, tokens)
    and only the first violation is reported.
    """
    total_bytes = byte_length(text) + images_byte_size(images)
    if total_bytes > limits.max_bytes:
        return FitResult(False, LimitDimension.MAX_BYTES, total_bytes, limits.max_bytes)

    if len(text) > limits.max_chars:
        return FitResult(False, LimitDimension.MAX_CHARS, len(text), limits.max_chars)

    tokens = estimate_tokens(text)
    if tokens > limits.max_tokens:
        return FitResult(False, LimitDimension.MAX_TOKENS, tokens, limits.max_tokens)

    return FitResult(True)


def ensure_fits(
    text: str,
    images: Sequence[Image],
    limits: Limits,
    provider: Optional[str] = None,
    model: Optional[str] = None,
) -> None:
    """
    Raise if text plus images do not fit without splitting.

    Raises:
        LimitExceededError: For the first violated dimension.
    """
    result = check_fits(text, images, limits)
    if not result.fits:
        raise LimitExceededError(
            limit=result.dimension,
            actual=result.actual,
            allowed=result.allowed,
            provider=provider,
            model=model,
        )


__all__ = [
    "LimitDimension",
    "Limits",
    "LimitsOverride",
    "FitResult",
    "check_fits",
    "ensure_fits",
]
